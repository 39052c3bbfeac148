# views.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import (
    ConstraintViolation, NotFound, StoreUnavailable, StoryCatalogError, ValidationError,
)
from .serializers import (
    CommentInputSerializer, CommentSerializer,
    StoryDetailSerializer, StoryInputSerializer,
    StoryListSerializer, StorySerializer,
)
from .services import StoryCatalogService

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    ConstraintViolation: status.HTTP_409_CONFLICT,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class CatalogAPIView(APIView):
    """
    Базовий view: кожен запит отримує свіжий сервіс,
    помилки каталогу віддаються як {"code", "detail", ...}.
    """
    service_class = StoryCatalogService

    def get_service(self) -> StoryCatalogService:
        return self.service_class()

    def handle_exception(self, exc):
        if isinstance(exc, StoryCatalogError):
            body = {"code": exc.code, "detail": exc.detail}
            if isinstance(exc, ValidationError):
                body.update({"field": exc.field, "rule": exc.rule})
            code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
            return Response(body, status=code)
        return super().handle_exception(exc)


class StoryListCreateView(CatalogAPIView):
    """
    GET  /api/stories/: усі історії (новіші першими) з кількістю коментарів
    POST /api/stories/: нова історія
    """

    def get(self, request):
        rows = self.get_service().get_listing()
        return Response(StoryListSerializer(rows, many=True).data)

    def post(self, request):
        ser = StoryInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        story = self.get_service().submit_story(**ser.validated_data)
        return Response(StorySerializer(story).data, status=status.HTTP_201_CREATED)


class StoryDetailView(CatalogAPIView):
    """
    GET /api/stories/<id>/: історія + коментарі від найстаршого
    PUT /api/stories/<id>/: повна заміна title/content/author_name
    """

    def get(self, request, pk: int):
        detail = self.get_service().get_detail(pk)
        return Response(StoryDetailSerializer(detail).data)

    def put(self, request, pk: int):
        ser = StoryInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        story = self.get_service().edit_story(pk, **ser.validated_data)
        return Response(StorySerializer(story).data)


class StoryCommentsView(CatalogAPIView):
    """
    GET  /api/stories/<id>/comments/
    POST /api/stories/<id>/comments/
    """

    def get(self, request, pk: int):
        detail = self.get_service().get_detail(pk)
        return Response(CommentSerializer(detail.comments, many=True).data)

    def post(self, request, pk: int):
        ser = CommentInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        comment = self.get_service().submit_comment(pk, **ser.validated_data)
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)
