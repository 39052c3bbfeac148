from django.urls import path
from .views import StoryListCreateView, StoryDetailView, StoryCommentsView

urlpatterns = [
    path("stories/", StoryListCreateView.as_view(), name="stories-list"),
    path("stories/<int:pk>/", StoryDetailView.as_view(), name="story-detail"),
    path("stories/<int:pk>/comments/", StoryCommentsView.as_view(), name="story-comments"),
]
