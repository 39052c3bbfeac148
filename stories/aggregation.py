from collections.abc import Iterable

from django.db import connections
from django.db.models import Count

from .models import Comment
from .repositories import store_errors


class CommentCountAggregator:
    """
    Кількість коментарів для набору історій одним згрупованим запитом
    (замість окремого count на кожну історію).

    Якщо набір id перевищує ліміт параметрів бекенду (SQLite), запит
    ділиться на пачки розміром у цей ліміт.
    """

    def _batch_size(self) -> int | None:
        return connections[Comment.objects.db].features.max_query_params

    def counts_for(self, story_ids: Iterable) -> dict:
        ids = list(dict.fromkeys(story_ids))
        if not ids:
            return {}

        size = self._batch_size() or len(ids)
        counts = {}
        with store_errors():
            for start in range(0, len(ids), size):
                rows = (
                    Comment.objects
                    .filter(story_id__in=ids[start:start + size])
                    .values("story_id")
                    .annotate(count=Count("id"))
                    .order_by()
                )
                counts.update({row["story_id"]: row["count"] for row in rows})

        # історії без коментарів не дають групи
        return {story_id: counts.get(story_id, 0) for story_id in ids}
