"""
Репозиторії історій та коментарів поверх Django ORM.

Відсутній запис повертається як None (нормальний результат, не помилка).
Помилки драйвера БД не виходять за межі репозиторію: вони перетворюються
на ConstraintViolation або StoreUnavailable.
"""
from contextlib import contextmanager
from datetime import timedelta

from django.db import (
    DataError, IntegrityError, InterfaceError, OperationalError, transaction,
)
from django.utils import timezone

from .exceptions import ConstraintViolation, StoreUnavailable
from .models import Comment, Story


@contextmanager
def store_errors():
    try:
        yield
    except (IntegrityError, DataError) as exc:
        # текст драйвера лишається лише в __cause__ і в серверному лозі
        raise ConstraintViolation() from exc
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailable() from exc


class StoryRepository:

    def create(self, title: str, content: str, author_name: str) -> Story:
        now = timezone.now()
        with store_errors(), transaction.atomic():
            return Story.objects.create(
                title=title,
                content=content,
                author_name=author_name,
                created_at=now,
                updated_at=now,
            )

    def get_by_id(self, story_id) -> Story | None:
        with store_errors():
            return Story.objects.filter(pk=story_id).first()

    def exists(self, story_id) -> bool:
        with store_errors():
            return Story.objects.filter(pk=story_id).exists()

    def list_all(self) -> list[Story]:
        with store_errors():
            return list(Story.objects.order_by("-created_at", "-id"))

    def update(self, story_id, title: str, content: str, author_name: str) -> Story | None:
        """
        Повна заміна title/content/author_name. id та created_at не змінюються.
        Без токена версії: перемагає останній запис.
        """
        with store_errors(), transaction.atomic():
            story = Story.objects.select_for_update().filter(pk=story_id).first()
            if story is None:
                return None

            now = timezone.now()
            # updated_at строго зростає навіть якщо годинник не зрушив
            if now <= story.updated_at:
                now = story.updated_at + timedelta(microseconds=1)

            story.title = title
            story.content = content
            story.author_name = author_name
            story.updated_at = now
            story.save(update_fields=["title", "content", "author_name", "updated_at"])
        return story


class CommentRepository:

    def create(self, story_id, commenter_name: str, comment_text: str) -> Comment:
        # існування історії перевіряє сервісний шар
        with store_errors(), transaction.atomic():
            return Comment.objects.create(
                story_id=story_id,
                commenter_name=commenter_name,
                comment_text=comment_text,
                created_at=timezone.now(),
            )

    def list_for_story(self, story_id) -> list[Comment]:
        with store_errors():
            return list(
                Comment.objects
                .filter(story_id=story_id)
                .order_by("created_at", "id")
            )
