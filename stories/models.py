from django.db import models
from django.db.models.functions import Length, Trim
from django.db.models.lookups import GreaterThanOrEqual
from django.utils import timezone

from .validation import (
    COMMENT_TEXT_MAX, COMMENT_TEXT_MIN,
    CONTENT_MAX, CONTENT_MIN,
    NAME_MAX, NAME_MIN,
    TITLE_MAX, TITLE_MIN,
)


def min_trimmed_length(field: str, minimum: int, name: str) -> models.CheckConstraint:
    """Страховка рівня БД під ValidationPolicy: довжина після trim не менша за minimum."""
    return models.CheckConstraint(
        condition=GreaterThanOrEqual(Length(Trim(field)), minimum),
        name=name,
    )


class Story(models.Model):
    title = models.CharField(max_length=TITLE_MAX)
    content = models.TextField(max_length=CONTENT_MAX)
    author_name = models.CharField(max_length=NAME_MAX)

    # обидва ставить репозиторій одним читанням годинника
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at", "-id"], name="story_created_idx"),
        ]
        constraints = [
            min_trimmed_length("title", TITLE_MIN, "chk_story_title_min"),
            min_trimmed_length("content", CONTENT_MIN, "chk_story_content_min"),
            min_trimmed_length("author_name", NAME_MIN, "chk_story_author_min"),
        ]

    def __str__(self):
        return self.title


class Comment(models.Model):
    story = models.ForeignKey(Story, on_delete=models.CASCADE, related_name="comments")
    commenter_name = models.CharField(max_length=NAME_MAX)
    comment_text = models.TextField(max_length=COMMENT_TEXT_MAX)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        # потік коментарів від найстаршого, id розв'язує однакові мітки часу
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["story", "created_at", "id"], name="comment_story_created_idx"),
        ]
        constraints = [
            min_trimmed_length("commenter_name", NAME_MIN, "chk_comment_name_min"),
            min_trimmed_length("comment_text", COMMENT_TEXT_MIN, "chk_comment_text_min"),
        ]

    def __str__(self):
        return f"Comment #{self.pk} on story {self.story_id} by {self.commenter_name}"
