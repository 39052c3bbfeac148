# serializers.py
import math

from rest_framework import serializers

from .models import Comment, Story

EXCERPT_LENGTH = 200
WORDS_PER_MINUTE = 200


def build_excerpt(content: str | None, max_length: int = EXCERPT_LENGTH) -> str:
    v = content or ""
    if len(v) <= max_length:
        return v
    return v[:max_length] + "..."


def estimate_read_time(content: str | None) -> int:
    """Хвилини читання при 200 словах/хв, не менше 1."""
    words = len((content or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


# ---------- Input: лише форма даних, правила у ValidationPolicy ----------
class StoryInputSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, trim_whitespace=False)
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)
    author_name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class CommentInputSerializer(serializers.Serializer):
    commenter_name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    comment_text = serializers.CharField(allow_blank=True, trim_whitespace=False)


# ---------- Output ----------
class StoryListSerializer(serializers.Serializer):
    """Рядок лістингу (StoryListItem) + excerpt для картки."""
    id = serializers.IntegerField()
    title = serializers.CharField()
    excerpt = serializers.SerializerMethodField()
    author_name = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    comment_count = serializers.IntegerField()

    def get_excerpt(self, obj) -> str:
        return build_excerpt(obj.content)


class StorySerializer(serializers.ModelSerializer):
    read_time_minutes = serializers.SerializerMethodField()

    class Meta:
        model = Story
        fields = ["id", "title", "content", "author_name", "created_at", "updated_at", "read_time_minutes"]
        read_only_fields = fields

    def get_read_time_minutes(self, obj: Story) -> int:
        return estimate_read_time(obj.content)


class CommentSerializer(serializers.ModelSerializer):
    story_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "story_id", "commenter_name", "comment_text", "created_at"]
        read_only_fields = fields


class StoryDetailSerializer(serializers.Serializer):
    story = StorySerializer()
    comments = CommentSerializer(many=True)
