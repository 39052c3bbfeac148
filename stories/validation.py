"""
ValidationPolicy: чисті правила для історій та коментарів.

Правила застосовуються до значення після trim. Повертається лише перше
порушене правило, без агрегації.
"""
from typing import NamedTuple

from .exceptions import ValidationError

TITLE_MIN = 3
TITLE_MAX = 200
CONTENT_MIN = 50
CONTENT_MAX = 10000
NAME_MIN = 2
NAME_MAX = 100
COMMENT_TEXT_MIN = 3
COMMENT_TEXT_MAX = 1000

MIN_LENGTH = "min_length"
MAX_LENGTH = "max_length"


class StoryDraft(NamedTuple):
    title: str
    content: str
    author_name: str


class CommentDraft(NamedTuple):
    commenter_name: str
    comment_text: str


def _clean(value) -> str:
    return ("" if value is None else str(value)).strip()


def _check(field: str, value: str, minimum: int, maximum: int, label: str) -> None:
    if len(value) < minimum:
        raise ValidationError(
            field, MIN_LENGTH,
            f"{label} must be at least {minimum} characters long",
        )
    if len(value) > maximum:
        raise ValidationError(
            field, MAX_LENGTH,
            f"{label} must be at most {maximum} characters long",
        )


def validate_story(title, content, author_name) -> StoryDraft:
    title = _clean(title)
    content = _clean(content)
    author_name = _clean(author_name)

    _check("title", title, TITLE_MIN, TITLE_MAX, "Title")
    _check("content", content, CONTENT_MIN, CONTENT_MAX, "Story")
    _check("author_name", author_name, NAME_MIN, NAME_MAX, "Author name")
    return StoryDraft(title, content, author_name)


def validate_comment(commenter_name, comment_text) -> CommentDraft:
    commenter_name = _clean(commenter_name)
    comment_text = _clean(comment_text)

    _check("commenter_name", commenter_name, NAME_MIN, NAME_MAX, "Name")
    _check("comment_text", comment_text, COMMENT_TEXT_MIN, COMMENT_TEXT_MAX, "Comment")
    return CommentDraft(commenter_name, comment_text)
