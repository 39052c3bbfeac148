"""
StoryCatalogService: єдина точка входу для читання й запису історій.

Сервіс не тримає стану між викликами; view-моделі будуються заново
на кожен запит. Конкурентні редагування однієї історії: перемагає
останній запис (токенів версії немає).
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime

from .aggregation import CommentCountAggregator
from .exceptions import ConstraintViolation, NotFound, StoreUnavailable, ValidationError
from .models import Comment, Story
from .repositories import CommentRepository, StoryRepository
from .validation import validate_comment, validate_story

logger = logging.getLogger("stories")


@dataclass(frozen=True)
class StoryListItem:
    id: int
    title: str
    content: str
    author_name: str
    created_at: datetime
    updated_at: datetime
    comment_count: int

    @classmethod
    def from_story(cls, story: Story, comment_count: int) -> "StoryListItem":
        return cls(
            id=story.id,
            title=story.title,
            content=story.content,
            author_name=story.author_name,
            created_at=story.created_at,
            updated_at=story.updated_at,
            comment_count=comment_count,
        )


@dataclass
class StoryDetail:
    story: Story
    comments: list[Comment] = field(default_factory=list)

    def append_comment(self, comment: Comment) -> None:
        """Локальне додавання вже підтвердженого коментаря в кінець потоку."""
        if comment.story_id != self.story.id:
            raise ValueError("Comment belongs to a different story.")
        self.comments.append(comment)


@contextmanager
def _store_failures(action: str, **context):
    try:
        yield
    except (ConstraintViolation, StoreUnavailable) as exc:
        logger.error("Помилка сховища", exc_info=exc, extra={"action": action, "code": exc.code, **context})
        raise


def _validated(validate, *args):
    try:
        return validate(*args)
    except ValidationError as exc:
        logger.warning("Валідація не пройшла", extra={"field": exc.field, "rule": exc.rule})
        raise


class StoryCatalogService:

    def __init__(self, stories=None, comments=None, aggregator=None):
        self.stories = stories or StoryRepository()
        self.comments = comments or CommentRepository()
        self.aggregator = aggregator or CommentCountAggregator()

    # ---------- writes ----------

    def submit_story(self, title, content, author_name) -> Story:
        draft = _validated(validate_story, title, content, author_name)
        with _store_failures("submit_story"):
            story = self.stories.create(*draft)
        logger.info("Історію збережено", extra={"story_id": story.id})
        return story

    def edit_story(self, story_id, title, content, author_name) -> Story:
        draft = _validated(validate_story, title, content, author_name)
        with _store_failures("edit_story", story_id=story_id):
            story = self.stories.update(story_id, *draft)
        if story is None:
            logger.info("Історію для редагування не знайдено", extra={"story_id": story_id})
            raise NotFound(story_id)
        logger.info("Історію оновлено", extra={"story_id": story.id})
        return story

    def submit_comment(self, story_id, commenter_name, comment_text) -> Comment:
        draft = _validated(validate_comment, commenter_name, comment_text)
        with _store_failures("submit_comment", story_id=story_id):
            # сховище не гарантує FK, тож перевіряємо тут
            if not self.stories.exists(story_id):
                logger.info("Коментар до неіснуючої історії", extra={"story_id": story_id})
                raise NotFound(story_id)
            comment = self.comments.create(story_id, *draft)
        logger.info("Коментар збережено", extra={"story_id": story_id, "comment_id": comment.id})
        return comment

    # ---------- reads ----------

    def get_listing(self) -> list[StoryListItem]:
        with _store_failures("get_listing"):
            stories = self.stories.list_all()
            if not stories:
                return []
            counts = self.aggregator.counts_for([story.id for story in stories])
        return [StoryListItem.from_story(story, counts.get(story.id, 0)) for story in stories]

    def get_detail(self, story_id) -> StoryDetail:
        with _store_failures("get_detail", story_id=story_id):
            story = self.stories.get_by_id(story_id)
            if story is None:
                raise NotFound(story_id)
            comments = self.comments.list_for_story(story.id)
        return StoryDetail(story=story, comments=comments)
