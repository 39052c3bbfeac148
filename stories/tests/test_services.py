from __future__ import annotations

import logging
from unittest import mock

import pytest

from stories.aggregation import CommentCountAggregator
from stories.exceptions import ConstraintViolation, NotFound, StoreUnavailable, ValidationError
from stories.models import Comment, Story
from stories.repositories import CommentRepository, StoryRepository
from stories.services import StoryCatalogService, StoryDetail

pytestmark = pytest.mark.django_db

CONTENT = "x" * 50


def test_submit_story_persists_trimmed_values(service) -> None:
    story = service.submit_story("  A Tale ", f"  {CONTENT}  ", " Bo ")

    stored = StoryRepository().get_by_id(story.id)
    assert (stored.title, stored.content, stored.author_name) == ("A Tale", CONTENT, "Bo")
    assert stored.created_at == stored.updated_at


@pytest.mark.parametrize(
    ("title", "content", "author"),
    [
        ("ab", CONTENT, "Bo"),
        ("A Tale", "x" * 49, "Bo"),
        ("A Tale", CONTENT, " B "),
    ],
)
def test_invalid_story_is_never_written(service, make_story, title, content, author) -> None:
    make_story()
    before = len(service.get_listing())

    with pytest.raises(ValidationError):
        service.submit_story(title, content, author)

    assert len(service.get_listing()) == before


def test_validation_happens_before_any_store_call() -> None:
    stories = mock.Mock(spec=StoryRepository)
    service = StoryCatalogService(stories=stories)

    with pytest.raises(ValidationError):
        service.submit_story("ab", CONTENT, "Bo")
    with pytest.raises(ValidationError):
        service.edit_story(1, "ab", CONTENT, "Bo")

    stories.create.assert_not_called()
    stories.update.assert_not_called()


def test_listing_is_newest_first(service, make_story, clock) -> None:
    t1 = make_story(title="First")
    clock.tick()
    t2 = make_story(title="Second")
    clock.tick()
    t3 = make_story(title="Third")

    assert [row.id for row in service.get_listing()] == [t3.id, t2.id, t1.id]


def test_listing_is_idempotent_without_writes(service, make_story, clock) -> None:
    story = make_story()
    clock.tick()
    make_story(title="Another")
    service.submit_comment(story.id, "Cam", "Lovely!")

    assert service.get_listing() == service.get_listing()


def test_listing_counts_comments(service, make_story) -> None:
    story = make_story()
    assert service.get_listing()[0].comment_count == 0

    for i in range(4):
        service.submit_comment(story.id, "Cam", f"comment number {i}")

    assert service.get_listing()[0].comment_count == 4


@pytest.mark.parametrize("n_stories", [1, 3, 12])
def test_listing_round_trips_do_not_grow_with_stories(
    service, make_story, django_assert_num_queries, n_stories
) -> None:
    for i in range(n_stories):
        story = make_story(title=f"Story {i}")
        for _ in range(i):
            service.submit_comment(story.id, "Cam", "Lovely!")

    # один select історій + один згрупований count
    with django_assert_num_queries(2):
        rows = service.get_listing()

    assert len(rows) == n_stories


def test_listing_calls_aggregator_once_with_full_id_set() -> None:
    aggregator = mock.Mock(wraps=CommentCountAggregator())
    service = StoryCatalogService(aggregator=aggregator)
    ids = {service.submit_story(f"Story {i}", CONTENT, "Bo").id for i in range(3)}

    service.get_listing()

    aggregator.counts_for.assert_called_once()
    assert set(aggregator.counts_for.call_args.args[0]) == ids


def test_empty_listing_skips_aggregator(django_assert_num_queries) -> None:
    aggregator = mock.Mock(spec=CommentCountAggregator)
    service = StoryCatalogService(aggregator=aggregator)

    with django_assert_num_queries(1):
        assert service.get_listing() == []

    aggregator.counts_for.assert_not_called()


def test_edit_story(service, make_story, clock) -> None:
    story = make_story()
    clock.tick(5)

    edited = service.edit_story(story.id, "A Better Tale", "z" * 80, "Bob")

    assert edited.id == story.id
    assert edited.created_at == story.created_at
    assert edited.updated_at > edited.created_at
    assert edited.title == "A Better Tale"


def test_edit_missing_story_raises_not_found(service) -> None:
    with pytest.raises(NotFound) as info:
        service.edit_story(424242, "A Tale", CONTENT, "Bo")

    assert info.value.story_id == 424242


def test_concurrent_edits_last_write_wins(service, make_story, clock) -> None:
    story = make_story()
    service.edit_story(story.id, "Edit from tab one", CONTENT, "Bo")
    clock.tick()
    service.edit_story(story.id, "Edit from tab two", CONTENT, "Bo")

    assert service.get_detail(story.id).story.title == "Edit from tab two"


def test_comment_on_missing_story(service) -> None:
    with pytest.raises(NotFound):
        service.submit_comment(424242, "Alice", "nice story")

    assert Comment.objects.count() == 0


def test_comment_boundary_lengths(service, make_story) -> None:
    story = make_story()

    assert service.submit_comment(story.id, "Cam", "c" * 1000).id is not None
    with pytest.raises(ValidationError):
        service.submit_comment(story.id, "Cam", "c" * 1001)

    assert Comment.objects.filter(story=story).count() == 1


def test_detail_orders_comments_oldest_first(service, make_story, clock) -> None:
    story = make_story()
    ids = []
    for text in ("first", "second", "third"):
        clock.tick()
        ids.append(service.submit_comment(story.id, "Cam", text).id)

    detail = service.get_detail(story.id)

    assert [c.id for c in detail.comments] == ids


def test_detail_not_found_skips_comment_repository() -> None:
    comments = mock.Mock(spec=CommentRepository)
    service = StoryCatalogService(comments=comments)

    with pytest.raises(NotFound):
        service.get_detail(424242)

    comments.list_for_story.assert_not_called()


def test_detail_local_append(service, make_story) -> None:
    story = make_story()
    detail = service.get_detail(story.id)
    comment = service.submit_comment(story.id, "Cam", "Lovely!")

    detail.append_comment(comment)

    assert [c.id for c in detail.comments] == [comment.id]
    assert [c.id for c in detail.comments] == [c.id for c in service.get_detail(story.id).comments]


def test_detail_append_rejects_foreign_comment(make_story) -> None:
    story = make_story()
    other = make_story(title="Other")
    detail = StoryDetail(story=story)

    with pytest.raises(ValueError):
        detail.append_comment(Comment(story=other, commenter_name="Cam", comment_text="Lovely!"))


def test_store_unavailable_propagates() -> None:
    stories = mock.Mock(spec=StoryRepository)
    stories.list_all.side_effect = StoreUnavailable()
    service = StoryCatalogService(stories=stories)

    with pytest.raises(StoreUnavailable):
        service.get_listing()


def test_end_to_end(service) -> None:
    story = service.submit_story("A Tale", "x" * 50, "Bo")
    assert story.title == "A Tale"

    listing = service.get_listing()
    assert [(row.id, row.comment_count) for row in listing] == [(story.id, 0)]

    service.submit_comment(story.id, "Cam", "Lovely!")

    listing = service.get_listing()
    assert [(row.id, row.comment_count) for row in listing] == [(story.id, 1)]

    detail = service.get_detail(story.id)
    assert detail.story.id == story.id
    assert [c.commenter_name for c in detail.comments] == ["Cam"]
    assert isinstance(detail.story, Story)


def test_not_found_is_never_logged_as_error(service, caplog) -> None:
    caplog.set_level(logging.INFO, logger="stories")

    for call in (
        lambda: service.get_detail(424242),
        lambda: service.edit_story(424242, "A Tale", CONTENT, "Bo"),
        lambda: service.submit_comment(424242, "Alice", "nice story"),
    ):
        with pytest.raises(NotFound):
            call()

    records = [r for r in caplog.records if r.name == "stories"]
    assert records
    assert all(r.levelno < logging.WARNING for r in records)


def test_store_failure_logged_with_context_in_extra(caplog) -> None:
    stories = mock.Mock(spec=StoryRepository)
    stories.update.side_effect = ConstraintViolation()
    service = StoryCatalogService(stories=stories)

    with pytest.raises(ConstraintViolation):
        service.edit_story(7, "A Tale", CONTENT, "Bo")

    [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.getMessage() == "Помилка сховища"
    assert (record.action, record.code, record.story_id) == (
        "edit_story", "constraint_violation", 7,
    )
