from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stories.services import StoryCatalogService

CONTENT = "x" * 50


class Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: int = 1) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock(monkeypatch) -> Clock:
    c = Clock()
    monkeypatch.setattr("django.utils.timezone.now", c)
    return c


@pytest.fixture
def service() -> StoryCatalogService:
    return StoryCatalogService()


@pytest.fixture
def make_story(service):
    def _make(title: str = "A Tale", content: str = CONTENT, author_name: str = "Bo"):
        return service.submit_story(title, content, author_name)

    return _make
