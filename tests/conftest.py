"""Shared pytest fixtures for the Drill test suite."""

from datetime import datetime, timedelta

import pytest

from drill.config import Config
from drill.models import ContentType, ItemMetadata, KnowledgeItem, PerformanceRecord
from drill.scheduling.engine import SchedulingEngine
from drill.scheduling.parameters import AlgorithmParameters


@pytest.fixture
def now():
    """Fixed 'current time' so date arithmetic is deterministic."""
    return datetime(2024, 3, 15, 10, 30)


@pytest.fixture
def parameters():
    """Default algorithm parameters."""
    return AlgorithmParameters()


@pytest.fixture
def engine(parameters, now):
    """Engine with a frozen clock and the default review ids."""
    return SchedulingEngine(parameters, clock=lambda: now)


@pytest.fixture
def make_item(now):
    """Factory for knowledge items with arbitrary scheduling state."""

    def _make_item(
        item_id: str = "item-1",
        ease_factor: float = 2.5,
        interval: int = 0,
        repetitions: int = 0,
        difficulty: int = 3,
        last_reviewed: datetime | None = None,
        next_review: datetime | None = None,
        history: tuple[PerformanceRecord, ...] = (),
    ) -> KnowledgeItem:
        return KnowledgeItem(
            id=item_id,
            question=f"Question for {item_id}",
            answer=f"Answer for {item_id}",
            tags={"biology"},
            content_type=ContentType.FLASHCARD,
            metadata=ItemMetadata(
                ease_factor=ease_factor,
                interval=interval,
                repetitions=repetitions,
                difficulty=difficulty,
                created=now - timedelta(days=30),
                last_reviewed=last_reviewed,
                next_review=next_review,
                performance_history=history,
            ),
        )

    return _make_item


@pytest.fixture
def sample_item(make_item):
    """Item on its third review: ease 2.5, 6 day interval, two repetitions."""
    return make_item(ease_factor=2.5, interval=6, repetitions=2)


@pytest.fixture
def good_review(now):
    """Rating 4, neutral difficulty, neutral response time."""
    return PerformanceRecord(date=now, rating=4, response_time=5.0, difficulty=3)


@pytest.fixture
def lapse_review(now):
    """Forgotten item: rating 1, neutral difficulty and response time."""
    return PerformanceRecord(date=now, rating=1, response_time=5.0, difficulty=3)


@pytest.fixture
def reviewed_item(make_item, now):
    """Item with two recorded reviews, last reviewed yesterday."""
    history = (
        PerformanceRecord(date=now - timedelta(days=7), rating=4, response_time=3.0, difficulty=2),
        PerformanceRecord(date=now - timedelta(days=1), rating=2, response_time=9.0, difficulty=4),
    )
    return make_item(
        item_id="reviewed",
        ease_factor=2.0,
        interval=1,
        repetitions=1,
        last_reviewed=now - timedelta(days=1),
        next_review=now,
        history=history,
    )


@pytest.fixture
def config():
    """Test configuration with non-default values."""
    return Config(
        initial_ease_factor=2.3,
        minimum_ease_factor=1.3,
        maximum_ease_factor=2.8,
        new_items_per_day=5,
        max_reviews_per_day=10,
        app_url="https://learn.example.com",
        timezone="Europe/Dublin",
    )
