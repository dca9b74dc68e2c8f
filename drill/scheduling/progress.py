"""Aggregate progress statistics over a learner's items."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from drill.constants import PASSING_RATING
from drill.ids import IdFactory
from drill.models import (
    KnowledgeItem,
    PerformanceMetrics,
    PerformanceRecord,
    UserProgress,
)
from drill.scheduling.parameters import AlgorithmParameters
from drill.scheduling.planner import to_review_schedule


def average(values: list[float]) -> float:
    """Mean of `values`, or 0.0 when there are none."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def performance_metrics(history: list[PerformanceRecord]) -> PerformanceMetrics:
    """Averages across a flattened review history. All zero when it is empty."""
    if not history:
        return PerformanceMetrics()

    passed = sum(1 for record in history if record.rating >= PASSING_RATING)
    return PerformanceMetrics(
        average_rating=average([record.rating for record in history]),
        average_response_time=average([record.response_time for record in history]),
        average_difficulty=average([record.difficulty for record in history]),
        success_rate=passed / len(history),
    )


def daily_streak(items: list[KnowledgeItem], today: datetime) -> int:
    """Count consecutive days, back from today, with at least one review.

    Only each item's most recent review counts, so the streak reflects the
    days on which some item was last reviewed.
    """
    review_days = {
        item.metadata.last_reviewed.date()
        for item in items
        if item.metadata.last_reviewed is not None
    }

    streak = 0
    day = today.date()
    while day in review_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def last_review_date(items: list[KnowledgeItem]) -> datetime | None:
    reviewed = [item.metadata.last_reviewed for item in items if item.metadata.last_reviewed is not None]
    return max(reviewed, default=None)


def calculate_user_progress(
    items: Iterable[KnowledgeItem],
    now: datetime,
    parameters: AlgorithmParameters,
    id_factory: IdFactory,
) -> UserProgress:
    """Summarize a learner's items as of `now`. Never mutates the items."""
    items = list(items)

    mastery = parameters.mastery_ease_factor
    mastered = [item for item in items if item.metadata.ease_factor >= mastery]

    history = [record for item in items for record in item.metadata.performance_history]

    upcoming = [
        item
        for item in items
        if item.metadata.next_review is not None and item.metadata.next_review > now
    ]
    upcoming_reviews = [to_review_schedule(item, id_factory) for item in upcoming]
    upcoming_reviews.sort(key=lambda review: review.scheduled_date)

    return UserProgress(
        total_items=len(items),
        mastered_items=len(mastered),
        average_ease_factor=average([item.metadata.ease_factor for item in items]),
        average_interval=average([item.metadata.interval for item in items]),
        daily_streak=daily_streak(items, now),
        last_review_date=last_review_date(items),
        upcoming_reviews=upcoming_reviews,
        performance_metrics=performance_metrics(history),
    )
