"""Daily learning plan generation.

A plan combines a capped batch of never-reviewed items with the reviews that
have come due, plus a rough time estimate for working through both.
"""

from collections.abc import Iterable
from datetime import datetime

from drill.constants import NEW_ITEM_MINUTES, REVIEW_MINUTES
from drill.ids import IdFactory
from drill.models import KnowledgeItem, LearningPlan, ReviewSchedule


def to_review_schedule(item: KnowledgeItem, id_factory: IdFactory) -> ReviewSchedule:
    """Wrap an item's next review in a fresh, not yet completed schedule."""
    return ReviewSchedule(
        id=id_factory(item.id, item.metadata.next_review),
        item_id=item.id,
        scheduled_date=item.metadata.next_review,
        completed=False,
    )


def select_new_items(items: Iterable[KnowledgeItem], limit: int) -> list[KnowledgeItem]:
    """Pick never-reviewed items, hardest first.

    Harder material is introduced first so it gets the most exposure time.
    Items with equal difficulty keep their input order.
    """
    candidates = [item for item in items if item.metadata.repetitions == 0]
    candidates.sort(key=lambda item: item.metadata.difficulty, reverse=True)
    return candidates[:limit]


def schedule_reviews(
    items: Iterable[KnowledgeItem],
    as_of: datetime,
    limit: int,
    id_factory: IdFactory,
) -> list[ReviewSchedule]:
    """Schedule items that are due on or before `as_of`, earliest first."""
    due = [
        item
        for item in items
        if item.metadata.next_review is not None and item.metadata.next_review <= as_of
    ]
    due.sort(key=lambda item: item.metadata.next_review)
    return [to_review_schedule(item, id_factory) for item in due[:limit]]


def estimate_duration(new_items: list[KnowledgeItem], reviews: list[ReviewSchedule]) -> int:
    """Minutes needed for a plan: 2 per new item, 1 per review."""
    return len(new_items) * NEW_ITEM_MINUTES + len(reviews) * REVIEW_MINUTES


def build_learning_plan(
    items: Iterable[KnowledgeItem],
    as_of: datetime,
    new_limit: int,
    review_limit: int,
    id_factory: IdFactory,
) -> LearningPlan:
    """Generate the plan for `as_of` without touching the items."""
    items = list(items)
    new_items = select_new_items(items, new_limit)
    reviews = schedule_reviews(items, as_of, review_limit, id_factory)

    return LearningPlan(
        date=as_of,
        new_items=new_items,
        reviews=reviews,
        estimated_duration=estimate_duration(new_items, reviews),
    )
