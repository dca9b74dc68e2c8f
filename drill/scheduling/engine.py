"""Adaptive review scheduling engine.

Ties the weighted SM-2 formulas, plan generation and progress statistics to
one validated parameter set. The engine keeps no state between calls: items
go in, new values come out, and the caller persists whatever it needs.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timedelta
import logging

from drill.constants import NEUTRAL_DIFFICULTY
from drill.ids import IdFactory, new_item_id, review_id
from drill.models import (
    ContentType,
    ItemMetadata,
    ItemState,
    KnowledgeItem,
    LearningPlan,
    PerformanceRecord,
    ReviewSchedule,
    UserProgress,
)
from drill.scheduling import sm2
from drill.scheduling.parameters import AlgorithmParameters
from drill.scheduling.planner import build_learning_plan
from drill.scheduling.progress import calculate_user_progress

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """Schedules reviews for knowledge items using weighted SM-2."""

    def __init__(
        self,
        parameters: AlgorithmParameters | None = None,
        id_factory: IdFactory = review_id,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.parameters = parameters or AlgorithmParameters()
        self.id_factory = id_factory
        self.clock = clock

    def create_item(
        self,
        question: str,
        answer: str,
        tags: Iterable[str] = (),
        difficulty: int = NEUTRAL_DIFFICULTY,
        content_type: ContentType = ContentType.FLASHCARD,
        item_id: str | None = None,
        created: datetime | None = None,
    ) -> KnowledgeItem:
        """Create a never-reviewed item starting at the initial ease factor."""
        return KnowledgeItem(
            id=item_id or new_item_id(),
            question=question,
            answer=answer,
            tags=frozenset(tags),
            content_type=content_type,
            metadata=ItemMetadata(
                ease_factor=self.parameters.initial_ease_factor,
                interval=0,
                repetitions=0,
                difficulty=sm2.clamp_difficulty(difficulty),
                created=created or self.clock(),
            ),
        )

    def compute_next_interval(self, item: KnowledgeItem, performance: PerformanceRecord) -> int:
        """Days until the next review if `performance` were recorded now."""
        meta = item.metadata
        return sm2.compute_next_interval(
            performance,
            ease_factor=meta.ease_factor,
            interval=meta.interval,
            repetitions=meta.repetitions,
            parameters=self.parameters,
        )

    def update_ease_factor(self, current_ease_factor: float, performance: PerformanceRecord) -> float:
        return sm2.update_ease_factor(current_ease_factor, performance, self.parameters)

    def record_review(self, item: KnowledgeItem, performance: PerformanceRecord) -> KnowledgeItem:
        """Apply one completed review and return the updated item.

        The interval is computed from the item's state before this review.
        A lapse restarts the interval and lowers the ease factor, but every
        recorded review still counts towards the repetitions, so an item
        leaves NEW on its first review whatever the rating.
        """
        record = replace(
            performance,
            rating=sm2.clamp_rating(performance.rating),
            difficulty=sm2.clamp_difficulty(performance.difficulty),
        )
        meta = item.metadata

        interval = self.compute_next_interval(item, record)
        ease_factor = self.update_ease_factor(meta.ease_factor, record)
        repetitions = meta.repetitions + 1

        logger.debug(
            "Item %s rated %s: interval %s -> %s days, ease %.2f -> %.2f",
            item.id,
            record.rating,
            meta.interval,
            interval,
            meta.ease_factor,
            ease_factor,
        )

        return replace(
            item,
            metadata=replace(
                meta,
                ease_factor=ease_factor,
                interval=interval,
                repetitions=repetitions,
                last_reviewed=record.date,
                next_review=record.date + timedelta(days=interval),
                performance_history=meta.performance_history + (record,),
            ),
        )

    def complete_review(self, schedule: ReviewSchedule, performance: PerformanceRecord) -> ReviewSchedule:
        """Mark a scheduled review as done."""
        return replace(
            schedule,
            completed=True,
            actual_date=performance.date,
            performance=performance,
        )

    def item_state(self, item: KnowledgeItem) -> ItemState:
        # New items start at the initial ease factor, which may already sit
        # above the mastery threshold
        if item.metadata.repetitions == 0:
            return ItemState.NEW
        if item.metadata.ease_factor >= self.parameters.mastery_ease_factor:
            return ItemState.MASTERED
        return ItemState.LEARNING

    def generate_learning_plan(
        self, items: Iterable[KnowledgeItem], as_of: datetime | None = None
    ) -> LearningPlan:
        """Build today's plan: capped new items plus capped due reviews."""
        plan = build_learning_plan(
            items,
            as_of=as_of or self.clock(),
            new_limit=self.parameters.new_items_per_day,
            review_limit=self.parameters.max_reviews_per_day,
            id_factory=self.id_factory,
        )
        logger.debug(
            "Plan for %s: %d new, %d reviews, ~%d min",
            plan.date,
            len(plan.new_items),
            len(plan.reviews),
            plan.estimated_duration,
        )
        return plan

    def calculate_user_progress(
        self, items: Iterable[KnowledgeItem], now: datetime | None = None
    ) -> UserProgress:
        return calculate_user_progress(
            items,
            now=now or self.clock(),
            parameters=self.parameters,
            id_factory=self.id_factory,
        )
