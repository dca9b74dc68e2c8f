"""Data models for Drill."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ContentType(Enum):
    FLASHCARD = "flashcard"
    CLOZE = "cloze"
    MULTIPLE_CHOICE = "multiple_choice"
    FREE_RESPONSE = "free_response"


class ItemState(Enum):
    """Where an item sits in its review lifecycle."""

    NEW = "new"  # Never reviewed
    LEARNING = "learning"  # Reviewed, ease factor below the mastery threshold
    MASTERED = "mastered"  # Ease factor at or above the mastery threshold


@dataclass(frozen=True)
class PerformanceRecord:
    """One completed review of an item.

    rating: Recall quality (0-5), 3 and above is a pass:
        5 - Perfect response, no hesitation
        4 - Correct response after hesitation
        3 - Correct response with difficulty
        2 - Incorrect, but seemed easy to recall
        1 - Incorrect, but remembered when shown answer
        0 - Complete blackout
    response_time: Seconds taken to answer
    difficulty: How hard the item felt this time (1-5)
    """

    date: datetime
    rating: int
    response_time: float
    difficulty: int = 3


@dataclass
class ItemMetadata:
    """Scheduling state for a knowledge item. Only the engine updates it."""

    ease_factor: float = 2.5
    interval: int = 0
    repetitions: int = 0
    difficulty: int = 3  # Subjective 1-5 rating, independent of ease factor
    created: datetime | None = None
    last_reviewed: datetime | None = None
    next_review: datetime | None = None
    performance_history: tuple[PerformanceRecord, ...] = ()


@dataclass
class KnowledgeItem:
    """A single learnable fact or question.

    The scheduler only reads `metadata`; `content_type` tags the payload shape
    for callers and is otherwise ignored.
    """

    id: str
    question: str = ""
    answer: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)
    content_type: ContentType = ContentType.FLASHCARD
    metadata: ItemMetadata = field(default_factory=ItemMetadata)

    def __post_init__(self):
        self.tags = frozenset(self.tags)


@dataclass
class ReviewSchedule:
    """A scheduled (or completed) review of one item."""

    id: str
    item_id: str
    scheduled_date: datetime
    completed: bool = False
    actual_date: datetime | None = None
    performance: PerformanceRecord | None = None


@dataclass
class LearningPlan:
    """What the learner should work through on a given day."""

    date: datetime
    new_items: list[KnowledgeItem]
    reviews: list[ReviewSchedule]
    estimated_duration: int  # Minutes


@dataclass
class PerformanceMetrics:
    """Averages over every recorded review."""

    average_rating: float = 0.0
    average_response_time: float = 0.0
    average_difficulty: float = 0.0
    success_rate: float = 0.0


@dataclass
class UserProgress:
    """Aggregate progress across a learner's items."""

    total_items: int = 0
    mastered_items: int = 0
    average_ease_factor: float = 0.0
    average_interval: float = 0.0
    daily_streak: int = 0
    last_review_date: datetime | None = None
    upcoming_reviews: list[ReviewSchedule] = field(default_factory=list)
    performance_metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)
