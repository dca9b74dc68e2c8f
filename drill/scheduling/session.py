"""Running tally for a single review session."""

from dataclasses import dataclass

from drill.models import PerformanceRecord
from drill.scheduling.sm2 import clamp_difficulty, clamp_rating


@dataclass
class ReviewSession:
    """Counts what happened while a learner worked through a plan."""

    cards_reviewed: int = 0
    easy_responses: int = 0  # Rated 4 or 5
    hard_responses: int = 0  # Rated 2 or below
    average_difficulty: float = 0.0

    def record(self, performance: PerformanceRecord) -> None:
        rating = clamp_rating(performance.rating)
        difficulty = clamp_difficulty(performance.difficulty)

        if rating >= 4:
            self.easy_responses += 1
        elif rating <= 2:
            self.hard_responses += 1

        total = self.average_difficulty * self.cards_reviewed + difficulty
        self.cards_reviewed += 1
        self.average_difficulty = total / self.cards_reviewed

    def reset(self) -> None:
        self.cards_reviewed = 0
        self.easy_responses = 0
        self.hard_responses = 0
        self.average_difficulty = 0.0
