"""Tunable parameters for the scheduling algorithm."""

from dataclasses import dataclass

from drill.constants import MASTERY_THRESHOLD
from drill.errors import ConfigurationError


@dataclass(frozen=True)
class AlgorithmParameters:
    """Configuration for every scheduling formula.

    Validated on construction, so an engine can never be built around an
    inconsistent parameter set.
    """

    initial_ease_factor: float = 2.5
    minimum_ease_factor: float = 1.3
    maximum_ease_factor: float = 2.5
    difficulty_weight: float = 0.3  # How strongly felt difficulty moves the interval
    performance_weight: float = 0.5  # How strongly the rating moves the interval
    response_time_weight: float = 0.2  # How strongly answer latency moves the interval
    interval_modifier: float = 1.0  # Global multiplier on every computed interval
    new_items_per_day: int = 20
    max_reviews_per_day: int = 100

    def __post_init__(self):
        if self.minimum_ease_factor <= 0:
            raise ConfigurationError(
                f"minimum_ease_factor must be positive, got {self.minimum_ease_factor}"
            )
        if self.minimum_ease_factor > self.maximum_ease_factor:
            raise ConfigurationError(
                f"minimum_ease_factor ({self.minimum_ease_factor}) exceeds "
                f"maximum_ease_factor ({self.maximum_ease_factor})"
            )
        if not self.minimum_ease_factor <= self.initial_ease_factor <= self.maximum_ease_factor:
            raise ConfigurationError(
                f"initial_ease_factor ({self.initial_ease_factor}) must lie within "
                f"[{self.minimum_ease_factor}, {self.maximum_ease_factor}]"
            )

        for name in ("difficulty_weight", "performance_weight", "response_time_weight"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")

        if self.interval_modifier <= 0:
            raise ConfigurationError(
                f"interval_modifier must be positive, got {self.interval_modifier}"
            )

        for name in ("new_items_per_day", "max_reviews_per_day"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")

    @property
    def mastery_ease_factor(self) -> float:
        """Ease factor at which an item counts as mastered."""
        return self.maximum_ease_factor * MASTERY_THRESHOLD
