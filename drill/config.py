"""Configuration management for Drill."""

# This module centralizes environment variable loading for the scheduler:
# algorithm weights, daily caps, and the settings used by calendar export.

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from drill.scheduling.parameters import AlgorithmParameters

ENV_PREFIX = "DRILL_"

_DEFAULTS = AlgorithmParameters()


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Ease factor
    initial_ease_factor: float = _DEFAULTS.initial_ease_factor
    minimum_ease_factor: float = _DEFAULTS.minimum_ease_factor
    maximum_ease_factor: float = _DEFAULTS.maximum_ease_factor

    # Interval weighting
    difficulty_weight: float = _DEFAULTS.difficulty_weight
    performance_weight: float = _DEFAULTS.performance_weight
    response_time_weight: float = _DEFAULTS.response_time_weight
    interval_modifier: float = _DEFAULTS.interval_modifier

    # Daily plan caps
    new_items_per_day: int = _DEFAULTS.new_items_per_day
    max_reviews_per_day: int = _DEFAULTS.max_reviews_per_day

    # Calendar export
    app_url: str = ""  # e.g., https://learn.example.com, used for review links

    # Timezone
    timezone: str = "UTC"

    @staticmethod
    def _safe_int(value: str | None, default: int = 0) -> int:
        """Safely parse an integer, returning default if invalid."""
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    @staticmethod
    def _safe_float(value: str | None, default: float = 0.0) -> float:
        """Safely parse a float, returning default if invalid."""
        try:
            return float(value)
        except (ValueError, TypeError):
            return default

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        def env(name: str) -> str | None:
            return os.environ.get(ENV_PREFIX + name)

        return cls(
            initial_ease_factor=cls._safe_float(env("INITIAL_EASE_FACTOR"), _DEFAULTS.initial_ease_factor),
            minimum_ease_factor=cls._safe_float(env("MINIMUM_EASE_FACTOR"), _DEFAULTS.minimum_ease_factor),
            maximum_ease_factor=cls._safe_float(env("MAXIMUM_EASE_FACTOR"), _DEFAULTS.maximum_ease_factor),
            difficulty_weight=cls._safe_float(env("DIFFICULTY_WEIGHT"), _DEFAULTS.difficulty_weight),
            performance_weight=cls._safe_float(env("PERFORMANCE_WEIGHT"), _DEFAULTS.performance_weight),
            response_time_weight=cls._safe_float(env("RESPONSE_TIME_WEIGHT"), _DEFAULTS.response_time_weight),
            interval_modifier=cls._safe_float(env("INTERVAL_MODIFIER"), _DEFAULTS.interval_modifier),
            new_items_per_day=cls._safe_int(env("NEW_ITEMS_PER_DAY"), _DEFAULTS.new_items_per_day),
            max_reviews_per_day=cls._safe_int(env("MAX_REVIEWS_PER_DAY"), _DEFAULTS.max_reviews_per_day),
            app_url=env("APP_URL") or "",
            timezone=env("TIMEZONE") or "UTC",
        )

    def algorithm_parameters(self) -> AlgorithmParameters:
        """Validated algorithm parameters. Raises ConfigurationError if inconsistent."""
        return AlgorithmParameters(
            initial_ease_factor=self.initial_ease_factor,
            minimum_ease_factor=self.minimum_ease_factor,
            maximum_ease_factor=self.maximum_ease_factor,
            difficulty_weight=self.difficulty_weight,
            performance_weight=self.performance_weight,
            response_time_weight=self.response_time_weight,
            interval_modifier=self.interval_modifier,
            new_items_per_day=self.new_items_per_day,
            max_reviews_per_day=self.max_reviews_per_day,
        )
