"""Weighted SM-2 Spaced Repetition Algorithm.

Based on the SuperMemo SM-2 algorithm by Piotr Wozniak, extended with three
multiplicative modifiers on the interval: felt difficulty, recall rating and
response time. Each modifier is 1.0 for a neutral observation (difficulty 3,
rating 3, a five second answer).
https://www.supermemo.com/en/blog/application-of-a-computer-to-improve-the-results-obtained-in-working-with-the-supermemo-method
"""

import logging
import math

from drill.constants import (
    DIFFICULTY_EASE_STEP,
    FAST_RESPONSE_TIME,
    FIRST_INTERVAL,
    LAPSE_EASE_PENALTY,
    LAPSE_INTERVAL,
    MAX_DIFFICULTY,
    MAX_RATING,
    MIN_DIFFICULTY,
    MIN_RATING,
    NEUTRAL_DIFFICULTY,
    NEUTRAL_RESPONSE_TIME,
    PASSING_RATING,
    SECOND_INTERVAL,
)
from drill.models import PerformanceRecord
from drill.scheduling.parameters import AlgorithmParameters

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (22.5 -> 23)."""
    return math.floor(value + 0.5)


def clamp_rating(rating: int) -> int:
    clamped = max(MIN_RATING, min(MAX_RATING, rating))
    if clamped != rating:
        logger.debug("Rating %s outside %s-%s, clamped to %s", rating, MIN_RATING, MAX_RATING, clamped)
    return clamped


def clamp_difficulty(difficulty: int) -> int:
    clamped = max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, difficulty))
    if clamped != difficulty:
        logger.debug(
            "Difficulty %s outside %s-%s, clamped to %s",
            difficulty,
            MIN_DIFFICULTY,
            MAX_DIFFICULTY,
            clamped,
        )
    return clamped


def base_interval(rating: int, repetitions: int, interval: int, ease_factor: float) -> int:
    """Graduated SM-2 interval before any weighting.

    A lapse always restarts at LAPSE_INTERVAL. Passing reviews step through
    1 day, 6 days, then grow by the ease factor.
    """
    if rating < PASSING_RATING:
        return LAPSE_INTERVAL
    if repetitions == 0:
        return FIRST_INTERVAL
    if repetitions == 1:
        return SECOND_INTERVAL
    return round_half_up(interval * ease_factor)


def compute_next_interval(
    performance: PerformanceRecord,
    ease_factor: float,
    interval: int,
    repetitions: int,
    parameters: AlgorithmParameters,
) -> int:
    """
    Calculate the next review interval in days.

    Args:
        performance: The review being recorded
        ease_factor: The item's ease factor before this review
        interval: The item's current interval in days
        repetitions: Reviews recorded so far
        parameters: Weights and global interval modifier

    Returns:
        Whole days until the next review. Zero means due again today.
    """
    rating = clamp_rating(performance.rating)
    difficulty = clamp_difficulty(performance.difficulty)
    response_time = max(0.0, performance.response_time)

    base = base_interval(rating, repetitions, interval, ease_factor)

    # Harder than neutral shortens, easier lengthens. Written as
    # 1 + (difficulty - 3) * weight it would lengthen intervals for harder items.
    difficulty_modifier = 1 - (difficulty - NEUTRAL_DIFFICULTY) * parameters.difficulty_weight
    performance_modifier = 1 + (rating - PASSING_RATING) * parameters.performance_weight
    # Answers faster than the neutral time lengthen the interval
    response_time_modifier = 1 + (NEUTRAL_RESPONSE_TIME - response_time) * parameters.response_time_weight

    weighted = (
        base
        * difficulty_modifier
        * performance_modifier
        * response_time_modifier
        * parameters.interval_modifier
    )
    return max(0, round_half_up(weighted))


def update_ease_factor(
    current_ease_factor: float,
    performance: PerformanceRecord,
    parameters: AlgorithmParameters,
) -> float:
    """
    Adjust an ease factor after a review.

    Passing reviews use the classic SM-2 delta, lapses take a flat penalty.
    Items that felt harder than neutral lose a further step either way.
    The result is clamped to the configured bounds.
    """
    rating = clamp_rating(performance.rating)
    difficulty = clamp_difficulty(performance.difficulty)

    new_ef = current_ease_factor
    if rating >= PASSING_RATING:
        new_ef += 0.1 - (5 - rating) * (0.08 + (5 - rating) * 0.02)
    else:
        new_ef -= LAPSE_EASE_PENALTY

    new_ef -= (difficulty - NEUTRAL_DIFFICULTY) * DIFFICULTY_EASE_STEP

    return max(parameters.minimum_ease_factor, min(parameters.maximum_ease_factor, new_ef))


def rating_from_performance(correct: bool, response_time: float | None = None) -> int:
    """
    Derive a 0-5 rating for front ends that only know right or wrong.

    A wrong answer rates two steps below a pass. A right answer rates by
    speed: under FAST_RESPONSE_TIME is perfect recall, and at or beyond the
    neutral response time is the lowest pass. A right answer with no timing
    rates one step above a pass.

    Args:
        correct: Whether the learner answered correctly
        response_time: Seconds taken to answer, if measured

    Returns:
        Rating on the 0-5 scale
    """
    if not correct:
        return PASSING_RATING - 2

    if response_time is None or FAST_RESPONSE_TIME <= response_time < NEUTRAL_RESPONSE_TIME:
        return PASSING_RATING + 1
    if response_time < FAST_RESPONSE_TIME:
        return MAX_RATING
    return PASSING_RATING
