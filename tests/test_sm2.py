"""Tests for the weighted SM-2 spaced repetition algorithm."""

import pytest

from drill.models import PerformanceRecord
from drill.scheduling.parameters import AlgorithmParameters
from drill.scheduling.sm2 import (
    base_interval,
    clamp_difficulty,
    clamp_rating,
    compute_next_interval,
    rating_from_performance,
    round_half_up,
    update_ease_factor,
)


def review(now, rating=3, response_time=5.0, difficulty=3):
    return PerformanceRecord(date=now, rating=rating, response_time=response_time, difficulty=difficulty)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_half_rounds_up(self):
        """Halves should round away from the even neighbour."""
        assert round_half_up(22.5) == 23
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_regular_rounding(self):
        assert round_half_up(2.4) == 2
        assert round_half_up(2.6) == 3
        assert round_half_up(15.0) == 15


class TestClamping:
    """Tests for rating and difficulty clamping."""

    def test_rating_clamped_to_scale(self):
        assert clamp_rating(10) == 5
        assert clamp_rating(-5) == 0
        assert clamp_rating(3) == 3

    def test_difficulty_clamped_to_scale(self):
        assert clamp_difficulty(0) == 1
        assert clamp_difficulty(9) == 5
        assert clamp_difficulty(4) == 4


class TestBaseInterval:
    """Tests for the graduated base interval."""

    def test_first_repetition_is_one_day(self):
        assert base_interval(rating=4, repetitions=0, interval=0, ease_factor=2.5) == 1

    def test_second_repetition_is_six_days(self):
        assert base_interval(rating=4, repetitions=1, interval=1, ease_factor=2.5) == 6

    def test_later_repetitions_grow_by_ease_factor(self):
        assert base_interval(rating=4, repetitions=2, interval=6, ease_factor=2.5) == 15
        assert base_interval(rating=3, repetitions=5, interval=10, ease_factor=1.3) == 13

    @pytest.mark.parametrize("rating", [0, 1, 2])
    def test_lapse_restarts_at_one_day(self, rating):
        """A lapse ignores the prior interval entirely."""
        assert base_interval(rating=rating, repetitions=8, interval=120, ease_factor=2.5) == 1


class TestComputeNextInterval:
    """Tests for compute_next_interval."""

    def test_worked_example(self, now):
        """ease 2.5, interval 6, third review rated 4 -> round(15 * 1.5) = 23."""
        interval = compute_next_interval(
            review(now, rating=4),
            ease_factor=2.5,
            interval=6,
            repetitions=2,
            parameters=AlgorithmParameters(),
        )
        assert interval == 23

    def test_neutral_observation_keeps_base_interval(self, now):
        """Rating 3, difficulty 3 and a 5s answer leave the base untouched."""
        interval = compute_next_interval(
            review(now), ease_factor=2.5, interval=6, repetitions=2, parameters=AlgorithmParameters()
        )
        assert interval == 15

    def test_first_and_second_reviews(self, now):
        params = AlgorithmParameters()
        first = compute_next_interval(review(now, rating=4), 2.5, 0, 0, params)
        second = compute_next_interval(review(now, rating=4), 2.5, 1, 1, params)
        assert first == 2  # 1 * 1.5 rounds up
        assert second == 9  # 6 * 1.5

    def test_harder_items_get_shorter_intervals(self, now):
        params = AlgorithmParameters()
        hard = compute_next_interval(review(now, difficulty=5), 2.5, 6, 2, params)
        neutral = compute_next_interval(review(now, difficulty=3), 2.5, 6, 2, params)
        easy = compute_next_interval(review(now, difficulty=1), 2.5, 6, 2, params)
        assert hard == 6  # 15 * 0.4
        assert neutral == 15
        assert easy == 24  # 15 * 1.6
        assert hard < neutral < easy

    def test_higher_ratings_get_longer_intervals(self, now):
        params = AlgorithmParameters()
        intervals = [
            compute_next_interval(review(now, rating=rating), 2.5, 6, 2, params)
            for rating in (3, 4, 5)
        ]
        assert intervals == [15, 23, 30]

    def test_fast_answers_lengthen_slow_answers_shorten(self, now):
        params = AlgorithmParameters()
        fast = compute_next_interval(review(now, response_time=2.0), 2.5, 6, 2, params)
        slow = compute_next_interval(review(now, response_time=8.0), 2.5, 6, 2, params)
        assert fast == 24  # 15 * 1.6
        assert slow == 6  # 15 * 0.4

    def test_interval_never_negative(self, now):
        """Very slow answers push the modifier below zero; the result clamps at 0."""
        interval = compute_next_interval(
            review(now, response_time=30.0), 2.5, 6, 2, AlgorithmParameters()
        )
        assert interval == 0

    def test_interval_modifier_scales_result(self, now):
        params = AlgorithmParameters(interval_modifier=2.0)
        assert compute_next_interval(review(now), 2.5, 6, 2, params) == 30

    def test_lapse_uses_one_day_base(self, now):
        """With the rating weight disabled a lapse lands exactly on one day."""
        params = AlgorithmParameters(performance_weight=0.0)
        for rating in (0, 1, 2):
            assert compute_next_interval(review(now, rating=rating), 2.5, 90, 7, params) == 1

    def test_lapse_with_default_weights_is_due_soon(self, now):
        params = AlgorithmParameters()
        assert compute_next_interval(review(now, rating=2), 2.5, 90, 7, params) == 1  # 1 * 0.5
        assert compute_next_interval(review(now, rating=1), 2.5, 90, 7, params) == 0  # 1 * 0.0

    def test_larger_ease_factor_never_shortens_interval(self, now):
        params = AlgorithmParameters()
        for rating in (3, 4, 5):
            for difficulty in (1, 2, 3, 4, 5):
                previous = -1
                for ease in (1.3, 1.5, 1.7, 1.9, 2.1, 2.3, 2.5):
                    interval = compute_next_interval(
                        review(now, rating=rating, difficulty=difficulty), ease, 10, 4, params
                    )
                    assert interval >= previous
                    previous = interval

    def test_out_of_range_rating_is_clamped(self, now):
        params = AlgorithmParameters()
        too_high = compute_next_interval(review(now, rating=10), 2.5, 6, 2, params)
        perfect = compute_next_interval(review(now, rating=5), 2.5, 6, 2, params)
        assert too_high == perfect


class TestUpdateEaseFactor:
    """Tests for update_ease_factor."""

    def test_rating_four_keeps_ease_factor(self, now):
        """The classic SM-2 delta for a 4 is zero."""
        result = update_ease_factor(2.5, review(now, rating=4), AlgorithmParameters())
        assert result == pytest.approx(2.5)

    def test_perfect_response_increases_ease(self, now):
        result = update_ease_factor(2.0, review(now, rating=5), AlgorithmParameters())
        assert result == pytest.approx(2.1)

    def test_difficult_pass_decreases_ease(self, now):
        result = update_ease_factor(2.0, review(now, rating=3), AlgorithmParameters())
        assert result == pytest.approx(1.86)

    def test_lapse_takes_flat_penalty(self, now):
        params = AlgorithmParameters()
        assert update_ease_factor(2.0, review(now, rating=0), params) == pytest.approx(1.8)
        assert update_ease_factor(2.0, review(now, rating=2), params) == pytest.approx(1.8)

    def test_felt_difficulty_adjusts_ease(self, now):
        params = AlgorithmParameters()
        assert update_ease_factor(2.0, review(now, rating=1, difficulty=5), params) == pytest.approx(1.6)
        assert update_ease_factor(2.0, review(now, rating=4, difficulty=1), params) == pytest.approx(2.2)

    def test_repeated_blackouts_clamp_at_minimum(self, now):
        params = AlgorithmParameters()
        ease = params.initial_ease_factor
        for _ in range(100):
            ease = update_ease_factor(ease, review(now, rating=0, difficulty=5), params)
        assert ease == pytest.approx(params.minimum_ease_factor)

    def test_repeated_perfect_reviews_clamp_at_maximum(self, now):
        params = AlgorithmParameters(maximum_ease_factor=3.0)
        ease = 1.5
        for _ in range(100):
            ease = update_ease_factor(ease, review(now, rating=5, difficulty=1), params)
        assert ease == pytest.approx(3.0)

    def test_always_within_bounds(self, now):
        params = AlgorithmParameters(minimum_ease_factor=1.3, maximum_ease_factor=2.8, initial_ease_factor=2.5)
        for start in (1.3, 1.9, 2.5, 2.8):
            for rating in range(6):
                for difficulty in range(1, 6):
                    result = update_ease_factor(start, review(now, rating=rating, difficulty=difficulty), params)
                    assert 1.3 <= result <= 2.8


class TestRatingFromPerformance:
    """Tests for deriving a rating from a right/wrong outcome."""

    def test_wrong_answer_is_a_lapse(self):
        assert rating_from_performance(correct=False) == 1
        assert rating_from_performance(correct=False, response_time=1.0) == 1

    @pytest.mark.parametrize(
        "response_time, expected",
        [
            (0.5, 5),
            (2.0, 4),  # fast threshold is exclusive
            (4.9, 4),
            (5.0, 3),  # neutral time is the lowest pass
            (30.0, 3),
        ],
    )
    def test_right_answer_rated_by_speed(self, response_time, expected):
        assert rating_from_performance(correct=True, response_time=response_time) == expected

    def test_untimed_right_answer(self):
        """No timing information rates one step above a pass."""
        assert rating_from_performance(correct=True) == 4

    def test_right_answers_always_pass(self):
        ratings = {rating_from_performance(True, t / 10) for t in range(0, 200)}
        assert min(ratings) >= 3
