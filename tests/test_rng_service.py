"""Tests for the RNG service sampling primitives."""

import random

import pytest

from fishcore.util.rng import MissingRNGError, RNGService, require_rng_param


class TestWeightedChoice:
    def test_zero_total_returns_minus_one(self) -> None:
        rng = RNGService(1)
        assert rng.weighted_choice_index([0.0, 0.0]) == -1
        assert rng.weighted_choice_index([]) == -1

    def test_negative_weights_count_as_zero(self) -> None:
        rng = RNGService(1)
        assert rng.weighted_choice_index([-5.0, -1.0]) == -1
        for _ in range(200):
            assert rng.weighted_choice_index([-3.0, 2.0, 0.0]) == 1

    def test_single_positive_weight_always_wins(self) -> None:
        rng = RNGService(7)
        for _ in range(200):
            assert rng.weighted_choice_index([0.0, 0.0, 4.0]) == 2

    def test_index_always_in_range(self) -> None:
        rng = RNGService(3)
        weights = [1.0, 2.0, 3.0, 0.5]
        for _ in range(1000):
            assert 0 <= rng.weighted_choice_index(weights) < len(weights)

    def test_frequencies_follow_weights(self) -> None:
        rng = RNGService(11)
        counts = [0, 0]
        for _ in range(10_000):
            counts[rng.weighted_choice_index([1.0, 3.0])] += 1
        share = counts[1] / sum(counts)
        assert 0.72 < share < 0.78

    def test_matches_cumulative_draw(self) -> None:
        """The draw is random() * total against the cumulative sum."""
        weights = [2.0, 1.0, 1.0]
        reference = random.Random(99)
        rng = RNGService(99)
        for _ in range(50):
            roll = reference.random() * 4.0
            expected = 0 if roll <= 2.0 else 1 if roll <= 3.0 else 2
            assert rng.weighted_choice_index(weights) == expected


class TestTruncatedNormal:
    def test_zero_sd_returns_clamped_mean(self) -> None:
        rng = RNGService(5)
        assert rng.truncated_normal(30.0, 0.0, 10.0, 50.0) == 30.0
        assert rng.truncated_normal(80.0, 0.0, 10.0, 50.0) == 50.0
        assert rng.truncated_normal(-3.0, -1.0, 0.0, 5.0) == 0.0

    def test_samples_stay_in_window(self) -> None:
        rng = RNGService(8)
        for _ in range(2000):
            sample = rng.truncated_normal(35.0, 7.5, 10.0, 50.0)
            assert 10.0 <= sample <= 50.0

    def test_unreachable_window_falls_back_to_clamped_mean(self) -> None:
        rng = RNGService(8)
        # Mean far outside a tiny window: every try misses.
        assert rng.truncated_normal(1000.0, 0.001, 0.0, 1.0) == 1.0


class TestBasics:
    def test_uniform_range_bounds(self) -> None:
        rng = RNGService(2)
        for _ in range(1000):
            value = rng.uniform_range(1.0, 5.0)
            assert 1.0 <= value < 5.0

    def test_chance_extremes(self) -> None:
        rng = RNGService(2)
        assert not any(rng.chance(0.0) for _ in range(500))
        assert all(rng.chance(1.0) for _ in range(500))

    def test_same_seed_same_stream(self) -> None:
        a = RNGService(1234)
        b = RNGService(1234)
        assert [a.value() for _ in range(20)] == [b.value() for _ in range(20)]

    def test_reseed_restarts_stream(self) -> None:
        rng = RNGService(10)
        first = [rng.value() for _ in range(5)]
        rng.seed(10)
        assert [rng.value() for _ in range(5)] == first
        assert rng.seed_value == 10

    def test_require_rng_param(self) -> None:
        rng = RNGService(1)
        assert require_rng_param(rng, "test") is rng
        with pytest.raises(MissingRNGError):
            require_rng_param(None, "test")
