"""Tests for weighted sampling."""

import numpy as np
import pytest

from symbolic_generation.errors import InvalidDistributionError
from symbolic_generation.sampling import (
    CategoricalDistribution, WeightedSampler, weighted_choice, weighted_choices
)


class TestWeightedSampler:
    """Weighted choice with replacement."""

    def test_draw_frequency_matches_weights(self):
        """B drawn with weight 3 against 1 should come up about 75% of the time."""
        sampler = WeightedSampler(seed=42)
        n = 10000
        draws = [sampler.draw(["A", "B"], [1, 3]) for _ in range(n)]
        frequency = draws.count("B") / n
        assert abs(frequency - 0.75) < 0.02

    def test_draw_many_frequency_matches_weights(self):
        sampler = WeightedSampler(seed=7)
        draws = sampler.draw_many(["A", "B"], [1, 3], 10000)
        assert len(draws) == 10000
        assert abs(draws.count("B") / 10000 - 0.75) < 0.02

    def test_zero_weight_items_never_drawn(self):
        sampler = WeightedSampler(seed=0)
        items = ["A", "B", "C", "D"]
        weights = [0, 1, 0, 0]
        assert set(sampler.draw_many(items, weights, 2000)) == {"B"}
        assert {sampler.draw(items, weights) for _ in range(500)} == {"B"}

    @pytest.mark.parametrize("items,weights", [
        ([], []),
        (["A"], [0]),
        (["A", "B"], [0, 0]),
        (["A", "B"], [1, -1]),
        (["A", "B"], [1]),
        (["A"], [float("nan")]),
        (["A"], [float("inf")]),
    ])
    def test_invalid_distribution(self, items, weights):
        sampler = WeightedSampler(seed=1)
        with pytest.raises(InvalidDistributionError):
            sampler.draw(items, weights)
        with pytest.raises(InvalidDistributionError):
            sampler.draw_many(items, weights, 3)

    def test_invalid_distribution_is_value_error(self):
        with pytest.raises(ValueError):
            CategoricalDistribution([], [])

    def test_same_seed_same_draws(self):
        items = list("abcdef")
        weights = [1, 2, 3, 4, 5, 6]
        first = WeightedSampler(seed=123).draw_many(items, weights, 200)
        second = WeightedSampler(seed=123).draw_many(items, weights, 200)
        assert first == second

    def test_injected_rng_is_used(self):
        rng = np.random.default_rng(5)
        sampler = WeightedSampler(rng=rng)
        assert sampler.rng is rng

    def test_seed_and_rng_are_exclusive(self):
        with pytest.raises(ValueError):
            WeightedSampler(seed=1, rng=np.random.default_rng(1))

    def test_draw_many_counts(self):
        sampler = WeightedSampler(seed=3)
        assert sampler.draw_many(["A"], [1], 0) == []
        assert sampler.draw_many(["A"], [2.5], 4) == ["A", "A", "A", "A"]
        with pytest.raises(ValueError):
            sampler.draw_many(["A"], [1], -1)


class TestCategoricalDistribution:
    """Prebuilt distributions."""

    def test_probabilities(self):
        distribution = CategoricalDistribution(["A", "B", "C"], [1, 1, 2])
        np.testing.assert_allclose(distribution.probabilities, [0.25, 0.25, 0.5])
        assert len(distribution) == 3

    def test_index_boundaries(self):
        distribution = CategoricalDistribution(["A", "B", "C"], [1, 0, 1])
        assert distribution.index_for(0.0) == 0
        assert distribution.index_for(0.49) == 0
        assert distribution.index_for(0.5) == 2
        assert distribution.index_for(0.999999) == 2

    def test_trailing_zero_weight_is_clamped(self):
        distribution = CategoricalDistribution(["A", "B"], [1, 0])
        # u == 1.0 cannot come from a uniform draw but must still map to a positive weight
        assert distribution.index_for(1.0) == 0
        indices = distribution.indices_for(np.array([0.0, 0.5, 1.0]))
        assert list(indices) == [0, 0, 0]

    def test_batch_and_single_lookup_agree(self):
        distribution = CategoricalDistribution(list("abcde"), [0.5, 0, 2, 1, 0.25])
        uniforms = np.linspace(0, 0.9999, 97)
        batch = distribution.indices_for(uniforms)
        single = [distribution.index_for(u) for u in uniforms]
        assert list(batch) == single

    def test_sample_many_uses_prebuilt_distribution(self):
        sampler = WeightedSampler(seed=11)
        distribution = CategoricalDistribution(["x", "y"], [0, 1])
        assert sampler.sample_many(distribution, 10) == ["y"] * 10
        assert sampler.sample(distribution) == "y"


def test_module_level_helpers():
    rng = np.random.default_rng(9)
    assert weighted_choice(["only"], [1], rng=rng) == "only"
    assert weighted_choices(["A", "B"], [0, 1], 5, rng=rng) == ["B"] * 5
    with pytest.raises(InvalidDistributionError):
        weighted_choice([], [])
