"""
Tests for Sampling Module.

Tests alias-method edge sampling and the degree^0.75 negative table.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from line_embedding.sampling import AliasSampler, NegativeSampler
from line_embedding.exceptions import ConfigurationError, ResourceError


class TestAliasSampler:
    """Tests for alias-method sampling."""

    @pytest.fixture
    def weights(self):
        return np.array([1.0, 2.0, 3.0, 4.0])

    @pytest.fixture
    def sampler(self, weights):
        return AliasSampler(weights)

    def test_table_reproduces_distribution(self, sampler, weights):
        """Test that the table encodes weights / sum exactly."""
        np.testing.assert_allclose(sampler.probabilities(), weights / weights.sum())

    def test_probabilities_in_unit_interval(self, sampler):
        """Test that every slot probability lies in [0, 1]."""
        assert np.all(sampler.prob_table >= 0)
        assert np.all(sampler.prob_table <= 1)
        assert np.all((sampler.alias >= 0) & (sampler.alias < sampler.num_items))

    def test_empirical_frequencies(self, sampler, weights):
        """Test sampled frequencies with a chi-square statistic."""
        rng = np.random.default_rng(12345)
        num_draws = 200_000

        draws = sampler.sample_many(rng, num_draws)
        observed = np.bincount(draws, minlength=len(weights))
        expected = num_draws * weights / weights.sum()
        chi_square = float(np.sum((observed - expected) ** 2 / expected))

        # 99.9% quantile of chi-square with 3 degrees of freedom
        assert chi_square < 16.27

    def test_scalar_sample_matches_table(self, sampler):
        """Test slot selection and the alias fallback of sample()."""
        for k in range(sampler.num_items):
            r1 = (k + 0.5) / sampler.num_items
            assert sampler.sample(r1, 0.0) == k or sampler.prob_table[k] == 0.0
            if sampler.prob_table[k] < 1.0:
                assert sampler.sample(r1, 0.999999) == sampler.alias[k]

    def test_scalar_sample_frequencies(self, sampler, weights):
        """Test scalar sampling over a regular grid of draws."""
        grid = (np.arange(400) + 0.5) / 400
        counts = np.zeros(len(weights))
        for r1 in grid:
            for r2 in grid:
                counts[sampler.sample(r1, r2)] += 1

        np.testing.assert_allclose(counts / counts.sum(), weights / weights.sum(), atol=0.01)

    def test_uniform_weights(self):
        """Test that equal weights never use the alias."""
        sampler = AliasSampler(np.ones(7))

        np.testing.assert_allclose(sampler.prob_table, 1.0)
        np.testing.assert_allclose(sampler.probabilities(), np.full(7, 1 / 7))

    def test_single_item(self):
        """Test a one-edge table."""
        sampler = AliasSampler(np.array([5.0]))

        assert sampler.sample(0.7, 0.7) == 0

    def test_skewed_weights(self):
        """Test weights spanning several orders of magnitude."""
        weights = np.array([1e-3, 1.0, 1e3, 5.0, 1e-3])
        sampler = AliasSampler(weights)

        np.testing.assert_allclose(sampler.probabilities(), weights / weights.sum(), rtol=1e-6)

    def test_invalid_weights(self):
        """Test that empty or all-zero weights are rejected."""
        with pytest.raises(ConfigurationError):
            AliasSampler(np.array([]))
        with pytest.raises(ConfigurationError):
            AliasSampler(np.zeros(3))


class TestNegativeSampler:
    """Tests for negative sampling."""

    def test_table_share(self):
        """Test that slot shares follow degree^0.75."""
        table_size = 100_000
        sampler = NegativeSampler(np.array([1.0, 1.0, 4.0]), table_size=table_size)

        share = np.mean(sampler.table == 2)
        expected = 4 ** 0.75 / (1 + 1 + 4 ** 0.75)

        assert abs(share - expected) <= 2.0 / table_size

    def test_table_contiguous_and_ordered(self):
        """Test that vertex ids are non-decreasing along the table."""
        sampler = NegativeSampler(np.array([3.0, 1.0, 2.0, 5.0]), table_size=1000)

        assert np.all(np.diff(sampler.table) >= 0)
        assert sampler.table[0] == 0
        assert sampler.table[-1] == 3

    def test_sample(self):
        """Test slot lookup."""
        sampler = NegativeSampler(np.array([1.0, 1.0, 4.0]), table_size=1000)

        assert sampler.sample(0) == 0
        assert sampler.sample(999) == 2

    def test_power_one_is_degree_proportional(self):
        """Test that power 1 reproduces plain degree proportions."""
        sampler = NegativeSampler(np.array([1.0, 3.0]), table_size=10_000, power=1.0)

        assert abs(np.mean(sampler.table == 1) - 0.75) <= 2.0 / 10_000

    def test_high_degree_bias(self):
        """Test that hubs are drawn more than uniform but less than linear."""
        degrees = np.array([10.0, 1.0, 1.0, 1.0, 1.0, 1.0])
        sampler = NegativeSampler(degrees, table_size=100_000)

        hub_share = np.mean(sampler.table == 0)

        assert hub_share > 1 / 6
        assert hub_share < 10 / 15

    def test_zero_degree_vertex_unreachable(self):
        """Test that a vertex with degree 0 gets no slots."""
        sampler = NegativeSampler(np.array([1.0, 0.0, 1.0]), table_size=1000)

        assert 1 not in sampler.table
        assert sampler.get_statistics()['unreachable_vertices'] == 1

    def test_chunked_build(self):
        """Test a table larger than one build chunk."""
        sampler = NegativeSampler(np.array([1.0, 2.0, 3.0]), table_size=(1 << 20) + 12345)

        assert len(sampler.table) == (1 << 20) + 12345
        assert np.all(np.diff(sampler.table) >= 0)

    def test_invalid(self):
        """Test rejected inputs."""
        with pytest.raises(ConfigurationError):
            NegativeSampler(np.array([1.0]), table_size=0)
        with pytest.raises(ConfigurationError):
            NegativeSampler(np.zeros(3), table_size=10)


def _out_of_memory(*args, **kwargs):
    raise MemoryError


class TestAllocationFailures:
    """Tests that failed table allocations surface as ResourceError."""

    def test_alias_table(self, monkeypatch):
        """Test the alias and probability tables."""
        sampler = AliasSampler()
        monkeypatch.setattr(np, 'zeros', _out_of_memory)

        with pytest.raises(ResourceError):
            sampler.build(np.array([1.0, 2.0, 3.0]))

    def test_negative_table(self, monkeypatch):
        """Test the negative sampling table."""
        monkeypatch.setattr(np, 'empty', _out_of_memory)

        with pytest.raises(ResourceError):
            NegativeSampler(np.array([1.0, 2.0]), table_size=100)

    def test_negative_cumulative_shares(self, monkeypatch):
        """Test the cumulative distribution built before the table."""
        monkeypatch.setattr(np, 'cumsum', _out_of_memory)

        with pytest.raises(ResourceError):
            NegativeSampler(np.array([1.0, 2.0]), table_size=100)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
