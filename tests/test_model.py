"""
Tests for Model Module.

Tests the sigmoid lookup table and the embedding store.
"""

import math

import pytest
import numpy as np
import torch
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from line_embedding.model import EmbeddingStore, SigmoidLookup
from line_embedding.exceptions import ConfigurationError, ResourceError


class TestSigmoidLookup:
    """Tests for the sigmoid lookup table."""

    @pytest.fixture
    def sigmoid(self):
        return SigmoidLookup()

    def test_saturation(self, sigmoid):
        """Test clamping outside the table domain."""
        assert sigmoid.eval(10.0) == 1
        assert sigmoid.eval(-10.0) == 0
        assert sigmoid.eval(6.0001) == 1
        assert sigmoid.eval(-6.0001) == 0

    def test_zero(self, sigmoid):
        """Test the midpoint within one bucket."""
        assert abs(sigmoid.eval(0.0) - 0.5) <= sigmoid.bucket_width

    def test_bounds_inside_domain(self, sigmoid):
        """Test that x == +/-bound index valid buckets."""
        assert sigmoid.eval(6.0) == pytest.approx(1 / (1 + math.exp(-6.0)), abs=sigmoid.bucket_width)
        assert sigmoid.eval(-6.0) == pytest.approx(1 / (1 + math.exp(6.0)), abs=1e-6)

    def test_non_decreasing(self, sigmoid):
        """Test monotonicity over increasing x."""
        values = [sigmoid.eval(x) for x in np.linspace(-8, 8, 20001)]

        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_close_to_exact(self, sigmoid):
        """Test the error against the exact logistic function."""
        for x in np.linspace(-5.99, 5.99, 1001):
            exact = 1 / (1 + math.exp(-x))
            assert abs(sigmoid.eval(float(x)) - exact) <= sigmoid.bucket_width

    def test_table_shape(self, sigmoid):
        """Test table size including the closing bucket."""
        assert sigmoid.table.shape == (1001,)
        assert sigmoid.bucket_width == pytest.approx(0.012)

    def test_custom_table(self):
        """Test a coarser table with a different bound."""
        sigmoid = SigmoidLookup(table_size=10, bound=2.0)

        assert sigmoid(3.0) == 1.0
        assert sigmoid(-3.0) == 0.0
        assert abs(sigmoid(0.0) - 0.5) <= sigmoid.bucket_width

    def test_non_finite(self, sigmoid):
        """Test NaN and infinities."""
        assert sigmoid.eval(float('nan')) == 0.0
        assert sigmoid.eval(float('inf')) == 1.0
        assert sigmoid.eval(float('-inf')) == 0.0
        assert sigmoid.eval(np.float32('nan')) == 0.0


class TestEmbeddingStore:
    """Tests for the embedding store."""

    @pytest.fixture
    def store(self):
        store = EmbeddingStore(num_vertices=50, dim=16)
        store.init(seed=3)
        return store

    def test_shapes(self, store):
        """Test matrix shapes and dtype."""
        assert store.vertex.shape == (50, 16)
        assert store.context.shape == (50, 16)
        assert store.vertex.dtype == torch.float32

    def test_vertex_init_range(self, store):
        """Test uniform initialisation within [-0.5/dim, 0.5/dim]."""
        bound = 0.5 / 16

        assert float(store.vertex.abs().max()) <= bound
        assert float(store.vertex.std()) > 0

    def test_context_zero(self, store):
        """Test that context embeddings start at zero."""
        assert torch.count_nonzero(store.context) == 0

    def test_separate_storage(self, store):
        """Test that vertex and context matrices never alias."""
        assert store.vertex.data_ptr() != store.context.data_ptr()
        assert not np.shares_memory(store.vertex_array, store.context_array)

        store.vertex_row(0)[:] = 1.0
        assert torch.count_nonzero(store.context) == 0

    def test_row_views_share_tensor_memory(self, store):
        """Test that row updates are visible through the tensors."""
        store.context_row(4)[:] += 2.0

        assert torch.all(store.context[4] == 2.0)

    def test_target_matrix(self, store):
        """Test target matrix selection per order."""
        assert store.target_matrix(1) is store.vertex_array
        assert store.target_matrix(2) is store.context_array
        with pytest.raises(ConfigurationError):
            store.target_matrix(3)

    def test_seeded_init(self):
        """Test that the same seed gives the same initialisation."""
        first = EmbeddingStore(10, 4)
        second = EmbeddingStore(10, 4)
        first.init(seed=9)
        second.init(seed=9)

        assert torch.equal(first.vertex, second.vertex)

    def test_get_embeddings_is_copy(self, store):
        """Test that snapshots do not change with later updates."""
        snapshot = store.get_embeddings()
        store.vertex_row(0)[:] += 1.0

        assert not torch.equal(snapshot, store.vertex)

    def test_invalid_shape(self):
        """Test rejected dimensions."""
        with pytest.raises(ConfigurationError):
            EmbeddingStore(num_vertices=10, dim=0)
        with pytest.raises(ConfigurationError):
            EmbeddingStore(num_vertices=0, dim=4)

    def test_allocation_failure(self, monkeypatch):
        """Test that a failed torch allocation surfaces as ResourceError."""
        def out_of_memory(*args, **kwargs):
            raise RuntimeError("not enough memory")

        monkeypatch.setattr(torch, 'empty', out_of_memory)

        with pytest.raises(ResourceError):
            EmbeddingStore(num_vertices=10, dim=4)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
