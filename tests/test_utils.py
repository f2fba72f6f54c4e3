"""
Tests for Utilities Module.

Tests the Embeddings container, embedding file I/O and post-processing.
"""

import pytest
import numpy as np
import torch
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from line_embedding.exceptions import ConfigurationError
from line_embedding.utils import (
    Embeddings, concatenate, normalize, read_embeddings, write_embeddings
)


@pytest.fixture
def embeddings():
    return Embeddings(
        ["A", "B", "C"],
        torch.tensor([[3.0, 4.0], [0.0, 0.0], [-1.5, 0.25]])
    )


class TestEmbeddings:
    """Tests for the Embeddings container."""

    def test_iteration_order(self, embeddings):
        """Test that iteration yields (name, vector) in row order."""
        pairs = list(embeddings)

        assert [name for name, _ in pairs] == ["A", "B", "C"]
        assert pairs[0] == ("A", [3.0, 4.0])

    def test_lookup(self, embeddings):
        """Test access by vertex name."""
        assert embeddings["C"].tolist() == [-1.5, 0.25]
        assert "B" in embeddings
        assert "Z" not in embeddings

    def test_to_dict(self, embeddings):
        """Test mapping output."""
        assert embeddings.to_dict()["B"] == [0.0, 0.0]

    def test_shape_mismatch(self):
        """Test that names and rows must match."""
        with pytest.raises(ValueError):
            Embeddings(["A"], torch.zeros((2, 3)))

    def test_numpy_input(self):
        """Test construction from a NumPy matrix."""
        emb = Embeddings(["x", "y"], np.ones((2, 3)))

        assert emb.dim == 3
        assert emb.vectors.dtype == torch.float32


class TestEmbeddingFiles:
    """Tests for LINE embedding files."""

    def test_text_format(self, embeddings, tmp_path):
        """Test the exact text layout."""
        path = tmp_path / "vec.txt"
        write_embeddings(path, embeddings)

        lines = path.read_text().splitlines()
        assert lines[0] == "3 2"
        assert lines[1] == "A 3.000000 4.000000 "
        assert len(lines) == 4

    def test_text_read_back(self, embeddings, tmp_path):
        """Test reading a text file."""
        path = tmp_path / "vec.txt"
        embeddings.write(path)

        loaded = read_embeddings(path)

        assert loaded.names == embeddings.names
        assert torch.allclose(loaded.vectors, embeddings.vectors, atol=1e-6)

    def test_binary_read_back(self, tmp_path):
        """Test that binary files keep exact float32 values."""
        emb = Embeddings(["v0", "v1"], torch.tensor([[0.1, -0.2, 1e-8], [10.0, 2.5, -3.0]]))
        path = tmp_path / "vec.bin"
        write_embeddings(path, emb, binary=True)

        loaded = read_embeddings(path, binary=True)

        assert loaded.names == ["v0", "v1"]
        assert torch.equal(loaded.vectors, emb.vectors)

    def test_binary_layout(self, tmp_path):
        """Test header, name separator and record terminator."""
        emb = Embeddings(["n"], torch.tensor([[1.0]]))
        path = tmp_path / "vec.bin"
        write_embeddings(path, emb, binary=True)

        assert path.read_bytes() == b"1 1\nn " + np.float32(1.0).tobytes() + b"\n"

    def test_truncated_file(self, tmp_path):
        """Test that a truncated text file is rejected."""
        path = tmp_path / "vec.txt"
        path.write_text("2 2\nA 1.0 2.0\nB 1.0\n")

        with pytest.raises(ConfigurationError):
            read_embeddings(path)

    def test_bad_header(self, tmp_path):
        """Test that a missing header is rejected."""
        path = tmp_path / "vec.txt"
        path.write_text("A 1.0 2.0\n")

        with pytest.raises(ConfigurationError):
            read_embeddings(path)


class TestPostprocess:
    """Tests for normalize and concatenate."""

    def test_normalize_unit_rows(self, embeddings):
        """Test unit L2 norms."""
        result = normalize(embeddings)

        assert result["A"].tolist() == pytest.approx([0.6, 0.8])
        assert float(result["C"].norm()) == pytest.approx(1.0)

    def test_normalize_zero_row(self, embeddings):
        """Test that zero vectors stay zero."""
        result = normalize(embeddings)

        assert result["B"].tolist() == [0.0, 0.0]

    def test_normalize_keeps_input(self, embeddings):
        """Test that the input is not modified."""
        normalize(embeddings)

        assert embeddings["A"].tolist() == [3.0, 4.0]

    def test_concatenate(self, embeddings):
        """Test joining by vertex name in the order of the first input."""
        second = Embeddings(["C", "A"], torch.tensor([[7.0], [9.0]]))

        result = concatenate(embeddings, second)

        assert result.names == ["A", "C"]
        assert result.dim == 3
        assert result["A"].tolist() == [3.0, 4.0, 9.0]
        assert result["C"].tolist() == [-1.5, 0.25, 7.0]

    def test_concatenate_disjoint(self, embeddings):
        """Test that no shared vertices gives an empty result."""
        second = Embeddings(["X"], torch.tensor([[1.0]]))

        result = concatenate(embeddings, second)

        assert len(result) == 0
        assert result.dim == 3
