"""
Embedding Store Module.

This module owns the two LINE parameter matrices:

- vertex: the embedding of each vertex, returned after training
- context: the context-space embedding, used only by second-order proximity

Both are contiguous float32 torch tensors with one row per vertex. The
training loop works on NumPy views that share their memory, so updates
made by worker threads are visible through the tensors without copying.

Concurrency:
    No locking is provided. Worker threads read and write rows of both
    matrices concurrently (HOGWILD-style); each sample touches only
    num_negative + 2 rows, so interference is rare and tolerated. Results
    must only be read after every worker has been joined.
"""

from typing import Optional

import numpy as np
import torch

from ..exceptions import ConfigurationError, ResourceError


class EmbeddingStore:
    """
    Vertex and context embedding matrices.

    Example:
        >>> store = EmbeddingStore(num_vertices=3, dim=4)
        >>> store.init(seed=1)
        >>> store.vertex_row(0).shape
        (4,)
        >>> float(store.context.abs().sum())
        0.0
    """

    def __init__(self, num_vertices: int, dim: int):
        """
        Allocate both matrices.

        Args:
            num_vertices: Number of rows
            dim: Embedding dimensionality

        Raises:
            ConfigurationError: If dim or num_vertices is not positive
            ResourceError: If either matrix cannot be allocated
        """
        if dim < 1:
            raise ConfigurationError(f"Embedding dimension must be positive, got {dim}")
        if num_vertices < 1:
            raise ConfigurationError(f"Embedding store needs at least one vertex, got {num_vertices}")

        self.num_vertices = num_vertices
        self.dim = dim

        try:
            self.vertex = torch.empty((num_vertices, dim), dtype=torch.float32)
            self.context = torch.zeros((num_vertices, dim), dtype=torch.float32)
        except RuntimeError as err:
            # torch reports failed CPU allocations as RuntimeError
            raise ResourceError(
                f"Could not allocate embeddings for {num_vertices} vertices x {dim} dims"
            ) from err

        # Views sharing storage with the tensors above
        self.vertex_array = self.vertex.numpy()
        self.context_array = self.context.numpy()

    def init(self, seed: Optional[int] = None) -> None:
        """
        Initialize parameters.

        Vertex embeddings get uniform noise in [-0.5 / dim, 0.5 / dim);
        context embeddings are zeroed.

        Args:
            seed: Random seed (None for nondeterministic)
        """
        generator = torch.Generator()
        if seed is None:
            generator.seed()
        else:
            generator.manual_seed(seed)

        with torch.no_grad():
            self.vertex.uniform_(0.0, 1.0, generator=generator)
            self.vertex.sub_(0.5).div_(self.dim)
            self.context.zero_()

    def vertex_row(self, vid: int) -> np.ndarray:
        """Writable view of one vertex embedding [dim]."""
        return self.vertex_array[vid]

    def context_row(self, vid: int) -> np.ndarray:
        """Writable view of one context embedding [dim]."""
        return self.context_array[vid]

    def target_matrix(self, order: int) -> np.ndarray:
        """
        Matrix holding target vectors for a proximity order.

        Args:
            order: 1 (vertex space) or 2 (context space)

        Returns:
            NumPy view of the matrix [num_vertices, dim]
        """
        if order == 1:
            return self.vertex_array
        if order == 2:
            return self.context_array
        raise ConfigurationError(f"Order should be either 1 or 2, got {order}")

    def get_embeddings(self) -> torch.Tensor:
        """
        Snapshot of the vertex embeddings.

        Returns:
            Copy of the vertex matrix [num_vertices, dim]
        """
        return self.vertex.clone()
