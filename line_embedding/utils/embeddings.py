"""
Embeddings Result Module.

Training hands its output consumer an ordered sequence of
``(vertex_name, vector)`` pairs. Embeddings wraps that sequence: vertex
names in first-occurrence order plus a matching [num_vertices, dim]
tensor.
"""

from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple, Union

import numpy as np
import torch


class Embeddings:
    """
    Ordered vertex embeddings.

    Example:
        >>> import torch
        >>> emb = Embeddings(["A", "B"], torch.tensor([[1.0, 0.0], [0.0, 2.0]]))
        >>> len(emb), emb.dim
        (2, 2)
        >>> list(emb)[1]
        ('B', [0.0, 2.0])
        >>> emb["A"].tolist()
        [1.0, 0.0]
    """

    def __init__(self, names: Sequence[str], vectors: Union[torch.Tensor, np.ndarray]):
        """
        Initialize embeddings.

        Args:
            names: Vertex names, one per row
            vectors: Embedding matrix [num_vertices, dim]
        """
        vectors = torch.as_tensor(vectors, dtype=torch.float32)
        if vectors.dim() != 2 or vectors.shape[0] != len(names):
            raise ValueError(
                f"Expected a [{len(names)}, dim] matrix, got shape {tuple(vectors.shape)}"
            )

        self.names: List[str] = list(names)
        self.vectors = vectors
        self._positions: Dict[str, int] = {name: i for i, name in enumerate(self.names)}

    @property
    def dim(self) -> int:
        return int(self.vectors.shape[1])

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[Tuple[str, List[float]]]:
        for name, row in zip(self.names, self.vectors.tolist()):
            yield name, row

    def __contains__(self, name: str) -> bool:
        return name in self._positions

    def __getitem__(self, name: str) -> torch.Tensor:
        return self.vectors[self._positions[name]]

    def numpy(self) -> np.ndarray:
        """Embedding matrix as a NumPy array (a copy)."""
        return self.vectors.numpy().copy()

    def to_dict(self) -> Dict[str, List[float]]:
        """Mapping from vertex name to vector."""
        return dict(iter(self))

    def write(self, path: Union[str, Path], binary: bool = False) -> None:
        """Write in the LINE embedding file format (see utils.io)."""
        from .io import write_embeddings
        write_embeddings(path, self, binary=binary)
