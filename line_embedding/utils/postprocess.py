"""
Embedding Post-processing Module.

Helpers applied after training:
- normalize: scale every vector to unit L2 norm
- concatenate: join first- and second-order embeddings vertex by vertex
"""

import torch

from .embeddings import Embeddings


def normalize(embeddings: Embeddings) -> Embeddings:
    """
    L2-normalise each embedding.

    Zero vectors are returned unchanged.

    Args:
        embeddings: Input embeddings

    Returns:
        New Embeddings with unit-length rows
    """
    vectors = embeddings.vectors
    norms = vectors.norm(dim=1, keepdim=True)
    norms = torch.where(norms > 0, norms, torch.ones_like(norms))
    return Embeddings(embeddings.names, vectors / norms)


def concatenate(first: Embeddings, second: Embeddings) -> Embeddings:
    """
    Concatenate two embeddings of the same vertices.

    Vertices are matched by name and kept in the order of ``first``.
    Vertices missing from ``second`` are skipped.

    Args:
        first: Embeddings providing the leading dimensions (usually order 1)
        second: Embeddings providing the trailing dimensions (usually order 2)

    Returns:
        Embeddings with dim = first.dim + second.dim
    """
    names = [name for name in first.names if name in second]
    if not names:
        return Embeddings([], torch.zeros((0, first.dim + second.dim)))

    rows = [torch.cat([first[name], second[name]]) for name in names]
    return Embeddings(names, torch.stack(rows))
