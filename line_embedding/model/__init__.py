"""
Model Module for LINE Training.

This module holds the trainable state and the numeric helpers of the
SGD loop:

- EmbeddingStore: vertex and context embedding matrices
- SigmoidLookup: table-based logistic function

Example:
    >>> from line_embedding.model import EmbeddingStore, SigmoidLookup
    >>>
    >>> store = EmbeddingStore(num_vertices=1000, dim=128)
    >>> store.init(seed=42)
    >>> sigmoid = SigmoidLookup()
    >>> sigmoid(0.0)
    0.5
"""

from .embedding_store import EmbeddingStore
from .sigmoid import SigmoidLookup, SIGMOID_BOUND, SIGMOID_TABLE_SIZE

__all__ = [
    'EmbeddingStore',
    'SigmoidLookup',
    'SIGMOID_BOUND',
    'SIGMOID_TABLE_SIZE',
]
