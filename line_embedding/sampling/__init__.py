"""
Sampling Module for LINE Training.

This module implements the two O(1) samplers driving the SGD loop:

1. Alias-method edge sampling, proportional to edge weight
2. Degree-biased negative sampling, proportional to degree^0.75

Both tables are built once before training and are read-only while the
worker threads run, so they are shared without locks.

Classes:
    AliasSampler: Walker alias table over edge weights
    NegativeSampler: Fixed-size table of vertex ids

Example:
    >>> from line_embedding.sampling import AliasSampler, NegativeSampler
    >>>
    >>> edge_sampler = AliasSampler(graph.weights)
    >>> neg_sampler = NegativeSampler(graph.degrees, table_size=1_000_000)
"""

from .alias_sampler import AliasSampler
from .negative_sampler import NegativeSampler

__all__ = [
    'AliasSampler',
    'NegativeSampler',
]
