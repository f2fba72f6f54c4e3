"""
LINE Embedding Training Package.

This package learns low-dimensional vertex embeddings for weighted,
directed graphs with the LINE algorithm (first- and second-order
proximity). Training is asynchronous, lock-free SGD (HOGWILD-style) run by
a pool of worker threads, with alias-method edge sampling and
degree^0.75 negative sampling.

Submodules:
    - data: Vertex indexing, graph loading and network reconstruction
    - sampling: Alias edge sampler and negative sampling table
    - model: Sigmoid lookup table and embedding parameter storage
    - training: Worker threads, orchestration and progress logging
    - utils: Embedding results, file I/O and post-processing

Example:
    >>> from line_embedding import train_line
    >>> edges = [("A", "B", 1.0), ("B", "C", 1.0), ("C", "A", 1.0)]
    >>> embeddings = train_line(edges, {'model': {'dim': 2, 'order': 1}})
    >>> for name, vector in embeddings:
    ...     print(name, vector)
"""

from .exceptions import LINEError, ConfigurationError, ResourceError, TrainingError
from .training import LINETrainer, train_line
from .utils import Embeddings

__version__ = "1.0.0"
__author__ = "LINE Embedding Team"

# Version info
VERSION_INFO = {
    'major': 1,
    'minor': 0,
    'patch': 0,
    'release': 'stable'
}

__all__ = [
    'LINEError',
    'ConfigurationError',
    'ResourceError',
    'TrainingError',
    'LINETrainer',
    'train_line',
    'Embeddings',
]
