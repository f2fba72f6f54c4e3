"""
Utilities Module.

This module provides helpers around the trained embeddings:
- The ordered Embeddings result handed to output consumers
- Reading and writing LINE text/binary embedding files
- Normalisation and concatenation of embeddings

Components:
    embeddings: Ordered (vertex name, vector) container
    io: LINE embedding file format
    postprocess: normalize and concatenate
"""

from .embeddings import Embeddings
from .io import read_embeddings, write_embeddings
from .postprocess import concatenate, normalize

__all__ = [
    'Embeddings',
    # I/O
    'read_embeddings',
    'write_embeddings',
    # Post-processing
    'concatenate',
    'normalize',
]
