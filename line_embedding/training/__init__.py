"""
Training Module for LINE.

This module implements the training pipeline including:
- Run settings and validation
- Asynchronous multi-threaded SGD with learning-rate decay
- Progress logging and run summaries

Components:
    LINETrainer: Builds tables and runs the worker pool
    LINESettings: Validated run configuration
    TrainingLogger: Console progress and JSON summary
    train_line: One-call edge stream to embeddings

Example:
    >>> from line_embedding.training import train_line
    >>>
    >>> embeddings = train_line(edges, config)
    >>> embeddings.write("vectors.txt")
"""

from .trainer import LINETrainer, LINESettings, train_line
from .callbacks import TrainingLogger

__all__ = [
    'LINETrainer',
    'LINESettings',
    'TrainingLogger',
    'train_line',
]
