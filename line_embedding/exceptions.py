"""
Exceptions raised by the LINE training engine.

Configuration and allocation failures happen during the single-threaded
setup phase, before any worker thread is started. A failure inside a
worker is captured and re-raised as TrainingError once every worker has
been joined.
"""


class LINEError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(LINEError, ValueError):
    """
    Invalid run configuration or input.

    Raised for an unsupported proximity order, non-positive dimensions,
    thread counts or learning rates, non-positive edge weights, an empty
    graph, or a vertex count above the configured ceiling.
    """


class ResourceError(LINEError, MemoryError):
    """Allocation of a table or matrix failed during setup."""


class TrainingError(LINEError, RuntimeError):
    """A worker thread failed, or training diverged to non-finite values."""
