"""
Sigmoid Lookup Module.

The SGD loop evaluates the logistic function once per (source, target)
pair. A precomputed table over [-bound, bound] replaces the exponential
with a single index computation; outside the domain the value saturates
to exactly 0 or 1, and NaN maps to 0.
"""

import numpy as np


SIGMOID_BOUND = 6.0
SIGMOID_TABLE_SIZE = 1000


class SigmoidLookup:
    """
    Table-based approximation of 1 / (1 + exp(-x)).

    The error is bounded by the bucket width, 2 * bound / table_size.

    Example:
        >>> sigmoid = SigmoidLookup()
        >>> sigmoid(10.0), sigmoid(-10.0), sigmoid(0.0)
        (1.0, 0.0, 0.5)
    """

    def __init__(self, table_size: int = SIGMOID_TABLE_SIZE, bound: float = SIGMOID_BOUND):
        self.table_size = int(table_size)
        self.bound = float(bound)
        self.table = self.build()
        # Plain list for fast scalar indexing in the training loop
        self._values = self.table.tolist()
        self._scale = self.table_size / self.bound / 2

    def build(self) -> np.ndarray:
        """
        Precompute the table.

        Bucket k holds sigmoid(2 * bound * k / table_size - bound). One
        extra bucket covers x == bound exactly.

        Returns:
            Sigmoid values [table_size + 1]
        """
        k = np.arange(self.table_size + 1, dtype=np.float64)
        x = 2 * self.bound * k / self.table_size - self.bound
        return (1.0 / (1.0 + np.exp(-x))).astype(np.float32)

    @property
    def bucket_width(self) -> float:
        return 2 * self.bound / self.table_size

    def eval(self, x: float) -> float:
        """
        Approximate sigmoid(x).

        Args:
            x: Input value

        Returns:
            1.0 above the bound, 0.0 below -bound or for NaN, else the
            bucket value
        """
        if x > self.bound:
            return 1.0
        # Written as a negated >= so NaN also lands here
        if not x >= -self.bound:
            return 0.0
        return self._values[int((x + self.bound) * self._scale)]

    __call__ = eval
