"""
Vertex Index Module.

This module maps vertex names to stable integer ids. Ids are handed out
sequentially in first-occurrence order, which is also the order in which
embeddings are emitted after training.

The index is an open-addressing hash table with linear probing. The slot
table only stores ids; names and degrees live in dense per-id arrays, so
growing the slot table never changes an id that was already issued.
"""

from typing import Iterator, List, Optional

import numpy as np

from ..exceptions import ConfigurationError, ResourceError


# Slot value for an empty bucket
EMPTY_SLOT = -1


class VertexIndex:
    """
    Name to id bijection with per-vertex weighted degree.

    The slot table is kept at most half full; when an insert would cross
    that load factor the table doubles and every name is re-probed.
    An optional ``max_vertices`` ceiling turns an oversized input into a
    ConfigurationError instead of unbounded growth.

    Example:
        >>> index = VertexIndex()
        >>> index.insert("B"), index.insert("A"), index.insert("B")
        (0, 1, 0)
        >>> index.lookup("C") is None
        True
    """

    def __init__(
        self,
        initial_capacity: int = 1024,
        max_vertices: Optional[int] = None
    ):
        """
        Initialize an empty index.

        Args:
            initial_capacity: Number of hash slots to start with
            max_vertices: Maximum number of distinct vertices (None for no limit)
        """
        if max_vertices is not None and max_vertices < 1:
            raise ConfigurationError(f"max_vertices must be positive, got {max_vertices}")

        capacity = 16
        while capacity < initial_capacity:
            capacity *= 2

        self.max_vertices = max_vertices
        self._names: List[str] = []
        self._degrees = np.zeros(max(capacity // 2, 1), dtype=np.float64)
        self._slots = self._allocate_slots(capacity)

    @staticmethod
    def _allocate_slots(capacity: int) -> np.ndarray:
        try:
            return np.full(capacity, EMPTY_SLOT, dtype=np.int64)
        except MemoryError as err:
            raise ResourceError(
                f"Could not allocate vertex hash table with {capacity} slots"
            ) from err

    @property
    def capacity(self) -> int:
        """Current number of hash slots."""
        return len(self._slots)

    def _probe(self, name: str) -> int:
        """Return the slot holding ``name`` or the empty slot where it belongs."""
        mask = len(self._slots) - 1
        addr = hash(name) & mask
        while True:
            vid = self._slots[addr]
            if vid == EMPTY_SLOT or self._names[vid] == name:
                return addr
            addr = (addr + 1) & mask

    def _grow(self) -> None:
        new_capacity = len(self._slots) * 2
        self._slots = self._allocate_slots(new_capacity)
        mask = new_capacity - 1
        for vid, name in enumerate(self._names):
            addr = hash(name) & mask
            while self._slots[addr] != EMPTY_SLOT:
                addr = (addr + 1) & mask
            self._slots[addr] = vid

    def lookup(self, name: str) -> Optional[int]:
        """
        Find the id of a vertex.

        Args:
            name: Vertex name

        Returns:
            Vertex id, or None if the name has not been inserted
        """
        vid = self._slots[self._probe(name)]
        return None if vid == EMPTY_SLOT else int(vid)

    def insert(self, name: str) -> int:
        """
        Insert a vertex name.

        Args:
            name: Vertex name

        Returns:
            The existing id if the name is known, else the next sequential id

        Raises:
            ConfigurationError: If ``max_vertices`` would be exceeded
        """
        addr = self._probe(name)
        vid = self._slots[addr]
        if vid != EMPTY_SLOT:
            return int(vid)

        vid = len(self._names)
        if self.max_vertices is not None and vid >= self.max_vertices:
            raise ConfigurationError(
                f"Vertex capacity of {self.max_vertices} exceeded while inserting {name!r}"
            )

        if vid >= len(self._degrees):
            try:
                self._degrees = np.concatenate([self._degrees, np.zeros_like(self._degrees)])
            except MemoryError as err:
                raise ResourceError("Could not grow vertex degree array") from err

        self._names.append(name)
        self._degrees[vid] = 0.0

        # Keep the load factor at or below 1/2
        if 2 * len(self._names) > len(self._slots):
            self._grow()
        else:
            self._slots[addr] = vid

        return vid

    def add_degree(self, vid: int, weight: float) -> None:
        """Accumulate an incident edge weight on a vertex."""
        self._degrees[vid] += weight

    def name(self, vid: int) -> str:
        """Return the name of vertex ``vid``."""
        return self._names[vid]

    @property
    def names(self) -> List[str]:
        """Vertex names in id order (a copy)."""
        return list(self._names)

    def degrees(self) -> np.ndarray:
        """Weighted degrees in id order."""
        return self._degrees[:len(self._names)].copy()

    def __getitem__(self, name: str) -> int:
        vid = self.lookup(name)
        if vid is None:
            raise KeyError(name)
        return vid

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)
