"""
Graph Loader Module.

This module turns an edge supplier, an ordered stream of
``(source_name, target_name, weight)`` triples, into the flat arrays the
trainer samples from. It also provides the edge suppliers used by the
scripts and tests:

- read_edge_list: LINE edge-list files ("<u> <v> <w>" per line)
- edges_from_networkx: adapter for NetworkX graphs
- GraphLoader.create_mock: synthetic random graphs for testing

Edges are directed. Duplicate rows are kept as independent edges, and an
undirected relationship must be supplied as two directed rows.
"""

import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import networkx as nx
import numpy as np

from ..exceptions import ConfigurationError, ResourceError
from .vertex_index import VertexIndex


EdgeTriple = Tuple[str, str, float]


@dataclass
class Graph:
    """
    A loaded graph: vertex index plus parallel edge arrays.

    Attributes:
        vertex_index: Name to id mapping with weighted degrees
        source_ids: Source vertex id per edge [num_edges]
        target_ids: Target vertex id per edge [num_edges]
        weights: Weight per edge [num_edges]
    """
    vertex_index: VertexIndex
    source_ids: np.ndarray
    target_ids: np.ndarray
    weights: np.ndarray

    @property
    def num_vertices(self) -> int:
        return len(self.vertex_index)

    @property
    def num_edges(self) -> int:
        return len(self.weights)

    @property
    def degrees(self) -> np.ndarray:
        return self.vertex_index.degrees()

    def edges(self) -> Iterator[EdgeTriple]:
        """Iterate edges back as name triples, in input order."""
        names = self.vertex_index.names
        for src, dst, weight in zip(self.source_ids, self.target_ids, self.weights):
            yield names[src], names[dst], float(weight)


class GraphLoader:
    """
    Single-pass loader from an edge stream to a Graph.

    Example:
        >>> loader = GraphLoader()
        >>> graph = loader.load([("A", "B", 1.0), ("B", "C", 2.0)])
        >>> graph.num_vertices, graph.num_edges
        (3, 2)
        >>> graph.degrees.tolist()
        [1.0, 3.0, 2.0]
    """

    def __init__(self, max_vertices: Optional[int] = None):
        """
        Initialize loader.

        Args:
            max_vertices: Vertex capacity ceiling passed to the VertexIndex
        """
        self.max_vertices = max_vertices

    @staticmethod
    def _allocate(size: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        try:
            return (
                np.empty(size, dtype=np.int64),
                np.empty(size, dtype=np.int64),
                np.empty(size, dtype=np.float64),
            )
        except MemoryError as err:
            raise ResourceError(f"Could not allocate edge arrays for {size} edges") from err

    def load(self, edges: Iterable[EdgeTriple]) -> Graph:
        """
        Load an edge stream.

        Arrays are pre-sized when ``edges`` reports its length and grown
        geometrically otherwise.

        Args:
            edges: Iterable of (source_name, target_name, weight)

        Returns:
            Loaded Graph

        Raises:
            ConfigurationError: On a non-positive or non-finite weight, or
                an empty stream
            ResourceError: If the edge arrays cannot be allocated
        """
        try:
            capacity = max(len(edges), 1)
        except TypeError:
            capacity = 1024

        index = VertexIndex(initial_capacity=2 * capacity, max_vertices=self.max_vertices)
        source_ids, target_ids, weights = self._allocate(capacity)
        num_edges = 0

        for k, (source, target, weight) in enumerate(edges):
            weight = float(weight)
            if not math.isfinite(weight) or weight <= 0:
                raise ConfigurationError(
                    f"Edge {k} ({source!r} -> {target!r}) has invalid weight {weight}; "
                    "weights must be finite and positive"
                )

            if num_edges == len(weights):
                grown = self._allocate(2 * len(weights))
                for new, old in zip(grown, (source_ids, target_ids, weights)):
                    new[:num_edges] = old
                source_ids, target_ids, weights = grown

            src = index.insert(str(source))
            index.add_degree(src, weight)
            dst = index.insert(str(target))
            index.add_degree(dst, weight)

            source_ids[num_edges] = src
            target_ids[num_edges] = dst
            weights[num_edges] = weight
            num_edges += 1

        if num_edges == 0:
            raise ConfigurationError("Edge stream is empty; nothing to train on")

        return Graph(
            vertex_index=index,
            source_ids=source_ids[:num_edges].copy(),
            target_ids=target_ids[:num_edges].copy(),
            weights=weights[:num_edges].copy(),
        )

    @staticmethod
    def create_mock(
        num_vertices: int = 100,
        num_edges: int = 400,
        weighted: bool = True,
        seed: int = 42
    ) -> List[EdgeTriple]:
        """
        Create a synthetic undirected graph as directed edge triples.

        Each undirected edge of a G(n, m) random graph is emitted in both
        directions, which is how LINE expects undirected input.

        Args:
            num_vertices: Number of vertices
            num_edges: Number of undirected edges
            weighted: Draw integer weights in [1, 5] instead of 1.0
            seed: Random seed for reproducibility

        Returns:
            List of (source_name, target_name, weight) triples
        """
        graph = nx.gnm_random_graph(num_vertices, num_edges, seed=seed)
        rng = random.Random(seed)
        for u, v in graph.edges():
            graph[u][v]['weight'] = float(rng.randint(1, 5)) if weighted else 1.0
        return list(edges_from_networkx(graph))


def edges_from_networkx(
    graph: nx.Graph,
    weight: str = 'weight',
    default_weight: float = 1.0
) -> Iterator[EdgeTriple]:
    """
    Adapt a NetworkX graph into an edge stream.

    Directed graphs yield each edge once. Undirected graphs yield every
    edge in both directions.

    Args:
        graph: NetworkX graph
        weight: Edge attribute holding the weight
        default_weight: Weight for edges without the attribute

    Yields:
        (source_name, target_name, weight) triples
    """
    for u, v, data in graph.edges(data=True):
        w = float(data.get(weight, default_weight))
        yield str(u), str(v), w
        if not graph.is_directed():
            yield str(v), str(u), w


def read_edge_list(path: Union[str, Path]) -> Iterator[EdgeTriple]:
    """
    Read a LINE edge-list file.

    Each line holds ``<u> <v> <w>`` separated by blanks or tabs; the weight
    defaults to 1.0 when omitted. Blank lines are skipped.

    Args:
        path: Path to the edge-list file

    Yields:
        (source_name, target_name, weight) triples

    Raises:
        ConfigurationError: On a malformed line
    """
    path = Path(path)
    with open(path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            parts = line.split()
            if not parts:
                continue
            if len(parts) not in (2, 3):
                raise ConfigurationError(
                    f"{path}:{line_no}: expected '<u> <v> <w>', got {line.strip()!r}"
                )
            try:
                weight = float(parts[2]) if len(parts) == 3 else 1.0
            except ValueError as err:
                raise ConfigurationError(
                    f"{path}:{line_no}: invalid weight {parts[2]!r}"
                ) from err
            yield parts[0], parts[1], weight
