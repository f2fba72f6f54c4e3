"""
Network Reconstruction Module.

Second-order LINE learns poorly for vertices with very few neighbours.
Reconstruction densifies the graph before training: every vertex with at
most ``max_k`` out-neighbours is expanded by a breadth-first search up to
``max_depth`` hops, and its ``max_k`` strongest reachable vertices become
its new neighbours. Vertices that already have more than ``max_k``
neighbours keep their edges unchanged.

The weight of a reached vertex is the sum, over all paths of length
1..max_depth, of the product of normalised transition weights along the
path, scaled by the start vertex's total out-weight. A direct neighbour
therefore keeps its original edge weight.
"""

from collections import deque
from typing import Dict, Iterable, List

import numpy as np

from .graph_loader import EdgeTriple, GraphLoader


def reconstruct(
    edges: Iterable[EdgeTriple],
    max_depth: int = 2,
    max_k: int = 10
) -> List[EdgeTriple]:
    """
    Densify a directed weighted graph.

    Args:
        edges: Iterable of (source_name, target_name, weight)
        max_depth: Maximum BFS depth
        max_k: Neighbour threshold and number of neighbours kept per vertex

    Returns:
        Reconstructed edge triples, grouped by source in first-occurrence order
    """
    graph = GraphLoader().load(edges)
    names = graph.vertex_index.names
    num_vertices = graph.num_vertices

    neighbors: List[List[int]] = [[] for _ in range(num_vertices)]
    neighbor_weights: List[List[float]] = [[] for _ in range(num_vertices)]
    for src, dst, w in zip(graph.source_ids.tolist(), graph.target_ids.tolist(),
                           graph.weights.tolist()):
        neighbors[src].append(dst)
        neighbor_weights[src].append(w)

    out_weight = np.zeros(num_vertices, dtype=np.float64)
    np.add.at(out_weight, graph.source_ids, graph.weights)

    result: List[EdgeTriple] = []
    for sv in range(num_vertices):
        if len(neighbors[sv]) > max_k:
            for nb, w in zip(neighbors[sv], neighbor_weights[sv]):
                result.append((names[sv], names[nb], w))
            continue

        reached: Dict[int, float] = {}
        queue = deque([(sv, 0, float(out_weight[sv]))])
        while queue:
            cv, depth, cw = queue.popleft()
            if depth != 0:
                reached[cv] = reached.get(cv, 0.0) + cw
            if depth < max_depth:
                total = out_weight[cv]
                for nb, w in zip(neighbors[cv], neighbor_weights[cv]):
                    queue.append((nb, depth + 1, cw * w / total))

        # Strongest first, ties broken by vertex id
        ranked = sorted(reached.items(), key=lambda item: (-item[1], item[0]))
        for vid, w in ranked[:max_k]:
            result.append((names[sv], names[vid], w))

    return result
