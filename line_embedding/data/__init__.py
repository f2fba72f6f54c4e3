"""
Data Module for LINE Training.

This module handles:
1. Mapping vertex names to stable integer ids
2. Loading edge streams into flat edge arrays with weighted degrees
3. Reading edge-list files and adapting NetworkX graphs
4. Reconstructing (densifying) sparse networks before training

Classes:
    VertexIndex: Growable open-addressing name to id table
    GraphLoader: Load an edge stream into a Graph
    Graph: Vertex index plus source/target/weight arrays

Example:
    >>> from line_embedding.data import GraphLoader, read_edge_list
    >>>
    >>> graph = GraphLoader().load(read_edge_list("net.txt"))
    >>> print(graph.num_vertices, graph.num_edges)
"""

from .vertex_index import VertexIndex
from .graph_loader import Graph, GraphLoader, edges_from_networkx, read_edge_list
from .reconstruct import reconstruct

__all__ = [
    'VertexIndex',
    'Graph',
    'GraphLoader',
    'edges_from_networkx',
    'read_edge_list',
    'reconstruct',
]
