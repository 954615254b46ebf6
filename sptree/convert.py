"""Conversions between :mod:`networkx` graphs and :mod:`sptree` graphs."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Tuple

import networkx as nx

from .distance import INF
from .engine import ShortestPaths
from .export import tree_edges
from .graph import DirectedGraph, Vertex, Weights, check_weight


def from_networkx(
    G: nx.DiGraph, weight: str = "weight", default: int | None = None
) -> Tuple[DirectedGraph, Weights, Dict[Hashable, Vertex]]:
    """Build a :class:`~sptree.graph.DirectedGraph` from a networkx graph.

    Undirected graphs contribute both directions of every edge; multigraph
    parallel edges stay separate.

    Args:
        G: Source graph.
        weight: Edge attribute holding the weight.
        default: Weight for edges without the attribute. If ``None`` such an
            edge raises :class:`~sptree.exceptions.GraphFormatError`.

    Returns:
        ``(graph, weights, vertex_by_node)``, the last mapping every networkx
        node to its vertex.
    """
    g = DirectedGraph()
    vertex_by_node: Dict[Hashable, Vertex] = {n: g.add_vertex(n) for n in G.nodes}
    weights: Weights = {}
    directed = G.is_directed()
    for u, v, data in G.edges(data=True):
        where = f"({u!r}, {v!r})"
        w = check_weight(data.get(weight, default), where)
        weights[g.add_edge(vertex_by_node[u], vertex_by_node[v])] = w
        if not directed and u != v:
            weights[g.add_edge(vertex_by_node[v], vertex_by_node[u])] = w
    return g, weights, vertex_by_node


def node_key(v: Any) -> Hashable:
    """Return the networkx node for vertex ``v``: its name, or ``v`` itself."""
    return v.name if isinstance(v, Vertex) else v


def tree_to_networkx(sp: ShortestPaths) -> nx.DiGraph:
    """Return the shortest-path tree of a finished run as a ``DiGraph``.

    Nodes are vertex names (or the vertices themselves for graph views whose
    vertices are plain values) with a ``distance`` attribute, ``None`` when
    unreachable. Edges carry ``weight``.
    """
    T = nx.DiGraph()
    for v in sp.graph.vertices():
        d = sp.distance(v)
        T.add_node(node_key(v), distance=None if d is INF else d)
    for e, w in tree_edges(sp):
        T.add_edge(node_key(e.tail), node_key(e.head), weight=w)
    return T


__all__ = ["from_networkx", "node_key", "tree_to_networkx"]
