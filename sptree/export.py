"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
from typing import Any, Dict, Hashable, List, Tuple

from .distance import INF
from .engine import ShortestPaths
from .graph import EdgeLike


def _label(v: Hashable) -> str:
    name = getattr(v, "name", v)
    return str(name)


def tree_edges(sp: ShortestPaths) -> List[Tuple[EdgeLike, int]]:
    """Return the parent edges of a finished run with their weights.

    Args:
        sp: Engine on which :meth:`~sptree.engine.ShortestPaths.run` has
            completed.

    Returns:
        ``(edge, weight)`` pairs, one per reachable vertex other than the
        start, in vertex order.
    """
    out: List[Tuple[EdgeLike, int]] = []
    for v in sp.graph.vertices():
        e = sp.parent_edge(v)
        if e is not None:
            out.append((e, sp.weight(e)))
    return out


def export_tree_json(sp: ShortestPaths) -> str:
    """Return a JSON string with nodes (and distances) and tree edges.

    Unreachable vertices get ``"distance": null``.
    """
    nodes: List[Dict[str, Any]] = []
    for v in sp.graph.vertices():
        d = sp.distance(v)
        nodes.append({"id": _label(v), "distance": None if d is INF else d})
    data = {
        "source": _label(sp.start),
        "nodes": nodes,
        "edges": [
            {"source": _label(e.tail), "target": _label(e.head), "weight": w}
            for e, w in tree_edges(sp)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(sp: ShortestPaths) -> str:
    """Return a minimal GraphML string for the shortest-path tree."""
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <graph id="T" edgedefault="directed">')
    for i, v in enumerate(sp.graph.vertices()):
        lines.append(f'    <node id="n{i}"/>')
    index = {v: i for i, v in enumerate(sp.graph.vertices())}
    for e, w in tree_edges(sp):
        lines.append(
            f'    <edge source="n{index[e.tail]}" target="n{index[e.head]}" weight="{w}"/>'
        )
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["export_tree_graphml", "export_tree_json", "tree_edges"]
