"""Reference Dijkstra implementation used in tests and benchmarks."""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Dict, Hashable, List, Mapping, Optional, Set, Tuple

from .distance import INF
from .engine import ShortestPathResult
from .graph import EdgeLike, GraphView


def dijkstra_reference(
    graph: GraphView, weights: Mapping[Any, int], source: Hashable
) -> ShortestPathResult:
    """Run textbook Dijkstra with :mod:`heapq` and lazy deletion.

    Stale heap entries are skipped instead of decreased in place, which makes
    this an independent cross-check for :class:`~sptree.engine.ShortestPaths`.

    Args:
        graph: Input graph with non-negative edge weights.
        weights: Mapping from edge to weight.
        source: Source vertex.

    Returns:
        Distances (``INF`` for unreachable vertices) and parent edges.
    """
    dist: Dict[Hashable, Any] = {v: INF for v in graph.vertices()}
    pred: Dict[Hashable, Optional[EdgeLike]] = {v: None for v in dist}
    dist[source] = 0
    # vertices need not be orderable, so ties are broken by push order
    seq = itertools.count()
    pq: List[Tuple[int, int, Hashable]] = [(0, next(seq), source)]
    seen: Set[Hashable] = set()
    while pq:
        d, _, u = heapq.heappop(pq)
        if u in seen:
            continue
        seen.add(u)
        for e in graph.edges_from(u):
            nd = d + weights[e]
            if nd < dist[e.head]:
                dist[e.head] = nd
                pred[e.head] = e
                heapq.heappush(pq, (nd, next(seq), e.head))
    return ShortestPathResult(source=source, distances=dist, parent_edges=pred)


__all__ = ["dijkstra_reference"]
