"""Seeded random graph families for tests, benchmarks and the CLI.

GRAPH TYPES
-----------
erdos_renyi
    Uniformly sampled directed edges. The average case.
dag
    Edges only from lower to higher index; every path is short in hops.
grid
    Near-square 2D grid with edges to the right and down neighbours in both
    directions. Many equal-length shortest paths, which exercises ties.

Weights are integers drawn uniformly from ``[w_min, w_max]``; ``w_min`` may be
``0`` to produce zero-weight edges. Vertices are named ``"0" .. "n-1"``.
"""

from __future__ import annotations

import math
import random
from typing import List, Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import DirectedGraph, Weights

GraphType = Literal["erdos_renyi", "dag", "grid"]
GRAPH_TYPES: Tuple[str, ...] = ("erdos_renyi", "dag", "grid")


def random_graph(
    n: int,
    m: Optional[int] = None,
    *,
    graph_type: GraphType = "erdos_renyi",
    w_min: int = 0,
    w_max: int = 10,
    seed: Optional[int] = 0,
    backbone: bool = True,
    allow_self_loops: bool = False,
) -> Tuple[DirectedGraph, Weights]:
    """Generate a directed graph with non-negative integer weights.

    Args:
        n: Number of vertices (``n > 0``).
        m: Target number of edges. Defaults to ``4 * n`` capped by the
            number of possible edges. For grids, extra random edges are added
            on top of the grid until ``m`` is reached.
        graph_type: One of :data:`GRAPH_TYPES`.
        w_min: Smallest weight (``>= 0``).
        w_max: Largest weight (``>= w_min``).
        seed: Seed for :class:`random.Random`.
        backbone: Add the chain ``i -> i+1`` first so every vertex is
            reachable from ``"0"`` (ignored for grids).
        allow_self_loops: Permit ``u -> u`` edges.

    Returns:
        A tuple ``(graph, weights)``.

    Raises:
        ConfigError: If a parameter is out of range.
    """
    if not isinstance(n, int) or n <= 0:
        raise ConfigError("n must be a positive integer.")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")
    if m is not None and m < 0:
        raise ConfigError("m must be >= 0.")
    if graph_type not in GRAPH_TYPES:
        raise ConfigError(f"unknown graph_type {graph_type!r}")

    rng = random.Random(seed)
    max_edges = n * n if allow_self_loops else n * (n - 1)
    if graph_type == "dag":
        max_edges = n * (n - 1) // 2
    if m is None and graph_type != "grid":
        m = min(4 * n, max_edges)

    seen: Set[Tuple[int, int]] = set()
    edges: List[Tuple[int, int, int]] = []

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        if (u, v) in seen:
            return
        seen.add((u, v))
        edges.append((u, v, rng.randint(w_min, w_max)))

    if backbone and graph_type != "grid":
        for i in range(n - 1):
            add_edge(i, i + 1)

    if graph_type == "grid":
        rows = max(1, math.isqrt(n))
        cols = max(1, (n + rows - 1) // rows)
        for r in range(rows):
            for c in range(cols):
                u = r * cols + c
                if u >= n:
                    continue
                if c + 1 < cols and u + 1 < n:
                    add_edge(u, u + 1)
                    add_edge(u + 1, u)
                if u + cols < n:
                    add_edge(u, u + cols)
                    add_edge(u + cols, u)
        max_edges = n * n if allow_self_loops else n * (n - 1)

    target = min(m, max_edges) if m is not None else len(edges)
    while len(edges) < target:
        u = rng.randrange(n)
        v = rng.randrange(n)
        if graph_type == "dag":
            if u == v:
                continue
            if u > v:
                u, v = v, u
        add_edge(u, v)

    triples = [(str(u), str(v), w) for u, v, w in edges]
    return DirectedGraph.from_edges(triples, vertices=[str(i) for i in range(n)])


__all__ = ["GRAPH_TYPES", "GraphType", "random_graph"]
