"""Dijkstra's single-source shortest paths over an addressable min-heap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Mapping, Optional

from .distance import INF, Distance, VertexAndDist, extend
from .exceptions import (
    AlgorithmError,
    ConfigError,
    InputError,
    InvalidSourceError,
    MissingWeightError,
    UnreachableError,
)
from .graph import EdgeLike, GraphView, check_weight
from .heap import Decreaser, MinHeap
from .logger import Logger, NoopLogger
from .ticker import Ticker


@dataclass(frozen=True)
class EngineConfig:
    """Configuration knobs for the engine.

    Attributes:
        arity: Children per heap node; ``2`` gives a binary heap.
        validate_weights: Check every weight read during relaxation and
            reject negative or non-integral ones.
        trace: Emit a ``debug`` event for every extraction and every
            successful relaxation (only when the logger accepts ``debug``).
    """

    arity: int = 2
    validate_weights: bool = True
    trace: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.arity, bool) or not isinstance(self.arity, int) or self.arity < 2:
            raise ConfigError("arity must be an integer >= 2.")


@dataclass(frozen=True)
class ShortestPathResult:
    """Distances and parent edges produced by a run."""

    source: Hashable
    distances: Dict[Hashable, Distance]
    parent_edges: Dict[Hashable, Optional[EdgeLike]]


@dataclass(frozen=True)
class EngineMetrics:
    """Performance metrics collected from an engine run."""

    n: int
    m: int
    arity: int
    counters: Dict[str, int]
    wall_ms: float


class ShortestPaths:
    """Shortest-path tree from a fixed start vertex.

    Every vertex goes into a :class:`~sptree.heap.MinHeap` at distance
    :data:`~sptree.distance.INF`, the start is decreased to ``0`` and the
    minimum is extracted until the heap is empty. Each extraction relaxes the
    outgoing edges of the extracted vertex through the heads' handles and
    records the improving edge as the head's parent edge. Weights must be
    non-negative: a finalised vertex is never revisited.

    Args:
        graph: Any :class:`~sptree.graph.GraphView`.
        weights: Mapping from every edge of ``graph`` to a non-negative ``int``.
        start: Start vertex; must be one of ``graph.vertices()``.
        config: Optional engine configuration.
        logger: Optional event logger.

    Raises:
        InvalidSourceError: If ``start`` is not a vertex of ``graph``.

    Examples:
        ```python
        >>> g, w = DirectedGraph.from_edges([("a", "b", 1), ("b", "c", 2)])
        >>> sp = ShortestPaths(g, w, g.vertex("a"))
        >>> sp.run()
        >>> sp.length(g.vertex("c"))
        3
        ```
    """

    def __init__(
        self,
        graph: GraphView,
        weights: Mapping[Any, int],
        start: Hashable,
        config: Optional[EngineConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        try:
            known = start in set(graph.vertices())
        except TypeError:  # unhashable start
            known = False
        if not known:
            raise InvalidSourceError(f"start vertex {start!r} is not in the graph.")
        self.graph = graph
        self.weights = weights
        self.start = start
        self.cfg = config or EngineConfig()
        self.logger = logger or NoopLogger()
        self.ticker = Ticker()
        self.counters: Dict[str, int] = {}
        self._handles: Dict[Hashable, Decreaser[VertexAndDist]] = {}
        self._parent_edges: Dict[Hashable, Optional[EdgeLike]] = {}
        self._done = False

    # ---------- relaxation ------------------------------------------------

    def weight(self, edge: EdgeLike) -> int:
        """Return the weight of ``edge`` as the engine reads it.

        Raises:
            MissingWeightError: If the weight mapping has no entry for ``edge``.
            GraphFormatError: If validation is on and the weight is invalid.
        """
        try:
            w = self.weights[edge]
        except KeyError:
            raise MissingWeightError(edge) from None
        if self.cfg.validate_weights:
            return check_weight(w, repr(edge))
        return w

    def run(self) -> None:
        """Compute the shortest-path tree, discarding any previous run."""
        self._done = False
        self.ticker.reset()
        counters = {"extractions": 0, "edges_scanned": 0, "decreases": 0, "heap_ticks": 0}
        trace = self.cfg.trace and self.logger.enabled("debug")

        vertices = list(self.graph.vertices())
        pq: MinHeap[VertexAndDist] = MinHeap(
            capacity=len(vertices), ticker=self.ticker, arity=self.cfg.arity
        )
        handles: Dict[Hashable, Decreaser[VertexAndDist]] = {}
        parents: Dict[Hashable, Optional[EdgeLike]] = {}
        for v in vertices:
            handles[v] = pq.insert(VertexAndDist(v, INF))
            parents[v] = None
        handles[self.start].decrease(VertexAndDist(self.start, 0))

        while not pq.is_empty():
            u = pq.extract_min()
            counters["extractions"] += 1
            if trace:
                self.logger.debug("extract", vertex=u.vertex, distance=u.distance)
            for e in self.graph.edges_from(u.vertex):
                counters["edges_scanned"] += 1
                cand = extend(u.distance, self.weight(e))
                try:
                    h = handles[e.head]
                except KeyError:
                    raise InputError(f"edge {e!r} leads outside the graph.") from None
                if cand < h.get_value().distance:
                    h.decrease(VertexAndDist(e.head, cand))
                    parents[e.head] = e
                    counters["decreases"] += 1
                    if trace:
                        self.logger.debug("relax", edge=e, distance=cand)

        counters["heap_ticks"] = self.ticker.ticks
        self.counters = counters
        self._handles = handles
        self._parent_edges = parents
        self._done = True
        self.logger.info("run", n=len(vertices), **counters)

    # ---------- queries ---------------------------------------------------

    def _require(self, vertex: Hashable) -> None:
        if not self._done:
            raise AlgorithmError("call run() before querying paths.")
        if vertex not in self._handles:
            raise InputError(f"{vertex!r} is not a vertex of the graph.")

    def path(self, end: Hashable) -> List[EdgeLike]:
        """Return the edges of a shortest path from the start to ``end``.

        Args:
            end: Target vertex.

        Returns:
            Edges in order from the start vertex to ``end``; empty when
            ``end`` is the start.

        Raises:
            UnreachableError: If ``end`` cannot be reached from the start.
        """
        self._require(end)
        edges: List[EdgeLike] = []
        cur = end
        while cur != self.start:
            e = self._parent_edges[cur]
            if e is None:
                raise UnreachableError(end)
            edges.append(e)
            if len(edges) > len(self._parent_edges):
                raise AlgorithmError("parent edges form a cycle.")
            cur = e.tail
        edges.reverse()
        return edges

    def find_path(self, end: Hashable) -> Optional[List[EdgeLike]]:
        """Like :meth:`path`, but return ``None`` for an unreachable ``end``."""
        try:
            return self.path(end)
        except UnreachableError:
            return None

    def length(self, end: Hashable) -> int:
        """Return the total weight of :meth:`path` to ``end``."""
        return sum(self.weight(e) for e in self.path(end))

    def distance(self, end: Hashable) -> Distance:
        """Return the finalised distance of ``end`` as held by its heap entry.

        This does not walk the tree; for every reachable vertex it equals
        :meth:`length`, and it is :data:`~sptree.distance.INF` otherwise.
        """
        self._require(end)
        return self._handles[end].get_value().distance

    distance_estimate = distance

    def is_reachable(self, end: Hashable) -> bool:
        return self.distance(end) is not INF

    def parent_edge(self, end: Hashable) -> Optional[EdgeLike]:
        """Return the tree edge entering ``end``, or ``None``."""
        self._require(end)
        return self._parent_edges[end]

    def distances(self) -> Dict[Hashable, Distance]:
        if not self._done:
            raise AlgorithmError("call run() before querying paths.")
        return {v: h.get_value().distance for v, h in self._handles.items()}

    def result(self) -> ShortestPathResult:
        """Return a snapshot of the finished run."""
        return ShortestPathResult(
            source=self.start,
            distances=self.distances(),
            parent_edges=dict(self._parent_edges),
        )

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters of the last run."""
        return dict(self.counters)

    def metrics(self, wall_ms: float) -> EngineMetrics:
        """Return performance metrics for the most recent run.

        Args:
            wall_ms: Wall-clock time spent in :meth:`run` in milliseconds.
        """
        vertices = list(self.graph.vertices())
        m = sum(len(list(self.graph.edges_from(v))) for v in vertices)
        return EngineMetrics(
            n=len(vertices),
            m=m,
            arity=self.cfg.arity,
            counters=self.summary(),
            wall_ms=wall_ms,
        )


def shortest_paths(
    graph: GraphView,
    weights: Mapping[Any, int],
    start: Hashable,
    config: Optional[EngineConfig] = None,
    logger: Logger | None = None,
) -> ShortestPaths:
    """Build a :class:`ShortestPaths` engine, run it and return it."""
    sp = ShortestPaths(graph, weights, start, config=config, logger=logger)
    sp.run()
    return sp


__all__ = [
    "EngineConfig",
    "EngineMetrics",
    "ShortestPathResult",
    "ShortestPaths",
    "shortest_paths",
]
