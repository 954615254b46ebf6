"""NumPy-backed graph view with integer vertices."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Mapping, NamedTuple, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import DirectedGraph, Weights


class ArrayEdge(NamedTuple):
    """Edge of an :class:`ArrayGraph`; ``index`` is its CSR position."""

    index: int
    tail: int
    head: int


class ArrayWeights(Mapping[ArrayEdge, int]):
    """Weight function of an :class:`ArrayGraph`, looked up by edge index."""

    def __init__(self, graph: "ArrayGraph") -> None:
        self._graph = graph

    def __getitem__(self, edge: ArrayEdge) -> int:
        g = self._graph
        if not isinstance(edge, ArrayEdge) or not (0 <= edge.index < g.m):
            raise KeyError(edge)
        return int(g.weights_array[edge.index])

    def __iter__(self) -> Iterator[ArrayEdge]:
        return iter(self._graph.edges())

    def __len__(self) -> int:
        return self._graph.m


class ArrayGraph:
    """Directed graph stored in compressed sparse row form.

    Vertices are the integers ``0 .. n-1``. Outgoing edges of ``u`` occupy
    positions ``indptr[u]:indptr[u + 1]`` of ``heads`` and ``weights_array``.
    Negative or non-integral weights are rejected with
    :class:`~sptree.exceptions.GraphFormatError` citing the offending edge.

    Args:
        n: Number of vertices.
        tails: Tail vertex of every edge.
        heads: Head vertex of every edge.
        weights: Weight of every edge.
    """

    def __init__(
        self,
        n: int,
        tails: Sequence[int] | npt.ArrayLike,
        heads: Sequence[int] | npt.ArrayLike,
        weights: Sequence[int] | npt.ArrayLike,
    ) -> None:
        if not isinstance(n, int) or n <= 0:
            raise InputError("ArrayGraph.n must be a positive integer.")
        t = np.asarray(tails, dtype=np.int64).reshape(-1)
        h = np.asarray(heads, dtype=np.int64).reshape(-1)
        w = np.asarray(weights).reshape(-1)
        if not (t.shape == h.shape == w.shape):
            raise InputError("tails, heads and weights must have the same length.")
        if t.size and (t.min() < 0 or t.max() >= n or h.min() < 0 or h.max() >= n):
            raise InputError("edge endpoints must be vertex ids in [0, n).")
        if w.size:
            if not np.issubdtype(w.dtype, np.number):
                raise GraphFormatError("edge weights must be numeric.")
            with np.errstate(invalid="ignore"):
                mask = (w < 0) | (w != np.floor(w))
                # weights are stored as int64
                if np.issubdtype(w.dtype, np.floating):
                    mask |= ~np.isfinite(w) | (w >= 2.0**63)
                elif w.dtype == np.uint64:
                    mask |= w > np.uint64(np.iinfo(np.int64).max)
            bad = np.flatnonzero(mask)
            if bad.size:
                i = int(bad[0])
                raise GraphFormatError(
                    f"invalid weight {w[i]} on edge ({int(t[i])}, {int(h[i])})"
                )

        order = np.argsort(t, kind="stable")
        self.n = n
        self.heads: npt.NDArray[np.int64] = h[order]
        self.weights_array: npt.NDArray[np.int64] = w[order].astype(np.int64)
        self.indptr: npt.NDArray[np.int64] = np.zeros(n + 1, dtype=np.int64)
        np.cumsum(np.bincount(t, minlength=n), out=self.indptr[1:])

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int, int]]) -> "ArrayGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        triples = list(edges)
        if not triples:
            return cls(n, [], [], np.zeros(0, dtype=np.int64))
        tails, heads, weights = zip(*triples)
        return cls(n, tails, heads, weights)

    @property
    def m(self) -> int:
        return int(self.heads.shape[0])

    @property
    def weights(self) -> ArrayWeights:
        """Mapping from :class:`ArrayEdge` to weight, for the engine."""
        return ArrayWeights(self)

    def vertices(self) -> range:
        return range(self.n)

    def edges_from(self, u: int) -> List[ArrayEdge]:
        lo, hi = int(self.indptr[u]), int(self.indptr[u + 1])
        return [ArrayEdge(i, u, int(self.heads[i])) for i in range(lo, hi)]

    def edges(self) -> Iterator[ArrayEdge]:
        for u in range(self.n):
            yield from self.edges_from(u)

    def out_degree(self, u: int) -> int:
        return int(self.indptr[u + 1] - self.indptr[u])

    # Utility for tests: convert to a DirectedGraph
    def to_directed_graph(self) -> Tuple[DirectedGraph, Weights]:
        """Return a :class:`~sptree.graph.DirectedGraph` copy named ``0 .. n-1``."""
        triples = [(e.tail, e.head, int(self.weights_array[e.index])) for e in self.edges()]
        return DirectedGraph.from_edges(triples, vertices=range(self.n))


__all__ = ["ArrayEdge", "ArrayGraph", "ArrayWeights"]
