"""Directed graph representation read by the shortest-path engine."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Set, Tuple

from .exceptions import GraphFormatError, InputError

Weights = Dict["Edge", int]
EdgeTriple = Tuple[Hashable, Hashable, Any]


class EdgeLike(Protocol):
    """Anything with a ``tail`` and a ``head`` vertex."""

    @property
    def tail(self) -> Any: ...

    @property
    def head(self) -> Any: ...


class GraphView(Protocol):
    """Read-only view of a directed graph consumed by the engine.

    Any object exposing these two methods works; neither the vertex nor the
    edge type is fixed, as long as vertices are hashable and edges are usable
    as keys of the weight mapping.
    """

    def vertices(self) -> Iterable[Any]:
        """Return every vertex of the graph."""
        ...

    def edges_from(self, vertex: Any) -> Iterable[EdgeLike]:
        """Return the outgoing edges of ``vertex``."""
        ...


class Vertex:
    """A graph vertex with an ordered list of outgoing edges.

    Vertices compare by identity; ``name`` is only a label.
    """

    __slots__ = ("name", "_edges")

    def __init__(self, name: Optional[Hashable] = None) -> None:
        self.name = name
        self._edges: List[Edge] = []

    def edges_from(self) -> List["Edge"]:
        """Return a copy of the outgoing edges in insertion order."""
        return list(self._edges)

    def out_degree(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"Vertex({self.name!r})"


@dataclass(frozen=True, eq=False)
class Edge:
    """Directed edge ``tail -> head``.

    Edges compare by identity, so parallel edges are distinct keys of a
    weight mapping.
    """

    tail: Vertex
    head: Vertex

    def __repr__(self) -> str:
        return f"Edge({self.tail.name!r} -> {self.head.name!r})"


def check_weight(w: Any, where: str) -> int:
    """Validate an edge weight and return it as an ``int``.

    Args:
        w: Candidate weight. Integral floats such as ``2.0`` are accepted.
        where: Description of the edge, used in the error message.

    Returns:
        The weight as an integer.

    Raises:
        GraphFormatError: If ``w`` is not a non-negative integer.
    """
    if isinstance(w, bool) or not isinstance(w, numbers.Real):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge {where}")
    if not isinstance(w, numbers.Integral):
        if not float(w).is_integer():
            raise GraphFormatError(f"non-integral weight {w} on edge {where}")
    w = int(w)
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge {where}")
    return w


class DirectedGraph:
    """Directed graph of :class:`Vertex` objects joined by :class:`Edge` objects.

    Weights are not stored here: callers keep them in a separate mapping from
    edge to non-negative ``int``, usually the one returned by
    :meth:`from_edges`.
    """

    def __init__(self) -> None:
        self._vertices: List[Vertex] = []
        self._members: Set[Vertex] = set()
        self._num_edges = 0

    def add_vertex(self, name: Optional[Hashable] = None) -> Vertex:
        """Create a vertex, add it to the graph and return it."""
        v = Vertex(name)
        self._vertices.append(v)
        self._members.add(v)
        return v

    def add_edge(self, tail: Vertex, head: Vertex) -> Edge:
        """Add a directed edge from ``tail`` to ``head``.

        Args:
            tail: Vertex the edge leaves.
            head: Vertex the edge enters.

        Returns:
            The new edge. Give it a weight in the caller's weight mapping.

        Raises:
            InputError: If either vertex belongs to another graph.
        """
        if tail not in self._members or head not in self._members:
            raise InputError("both endpoints must be vertices of this graph.")
        e = Edge(tail, head)
        tail._edges.append(e)
        self._num_edges += 1
        return e

    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    def edges_from(self, vertex: Vertex) -> List[Edge]:
        return vertex.edges_from()

    def edges(self) -> Iterator[Edge]:
        """Iterate over all edges, grouped by tail vertex."""
        for v in self._vertices:
            yield from v._edges

    def vertex(self, name: Hashable) -> Vertex:
        """Return the first vertex labelled ``name``.

        Raises:
            InputError: If no vertex carries that name.
        """
        for v in self._vertices:
            if v.name == name:
                return v
        raise InputError(f"no vertex named {name!r}")

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._members

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[EdgeTriple],
        vertices: Iterable[Hashable] = (),
    ) -> Tuple["DirectedGraph", Weights]:
        """Create a graph and its weights from ``(tail, head, weight)`` triples.

        Vertices are identified by name while building: every distinct name
        becomes one vertex. Names listed in ``vertices`` are created first, in
        order, which keeps isolated vertices.

        Args:
            edges: Iterable of ``(tail_name, head_name, weight)`` triples.
            vertices: Optional names of vertices to create up front.

        Returns:
            A tuple ``(graph, weights)``.

        Raises:
            GraphFormatError: If a weight is negative or not integral.

        Examples:
            ```python
            >>> g, w = DirectedGraph.from_edges([("a", "b", 2)])
            >>> [w[e] for e in g.edges()]
            [2]
            ```
        """
        g = cls()
        by_name: Dict[Hashable, Vertex] = {}

        def lookup(name: Hashable) -> Vertex:
            v = by_name.get(name)
            if v is None:
                v = by_name[name] = g.add_vertex(name)
            return v

        for name in vertices:
            lookup(name)
        weights: Weights = {}
        for tail, head, w in edges:
            checked = check_weight(w, f"({tail!r}, {head!r})")
            e = g.add_edge(lookup(tail), lookup(head))
            weights[e] = checked
        return g, weights


__all__ = [
    "DirectedGraph",
    "Edge",
    "EdgeLike",
    "EdgeTriple",
    "GraphView",
    "Vertex",
    "Weights",
    "check_weight",
]
