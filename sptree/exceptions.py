"""Custom exception types used across :mod:`sptree`."""

from __future__ import annotations


class SptreeError(Exception):
    """Base class for all package-specific errors."""


class InputError(SptreeError, ValueError):
    """Raised for invalid user input such as foreign vertices."""


class GraphFormatError(InputError):
    """Raised when parsing a graph fails or an edge weight is invalid."""


class InvalidSourceError(InputError):
    """Raised when the start vertex is not part of the graph."""


class UnreachableError(InputError, LookupError):
    """Raised when asking for the path to a vertex the start cannot reach.

    This is an expected outcome on disconnected graphs; use
    :meth:`~sptree.engine.ShortestPaths.find_path` to get ``None`` instead.
    """

    def __init__(self, vertex: object) -> None:
        super().__init__(f"no path from the start vertex to {vertex!r}")
        self.vertex = vertex


class ConfigError(SptreeError, ValueError):
    """Raised for invalid configuration options."""


class MissingWeightError(ConfigError, KeyError):
    """Raised when the weight function has no entry for a scanned edge."""

    def __init__(self, edge: object) -> None:
        super().__init__(f"no weight for edge {edge!r}")
        self.edge = edge

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return str(self.args[0])


class AlgorithmError(SptreeError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class EmptyQueueError(AlgorithmError):
    """Raised when extracting from an empty priority queue."""


class InvalidDecreaseError(AlgorithmError):
    """Raised when a decrease-key call does not strictly lower the value."""


class HeapFullError(AlgorithmError):
    """Raised when inserting into a heap that reached its capacity."""


__all__ = [
    "SptreeError",
    "InputError",
    "GraphFormatError",
    "InvalidSourceError",
    "UnreachableError",
    "ConfigError",
    "MissingWeightError",
    "AlgorithmError",
    "EmptyQueueError",
    "InvalidDecreaseError",
    "HeapFullError",
]
