"""Distance values and the vertex/distance pairs stored in the heap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Union


class _Infinity:
    """Distance of a vertex that has not been reached.

    The single instance, :data:`INF`, compares greater than every integer and
    equal only to itself. It supports no arithmetic: use :func:`extend` to add
    a weight to a distance.
    """

    _instance: "_Infinity | None" = None

    def __new__(cls) -> "_Infinity":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __lt__(self, other: Any) -> bool:
        return False

    def __le__(self, other: Any) -> bool:
        return other is self

    def __gt__(self, other: Any) -> bool:
        return other is not self

    def __ge__(self, other: Any) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return other is self

    def __hash__(self) -> int:
        return hash("sptree.INF")

    def __repr__(self) -> str:
        return "INF"

    def __reduce__(self) -> str:
        return "INF"


INF = _Infinity()

Distance = Union[int, _Infinity]


def extend(distance: Distance, weight: int) -> Distance:
    """Return ``distance + weight``, saturating at :data:`INF`.

    Args:
        distance: Current distance, possibly :data:`INF`.
        weight: Non-negative edge weight.

    Returns:
        :data:`INF` if ``distance`` is infinite, otherwise the sum.
    """
    if distance is INF:
        return INF
    return distance + weight  # type: ignore[operator]


def is_finite(distance: Distance) -> bool:
    """Return ``True`` unless ``distance`` is :data:`INF`."""
    return distance is not INF


@dataclass(frozen=True, eq=False)
class VertexAndDist:
    """A vertex paired with its current distance estimate.

    Instances are ordered by ``distance`` only, which is what the heap needs.
    A decrease replaces the whole pair, so a value handed out by the heap is
    never changed afterwards.
    """

    vertex: Hashable
    distance: Distance

    def __lt__(self, other: "VertexAndDist") -> bool:
        return self.distance < other.distance

    def __le__(self, other: "VertexAndDist") -> bool:
        return self.distance <= other.distance

    def __gt__(self, other: "VertexAndDist") -> bool:
        return self.distance > other.distance

    def __ge__(self, other: "VertexAndDist") -> bool:
        return self.distance >= other.distance

    def __repr__(self) -> str:
        return f"VertexAndDist({self.vertex!r}, {self.distance!r})"


__all__ = ["INF", "Distance", "VertexAndDist", "extend", "is_finite"]
