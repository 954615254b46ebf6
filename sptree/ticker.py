"""Operation counter shared by the heap and the engine."""

from __future__ import annotations


class Ticker:
    """Count elementary operations.

    The heap ticks once per swap performed while sifting, which gives tests a
    machine-independent handle on the ``O(log n)`` cost of each operation.
    """

    def __init__(self) -> None:
        self._ticks = 0

    def tick(self, n: int = 1) -> None:
        """Record ``n`` operations."""
        self._ticks += n

    @property
    def ticks(self) -> int:
        """Number of operations recorded since the last reset."""
        return self._ticks

    def reset(self) -> None:
        self._ticks = 0

    def __repr__(self) -> str:
        return f"Ticker(ticks={self._ticks})"


__all__ = ["Ticker"]
