"""Addressable min-heap with decrease-key through stable handles."""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from .exceptions import ConfigError, EmptyQueueError, HeapFullError, InvalidDecreaseError
from .ticker import Ticker

T = TypeVar("T")

_EXTRACTED = -1


class Decreaser(Generic[T]):
    """Handle to one entry of a :class:`MinHeap`.

    A handle is issued by :meth:`MinHeap.insert` and stays tied to that entry.
    It can read the entry's value at any time, including after the entry has
    been extracted (the final value is kept), and can lower the value for as
    long as the entry is still in the heap.
    """

    __slots__ = ("_heap", "_slot")

    def __init__(self, heap: "MinHeap[T]", slot: int) -> None:
        self._heap = heap
        self._slot = slot

    def get_value(self) -> T:
        """Return the entry's current value without changing anything."""
        return self._heap._values[self._slot]

    def decrease(self, new_value: T) -> None:
        """Replace the entry's value with a strictly smaller one.

        Args:
            new_value: Replacement value; must compare ``<`` the current one.

        Raises:
            InvalidDecreaseError: If ``new_value`` is not strictly smaller, or
                the entry has already been extracted. The heap is unchanged.
        """
        self._heap._decrease(self._slot, new_value)

    @property
    def live(self) -> bool:
        """``True`` while the entry is still in the heap."""
        return self._heap._pos[self._slot] != _EXTRACTED

    def __repr__(self) -> str:
        state = "live" if self.live else "extracted"
        return f"<Decreaser {self.get_value()!r} {state}>"


class MinHeap(Generic[T]):
    """Array-backed d-ary min-heap over values ordered by ``<``.

    Values live in an arena indexed by slot; the heap array holds slots and a
    second table maps every slot to its current heap position. Sifting keeps
    that table current, so a :class:`Decreaser` only needs its slot to find
    its entry. Every swap performed while sifting ticks the ``ticker``.

    Entries that compare equal are ordered by their position in the heap
    array, not by insertion order.

    Args:
        capacity: Optional bound on the number of live entries.
        ticker: Counter for sift swaps; a private one is created if omitted.
        arity: Children per node, ``2`` for a binary heap.

    Examples:
        ```python
        >>> h = MinHeap()
        >>> a = h.insert(5)
        >>> _ = h.insert(3)
        >>> a.decrease(1)
        >>> h.extract_min()
        1
        ```
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        ticker: Optional[Ticker] = None,
        arity: int = 2,
    ) -> None:
        if not isinstance(arity, int) or arity < 2:
            raise ConfigError("heap arity must be an integer >= 2.")
        if capacity is not None and capacity < 0:
            raise ConfigError("heap capacity must be non-negative.")
        self.capacity = capacity
        self.arity = arity
        self.ticker = ticker or Ticker()
        self._values: List[T] = []
        self._pos: List[int] = []
        self._heap: List[int] = []

    # ---- public API ---------------------------------------------------

    def insert(self, value: T) -> Decreaser[T]:
        """Add ``value`` and return a handle to its entry.

        Raises:
            HeapFullError: If the heap already holds ``capacity`` entries.
        """
        if self.capacity is not None and len(self._heap) >= self.capacity:
            raise HeapFullError(f"heap is full (capacity {self.capacity}).")
        slot = len(self._values)
        self._values.append(value)
        self._pos.append(len(self._heap))
        self._heap.append(slot)
        self._sift_up(len(self._heap) - 1)
        return Decreaser(self, slot)

    def extract_min(self) -> T:
        """Remove and return the smallest value.

        Raises:
            EmptyQueueError: If the heap has no entries.
        """
        if not self._heap:
            raise EmptyQueueError("extract_min on an empty heap.")
        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._pos[last] = 0
            self._sift_down(0)
        self._pos[root] = _EXTRACTED
        return self._values[root]

    def peek(self) -> T:
        """Return the smallest value without removing it."""
        if not self._heap:
            raise EmptyQueueError("peek on an empty heap.")
        return self._values[self._heap[0]]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    # ---- internals ----------------------------------------------------

    def _decrease(self, slot: int, new_value: T) -> None:
        i = self._pos[slot]
        if i == _EXTRACTED:
            raise InvalidDecreaseError("cannot decrease an entry that was already extracted.")
        current = self._values[slot]
        if not new_value < current:
            raise InvalidDecreaseError(
                f"decrease must lower the value: {new_value!r} is not less than {current!r}."
            )
        self._values[slot] = new_value
        self._sift_up(i)

    def _less(self, i: int, j: int) -> bool:
        return self._values[self._heap[i]] < self._values[self._heap[j]]

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._pos[heap[i]] = i
        self._pos[heap[j]] = j
        self.ticker.tick()

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // self.arity
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            first = self.arity * i + 1
            if first >= n:
                return
            best = first
            for child in range(first + 1, min(first + self.arity, n)):
                if self._less(child, best):
                    best = child
            if not self._less(best, i):
                return
            self._swap(i, best)
            i = best


__all__ = ["Decreaser", "MinHeap"]
