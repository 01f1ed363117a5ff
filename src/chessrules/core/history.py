"""Capacity-limited LIFO stack used for move history and captured pieces."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from chessrules.core.errors import HistoryOverflowError, HistoryUnderflowError

T = TypeVar("T")

DEFAULT_CAPACITY = 1000


class BoundedStack(Generic[T]):
    """Last-in-first-out container that refuses to grow past *capacity*.

    ``peek`` always returns the most recently pushed element. Iteration
    runs from most recent to oldest.
    """

    __slots__ = ("_items", "_capacity")

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Stack capacity must be >= 1, got {capacity!r}")
        self._items: list[T] = []
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, item: T) -> None:
        if len(self._items) >= self._capacity:
            raise HistoryOverflowError(
                f"Stack overflow: capacity {self._capacity} reached"
            )
        self._items.append(item)

    def pop(self) -> T:
        if not self._items:
            raise HistoryUnderflowError("Stack underflow: nothing to pop")
        return self._items.pop()

    def peek(self) -> T:
        if not self._items:
            raise HistoryUnderflowError("Stack underflow: nothing to peek")
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def snapshot(self) -> tuple[T, ...]:
        """Immutable copy, most recent first."""
        return tuple(reversed(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return reversed(self._items)

    def __repr__(self) -> str:
        return f"BoundedStack(size={len(self._items)}, capacity={self._capacity})"
