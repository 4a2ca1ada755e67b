"""A sparse vector that remembers freed slots for reuse."""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterator, Optional, SupportsIndex, TypeVar

__all__ = ["OptVec"]

T = TypeVar("T")
S = TypeVar("S")


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<empty>"


_EMPTY: Any = _Empty()


class OptVec(Generic[T]):
    """A growable sparse array.

    Removing a value frees its slot; the most recently freed slot is the first
    one reused by the next insertion.
    """

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._free: list[int] = []

    def __repr__(self) -> str:
        return f"OptVec(items={self._items!r}, free={self._free!r})"

    def _position(self, index: SupportsIndex) -> int:
        position = operator.index(index)
        if not 0 <= position < len(self._items):
            raise IndexError(f"index {position} out of range for OptVec")
        return position

    def __len__(self) -> int:
        """Number of slots in use, including reserved ones."""
        return len(self._items) - len(self._free)

    def is_empty(self) -> bool:
        """Return True when no slot is in use."""
        return len(self._items) == len(self._free)

    def _take_slot(self) -> Optional[int]:
        return self._free.pop() if self._free else None

    def insert(self, item: T) -> int:
        """Store ``item``, reusing a free slot if there is one; return its index."""
        index, _ = self.insert_with_ix(lambda _ix: (item, None))
        return index

    def insert_with_ix(self, factory: Callable[[int], tuple[T, S]]) -> tuple[int, S]:
        """Find a free index, call ``factory(index)`` for ``(item, extra)`` and store item.

        Returns ``(index, extra)``.
        """
        index = self._take_slot()
        if index is None:
            index = len(self._items)
            item, extra = factory(index)
            self._items.append(item)
        else:
            item, extra = factory(index)
            self._items[index] = item
        return index, extra

    def reserve_index(self) -> int:
        """Reserve an index without storing a value in it."""
        index = self._take_slot()
        if index is None:
            index = len(self._items)
            self._items.append(_EMPTY)
        return index

    def set(self, index: SupportsIndex, item: T) -> None:
        """Store ``item`` at ``index``. Raises IndexError when out of bounds."""
        self._items[self._position(index)] = item

    def remove(self, index: SupportsIndex) -> Optional[T]:
        """Remove and return the value at ``index`` and free the slot.

        Returns None if the slot was already empty. Raises IndexError when out
        of bounds.
        """
        position = self._position(index)
        item = self._items[position]
        if item is _EMPTY:
            return None
        self._items[position] = _EMPTY
        self._free.append(position)
        return item

    def get(self, index: SupportsIndex) -> Optional[T]:
        """Return the value at ``index`` or None if the slot is empty."""
        item = self._items[self._position(index)]
        return None if item is _EMPTY else item

    def __getitem__(self, index: SupportsIndex) -> T:
        item = self._items[self._position(index)]
        if item is _EMPTY:
            raise IndexError(f"Trying to access removed index `{operator.index(index)}`.")
        return item

    def __setitem__(self, index: SupportsIndex, item: T) -> None:
        self.set(index, item)

    def __iter__(self) -> Iterator[T]:
        return (item for item in self._items if item is not _EMPTY)