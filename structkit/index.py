"""A typed wrapper around a non-negative integer, used as a container index."""

from __future__ import annotations

from typing import Generic, TypeVar

__all__ = ["Index"]

T = TypeVar("T")


class Index(Generic[T]):
    """Typed index.

    The type parameter only documents which container the index belongs to.
    Two indexes are equal when their raw values are equal.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: int) -> None:
        if isinstance(raw, Index):
            raw = raw.raw
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(f"index must be an int, got {type(raw).__name__}")
        if raw < 0:
            raise ValueError(f"index must be non-negative, got {raw}")
        self.raw = raw

    def __int__(self) -> int:
        return self.raw

    def __index__(self) -> int:
        return self.raw

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Index):
            return self.raw == other.raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return str(self.raw)

    def __str__(self) -> str:
        return str(self.raw)