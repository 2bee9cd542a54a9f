"""Immutable item sequences used as generator lookup keys."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar, overload

from .constants import SEQUENCE_HASH_MASK, SEQUENCE_HASH_MULTIPLIER

T = TypeVar("T")


class ItemSequence(Generic[T]):
    """An ordered, fixed-length chain of items with value semantics."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T]) -> None:
        if items is None:
            raise ValueError("items must not be None")
        self._items: tuple[T, ...] = tuple(items)

    @classmethod
    def of(cls, *items: T) -> "ItemSequence[T]":
        return cls(items)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> T:
        ...

    @overload
    def __getitem__(self, index: slice) -> "ItemSequence[T]":
        ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return ItemSequence(self._items[index])
        return self._items[index]

    # ------------------------------------------------------------------
    # Windowing helpers
    # ------------------------------------------------------------------
    def last(self, count: int) -> "ItemSequence[T]":
        """Return the sequence made of the final ``count`` items."""

        if count < 0 or count > len(self._items):
            raise ValueError(
                f"cannot take the last {count} items of a sequence of length {len(self._items)}"
            )
        if count == 0:
            return ItemSequence(())
        return ItemSequence(self._items[-count:])

    def shifted(self, item: T) -> "ItemSequence[T]":
        """Drop the first item and append ``item``, keeping the length."""

        if not self._items:
            return ItemSequence(())
        return ItemSequence(self._items[1:] + (item,))

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ItemSequence):
            return NotImplemented
        if len(self._items) != len(other._items):
            return False
        return all(left == right for left, right in zip(self._items, other._items))

    def __hash__(self) -> int:
        value = 0
        for item in self._items:
            value = (value * SEQUENCE_HASH_MULTIPLIER + hash(item)) & SEQUENCE_HASH_MASK
        return value

    def __repr__(self) -> str:
        inner = ", ".join(repr(item) for item in self._items)
        return f"ItemSequence([{inner}])"

    def to_list(self) -> list[Any]:
        return list(self._items)


__all__ = ["ItemSequence"]
