"""Insertion-ordered set."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, MutableSet
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(MutableSet[T], Generic[T]):
    """A set that remembers first-insertion order.

    Re-adding an existing item keeps its original position.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = dict.fromkeys(items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: T) -> None:
        self._items.setdefault(item, None)

    def discard(self, item: T) -> None:
        self._items.pop(item, None)

    def update(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"
