"""
Ordered working collection for entries and tracks.

Every transformation returns a new ``Queue``; the original is never
modified. Asynchronous transformations run strictly one element at a time,
in order, so that catalog calls and progress output stay ordered and the
load on external services stays bounded.
"""

import random
from collections.abc import Awaitable, Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")
U = TypeVar("U")


class Queue(Generic[T]):
    """An ordered, immutable-transformation sequence."""

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._items: list[T] = list(items) if items is not None else []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "Queue[T]": ...

    def __getitem__(self, index: int | slice) -> "T | Queue[T]":
        if isinstance(index, slice):
            return Queue(self._items[index])
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Queue):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Queue({self._items!r})"

    def to_list(self) -> list[T]:
        return list(self._items)

    def slice(self, start: int, stop: int | None = None) -> "Queue[T]":
        """Elements ``start`` up to (not including) ``stop``."""
        return Queue(self._items[start:stop])

    def concat(self, other: Iterable[T]) -> "Queue[T]":
        return Queue([*self._items, *other])

    def map(self, fn: Callable[[T], U]) -> "Queue[U]":
        return Queue(fn(item) for item in self._items)

    def filter(self, predicate: Callable[[T], bool]) -> "Queue[T]":
        return Queue(item for item in self._items if predicate(item))

    def sort(self, comparator: Callable[[T, T], int]) -> "Queue[T]":
        """Stable sort with a ``cmp(a, b) -> int`` comparator."""
        return Queue(sorted(self._items, key=cmp_to_key(comparator)))

    def shuffle(self, rng: random.Random | None = None) -> "Queue[T]":
        items = list(self._items)
        (rng or random.Random()).shuffle(items)
        return Queue(items)

    def flatten(self) -> "Queue[Any]":
        """Expand nested queues by one level, keeping their order."""
        flat: list[Any] = []
        for item in self._items:
            if isinstance(item, Queue):
                flat.extend(item)
            else:
                flat.append(item)
        return Queue(flat)

    async def map_sequential(self, fn: Callable[[T], Awaitable[U]]) -> "Queue[U]":
        """Apply an async function to each element in order, one at a time.

        The next call starts only after the previous one has completed; a
        failure stops the iteration and propagates.
        """
        results: list[U] = []
        for item in self._items:
            results.append(await fn(item))
        return Queue(results)

    async def for_each_sequential(self, fn: Callable[[T], Awaitable[Any]]) -> None:
        for item in self._items:
            await fn(item)

    async def dispatch(self) -> "Queue[Any]":
        """Dispatch every element in order and collect the resulting queues."""
        return await self.map_sequential(lambda entry: entry.dispatch())  # type: ignore[attr-defined]
