#!/usr/bin/env python3
# termcore/helpers/ring_buffer.py
from __future__ import annotations

"""
Fixed-capacity circular container with overwrite-on-full semantics.

Used to bound command history and log retention. Storage is allocated once
at construction and never resized; pushing past capacity evicts an element
from the opposite end instead of growing.

Observers may register listeners to receive a `BufferChange` describing each
mutation (a live history view, for example). Every mutating call accepts
`notify=False` to suppress the notification for that call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class EmptyBufferError(LookupError):
    """Raised when reading or removing from an empty buffer."""


class ChangeAction(Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    RESET = "reset"


@dataclass(frozen=True, slots=True)
class BufferChange:
    """
    Description of a single buffer mutation.

    Attributes:
        action: Kind of mutation.
        index: Logical index affected (-1 for RESET).
        new_items: Items now present at `index` (ADD / REPLACE).
        old_items: Items removed from `index` (REMOVE / REPLACE).
    """
    action: ChangeAction
    index: int = -1
    new_items: tuple[Any, ...] = field(default_factory=tuple)
    old_items: tuple[Any, ...] = field(default_factory=tuple)


ChangeListener = Callable[["RingBuffer[Any]", BufferChange], None]


class RingBuffer(Generic[T]):
    """
    Double-ended queue of fixed capacity.

    Logical index 0 is always the oldest element. `push_back` on a full
    buffer overwrites the oldest slot; `push_front` on a full buffer
    overwrites the newest slot.
    """

    def __init__(self, capacity: int, items: Iterable[T] | None = None) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._items: list[T | None] = [None] * capacity
        self._head = 0
        self._count = 0
        self._listeners: list[ChangeListener] = []

        if items is not None:
            # Only the first `capacity` items are kept
            for item in items:
                if self._count == capacity:
                    break
                self._items[self._count] = item
                self._count += 1

    # ---------------- Introspection ----------------

    @property
    def capacity(self) -> int:
        return len(self._items)

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.capacity

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[T]:
        for logical in range(self._count):
            yield self._items[self._physical(logical)]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self.capacity}, items={self.snapshot()!r})"

    def snapshot(self) -> list[T]:
        """Return a copy of the contents, oldest first."""
        return list(self)

    # ---------------- Indexing ----------------

    def __getitem__(self, index: int) -> T:
        self._check_index(index)
        return self._items[self._physical(index)]  # type: ignore[return-value]

    def __setitem__(self, index: int, value: T) -> None:
        self.set(index, value)

    def set(self, index: int, value: T, *, notify: bool = True) -> None:
        """Replace the element at logical `index`."""
        self._check_index(index)
        slot = self._physical(index)
        old = self._items[slot]
        self._items[slot] = value
        if notify:
            self._emit(BufferChange(ChangeAction.REPLACE, index, (value,), (old,)))

    # ---------------- Peeking ----------------

    def front(self) -> T:
        """Return the oldest element without removing it."""
        self._check_not_empty()
        return self._items[self._head]  # type: ignore[return-value]

    def back(self) -> T:
        """Return the newest element without removing it."""
        self._check_not_empty()
        return self._items[self._physical(self._count - 1)]  # type: ignore[return-value]

    # ---------------- Mutation ----------------

    def add(self, item: T, *, notify: bool = True) -> None:
        """Alias for `push_back`."""
        self.push_back(item, notify=notify)

    def push_back(self, item: T, *, notify: bool = True) -> None:
        """Append `item`; when full, the oldest element is overwritten."""
        if self.is_full:
            evicted = self._items[self._head]
            self._items[self._head] = item
            self._head = (self._head + 1) % self.capacity
            if notify:
                # Reported as a replace at the evicted logical position
                self._emit(BufferChange(ChangeAction.REPLACE, 0, (item,), (evicted,)))
            return

        logical = self._count
        self._items[self._physical(logical)] = item
        self._count += 1
        if notify:
            self._emit(BufferChange(ChangeAction.ADD, logical, (item,)))

    def push_front(self, item: T, *, notify: bool = True) -> None:
        """Prepend `item`; when full, the newest element is overwritten."""
        self._head = (self._head - 1) % self.capacity

        if self._count == self.capacity:
            # The slot before head is the newest element's slot
            evicted = self._items[self._head]
            self._items[self._head] = item
            if notify:
                self._emit(BufferChange(
                    ChangeAction.REPLACE, self._count - 1, (item,), (evicted,)))
            return

        self._items[self._head] = item
        self._count += 1
        if notify:
            self._emit(BufferChange(ChangeAction.ADD, 0, (item,)))

    def pop_back(self, *, notify: bool = True) -> T:
        """Remove and return the newest element."""
        self._check_not_empty("cannot pop from an empty buffer")
        slot = self._physical(self._count - 1)
        item = self._items[slot]
        self._items[slot] = None
        self._count -= 1
        if notify:
            self._emit(BufferChange(ChangeAction.REMOVE, self._count, old_items=(item,)))
        return item  # type: ignore[return-value]

    def pop_front(self, *, notify: bool = True) -> T:
        """Remove and return the oldest element."""
        self._check_not_empty("cannot pop from an empty buffer")
        item = self._items[self._head]
        self._items[self._head] = None
        self._head = (self._head + 1) % self.capacity
        self._count -= 1
        if notify:
            self._emit(BufferChange(ChangeAction.REMOVE, 0, old_items=(item,)))
        return item  # type: ignore[return-value]

    def clear(self, *, notify: bool = True) -> None:
        """Drop every element; storage is reused, not reallocated."""
        for slot in range(self.capacity):
            self._items[slot] = None
        self._head = 0
        self._count = 0
        if notify:
            self._emit(BufferChange(ChangeAction.RESET))

    def replace_all(self, items: Iterable[T], *, notify: bool = True) -> None:
        """Reset the contents to `items` (newest last), emitting a single RESET."""
        self.clear(notify=False)
        for item in items:
            self.push_back(item, notify=False)
        if notify:
            self._emit(BufferChange(ChangeAction.RESET))

    # ---------------- Observers ----------------

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _emit(self, change: BufferChange) -> None:
        for listener in list(self._listeners):
            listener(self, change)

    # ---------------- Internals ----------------

    def _physical(self, logical: int) -> int:
        return (self._head + logical) % self.capacity

    def _check_index(self, index: int) -> None:
        if self._count == 0:
            raise IndexError(f"index {index} out of range: buffer is empty")
        if not 0 <= index < self._count:
            raise IndexError(f"index {index} out of range: buffer holds {self._count} items")

    def _check_not_empty(self, message: str = "buffer is empty") -> None:
        if self._count == 0:
            raise EmptyBufferError(message)
