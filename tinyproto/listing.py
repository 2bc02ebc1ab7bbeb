"""Intrusive doubly linked list with identifiers shared across all lists."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

__all__ = ["ListElement", "ElementList"]

_lock = threading.RLock()
_uids = itertools.count()


@dataclass(eq=False)
class ListElement:
    """Base element of an ElementList; subclass it to carry data."""

    next: ListElement | None = field(default=None, repr=False)
    prev: ListElement | None = field(default=None, repr=False)


class ElementList:
    """A list of ListElement objects, newest first, guarded by a shared lock."""

    def __init__(self) -> None:
        self.head: ListElement | None = None

    def add(self, element: ListElement) -> int:
        """Insert ``element`` at the head and return a 12-bit identifier."""
        with _lock:
            uid = next(_uids)
            element.next = self.head
            element.prev = None
            if self.head is not None:
                self.head.prev = element
            self.head = element
        return uid & 0x0FFF

    def remove(self, element: ListElement) -> None:
        """Unlink ``element`` from the list and clear its links."""
        with _lock:
            if element is self.head:
                self.head = element.next
                if self.head is not None:
                    self.head.prev = None
            else:
                if element.prev is not None:
                    element.prev.next = element.next
                if element.next is not None:
                    element.next.prev = element.prev
            element.prev = None
            element.next = None

    def clear(self) -> None:
        """Forget all elements."""
        with _lock:
            self.head = None

    def enumerate(self, func: Callable[[ListElement, Any], Any], data: Any = None) -> None:
        """Call ``func(element, data)`` for each element until it returns a false value."""
        with _lock:
            element = self.head
            while element is not None:
                if not func(element, data):
                    break
                element = element.next

    def __iter__(self) -> Iterator[ListElement]:
        with _lock:
            snapshot = []
            element = self.head
            while element is not None:
                snapshot.append(element)
                element = element.next
        return iter(snapshot)

    def __len__(self) -> int:
        return sum(1 for _ in self)