"""Subscription store: key → ordered list of handler entries."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Any

ALL_KEYS: Any = object()


class Subscription:
    """One stored handler entry.

    ``handler`` is what the subscriber passed in; ``callback`` is what the
    dispatcher calls (the handler itself, or a once wrapper around it).
    """

    __slots__ = ("key", "handler", "callback", "detach")

    def __init__(
        self,
        key: Hashable,
        handler: Callable[..., Any],
        callback: Callable[[Any, Hashable], None] | None = None,
    ):
        self.key = key
        self.handler = handler
        self.callback = callback if callback is not None else handler
        self.detach: Callable[[], None] | None = None  # cancel-listener removal

    def matches(self, handler: Callable[..., Any]) -> bool:
        return self.callback is handler or self.handler == handler

    def __repr__(self) -> str:
        return f"Subscription({self.key!r}, {self.handler!r})"


class SubscriptionStore:
    """Ordered handler entries per key.

    Insertion order is dispatch order. The same handler may be stored
    several times under one key and is then called that many times.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, list[Subscription]] = {}

    def add(self, entry: Subscription) -> None:
        self._entries.setdefault(entry.key, []).append(entry)

    def remove_handler(self, key: Hashable, handler: Callable[..., Any]) -> Subscription | None:
        """Remove the first entry under ``key`` matching ``handler``."""
        entries = self._entries.get(key)
        if not entries:
            return None
        for i, entry in enumerate(entries):
            if entry.matches(handler):
                del entries[i]
                return entry
        return None

    def discard(self, entry: Subscription) -> bool:
        """Remove exactly ``entry`` (by identity). Returns whether it was present."""
        entries = self._entries.get(entry.key)
        if not entries:
            return False
        for i, candidate in enumerate(entries):
            if candidate is entry:
                del entries[i]
                return True
        return False

    def clear(self, key: Hashable) -> list[Subscription]:
        """Empty the list for ``key``; the key stays present. Returns removed entries."""
        entries = self._entries.get(key)
        if entries is None:
            return []
        self._entries[key] = []
        return entries

    def snapshot(self, key: Hashable) -> list[Subscription]:
        """Copy of the entries for ``key`` at this moment."""
        return list(self._entries.get(key, []))

    def count(self, key: Hashable = ALL_KEYS) -> int:
        if key is ALL_KEYS:
            return sum(len(entries) for entries in self._entries.values())
        return len(self._entries.get(key, ()))

    def keys(self) -> list[Hashable]:
        return [key for key, entries in self._entries.items() if entries]

    def __contains__(self, key: Hashable) -> bool:
        return bool(self._entries.get(key))

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys())
