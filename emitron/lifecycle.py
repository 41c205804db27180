"""Handler wrappers for once-only delivery and the unsubscribe token."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from .store import Subscription

DropEntry = Callable[[Subscription], None]


class OnceHandler:
    """Wrapper that delivers a single event, then removes all of its entries.

    One instance may back entries under several keys (a batch
    subscription); whichever key fires first wins and every entry is
    dropped before the wrapped handler runs, so neither re-entrant
    publishes nor later entries in the same snapshot reach it again.
    """

    def __init__(self, handler: Callable[[Any, Hashable], None], drop: DropEntry):
        self.handler = handler
        self.fired = False
        self.entries: list[Subscription] = []
        self._drop = drop

    def __call__(self, payload: Any, key: Hashable) -> None:
        if self.fired:
            return
        self.fired = True
        for entry in self.entries:
            self._drop(entry)
        self.handler(payload, key)

    def __repr__(self) -> str:
        return f"OnceHandler({self.handler!r}, fired={self.fired})"


class Unsubscriber:
    """Callable returned by every subscribe; removes exactly its own entries.

    Calling it more than once has no further effect.
    """

    def __init__(self, entries: list[Subscription], drop: DropEntry):
        self._entries = entries
        self._drop = drop
        self.called = False

    def __call__(self) -> None:
        if self.called:
            return
        self.called = True
        for entry in self._entries:
            self._drop(entry)
