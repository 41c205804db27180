"""Cooperative cancellation: a source that signals, a token that observes."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

CancelListener = Callable[[], None]


class CancelToken:
    """Read side of a :class:`CancelSource`.

    Subscribers check :attr:`cancelled` and register listeners; only the
    owning source can flip the state.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._listeners: list[CancelListener] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def add_listener(self, listener: CancelListener) -> Callable[[], None]:
        """Register ``listener()`` for cancellation. Returns a detach callable.

        Listeners added after cancellation are never called.
        """
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass  # already fired or detached

        return remove

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        listeners, self._listeners = self._listeners, []
        logger.debug("Cancelling token, %d listener(s)", len(listeners))
        for listener in listeners:
            listener()


class CancelSource:
    """Owner of a :class:`CancelToken`.

    Usage::

        source = CancelSource()
        bus.subscribe("tick", on_tick, signal=source.token)
        source.cancel()  # on_tick is removed
    """

    def __init__(self) -> None:
        self.token = CancelToken()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self) -> None:
        """Signal cancellation. Repeated calls are no-ops."""
        self.token._fire()
