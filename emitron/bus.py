"""EventBus: synchronous in-process pub/sub with wildcard, once and cancellation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from functools import partial
from typing import Any, TypeVar, overload

from .base import WILDCARD, EventKey, Handler, PlainKey
from .config import SubscribeOptions, resolve_options
from .lifecycle import OnceHandler, Unsubscriber
from .store import ALL_KEYS, Subscription, SubscriptionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventBus:
    """Synchronous event dispatcher.

    Handlers are called as ``handler(payload, key)``: first those
    subscribed to the published key, in subscription order, then those
    subscribed to :data:`WILDCARD`. Each pass iterates a copy of the list
    taken when the pass starts, so handlers may subscribe, unsubscribe or
    publish without disturbing the pass in progress. Handler exceptions
    propagate out of :meth:`publish` and abort the rest of the fan-out.

    Usage::

        bus = EventBus()
        off = bus.subscribe("blink", lambda payload, key: print(key, payload))
        bus.publish("blink", 300.0)
        off()
    """

    def __init__(self) -> None:
        self._store = SubscriptionStore()

    # -- subscribing ---------------------------------------------------------

    @overload
    def subscribe(
        self,
        key: EventKey[T],
        handler: Callable[[T, Any], None],
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber: ...

    @overload
    def subscribe(
        self,
        key: PlainKey,
        handler: Handler,
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber: ...

    def subscribe(
        self,
        key: Hashable,
        handler: Handler,
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber:
        """Subscribe ``handler`` to ``key`` (or :data:`WILDCARD`).

        Returns a callable that removes this subscription; calling it
        again is a no-op. With a ``signal`` that is already cancelled
        nothing is registered.
        """
        opts = resolve_options(options, signal=signal, once=once)
        return self._subscribe([key], handler, opts)

    @overload
    def subscribe_many(
        self,
        keys: Iterable[EventKey[T]],
        handler: Callable[[T, Any], None],
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber: ...

    @overload
    def subscribe_many(
        self,
        keys: Iterable[PlainKey],
        handler: Handler,
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber: ...

    def subscribe_many(
        self,
        keys: Iterable[Hashable],
        handler: Handler,
        options: SubscribeOptions | None = None,
        *,
        signal: Any = None,
        once: bool | None = None,
    ) -> Unsubscriber:
        """Subscribe one handler to every key in ``keys``.

        With ``once`` the handler runs for the first matching publish on
        any of the keys and is then removed from all of them. The returned
        callable removes the handler from every key of the group.
        """
        group = list(keys)
        if not group:
            raise ValueError("subscribe_many() needs at least one key")
        opts = resolve_options(options, signal=signal, once=once)
        return self._subscribe(group, handler, opts)

    def _subscribe(
        self, keys: list[Hashable], handler: Handler, opts: SubscribeOptions
    ) -> Unsubscriber:
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")

        token = opts.signal
        if token is not None and token.cancelled:
            logger.debug("Signal already cancelled, not subscribing %r to %r", handler, keys)
            return Unsubscriber([], self._drop)

        if opts.once:
            wrapper = OnceHandler(handler, self._drop)
            entries = [Subscription(key, handler, wrapper) for key in keys]
            wrapper.entries.extend(entries)
        else:
            entries = [Subscription(key, handler) for key in keys]

        for entry in entries:
            self._store.add(entry)
            if token is not None:
                entry.detach = token.add_listener(partial(self._drop, entry))
            logger.debug("Subscribed %r to %r (once=%s)", handler, entry.key, opts.once)

        return Unsubscriber(entries, self._drop)

    # -- unsubscribing -------------------------------------------------------

    def unsubscribe(self, key: Hashable, handler: Handler | None = None) -> None:
        """Remove the first subscription of ``handler`` under ``key``.

        Without ``handler`` every subscription under exactly ``key`` is
        removed. Unknown keys and handlers are ignored.
        """
        if handler is None:
            removed = self._store.clear(key)
        else:
            match = self._store.remove_handler(key, handler)
            removed = [match] if match is not None else []
        for entry in removed:
            self._release(entry)
        if removed:
            logger.debug("Unsubscribed %d handler(s) from %r", len(removed), key)

    def _drop(self, entry: Subscription) -> None:
        if self._store.discard(entry):
            logger.debug("Removed %r", entry)
        self._release(entry)

    @staticmethod
    def _release(entry: Subscription) -> None:
        detach, entry.detach = entry.detach, None
        if detach is not None:
            detach()

    # -- publishing ----------------------------------------------------------

    @overload
    def publish(self, key: EventKey[None], payload: None = None) -> None: ...

    @overload
    def publish(self, key: EventKey[T | None], payload: T | None = None) -> None: ...

    @overload
    def publish(self, key: EventKey[T], payload: T) -> None: ...

    @overload
    def publish(self, key: PlainKey, payload: Any = None) -> None: ...

    def publish(self, key: Hashable, payload: Any = None) -> None:
        """Dispatch ``payload`` to handlers of ``key``, then to wildcard handlers.

        Publishing :data:`WILDCARD` itself runs both passes over the
        wildcard list, so its handlers are called twice.
        """
        snapshot = self._store.snapshot(key)
        logger.debug("Publishing %r to %d handler(s)", key, len(snapshot))
        for entry in snapshot:
            entry.callback(payload, key)

        # Taken after the exact pass so its removals are honoured here.
        wildcard = self._store.snapshot(WILDCARD)
        for entry in wildcard:
            entry.callback(payload, key)

    # -- introspection -------------------------------------------------------

    def listener_count(self, key: Hashable = ALL_KEYS) -> int:
        """Number of subscriptions under ``key``, or in total when omitted."""
        return self._store.count(key)

    def keys(self) -> list[Hashable]:
        """Keys that currently have at least one subscription."""
        return self._store.keys()


def create() -> EventBus:
    """Return a new, empty :class:`EventBus`."""
    return EventBus()
