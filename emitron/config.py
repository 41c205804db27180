"""Subscription options: dataclass-based config with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class SubscribeOptions:
    # Cancellation token: removes the subscription once it signals.
    # Anything with a ``cancelled`` flag and ``add_listener(cb)`` works.
    signal: Any = None

    # Deliver at most one event, then unsubscribe.
    once: bool = False


def resolve_options(
    options: SubscribeOptions | None,
    signal: Any = None,
    once: bool | None = None,
) -> SubscribeOptions:
    """Merge an options object with keyword overrides into one value."""
    if options is not None:
        if signal is not None or once is not None:
            raise TypeError(
                "pass either an options object or signal=/once= keywords, not both"
            )
        return options
    return SubscribeOptions(signal=signal, once=bool(once))
