"""Event keys, the wildcard sentinel and the handler signature."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

Handler = Callable[[Any, Any], None]


class _Wildcard:
    """Sentinel key whose handlers receive every published event."""

    def __repr__(self) -> str:
        return "WILDCARD"

    def __reduce__(self) -> str:
        return "WILDCARD"


WILDCARD = _Wildcard()

# Keys without a declared payload type. EventKey is left out on purpose so
# checkers route typed keys through the payload-aware overloads.
PlainKey = Union[str, bytes, int, float, tuple, frozenset, Enum, _Wildcard, None]


@dataclass(frozen=True)
class EventKey(Generic[T]):
    """Named event key carrying its payload type for static checkers.

    At runtime it is an ordinary hashable key; the bus never inspects
    payloads. Declare one per event::

        USER_JOINED: EventKey[str] = EventKey("user_joined")
        TICK: EventKey[None] = EventKey("tick")
        LIMIT: EventKey[int | None] = EventKey("limit")
    """

    name: str

    def __repr__(self) -> str:
        return f"EventKey({self.name!r})"
