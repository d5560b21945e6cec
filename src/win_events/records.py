"""Table records kept by every event-capable host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List


def noop(*args: Any, **kwargs: Any) -> None:
    """Stand-in for stored callbacks that are not callable."""


@dataclass(slots=True)
class Binding:
    """Callback a host registered for an event it raises itself."""

    callback: Callable[..., Any]
    context: object | None = None
    once: bool = False


@dataclass(slots=True, eq=False)
class ListenerRecord:
    """Entry in a source's listener index pointing back at the listening host.

    Records compare by identity so duplicate subscriptions stay distinct.
    """

    listener: object
    once: bool = False


@dataclass(slots=True)
class ListenerCallback:
    """Callback a listening host runs when a subscribed event fires."""

    callback: Callable[..., Any]
    context: object | None = None


@dataclass(slots=True)
class EventTables:
    """The three per-host tables, created lazily on first use."""

    own_bindings: Dict[str, Binding] = field(default_factory=dict)
    listener_index: Dict[str, List[ListenerRecord]] = field(default_factory=dict)
    listener_callbacks: Dict[str, ListenerCallback] = field(default_factory=dict)


__all__ = ["Binding", "EventTables", "ListenerCallback", "ListenerRecord", "noop"]
