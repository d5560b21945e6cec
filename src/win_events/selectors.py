"""Selectors describing which bindings or subscriptions to remove.

``off`` and ``stop_listening`` turn their loose positional arguments into one
of these values before touching any table; callers can also pass a selector
directly, e.g. ``host.off(ByCallback(handler))``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


class Selector:
    """Base class for removal selectors."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Clear(Selector):
    """Everything in the table the operation owns."""


@dataclass(frozen=True, slots=True)
class ByEvent(Selector):
    event: str


@dataclass(frozen=True, slots=True)
class ByCallback(Selector):
    callback: Callable[..., Any]


@dataclass(frozen=True, slots=True, eq=False)
class BySource(Selector):
    source: object


@dataclass(frozen=True, slots=True, eq=False)
class BySourceAndEvent(Selector):
    source: object
    event: str


def unbind_selector(event: object = None, callback: object = None) -> Selector | None:
    """Resolve the arguments of ``off`` into a selector, or ``None`` for a no-op."""

    if isinstance(event, Selector):
        return event
    if event is None and callback is None:
        return Clear()
    if isinstance(event, str):
        # one binding per name, so the callback is not matched
        return ByEvent(event)
    if callback is None and callable(event):
        return ByCallback(event)
    return None


def listening_selector(other: object = None, event: object = None) -> Selector | None:
    """Resolve the arguments of ``stop_listening`` into a selector, or ``None``."""

    if isinstance(other, Selector):
        return other
    if other is None and event is None:
        return Clear()
    if other is not None and isinstance(event, str):
        return BySourceAndEvent(other, event)
    return None


__all__ = [
    "ByCallback",
    "ByEvent",
    "BySource",
    "BySourceAndEvent",
    "Clear",
    "Selector",
    "listening_selector",
    "unbind_selector",
]
