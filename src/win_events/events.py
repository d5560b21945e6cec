"""Mixin event capability for arbitrary host objects.

Any object carrying the :class:`Events` operations can bind callbacks to its
own events, listen to events raised by other capable objects and unsubscribe
again. State lives in a private :class:`~win_events.records.EventTables`
attached to the host on first use, so :meth:`Events.extends` can graft the
operations onto plain objects (or classes) without inheritance.

Dispatch is synchronous. A host's own binding fires first, then cross-object
listeners in subscription order. Exceptions raised by callbacks propagate out
of :meth:`Events.trigger`.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from types import MethodType
from typing import Any, Callable, Iterable, List, Tuple

from .config import get_settings
from .exceptions import MixinError
from .logging import get_logger, log_event
from .records import Binding, EventTables, ListenerCallback, ListenerRecord, noop
from .selectors import (
    ByCallback,
    ByEvent,
    BySource,
    BySourceAndEvent,
    Clear,
    Selector,
    listening_selector,
    unbind_selector,
)

LOGGER = get_logger("events")

_TABLES_ATTR = "_event_tables"
_HOST_SLOTS = ("model", "view")

_current_context: ContextVar[object | None] = ContextVar("win_events_context", default=None)


def current_context() -> object | None:
    """Return the context the running callback was bound to.

    Inside a handler invoked by ``trigger`` this is the explicit context given
    to ``on``/``once``, the emitting host when none was given, or the
    listening host for cross-object callbacks. Outside dispatch it is ``None``.
    """

    return _current_context.get()


def _tables(host: object) -> EventTables | None:
    tables = getattr(host, _TABLES_ATTR, None)
    return tables if isinstance(tables, EventTables) else None


def _instances_hold_tables(cls: type) -> bool:
    if cls.__dictoffset__ != 0:
        return True
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if _TABLES_ATTR in slots:
            return True
    return False


def _ensure_tables(host: object) -> EventTables:
    tables = _tables(host)
    if tables is None:
        tables = EventTables()
        setattr(host, _TABLES_ATTR, tables)
    return tables


def _invoke(emitter: object, event: str, callback: Callable[..., Any], context: object, args: Tuple[Any, ...]) -> None:
    if get_settings().trace_dispatch:
        log_event(
            LOGGER,
            "handler_invoked",
            {"event": event, "emitter": repr(emitter), "callback": repr(callback)},
            level=logging.DEBUG,
        )
    token = _current_context.set(context)
    try:
        callback(*args)
    finally:
        _current_context.reset(token)


def _resolve(emitter: object, callback: object, context: object | None) -> Tuple[Callable[..., Any], object]:
    return (callback if callable(callback) else noop), (emitter if context is None else context)


def _subscribe(listener: object, other: object, event: str, callback: Callable[..., Any], once: bool) -> None:
    source_tables = _ensure_tables(other)
    source_tables.listener_index.setdefault(event, []).append(ListenerRecord(listener, once))
    # one callback slot per event name, shared by every source
    _ensure_tables(listener).listener_callbacks[event] = ListenerCallback(callback, listener)
    LOGGER.debug("listen event=%s once=%s source=%r", event, once, other)


def _remove_last_record(listener: object, other: object, event: str) -> None:
    tables = _tables(other)
    if tables is None or event not in tables.listener_index:
        return
    records = tables.listener_index[event]
    index = None
    for position, record in enumerate(records):
        if record.listener is listener:
            index = position
    if index is not None:
        tables.listener_index[event] = records[:index] + records[index + 1 :]


class Events:
    """Event capability that can be used directly or grafted onto other objects.

    ``model`` and ``view`` are free host slots for the surrounding
    application; they default to empty dicts and are shared by reference with
    every target passed to :meth:`extends`.
    """

    def __init__(self, model: object | None = None, view: object | None = None) -> None:
        self.model = model if model is not None else {}
        self.view = view if view is not None else {}

    def extends(self, target: object) -> None:
        """Attach the event operations to ``target``.

        Instances get methods bound to themselves and keep their own tables.
        Classes get the plain functions, so every instance gains the
        capability. :class:`~win_events.exceptions.MixinError` is raised when
        ``target`` refuses new attributes.
        """

        is_class = isinstance(target, type)
        if is_class and not _instances_hold_tables(target):
            raise MixinError(f"Instances of {target.__name__} cannot hold event tables")
        try:
            for name in OPERATIONS:
                function = Events.__dict__[name]
                setattr(target, name, function if is_class else MethodType(function, target))
            if not is_class:
                for name in _HOST_SLOTS:
                    if hasattr(self, name):
                        setattr(target, name, getattr(self, name))
        except (AttributeError, TypeError) as exc:
            raise MixinError(f"Cannot attach event operations to {type(target).__name__}") from exc
        LOGGER.debug("extended target=%r", target)

    def on(self, event: str, callback: Callable[..., Any], context: object | None = None) -> None:
        """Bind ``callback`` to ``event``, replacing any earlier binding for it."""

        _ensure_tables(self).own_bindings[event] = Binding(callback, context, once=False)
        LOGGER.debug("bind event=%s once=False", event)

    bind = on

    def once(self, event: str, callback: Callable[..., Any], context: object | None = None) -> None:
        """Like :meth:`on` but the binding is dropped after its first run."""

        _ensure_tables(self).own_bindings[event] = Binding(callback, context, once=True)
        LOGGER.debug("bind event=%s once=True", event)

    def off(self, event: str | Callable[..., Any] | Selector | None = None, callback: Callable[..., Any] | None = None) -> None:
        """Remove own bindings.

        ``off()`` clears everything, ``off(name)`` and ``off(name, callback)``
        drop the binding for ``name``, ``off(callback)`` drops every binding
        whose callback equals ``callback``. A selector may be passed instead.
        """

        selector = unbind_selector(event, callback)
        tables = _tables(self)
        if tables is None or selector is None:
            return
        bindings = tables.own_bindings
        if isinstance(selector, Clear):
            bindings.clear()
        elif isinstance(selector, ByEvent):
            bindings.pop(selector.event, None)
        elif isinstance(selector, ByCallback):
            for name in [name for name, binding in bindings.items() if binding.callback == selector.callback]:
                del bindings[name]
        else:
            return
        LOGGER.debug("unbind selector=%r", selector)

    unbind = off

    def trigger(self, event: str, args: Iterable[Any] | None = None) -> None:
        """Raise ``event``, spreading ``args`` into every matched callback."""

        tables = _tables(self)
        if tables is None:
            return
        args = tuple(args) if args is not None else ()

        binding = tables.own_bindings.get(event)
        if binding is not None:
            callback, context = _resolve(self, binding.callback, binding.context)
            _invoke(self, event, callback, context, args)
            if binding.once and tables.own_bindings.get(event) is binding:
                del tables.own_bindings[event]

        records = tables.listener_index.get(event)
        if not records:
            return
        fired: List[ListenerRecord] = []
        for record in tuple(records):
            listener_tables = _tables(record.listener)
            slot = listener_tables.listener_callbacks.get(event) if listener_tables else None
            if slot is None:
                callback, context = noop, self
            else:
                callback, context = _resolve(self, slot.callback, slot.context)
            _invoke(self, event, callback, context, args)
            if record.once:
                fired.append(record)
        if fired and event in tables.listener_index:
            tables.listener_index[event] = [
                record for record in tables.listener_index[event] if record not in fired
            ]

    def listen_to(self, other: object, event: str, callback: Callable[..., Any]) -> None:
        """Run ``callback`` whenever ``other`` triggers ``event``."""

        _subscribe(self, other, event, callback, once=False)

    def listen_to_once(self, other: object, event: str, callback: Callable[..., Any]) -> None:
        """Run ``callback`` the next time ``other`` triggers ``event``."""

        _subscribe(self, other, event, callback, once=True)

    def stop_listening(self, other: object | Selector | None = None, event: str | None = None) -> None:
        """Stop listening.

        ``stop_listening(other, event)`` removes the last subscription this
        host made to ``event`` on ``other`` and forgets its callback.
        ``stop_listening()`` only clears this host's callback slots; records
        left in sources' indexes then fire as no-ops. A single positional
        argument is not supported and does nothing; use
        :meth:`stop_listening_to` to drop every subscription to one source.
        """

        selector = listening_selector(other, event)
        if selector is None:
            LOGGER.debug("stop_listening ignored other=%r event=%r", other, event)
            return
        if isinstance(selector, Clear):
            tables = _tables(self)
            if tables is not None:
                tables.listener_callbacks.clear()
        elif isinstance(selector, BySourceAndEvent):
            _remove_last_record(self, selector.source, selector.event)
            tables = _tables(self)
            if tables is not None:
                tables.listener_callbacks.pop(selector.event, None)
        elif isinstance(selector, BySource):
            source_tables = _tables(selector.source)
            if source_tables is None:
                return
            for name, records in list(source_tables.listener_index.items()):
                source_tables.listener_index[name] = [r for r in records if r.listener is not self]
        else:
            return
        LOGGER.debug("stop_listening selector=%r", selector)

    def stop_listening_to(self, other: object) -> None:
        """Remove every subscription this host holds on ``other``."""

        Events.stop_listening(self, BySource(other))

    def has_binding(self, event: str) -> bool:
        tables = _tables(self)
        return tables is not None and event in tables.own_bindings

    def listeners(self, event: str) -> Tuple[object, ...]:
        """Listening hosts for ``event`` in dispatch order, duplicates included."""

        tables = _tables(self)
        if tables is None:
            return ()
        return tuple(record.listener for record in tables.listener_index.get(event, ()))


OPERATIONS = (
    "extends",
    "on",
    "bind",
    "once",
    "off",
    "unbind",
    "trigger",
    "listen_to",
    "listen_to_once",
    "stop_listening",
    "stop_listening_to",
    "has_binding",
    "listeners",
)


__all__ = ["Events", "OPERATIONS", "current_context"]
