from __future__ import annotations

import pytest

from win_events import ByCallback, ByEvent, Clear, Events, current_context


def test_on_trigger_spreads_args() -> None:
    emitter = Events()
    calls = []
    emitter.on("change", lambda *args: calls.append(args))

    emitter.trigger("change", [1, "two", None])

    assert calls == [(1, "two", None)]


def test_trigger_without_args_calls_with_nothing() -> None:
    emitter = Events()
    calls = []
    emitter.on("ping", lambda *args: calls.append(args))

    emitter.trigger("ping")
    emitter.trigger("ping", [])

    assert calls == [(), ()]


def test_bind_is_alias_of_on() -> None:
    emitter = Events()
    calls = []
    emitter.bind("x", lambda: calls.append("x"))
    emitter.trigger("x", [])
    assert calls == ["x"]


def test_once_fires_only_on_first_trigger() -> None:
    emitter = Events()
    calls = []
    emitter.once("ready", calls.append)

    emitter.trigger("ready", ["a1"])
    emitter.trigger("ready", ["a2"])

    assert calls == ["a1"]
    assert not emitter.has_binding("ready")


def test_second_binding_overwrites_first() -> None:
    emitter = Events()
    calls = []
    emitter.on("e", lambda: calls.append("cb1"))
    emitter.on("e", lambda: calls.append("cb2"))

    emitter.trigger("e", [])

    assert calls == ["cb2"]


def test_on_replaces_pending_once() -> None:
    emitter = Events()
    calls = []
    emitter.once("e", lambda: calls.append("once"))
    emitter.on("e", lambda: calls.append("on"))

    emitter.trigger("e")
    emitter.trigger("e")

    assert calls == ["on", "on"]


def test_off_without_args_clears_all_bindings() -> None:
    emitter = Events()
    calls = []
    emitter.on("e1", lambda: calls.append("e1"))
    emitter.on("e2", lambda: calls.append("e2"))

    emitter.off()
    emitter.trigger("e1", [])
    emitter.trigger("e2", [])

    assert calls == []


def test_off_by_event_name() -> None:
    emitter = Events()
    calls = []
    emitter.on("keep", lambda: calls.append("keep"))
    emitter.on("drop", lambda: calls.append("drop"))

    emitter.off("drop")
    emitter.trigger("keep")
    emitter.trigger("drop")

    assert calls == ["keep"]


def test_off_by_callback_removes_every_matching_binding() -> None:
    emitter = Events()
    calls = []

    def handler() -> None:
        calls.append("handler")

    emitter.on("a", handler)
    emitter.on("b", handler)
    emitter.on("c", lambda: calls.append("other"))

    emitter.off(handler)
    for name in ("a", "b", "c"):
        emitter.trigger(name)

    assert calls == ["other"]


def test_off_by_bound_method_matches_equal_method() -> None:
    class Widget:
        def __init__(self) -> None:
            self.calls = 0

        def render(self) -> None:
            self.calls += 1

    widget = Widget()
    emitter = Events()
    emitter.on("draw", widget.render)

    emitter.off(widget.render)
    emitter.trigger("draw")

    assert widget.calls == 0


def test_off_with_event_and_callback_ignores_callback() -> None:
    emitter = Events()
    calls = []
    emitter.on("e", lambda: calls.append("e"))

    emitter.off("e", lambda: None)
    emitter.trigger("e")

    assert calls == []


def test_unbind_accepts_selectors() -> None:
    emitter = Events()
    calls = []

    def handler() -> None:
        calls.append("h")

    emitter.on("a", handler)
    emitter.on("b", lambda: calls.append("b"))
    emitter.on("c", lambda: calls.append("c"))

    emitter.unbind(ByCallback(handler))
    emitter.unbind(ByEvent("b"))
    for name in ("a", "b", "c"):
        emitter.trigger(name)
    assert calls == ["c"]

    emitter.unbind(Clear())
    assert not emitter.has_binding("c")


def test_off_and_trigger_on_fresh_emitter_are_noops() -> None:
    emitter = Events()
    emitter.off()
    emitter.off("missing")
    emitter.off(print)
    emitter.trigger("missing", [1])
    assert not emitter.has_binding("missing")


def test_non_callable_callback_degrades_to_noop() -> None:
    emitter = Events()
    emitter.once("e", "not callable")

    emitter.trigger("e", [1, 2])

    assert not emitter.has_binding("e")


def test_context_defaults_to_emitter() -> None:
    emitter = Events()
    seen = []
    emitter.on("e", lambda: seen.append(current_context()))

    emitter.trigger("e")

    assert seen == [emitter]
    assert current_context() is None


def test_explicit_context_is_used() -> None:
    emitter = Events()
    owner = object()
    seen = []
    emitter.on("e", lambda: seen.append(current_context()), owner)

    emitter.trigger("e")

    assert seen == [owner]


def test_handler_exception_propagates_and_restores_context() -> None:
    emitter = Events()
    listener = Events()
    calls = []

    def boom() -> None:
        raise ValueError("boom")

    emitter.on("e", boom)
    listener.listen_to(emitter, "e", lambda: calls.append("listener"))

    with pytest.raises(ValueError, match="boom"):
        emitter.trigger("e")

    assert calls == []
    assert current_context() is None


def test_raising_once_binding_is_kept() -> None:
    emitter = Events()

    def boom() -> None:
        raise RuntimeError("fail")

    emitter.once("e", boom)
    with pytest.raises(RuntimeError):
        emitter.trigger("e")

    assert emitter.has_binding("e")


def test_handler_may_rebind_during_dispatch() -> None:
    emitter = Events()
    calls = []

    def first() -> None:
        calls.append("first")
        emitter.once("e", lambda: calls.append("second"))

    emitter.once("e", first)
    emitter.trigger("e")
    emitter.trigger("e")
    emitter.trigger("e")

    assert calls == ["first", "second"]


def test_model_and_view_slots() -> None:
    model = {"id": 1}
    emitter = Events(model)

    assert emitter.model is model
    assert emitter.view == {}
    assert Events().model is not Events().model
