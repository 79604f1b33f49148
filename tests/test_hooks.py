import copy
import logging

from diagtrace import hooks as _hooks


def test_deregister():
    hooks = _hooks.Hooks()

    x = {}

    @hooks.register("key")
    def do_not_call():
        x["x"] = True

    hooks.emit("key")
    assert x["x"]
    del x["x"]

    hooks.deregister("key", do_not_call)

    hooks.emit("key")

    assert len(x) == 0


def test_deregister_unknown():
    hooks = _hooks.Hooks()

    hooks.deregister("key", test_deregister_unknown)

    hooks.emit("key")


def test_emit_in_registration_order():
    hooks = _hooks.Hooks()
    called = []

    hooks.on("request", lambda span, request: called.append(("first", span, request)))
    hooks.on("request", lambda span, request: called.append(("second", span, request)))

    hooks.emit("request", "span", "request")

    assert called == [("first", "span", "request"), ("second", "span", "request")]


def test_register_twice():
    hooks = _hooks.Hooks()
    called = []

    def on_request(span, request):
        called.append(span)

    hooks.register("request", on_request)
    hooks.register("request", on_request)
    hooks.emit("request", "span", None)

    assert called == ["span"]


def test_failing_hook_is_isolated(caplog):
    hooks = _hooks.Hooks()
    called = []

    @hooks.on("request")
    def failing(span, request):
        raise ValueError("bad hook")

    @hooks.on("request")
    def working(span, request):
        called.append(span)

    with caplog.at_level(logging.ERROR, logger="diagtrace.hooks"):
        hooks.emit("request", "span", None)

    assert called == ["span"]
    assert "Failed to run hook request" in caplog.text


def test_copy():
    hooks = _hooks.Hooks()
    hooks.on("request", test_copy)

    copied = copy.copy(hooks)
    copied.deregister("request", test_copy)

    assert hooks._hooks["request"] == [test_copy]
    assert copied._hooks["request"] == []
