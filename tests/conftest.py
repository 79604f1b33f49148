import opentracing
from opentracing.mocktracer import MockTracer
from opentracing.scope_managers.contextvars import ContextVarsScopeManager
import pytest

from diagtrace.internal import core
from diagtrace.internal import logger


@pytest.fixture
def tracer():
    """A mock tracer whose active span stack follows the call context."""
    return MockTracer(scope_manager=ContextVarsScopeManager())


@pytest.fixture
def global_tracer(tracer):
    previous = opentracing.global_tracer()
    opentracing.set_global_tracer(tracer)
    yield tracer
    opentracing.set_global_tracer(previous)


@pytest.fixture(autouse=True)
def reset_listener_registry():
    """Reset registry callbacks after each test to prevent subscriptions leaking between tests."""
    yield
    core.all_listeners.reset()


@pytest.fixture
def listener_factory():
    listeners = []

    def make_listener(name):
        listener = core.DiagnosticListener(name)
        listeners.append(listener)
        return listener

    yield make_listener

    for listener in listeners:
        listener.dispose()


@pytest.fixture(autouse=True)
def no_log_rate_limit(monkeypatch):
    """Every log record reaches caplog, whatever the other tests logged before."""
    monkeypatch.setattr(logger, "_rate_limit", 0)
