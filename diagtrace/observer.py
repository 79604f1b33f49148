"""
Observers turn the events written to one named ``DiagnosticListener`` into spans.

``DiagnosticManager`` connects a set of observers to the listeners they are interested in, including
listeners created after the manager was started::

    manager = DiagnosticManager([HttpHandlerDiagnostics(tracer, options)])
    manager.start()
    ...
    manager.stop()
"""
import threading
from typing import Any
from typing import Iterable
from typing import List
from typing import Optional

import opentracing

from diagtrace.exceptions import DiagnosticPayloadError
from diagtrace.internal import core
from diagtrace.internal.logger import get_logger


log = get_logger(__name__)


class DiagnosticObserver(object):
    """Base class of the observers of a single named diagnostic listener.

    Subclasses set ``listener_name`` and implement ``on_event``.
    """

    listener_name = None  # type: str

    def __init__(self, tracer: Optional[opentracing.Tracer] = None) -> None:
        self._tracer = tracer
        self._subscriptions = {}  # type: dict
        self._lock = threading.Lock()
        self.log = get_logger(type(self).__module__)

    @property
    def tracer(self) -> opentracing.Tracer:
        """The tracer given at construction, the global tracer otherwise."""
        if self._tracer is not None:
            return self._tracer
        return opentracing.global_tracer()

    @property
    def is_subscribed(self) -> bool:
        return bool(self._subscriptions)

    def subscribe_if_match(self, listener: core.DiagnosticListener) -> bool:
        """Subscribe to ``listener`` if it is the one this observer handles."""
        if listener.name != self.listener_name:
            return False

        with self._lock:
            if id(listener) in self._subscriptions:
                return True
            self._subscriptions[id(listener)] = listener.subscribe(self)

        self.log.debug("subscribed to diagnostic listener %r", listener.name)
        return True

    def on_next(self, event_name: str, payload: Any) -> None:
        """Entry point called by the listener for every event."""
        try:
            self.on_event(event_name, payload)
        except DiagnosticPayloadError:
            self.log.error("unable to process event %s from %s", event_name, self.listener_name, exc_info=True)

    def on_event(self, event_name: str, payload: Any) -> None:
        raise NotImplementedError

    def on_completed(self, listener: core.DiagnosticListener) -> None:
        with self._lock:
            self._subscriptions.pop(id(listener), None)

    def dispose(self) -> None:
        with self._lock:
            subscriptions, self._subscriptions = self._subscriptions, {}
        for subscription in subscriptions.values():
            subscription.dispose()


class DiagnosticManager(object):
    """Connects observers to every matching listener, present and future."""

    def __init__(self, observers: Iterable[DiagnosticObserver]) -> None:
        self._observers: List[DiagnosticObserver] = list(observers)
        self._subscription = None  # type: Optional[core.Subscription]
        self._lock = threading.Lock()

    @property
    def observers(self) -> List[DiagnosticObserver]:
        return list(self._observers)

    @property
    def is_started(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        with self._lock:
            if self._subscription is not None:
                return
            log.debug("starting diagnostic manager with %d observers", len(self._observers))
            self._subscription = core.all_listeners.subscribe(self._on_listener)

    def stop(self) -> None:
        with self._lock:
            subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        subscription.dispose()
        for observer in self._observers:
            observer.dispose()
        log.debug("diagnostic manager stopped")

    def _on_listener(self, listener: core.DiagnosticListener) -> None:
        for observer in self._observers:
            observer.subscribe_if_match(listener)
