"""
This file implements the diagnostic event stream, the abstraction layer between event producers
(instrumented HTTP clients, web frameworks) and the observers that turn events into spans.

Producers own a named ``DiagnosticListener`` and write ``(event_name, payload)`` pairs to it::

    _listener = core.DiagnosticListener("diagtrace.http_client")

    def _wrapped_send(request):
        if _listener.is_enabled():
            _listener.write("http_client.request.start", {"request": request})
        ...

Consumers never import producers. They subscribe to ``all_listeners`` and pick the listeners they
care about by name, whenever those listeners are created::

    def _on_listener(listener):
        if listener.name == "diagtrace.http_client":
            listener.subscribe(my_observer)

    core.all_listeners.subscribe(_on_listener)

An observer is any object with ``on_next(event_name, payload)``; ``on_completed()`` is called when
the listener is disposed, if the observer defines it.
"""
import threading
from typing import Any
from typing import Callable
from typing import Optional
from typing import Tuple

from diagtrace.internal.logger import get_logger


log = get_logger(__name__)


class Subscription(object):
    """Handle returned by ``subscribe``. Disposing it more than once is a no-op."""

    __slots__ = ("_unsubscribe", "_disposed", "_lock")

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._disposed = False
        self._lock = threading.Lock()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
        self._unsubscribe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()


class DiagnosticListener(object):
    """A named source of diagnostic events."""

    def __init__(self, name: str) -> None:
        self.name = name
        # Replaced, never mutated: writers iterate over the tuple they read.
        self._observers: Tuple[Any, ...] = ()
        self._lock = threading.Lock()
        self._disposed = False
        all_listeners._add(self)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.name)

    def subscribe(self, observer: Any) -> Subscription:
        with self._lock:
            self._observers = self._observers + (observer,)

        def _unsubscribe():
            with self._lock:
                observers = list(self._observers)
                if observer in observers:
                    observers.remove(observer)
                self._observers = tuple(observers)

        return Subscription(_unsubscribe)

    def is_enabled(self, event_name: Optional[str] = None) -> bool:
        return bool(self._observers)

    def write(self, event_name: str, payload: Any) -> None:
        for observer in self._observers:
            observer.on_next(event_name, payload)

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            observers, self._observers = self._observers, ()
        all_listeners._remove(self)
        for observer in observers:
            on_completed = getattr(observer, "on_completed", None)
            if on_completed is not None:
                on_completed(self)


class _ListenerRegistry(object):
    """Process wide registry of live ``DiagnosticListener`` instances."""

    def __init__(self) -> None:
        self._listeners: Tuple[DiagnosticListener, ...] = ()
        self._callbacks: Tuple[Callable[[DiagnosticListener], None], ...] = ()
        self._lock = threading.RLock()

    def listeners(self) -> Tuple[DiagnosticListener, ...]:
        return self._listeners

    def subscribe(self, callback: Callable[[DiagnosticListener], None]) -> Subscription:
        """Call ``callback`` with every live listener now and with every listener created later."""
        with self._lock:
            self._callbacks = self._callbacks + (callback,)
            existing = self._listeners
        for listener in existing:
            callback(listener)

        def _unsubscribe():
            with self._lock:
                callbacks = list(self._callbacks)
                if callback in callbacks:
                    callbacks.remove(callback)
                self._callbacks = tuple(callbacks)

        return Subscription(_unsubscribe)

    def reset(self) -> None:
        with self._lock:
            self._callbacks = ()

    def _add(self, listener: DiagnosticListener) -> None:
        with self._lock:
            self._listeners = self._listeners + (listener,)
            callbacks = self._callbacks
        log.debug("diagnostic listener %r created", listener.name)
        for callback in callbacks:
            callback(listener)

    def _remove(self, listener: DiagnosticListener) -> None:
        with self._lock:
            self._listeners = tuple(existing for existing in self._listeners if existing is not listener)


all_listeners = _ListenerRegistry()


__all__ = [
    "DiagnosticListener",
    "Subscription",
    "all_listeners",
]
