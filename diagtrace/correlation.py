"""
Correlation of in-flight spans with the request objects that started them.

Start and stop events for one request may be delivered on different threads, but they always
carry the same request object. The span is looked up by the identity of that object.
"""
import threading
from typing import Any
from typing import Dict
from typing import Optional
import weakref

from diagtrace.exceptions import DuplicateCorrelation
from diagtrace.internal.logger import get_logger


log = get_logger(__name__)


class _Slot(object):
    __slots__ = ("ref", "span", "weak")

    def __init__(self, ref, weak):
        self.ref = ref
        self.weak = weak
        self.span = None

    def request(self):
        return self.ref() if self.weak else self.ref


class RequestCorrelation(object):
    """Per-request correlation map.

    A slot is created the first time a span is attached to a request. Releasing the span resets
    the slot to empty; the slot itself lives as long as the request object does. Requests that
    cannot be weakly referenced have their slot dropped on release instead.
    """

    def __init__(self) -> None:
        self._slots: Dict[int, _Slot] = {}
        self._lock = threading.RLock()

    def __len__(self):
        """Number of requests with a span attached."""
        with self._lock:
            return sum(1 for slot in list(self._slots.values()) if slot.span is not None)

    def attach(self, request: Any, span: Any) -> None:
        """Attach ``span`` to ``request``.

        :raises DuplicateCorrelation: if a span is already attached to the request.
        """
        key = id(request)
        with self._lock:
            slot = self._lookup(key, request)
            if slot is None:
                slot = self._new_slot(key, request)
                self._slots[key] = slot
            elif slot.span is not None:
                raise DuplicateCorrelation(request)
            slot.span = span

    def get(self, request: Any) -> Optional[Any]:
        with self._lock:
            slot = self._lookup(id(request), request)
            return slot.span if slot is not None else None

    def release(self, request: Any) -> Optional[Any]:
        """Detach and return the span of ``request``, ``None`` if there was none."""
        key = id(request)
        with self._lock:
            slot = self._lookup(key, request)
            if slot is None:
                return None
            span, slot.span = slot.span, None
            if not slot.weak:
                del self._slots[key]
            return span

    def _lookup(self, key: int, request: Any) -> Optional[_Slot]:
        slot = self._slots.get(key)
        if slot is None:
            return None
        if slot.request() is not request:
            # the id belonged to a request that was collected before its callback ran
            del self._slots[key]
            return None
        return slot

    def _new_slot(self, key: int, request: Any) -> _Slot:
        slots = self._slots

        def _evict(ref, key=key):
            # DEV: may run on any thread once the request is collected
            with self._lock:
                slot = slots.get(key)
                if slot is not None and slot.ref is ref:
                    del slots[key]

        try:
            return _Slot(weakref.ref(request, _evict), weak=True)
        except TypeError:
            log.debug("request of type %s does not support weak references", type(request).__name__)
            return _Slot(request, weak=False)
