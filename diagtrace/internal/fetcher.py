"""
Name based access to fields of event payloads.

Producers publish payloads whose concrete type is not known to the consumers: the same
field name can live on a mapping for one event and on an object attribute for another.
``PropertyFetcher`` resolves the accessor once per payload type and reuses it.
"""
from collections.abc import Mapping
import operator
import threading
from typing import Any
from typing import Callable
from typing import Dict

from diagtrace.exceptions import FieldNotFound


class PropertyFetcher(object):
    """Fetches the field ``name`` from payloads of any shape.

    Example::

        request_fetcher = PropertyFetcher("request")
        request = request_fetcher.fetch(payload)

    :raises FieldNotFound: when the payload does not carry the field.
    """

    __slots__ = ("name", "_accessors", "_lock")

    def __init__(self, name: str) -> None:
        self.name = name
        self._accessors: Dict[type, Callable[[Any], Any]] = {}
        self._lock = threading.Lock()

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.name)

    def fetch(self, payload: Any) -> Any:
        if payload is None:
            raise FieldNotFound(self.name, type(None))

        payload_type = type(payload)
        accessor = self._accessors.get(payload_type)
        if accessor is None:
            accessor = self._resolve(payload_type)

        try:
            return accessor(payload)
        except (AttributeError, KeyError):
            raise FieldNotFound(self.name, payload_type)

    def _resolve(self, payload_type: type) -> Callable[[Any], Any]:
        if issubclass(payload_type, Mapping):
            accessor = operator.itemgetter(self.name)
        else:
            accessor = operator.attrgetter(self.name)
        with self._lock:
            self._accessors[payload_type] = accessor
        return accessor
