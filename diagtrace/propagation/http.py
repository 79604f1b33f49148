from collections.abc import MutableMapping

from opentracing import Format


class HTTPHeadersCarrier(MutableMapping):
    """Carrier exposing the header collection of an outgoing request to ``Tracer.inject``.

    Setting a key replaces any value already present for that header. Header collections with
    case-insensitive keys (``requests.structures.CaseInsensitiveDict``) keep that behavior.
    """

    __slots__ = ("_headers",)

    def __init__(self, headers):
        self._headers = headers

    def __getitem__(self, key):
        return self._headers[key]

    def __setitem__(self, key, value):
        if key in self._headers:
            del self._headers[key]
        self._headers[key] = value

    def __delitem__(self, key):
        del self._headers[key]

    def __iter__(self):
        return iter(self._headers)

    def __len__(self):
        return len(self._headers)


class HTTPPropagator(object):
    """Injects span contexts into outgoing request headers."""

    @staticmethod
    def inject(tracer, span_context, headers):
        """Inject ``span_context`` into ``headers`` using the tracer's HTTP headers format.

        Errors raised by the tracer propagate to the caller.
        """
        tracer.inject(span_context, Format.HTTP_HEADERS, HTTPHeadersCarrier(headers))
