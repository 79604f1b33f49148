"""
Trace outgoing HTTP requests reported to the ``diagtrace.http_client`` diagnostic listener.

Any HTTP client can report its requests by writing the ``http_client.request.start``,
``http_client.exception`` and ``http_client.request.stop`` events; the ``requests`` library
does it once :func:`diagtrace.contrib.requests.patch` has been called.


Enabling
~~~~~~~~

The observer is created by :func:`diagtrace.install`. It can also be wired manually::

    from diagtrace.contrib.http_client import HttpHandlerDiagnostics
    from diagtrace.observer import DiagnosticManager

    manager = DiagnosticManager([HttpHandlerDiagnostics(tracer)])
    manager.start()


Global Configuration
~~~~~~~~~~~~~~~~~~~~

.. py:data:: diagtrace.settings.http_client_config.component_name

   Value of the ``component`` tag of the client spans.

   This option can also be set with the ``DIAGTRACE_HTTP_CLIENT_COMPONENT_NAME``
   environment variable.

   Default: ``"HttpOut"``

.. py:data:: diagtrace.settings.http_client_config.inject_enabled

   Include distributed tracing headers in outgoing requests.

   This option can also be set with the ``DIAGTRACE_HTTP_CLIENT_INJECT_ENABLED``
   environment variable.

   Default: ``True``

.. py:data:: diagtrace.settings.http_client_config.ignore_urls

   Comma separated URL prefixes of requests that are never traced.

   This option can also be set with the ``DIAGTRACE_HTTP_CLIENT_IGNORE_URLS``
   environment variable.

   Default: ``[]``


Instance Configuration
~~~~~~~~~~~~~~~~~~~~~~

Everything else is configured with :class:`HttpHandlerDiagnosticOptions`::

    options = HttpHandlerDiagnosticOptions(
        operation_name_resolver=lambda request: "GET billing" if "billing" in request.url else "HTTP GET",
        inject_enabled=lambda request: not request.url.startswith("https://partner.example.com"),
        on_request=lambda span, request: span.set_tag("tenant", request.headers.get("X-Tenant")),
    )
"""
from .diagnostics import HttpHandlerDiagnostics
from .options import HttpHandlerDiagnosticOptions
from .options import default_operation_name
from .options import url_prefix_matcher


__all__ = [
    "HttpHandlerDiagnosticOptions",
    "HttpHandlerDiagnostics",
    "default_operation_name",
    "url_prefix_matcher",
]
