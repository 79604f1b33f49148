from urllib import parse

from opentracing.ext import tags

from diagtrace import constants
from diagtrace import events
from diagtrace.correlation import RequestCorrelation
from diagtrace.exceptions import DiagnosticPayloadError
from diagtrace.observer import DiagnosticObserver
from diagtrace.propagation.http import HTTPPropagator
from diagtrace.span_utils import set_exception

from .options import HttpHandlerDiagnosticOptions
from .options import effective_port


def _status_code(response):
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status", None)
    return int(status) if status is not None else None


class HttpHandlerDiagnostics(DiagnosticObserver):
    """Traces outgoing HTTP requests reported to the ``diagtrace.http_client`` listener.

    One client span is started per request on the start event and finished on the stop event.
    Exception events annotate the span but leave it open: a stop event always follows.
    """

    listener_name = constants.HTTP_CLIENT_LISTENER

    def __init__(self, tracer=None, options=None):
        super(HttpHandlerDiagnostics, self).__init__(tracer)
        self.options = options if options is not None else HttpHandlerDiagnosticOptions()
        self._correlation = RequestCorrelation()

    def on_event(self, event_name, payload):
        event = events.parse_event(event_name, payload)
        if isinstance(event, events.HttpRequestStart):
            self._on_request_start(event)
        elif isinstance(event, events.HttpRequestException):
            self._on_request_exception(event)
        elif isinstance(event, events.HttpRequestStop):
            self._on_request_stop(event)

    def _call_policy(self, name, func, default, request):
        try:
            return func(request)
        except Exception:
            self.log.error("%s failed for request %r", name, request, exc_info=True)
            return default

    def _on_request_start(self, event):
        request = event.request
        options = self.options

        try:
            method = str(request.method).upper()
            raw_url = str(request.url)
            headers = request.headers
            url = parse.urlsplit(raw_url)
            port = effective_port(url)
        except (AttributeError, ValueError) as e:
            raise DiagnosticPayloadError("unusable request %r: %s" % (request, e))

        if self._call_policy("ignore pattern", options.should_ignore, False, request):
            self.log.debug("Ignoring request %s", raw_url)
            return

        operation_name = self._call_policy(
            "operation name resolver", options.operation_name_resolver, "HTTP %s" % (method,), request
        )

        tracer = self.tracer
        span = tracer.start_span(
            operation_name,
            tags={
                tags.SPAN_KIND: tags.SPAN_KIND_RPC_CLIENT,
                tags.COMPONENT: options.component_name,
                tags.HTTP_METHOD: method,
                tags.HTTP_URL: raw_url,
                tags.PEER_HOSTNAME: url.hostname,
                tags.PEER_PORT: port,
            },
        )

        try:
            options.hooks.emit("request", span, request)
            options.hooks.emit("response", span, request)

            if self._call_policy("inject enabled predicate", options.inject_enabled, True, request):
                HTTPPropagator.inject(tracer, span.context, headers)

            self._correlation.attach(request, span)
        except Exception:
            # nothing else would finish this span
            span.set_tag(tags.ERROR, True)
            span.finish()
            raise

    def _on_request_exception(self, event):
        span = self._correlation.get(event.request)
        if span is not None:
            set_exception(span, event.exception)

    def _on_request_stop(self, event):
        span = self._correlation.release(event.request)
        if span is None:
            return

        try:
            if event.response is not None:
                status = _status_code(event.response)
                if status is not None:
                    span.set_tag(tags.HTTP_STATUS_CODE, status)

            if event.request_task_status in (events.TaskStatus.CANCELED, events.TaskStatus.FAULTED):
                span.set_tag(tags.ERROR, True)
        finally:
            span.finish()
