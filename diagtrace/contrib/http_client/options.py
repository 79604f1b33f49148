from typing import Any
from typing import Callable
from typing import List
from urllib import parse

import attr

from diagtrace.constants import HTTP_CLIENT_COMPONENT
from diagtrace.exceptions import ConfigException
from diagtrace.hooks import Hooks


_DEFAULT_PORTS = {"http": 80, "https": 443}


def default_operation_name(request):
    return "HTTP %s" % (request.method.upper(),)


def _always(request):
    return True


def effective_port(parsed):
    return parsed.port or _DEFAULT_PORTS.get(parsed.scheme)


def url_prefix_matcher(base_url: str) -> Callable[[Any], bool]:
    """Return a predicate matching requests sent to ``base_url`` or below it."""
    base = parse.urlsplit(base_url)
    if not base.scheme or not base.hostname:
        raise ConfigException("not an absolute URL: %r" % (base_url,))
    base_port = effective_port(base)
    base_path = base.path or "/"

    def _match(request):
        url = parse.urlsplit(str(request.url))
        if url.scheme != base.scheme or url.hostname != base.hostname:
            return False
        if effective_port(url) != base_port:
            return False
        return (url.path or "/").startswith(base_path)

    return _match


def _check_callable(instance, attribute, value):
    if value is not None and not callable(value):
        raise ConfigException("%s must be callable, got %r" % (attribute.name, value))


@attr.s
class HttpHandlerDiagnosticOptions(object):
    """Options of the outgoing HTTP request observer.

    Example::

        options = HttpHandlerDiagnosticOptions(component_name="billing-client")
        options.ignore_patterns.append(lambda request: request.url.endswith("/health"))

        @options.hooks.on("request")
        def on_request(span, request):
            span.set_tag("http.request_id", request.headers.get("X-Request-Id"))

    Both the ``"request"`` and the ``"response"`` hooks are called with ``(span, request)`` when the
    span is started, in that order, before the trace context is injected.
    """

    component_name = attr.ib(default=HTTP_CLIENT_COMPONENT, type=str)
    operation_name_resolver = attr.ib(default=default_operation_name, validator=_check_callable)
    ignore_patterns = attr.ib(factory=list, type=List[Callable[[Any], bool]])
    inject_enabled = attr.ib(default=_always, validator=_check_callable)
    hooks = attr.ib(factory=Hooks, type=Hooks)
    on_request = attr.ib(default=None, validator=_check_callable, repr=False)
    on_response = attr.ib(default=None, validator=_check_callable, repr=False)

    def __attrs_post_init__(self):
        if not self.component_name:
            raise ConfigException("component_name must not be empty")
        for pattern in self.ignore_patterns:
            if not callable(pattern):
                raise ConfigException("ignore patterns must be callable, got %r" % (pattern,))
        if self.on_request is not None:
            self.hooks.register("request", self.on_request)
        if self.on_response is not None:
            self.hooks.register("response", self.on_response)
        if self.inject_enabled is None:
            self.inject_enabled = _always

    def should_ignore(self, request) -> bool:
        """``True`` when any ignore pattern matches ``request``; stops at the first match."""
        return any(ignore(request) for ignore in self.ignore_patterns)

    @classmethod
    def from_config(cls, config, **kwargs) -> "HttpHandlerDiagnosticOptions":
        """Build options from a ``diagtrace.settings.HttpClientConfig``.

        Keyword arguments override the configured values.
        """
        kwargs.setdefault("component_name", config.component_name)
        if not config.inject_enabled:
            kwargs.setdefault("inject_enabled", lambda request: False)
        options = cls(**kwargs)
        options.ignore_patterns.extend(url_prefix_matcher(url) for url in config.ignore_urls)
        return options

