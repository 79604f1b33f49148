"""
Wiring of the observers shipped with diagtrace.

``install`` is what an application calls once at startup::

    import diagtrace
    from opentracing.scope_managers.contextvars import ContextVarsScopeManager

    tracer = MyTracer(scope_manager=ContextVarsScopeManager())
    manager = diagtrace.install(tracer)
"""
from typing import Optional

from diagtrace import settings
from diagtrace.constants import DEFAULT_COLLECTOR_URL
from diagtrace.contrib.http_client import HttpHandlerDiagnosticOptions
from diagtrace.contrib.http_client import HttpHandlerDiagnostics
from diagtrace.contrib.http_client import url_prefix_matcher
from diagtrace.contrib.mvc import MvcDiagnostics
from diagtrace.internal.logger import get_logger
from diagtrace.observer import DiagnosticManager


log = get_logger(__name__)


def ignore_collector_requests(
    options: HttpHandlerDiagnosticOptions, collector_url: str = DEFAULT_COLLECTOR_URL
) -> HttpHandlerDiagnosticOptions:
    """Never trace requests sent to the span collector.

    The spans of an exported batch would otherwise be exported themselves, endlessly.
    """
    options.ignore_patterns.append(url_prefix_matcher(collector_url))
    return options


def install(
    tracer=None,
    http_client_options: Optional[HttpHandlerDiagnosticOptions] = None,
    config: Optional[settings.DiagtraceConfig] = None,
) -> Optional[DiagnosticManager]:
    """Start tracing the diagnostic events of the process.

    :param tracer: the ``opentracing.Tracer`` to use, the global tracer when ``None``
    :param http_client_options: options of the outgoing HTTP request observer; built from
        ``diagtrace.settings.http_client_config`` when ``None``
    :param config: defaults to ``diagtrace.settings.config``
    :returns: the started manager, ``None`` when diagtrace is disabled
    """
    config = config if config is not None else settings.config
    if not config.enabled:
        log.debug("diagtrace is disabled")
        return None

    if http_client_options is None:
        http_client_options = HttpHandlerDiagnosticOptions.from_config(settings.http_client_config)

    if config.ignore_collector:
        ignore_collector_requests(http_client_options, config.collector_url)

    manager = DiagnosticManager(
        [
            HttpHandlerDiagnostics(tracer, http_client_options),
            MvcDiagnostics(tracer),
        ]
    )
    manager.start()
    return manager
