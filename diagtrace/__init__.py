from .bootstrap import ignore_collector_requests
from .bootstrap import install
from .contrib.http_client import HttpHandlerDiagnosticOptions
from .contrib.http_client import HttpHandlerDiagnostics
from .contrib.mvc import MvcDiagnostics
from .observer import DiagnosticManager
from .observer import DiagnosticObserver


__version__ = "0.1.0"


__all__ = [
    "DiagnosticManager",
    "DiagnosticObserver",
    "HttpHandlerDiagnosticOptions",
    "HttpHandlerDiagnostics",
    "MvcDiagnostics",
    "ignore_collector_requests",
    "install",
]
