import requests
import wrapt

from diagtrace import constants
from diagtrace.events import HttpRequestException
from diagtrace.events import HttpRequestStart
from diagtrace.events import HttpRequestStop
from diagtrace.events import TaskStatus
from diagtrace.internal.core import DiagnosticListener
from diagtrace.internal.logger import get_logger
from diagtrace.internal.utils import ArgumentError
from diagtrace.internal.utils import get_argument_value
from diagtrace.internal.utils import unwrap as _u


log = get_logger(__name__)

listener = DiagnosticListener(constants.HTTP_CLIENT_LISTENER)


def get_version():
    # type: () -> str
    return getattr(requests, "__version__", "")


def _write(event):
    # Instrumentation must never change the outcome of the request
    try:
        listener.write(event.event_name, event)
    except Exception:
        log.error("error processing %s event", event.event_name, exc_info=True)


def _wrap_send(func, instance, args, kwargs):
    """Report the `Session.send` instance method to the HTTP client diagnostic listener"""
    if not listener.is_enabled():
        return func(*args, **kwargs)

    try:
        request = get_argument_value(args, kwargs, 0, "request")
    except ArgumentError:
        return func(*args, **kwargs)

    _write(HttpRequestStart(request=request))

    response = None
    status = TaskStatus.FAULTED
    try:
        response = func(*args, **kwargs)
        status = TaskStatus.RAN_TO_COMPLETION
        return response
    except Exception as e:
        _write(HttpRequestException(request=request, exception=e))
        raise
    except BaseException:
        status = TaskStatus.CANCELED
        raise
    finally:
        _write(HttpRequestStop(request=request, response=response, request_task_status=status))


def patch():
    """Report the requests sent by ``requests`` sessions to the HTTP client diagnostic listener"""
    if getattr(requests, "__diagtrace_patch", False):
        return
    requests.__diagtrace_patch = True

    wrapt.wrap_function_wrapper("requests", "Session.send", _wrap_send)


def unpatch():
    if not getattr(requests, "__diagtrace_patch", False):
        return
    requests.__diagtrace_patch = False

    _u(requests.Session, "send")
