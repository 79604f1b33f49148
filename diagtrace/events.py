"""
Typed views over the payloads written to the diagnostic listeners.

Every event name maps to one frozen ``attrs`` class. ``parse_event`` builds the typed event from
whatever payload the producer wrote (a mapping, an object, or the typed event itself), reading
fields by name. A missing field raises ``FieldNotFound``; it is never replaced by a default.

Producers are free to write the typed events directly::

    listener.write(HttpRequestStart.event_name, HttpRequestStart(request=request))
"""
import enum
from typing import Any
from typing import Dict
from typing import Optional
from typing import Type

import attr

from diagtrace import constants
from diagtrace.internal.fetcher import PropertyFetcher


class TaskStatus(enum.Enum):
    """Completion state of the operation reported by a stop event."""

    CREATED = "created"
    RUNNING = "running"
    RAN_TO_COMPLETION = "ran_to_completion"
    CANCELED = "canceled"
    FAULTED = "faulted"


_request_fetcher = PropertyFetcher("request")
_response_fetcher = PropertyFetcher("response")
_request_task_status_fetcher = PropertyFetcher("request_task_status")
_exception_fetcher = PropertyFetcher("exception")
_action_descriptor_fetcher = PropertyFetcher("action_descriptor")
_result_fetcher = PropertyFetcher("result")


@attr.s(frozen=True, slots=True)
class DiagnosticEvent(object):
    event_name = None  # type: str

    @classmethod
    def from_payload(cls, payload):
        return cls()


@attr.s(frozen=True, slots=True)
class HttpRequestStart(DiagnosticEvent):
    """An outgoing HTTP request is about to be sent."""

    event_name = constants.HTTP_REQUEST_START

    request = attr.ib()

    @classmethod
    def from_payload(cls, payload):
        return cls(request=_request_fetcher.fetch(payload))


@attr.s(frozen=True, slots=True)
class HttpRequestException(DiagnosticEvent):
    """Sending the request raised. A ``HttpRequestStop`` for the same request follows."""

    event_name = constants.HTTP_REQUEST_EXCEPTION

    request = attr.ib()
    exception = attr.ib()

    @classmethod
    def from_payload(cls, payload):
        return cls(request=_request_fetcher.fetch(payload), exception=_exception_fetcher.fetch(payload))


@attr.s(frozen=True, slots=True)
class HttpRequestStop(DiagnosticEvent):
    """The request completed. ``response`` is ``None`` when no response was received."""

    event_name = constants.HTTP_REQUEST_STOP

    request = attr.ib()
    response = attr.ib(default=None)
    request_task_status = attr.ib(default=TaskStatus.RAN_TO_COMPLETION)

    @classmethod
    def from_payload(cls, payload):
        return cls(
            request=_request_fetcher.fetch(payload),
            response=_response_fetcher.fetch(payload),
            request_task_status=_request_task_status_fetcher.fetch(payload),
        )


@attr.s(frozen=True, slots=True)
class BeforeAction(DiagnosticEvent):
    """An action was selected; filters and model binding have not run yet."""

    event_name = constants.MVC_BEFORE_ACTION

    action_descriptor = attr.ib()

    @classmethod
    def from_payload(cls, payload):
        return cls(action_descriptor=_action_descriptor_fetcher.fetch(payload))


@attr.s(frozen=True, slots=True)
class AfterAction(DiagnosticEvent):
    event_name = constants.MVC_AFTER_ACTION


@attr.s(frozen=True, slots=True)
class BeforeActionResult(DiagnosticEvent):
    """The action ran; the result (view, json, redirect...) is about to be executed."""

    event_name = constants.MVC_BEFORE_ACTION_RESULT

    result = attr.ib()

    @classmethod
    def from_payload(cls, payload):
        return cls(result=_result_fetcher.fetch(payload))


@attr.s(frozen=True, slots=True)
class AfterActionResult(DiagnosticEvent):
    event_name = constants.MVC_AFTER_ACTION_RESULT


EVENT_TYPES: Dict[str, Type[DiagnosticEvent]] = {
    event_type.event_name: event_type
    for event_type in (
        HttpRequestStart,
        HttpRequestException,
        HttpRequestStop,
        BeforeAction,
        AfterAction,
        BeforeActionResult,
        AfterActionResult,
    )
}


def parse_event(event_name: str, payload: Any) -> Optional[DiagnosticEvent]:
    """Return the typed event for ``event_name``, or ``None`` if the name is unknown.

    :raises FieldNotFound: when the payload lacks a field of the event.
    """
    event_type = EVENT_TYPES.get(event_name)
    if event_type is None:
        return None
    if isinstance(payload, event_type):
        return payload
    return event_type.from_payload(payload)
