from opentracing.ext import tags

from diagtrace import constants
from diagtrace import events
from diagtrace.exceptions import DiagnosticPayloadError


def controller_full_name(controller_type):
    return "%s.%s" % (controller_type.__module__, controller_type.__qualname__)


class MvcEventProcessor(object):
    """Starts and finishes spans around the action and result phases of an MVC request.

    Spans are pushed on the tracer's active span stack, so the result span of an action started
    while the action span is still active becomes its child.
    """

    def __init__(self, tracer, logger):
        if tracer is None:
            raise ValueError("tracer is required")
        if logger is None:
            raise ValueError("logger is required")
        self._tracer = tracer
        self._logger = logger

    @property
    def tracer(self):
        return self._tracer

    def process_event(self, event_name, payload):
        """Handle ``event_name``; return ``False`` if the event is not an MVC event."""
        event = events.parse_event(event_name, payload)

        if isinstance(event, events.BeforeAction):
            # DEV: start of the action pipeline. The action is selected but no filter has run
            #      and model binding has not happened yet.
            self._start_action(event.action_descriptor)
            return True

        if isinstance(event, (events.AfterAction, events.AfterActionResult)):
            self._close_active_scope(event_name)
            return True

        if isinstance(event, events.BeforeActionResult):
            # DEV: start of the result pipeline. The action ran; the view that will render the
            #      result (if any) is not known yet.
            self._start_result(event.result)
            return True

        return False

    def _start_action(self, descriptor):
        controller_name = getattr(descriptor, "controller_name", None)
        action_name = getattr(descriptor, "action_name", None)

        if controller_name is not None and action_name is not None:
            operation_name = "Action %s/%s" % (controller_name, action_name)
        else:
            controller_name = action_name = None
            try:
                operation_name = "Action %s" % (descriptor.display_name,)
            except AttributeError:
                raise DiagnosticPayloadError("action descriptor %r has no display name" % (descriptor,))

        span_tags = {tags.COMPONENT: constants.MVC_ACTION_COMPONENT}
        if controller_name is not None:
            span_tags[constants.MVC_TAG_CONTROLLER] = controller_name
            span_tags[constants.MVC_TAG_ACTION] = action_name

        self._tracer.start_active_span(operation_name, tags=span_tags, finish_on_close=True)

    def _start_result(self, result):
        result_type = type(result).__name__
        self._tracer.start_active_span(
            "Result %s" % (result_type,),
            tags={
                tags.COMPONENT: constants.MVC_RESULT_COMPONENT,
                constants.MVC_TAG_RESULT_TYPE: result_type,
            },
            finish_on_close=True,
        )

    def _close_active_scope(self, event_name):
        scope = self._tracer.scope_manager.active
        if scope is None:
            self._logger.debug("%s received without an active span", event_name)
            return
        scope.close()
