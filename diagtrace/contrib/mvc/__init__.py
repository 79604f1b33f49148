"""
Trace the action and result phases of MVC web frameworks.

The framework reports each phase to the ``diagtrace.mvc`` diagnostic listener::

    from diagtrace import constants
    from diagtrace.contrib.mvc import ControllerActionDescriptor
    from diagtrace.internal.core import DiagnosticListener

    listener = DiagnosticListener(constants.MVC_LISTENER)

    descriptor = ControllerActionDescriptor.for_controller(OrdersController, "show")
    listener.write(constants.MVC_BEFORE_ACTION, {"action_descriptor": descriptor})
    result = OrdersController().show()
    listener.write(constants.MVC_AFTER_ACTION, {})

    listener.write(constants.MVC_BEFORE_ACTION_RESULT, {"result": result})
    result.render()
    listener.write(constants.MVC_AFTER_ACTION_RESULT, {})

Action spans are named ``Action <controller>/<action>`` (``Action <display name>`` for actions
without a controller), result spans ``Result <result type>``. Both are activated on the tracer's
scope manager; use ``opentracing.scope_managers.contextvars.ContextVarsScopeManager`` so that
every request gets its own stack of active spans.
"""
from .descriptors import ActionDescriptor
from .descriptors import ControllerActionDescriptor
from .diagnostics import MvcDiagnostics
from .processor import MvcEventProcessor


__all__ = [
    "ActionDescriptor",
    "ControllerActionDescriptor",
    "MvcDiagnostics",
    "MvcEventProcessor",
]
