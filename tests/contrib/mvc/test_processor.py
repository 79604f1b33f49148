import logging

import pytest

from diagtrace import constants
from diagtrace.contrib.mvc import ActionDescriptor
from diagtrace.contrib.mvc import ControllerActionDescriptor
from diagtrace.contrib.mvc import MvcEventProcessor
from diagtrace.exceptions import DiagnosticPayloadError
from diagtrace.exceptions import FieldNotFound


log = logging.getLogger(__name__)


class OrdersController(object):
    def show(self):
        return JsonResult()


class JsonResult(object):
    pass


class ViewResult(object):
    pass


@pytest.fixture
def processor(tracer):
    return MvcEventProcessor(tracer, log)


def before_action(processor, descriptor):
    return processor.process_event(constants.MVC_BEFORE_ACTION, {"action_descriptor": descriptor})


def after_action(processor):
    return processor.process_event(constants.MVC_AFTER_ACTION, {})


def before_action_result(processor, result):
    return processor.process_event(constants.MVC_BEFORE_ACTION_RESULT, {"result": result})


def after_action_result(processor):
    return processor.process_event(constants.MVC_AFTER_ACTION_RESULT, {})


class TestMvcEventProcessor(object):
    def test_controller_action(self, tracer, processor):
        descriptor = ControllerActionDescriptor(display_name="Foo.Bar (app)", controller_name="Foo", action_name="Bar")

        assert before_action(processor, descriptor)
        assert tracer.scope_manager.active.span.operation_name == "Action Foo/Bar"
        assert after_action(processor)

        span = tracer.finished_spans()[0]
        assert span.operation_name == "Action Foo/Bar"
        assert span.tags == {"component": "MvcAction", "controller": "Foo", "action": "Bar"}
        assert tracer.scope_manager.active is None

    def test_controller_descriptor_from_class(self, tracer, processor):
        descriptor = ControllerActionDescriptor.for_controller(OrdersController, "show")

        before_action(processor, descriptor)
        after_action(processor)

        name = "%s.OrdersController" % (__name__,)
        span = tracer.finished_spans()[0]
        assert span.operation_name == "Action %s/show" % (name,)
        assert span.tags["controller"] == name
        assert descriptor.display_name == "%s.show" % (name,)

    def test_action_without_controller(self, tracer, processor):
        before_action(processor, ActionDescriptor(display_name="Baz"))
        after_action(processor)

        span = tracer.finished_spans()[0]
        assert span.operation_name == "Action Baz"
        assert span.tags == {"component": "MvcAction"}

    def test_duck_typed_descriptor(self, tracer, processor):
        class PageDescriptor(object):
            display_name = "/Index"
            controller_name = None
            action_name = None

        before_action(processor, PageDescriptor())
        after_action(processor)

        assert tracer.finished_spans()[0].operation_name == "Action /Index"

    def test_action_result(self, tracer, processor):
        assert before_action_result(processor, JsonResult())
        assert after_action_result(processor)

        span = tracer.finished_spans()[0]
        assert span.operation_name == "Result JsonResult"
        assert span.tags == {"component": "MvcResult", "result.type": "JsonResult"}

    def test_result_nested_in_action(self, tracer, processor):
        before_action(processor, ActionDescriptor(display_name="Baz"))
        before_action_result(processor, ViewResult())
        after_action_result(processor)
        after_action(processor)

        result, action = tracer.finished_spans()
        assert result.operation_name == "Result ViewResult"
        assert action.operation_name == "Action Baz"
        assert result.parent_id == action.context.span_id

    def test_result_after_action(self, tracer, processor):
        before_action(processor, ActionDescriptor(display_name="Baz"))
        after_action(processor)
        before_action_result(processor, ViewResult())
        after_action_result(processor)

        action, result = tracer.finished_spans()
        assert result.parent_id is None

    @pytest.mark.parametrize("event_name", [constants.MVC_AFTER_ACTION, constants.MVC_AFTER_ACTION_RESULT])
    def test_stop_without_active_span(self, tracer, processor, event_name):
        assert processor.process_event(event_name, {})
        assert tracer.finished_spans() == []

    def test_unknown_event(self, tracer, processor):
        assert not processor.process_event("mvc.unknown", {})
        assert not processor.process_event(constants.HTTP_REQUEST_START, {"request": None})
        assert tracer.finished_spans() == []

    def test_missing_descriptor(self, processor):
        with pytest.raises(FieldNotFound):
            processor.process_event(constants.MVC_BEFORE_ACTION, {"descriptor": None})

    def test_requires_tracer_and_logger(self, tracer):
        with pytest.raises(ValueError):
            MvcEventProcessor(None, log)
        with pytest.raises(ValueError):
            MvcEventProcessor(tracer, None)

    @pytest.mark.parametrize("descriptor", [None, object()])
    def test_descriptor_without_display_name(self, tracer, processor, descriptor):
        with pytest.raises(DiagnosticPayloadError):
            before_action(processor, descriptor)

        assert tracer.scope_manager.active is None
        assert tracer.finished_spans() == []

    def test_component_tags(self, tracer, processor):
        before_action(processor, ActionDescriptor(display_name="Baz"))
        before_action_result(processor, ViewResult())
        after_action_result(processor)
        after_action(processor)

        result, action = tracer.finished_spans()
        assert action.tags["component"] == "MvcAction"
        assert result.tags["component"] == "MvcResult"
