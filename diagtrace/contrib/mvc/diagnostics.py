from diagtrace import constants
from diagtrace.observer import DiagnosticObserver

from .processor import MvcEventProcessor


class MvcDiagnostics(DiagnosticObserver):
    """Traces the MVC events reported to the ``diagtrace.mvc`` listener."""

    listener_name = constants.MVC_LISTENER

    def __init__(self, tracer=None):
        super(MvcDiagnostics, self).__init__(tracer)
        self._processor = None

    @property
    def processor(self) -> MvcEventProcessor:
        # rebuilt only when the tracer changes, e.g. a global tracer registered late
        tracer = self.tracer
        processor = self._processor
        if processor is None or processor.tracer is not tracer:
            processor = self._processor = MvcEventProcessor(tracer, self.log)
        return processor

    def on_event(self, event_name, payload):
        if not self.processor.process_event(event_name, payload):
            self.log.debug("Ignoring unhandled event %s", event_name)
