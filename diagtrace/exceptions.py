class DiagtraceException(Exception):
    """Base class for every error raised by diagtrace."""


class ConfigException(DiagtraceException):
    """Configuration exception when an invalid option is given."""


class DiagnosticPayloadError(DiagtraceException):
    """An event payload does not have the shape expected for its event name."""


class FieldNotFound(DiagnosticPayloadError):
    """
    Raised when a named field cannot be read from an event payload.

    This usually means the producer of the events is a version we do not know about.
    """

    def __init__(self, field_name, payload_type):
        self.field_name = field_name
        self.payload_type = payload_type
        super(FieldNotFound, self).__init__(
            "field %r not found on payload of type %s" % (field_name, getattr(payload_type, "__name__", payload_type))
        )


class DuplicateCorrelation(DiagtraceException):
    """A request was started twice without being stopped in between."""

    def __init__(self, request):
        self.request = request
        super(DuplicateCorrelation, self).__init__("a span is already attached to request %r" % (request,))
