import traceback

from opentracing import logs
from opentracing.ext import tags


def set_exception(span, exception):
    """Flag ``span`` as errored and log the details of ``exception`` on it.

    The span is not finished.
    """
    if span is None or exception is None:
        return

    span.set_tag(tags.ERROR, True)
    span.log_kv(
        {
            logs.EVENT: tags.ERROR,
            logs.ERROR_KIND: type(exception).__name__,
            logs.ERROR_OBJECT: exception,
            logs.MESSAGE: str(exception),
            logs.STACK: "".join(traceback.format_exception(type(exception), exception, exception.__traceback__)),
        }
    )
