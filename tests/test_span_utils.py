from diagtrace.span_utils import set_exception


def test_set_exception(tracer):
    span = tracer.start_span("op")
    try:
        raise ConnectionError("connection refused")
    except ConnectionError as e:
        exception = e

    set_exception(span, exception)

    assert span.tags["error"] is True
    assert len(span.logs) == 1
    fields = span.logs[0].key_values
    assert fields["event"] == "error"
    assert fields["error.kind"] == "ConnectionError"
    assert fields["error.object"] is exception
    assert fields["message"] == "connection refused"
    assert "ConnectionError: connection refused" in fields["stack"]
    # the span stays open
    assert tracer.finished_spans() == []


def test_set_exception_without_exception(tracer):
    span = tracer.start_span("op")

    set_exception(span, None)

    assert "error" not in span.tags
