class DummyRequest(object):
    """Minimal outgoing request: what the HTTP client observer reads from a request."""

    def __init__(self, method="GET", url="http://example.com/path", headers=None):
        self.method = method
        self.url = url
        self.headers = headers if headers is not None else {}

    def __repr__(self):
        return "DummyRequest(%s %s)" % (self.method, self.url)


class DummyResponse(object):
    def __init__(self, status_code=200):
        self.status_code = status_code


def spans_by_name(tracer):
    return {span.operation_name: span for span in tracer.finished_spans()}
