# Diagnostic listener names
HTTP_CLIENT_LISTENER = "diagtrace.http_client"
MVC_LISTENER = "diagtrace.mvc"

# HTTP client events
HTTP_REQUEST_START = "http_client.request.start"
HTTP_REQUEST_STOP = "http_client.request.stop"
HTTP_REQUEST_EXCEPTION = "http_client.exception"

# MVC events
MVC_BEFORE_ACTION = "mvc.before_action"
MVC_AFTER_ACTION = "mvc.after_action"
MVC_BEFORE_ACTION_RESULT = "mvc.before_action_result"
MVC_AFTER_ACTION_RESULT = "mvc.after_action_result"

# Component tag values
HTTP_CLIENT_COMPONENT = "HttpOut"
MVC_ACTION_COMPONENT = "MvcAction"
MVC_RESULT_COMPONENT = "MvcResult"

# MVC tag names
MVC_TAG_CONTROLLER = "controller"
MVC_TAG_ACTION = "action"
MVC_TAG_RESULT_TYPE = "result.type"

DEFAULT_COLLECTOR_URL = "http://localhost:14268/api/traces"
