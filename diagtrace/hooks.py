import collections
from copy import copy

import attr

from diagtrace.internal.logger import get_logger


log = get_logger(__name__)


@attr.s(slots=True)
class Hooks(object):
    """
    Hooks configuration object is used for registering and calling hook functions

    Example::

        @options.hooks.on("request")
        def on_request(span, request):
            span.set_tag("http.request.id", request.headers.get("X-Request-Id"))
    """

    _hooks = attr.ib(init=False, factory=lambda: collections.defaultdict(list))

    def __copy__(self):
        hooks = Hooks()
        for hook, funcs in self._hooks.items():
            hooks._hooks[hook] = copy(funcs)
        return hooks

    def register(self, hook, func=None):
        """
        Function used to register a hook for the provided name.

        Example::

            def on_request(span, request):
                pass

            options.hooks.register("request", on_request)


        If no function is provided then a decorator is returned::

            @options.hooks.register("request")
            def on_request(span, request):
                pass

        :param hook: The name of the hook to register the function for
        :type hook: str
        :param func: The function to register, or ``None`` if a decorator should be returned
        :type func: function, None
        :returns: Either a function decorator if ``func is None``, otherwise ``None``
        :rtype: function, None
        """
        # If they didn't provide a function, then return a decorator
        if not func:

            def wrapper(func):
                self.register(hook, func)
                return func

            return wrapper
        if func not in self._hooks[hook]:
            self._hooks[hook].append(func)

    # Provide shorthand `on` method for `register`
    on = register

    def deregister(self, hook, func):
        """
        Function to deregister a function from a hook it was registered under

        :param hook: The name of the hook the function was registered for
        :type hook: str
        :param func: Function hook to deregister
        :type func: function
        """
        if hook in self._hooks:
            try:
                self._hooks[hook].remove(func)
            except ValueError:
                pass

    def emit(self, hook, *args, **kwargs):
        """
        Function used to call registered hook functions.

        A failing hook is logged and does not prevent the other hooks from running.

        :param hook: The hook to call functions for
        :type hook: str
        :param args: Positional arguments to pass to the hook functions
        :type args: list
        :param kwargs: Keyword arguments to pass to the hook functions
        :type kwargs: dict
        """
        for func in tuple(self._hooks.get(hook, ())):
            try:
                func(*args, **kwargs)
            except Exception:
                log.error("Failed to run hook %s function %s", hook, func, exc_info=True)
