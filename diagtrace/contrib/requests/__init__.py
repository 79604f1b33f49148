"""
The ``requests`` integration reports every request sent with the ``requests`` library to the
``diagtrace.http_client`` diagnostic listener, where
:class:`diagtrace.contrib.http_client.HttpHandlerDiagnostics` turns them into client spans.

Enabling
~~~~~~~~

Use :func:`patch()<diagtrace.contrib.requests.patch>` to enable the integration::

    from diagtrace.contrib.requests import patch
    patch()

    # use requests like usual

Nothing is reported while no observer is subscribed to the listener.
"""
from .patch import get_version
from .patch import patch
from .patch import unpatch


__all__ = ["get_version", "patch", "unpatch"]
