"""faaspy — File as a Service.

A request to ``/foo/bar`` runs the function exported by
``<root>/foo/bar/index.py`` for the request's HTTP method::

    # api/hello/index.py
    from faaspy import Request, Response

    def GET(request: Request) -> Response:
        return Response("hello")

Handler files are reloaded whenever they change on disk.
"""

from faaspy._internal.clock import uptime, utc_timestamp
from faaspy.app import App, create_app
from faaspy.config import AppConfig
from faaspy.context import get_logger, get_request
from faaspy.errors import ConfigurationError, FaaspyError, HandlerLoadError, InvalidResponseError
from faaspy.http.request import METHODS, Request
from faaspy.http.response import Response, json_response
from faaspy.server.errors import ErrorKind

__version__ = "0.1.0"

__all__ = [
    "METHODS",
    "App",
    "AppConfig",
    "ConfigurationError",
    "ErrorKind",
    "FaaspyError",
    "HandlerLoadError",
    "InvalidResponseError",
    "Request",
    "Response",
    "create_app",
    "get_logger",
    "get_request",
    "json_response",
    "uptime",
    "utc_timestamp",
]
