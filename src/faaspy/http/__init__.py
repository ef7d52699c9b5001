"""HTTP request/response types shared by the dispatcher and user handlers."""

from faaspy.http.headers import Headers
from faaspy.http.query import QueryParams
from faaspy.http.request import METHODS, Request
from faaspy.http.response import Response, json_response

__all__ = [
    "METHODS",
    "Headers",
    "QueryParams",
    "Request",
    "Response",
    "json_response",
]
