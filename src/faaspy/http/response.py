"""HTTP response with a chainable ``.with_*()`` transformation API.

Each transformation returns a new Response. Handlers build one directly
or through :func:`json_response`.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set status,
    headers and content type::

        Response("created").with_status(201).with_header("Location", "/items/1")
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> "Response":
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)


def json_response(
    data: Any,
    *,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
    indent: int | None = None,
) -> Response:
    """Serialize *data* as a JSON response."""
    response = Response(
        body=json_module.dumps(data, indent=indent, ensure_ascii=False, default=str),
        status=status,
        content_type="application/json",
    )
    if headers:
        response = response.with_headers(headers)
    return response


def _latin1(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def response_problem(value: object) -> str | None:
    """Why *value* cannot be sent as a response, or ``None`` if it can.

    Checks the shape the transport relies on: a ``Response`` whose body is
    text or bytes, whose status is an integer from 100 to 599, and whose
    content type and headers are latin-1 strings.
    """
    if not isinstance(value, Response):
        return f"expected Response, got {type(value).__name__}"
    if not isinstance(value.body, str | bytes):
        return f"body must be str or bytes, got {type(value.body).__name__}"
    status = value.status
    if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
        return f"status must be an integer from 100 to 599, got {status!r}"
    if not _latin1(value.content_type):
        return f"content type must be a latin-1 string, got {value.content_type!r}"
    if not isinstance(value.headers, tuple | list):
        return f"headers must be (name, value) pairs, got {type(value.headers).__name__}"
    for pair in value.headers:
        if not (isinstance(pair, tuple | list) and len(pair) == 2 and all(map(_latin1, pair))):
            return f"header must be a (name, value) pair of latin-1 strings, got {pair!r}"
    return None
