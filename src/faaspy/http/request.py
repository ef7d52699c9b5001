"""The request object handed to handler functions.

Everything except the body is captured from the ASGI scope up front and
never changes. The body stays on the ASGI ``receive`` channel until a
handler asks for it; the dispatcher itself never reads it.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from faaspy._internal.asgi import Receive
from faaspy.http.headers import Headers
from faaspy.http.query import QueryParams

METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD")
"""HTTP methods a handler file can export a function for."""


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


def _address(value: Any) -> tuple[str, int] | None:
    return (value[0], value[1]) if value else None


@dataclass(frozen=True, slots=True)
class Request:
    """One inbound HTTP request.

    Attributes:
        method: Upper-case method name.
        path: URL path without the query string.
        headers: Case-insensitive request headers.
        query: Parsed query string.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    _receive: Receive = field(default=_no_body, repr=False, compare=False)
    # Holds the body once read; the receive channel can only be drained once.
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Build a Request from an HTTP scope and its receive callable."""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple((bytes(k), bytes(v)) for k, v in scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=_address(scope.get("server")),
            client=_address(scope.get("client")),
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        if not self.query.raw:
            return self.path
        return f"{self.path}?{self.query.raw.decode('latin-1')}"

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as they arrive from the server."""
        more = True
        while more:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                return
            more = message.get("more_body", False)
            chunk = message.get("body", b"")
            if chunk:
                yield chunk

    async def body(self) -> bytes:
        """The whole body. Read once, then served from memory."""
        if not self._body:
            self._body.append(b"".join([chunk async for chunk in self.stream()]))
        return self._body[0]

    async def text(self, encoding: str = "utf-8") -> str:
        return (await self.body()).decode(encoding)

    async def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(await self.body())
