"""In-process test client for faaspy applications.

Requests go through ``App.__call__`` as ASGI messages, so tests exercise
the same path a real server would, minus the sockets. Responses come back
as the production ``Response`` type.
"""

import json as json_module
from typing import Any

from faaspy.app import App
from faaspy.http.response import Response


def _build_scope(method: str, target: str, headers: dict[str, str] | None) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _Recorder:
    """Collects what the app sends and turns it back into a Response."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: list[tuple[bytes, bytes]] = []
        self.chunks: list[bytes] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> Response:
        content_type = "text/plain; charset=utf-8"
        extra: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=content_type,
            headers=tuple(extra),
        )


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Drive a faaspy App without a server.

    Entering the client runs the app's startup hook and leaving it runs the
    shutdown hook, as the ASGI lifespan would::

        async with TestClient(App(root=tmp_path)) as client:
            response = await client.get("/api/health")
            assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        await self.app.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.app.shutdown()

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send one request; *json* is encoded and typed for you."""
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            headers = {"content-type": "application/json", **(headers or {})}

        pending = [body or b""]

        async def receive() -> dict[str, Any]:
            if pending:
                return {"type": "http.request", "body": pending.pop(), "more_body": False}
            return {"type": "http.disconnect"}

        recorder = _Recorder()
        await self.app(_build_scope(method, path, headers), receive, recorder)
        return recorder.response()

    async def get(self, path: str, **kwargs: Any) -> Response:
        return await self.request("GET", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> Response:
        return await self.request("HEAD", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> Response:
        return await self.request("OPTIONS", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Response:
        return await self.request("DELETE", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Response:
        return await self.request("PATCH", path, **kwargs)
