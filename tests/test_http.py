"""Tests for faaspy.http — Request, Response, Headers and QueryParams."""

from dataclasses import FrozenInstanceError
from typing import Any

import pytest

from faaspy.http.headers import Headers
from faaspy.http.query import QueryParams
from faaspy.http.request import METHODS, Request
from faaspy.http.response import Response, json_response, response_problem


def _scope(**overrides: Any) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": "http",
        "method": "post",
        "path": "/api/items",
        "query_string": b"a=1&a=2&b=x",
        "headers": [(b"content-type", b"application/json"), (b"x-tag", b"one"), (b"x-tag", b"two")],
        "http_version": "1.1",
        "server": ("localhost", 3000),
        "client": ("127.0.0.1", 5555),
    }
    scope.update(overrides)
    return scope


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return receive


class TestMethods:
    def test_enumeration(self) -> None:
        assert METHODS == ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD")


class TestRequest:
    def test_from_asgi(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b""))
        assert request.method == "POST"
        assert request.path == "/api/items"
        assert request.content_type == "application/json"
        assert request.server == ("localhost", 3000)
        assert request.client == ("127.0.0.1", 5555)
        assert request.url == "/api/items?a=1&a=2&b=x"

    def test_url_without_query(self) -> None:
        assert Request(method="GET", path="/x").url == "/x"

    def test_frozen(self) -> None:
        request = Request(method="GET", path="/x")
        with pytest.raises(FrozenInstanceError):
            request.path = "/y"  # type: ignore[misc]

    @pytest.mark.asyncio
    async def test_body_chunks_joined_and_cached(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b"ab", b"cd"))
        assert await request.body() == b"abcd"
        assert await request.body() == b"abcd"

    @pytest.mark.asyncio
    async def test_json(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b'{"k": [1, 2]}'))
        assert await request.json() == {"k": [1, 2]}

    @pytest.mark.asyncio
    async def test_text(self) -> None:
        request = Request.from_asgi(_scope(), _receiver("héllo".encode()))
        assert await request.text() == "héllo"

    @pytest.mark.asyncio
    async def test_empty_body_by_default(self) -> None:
        assert await Request(method="GET", path="/").body() == b""


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"text/html"),))
        assert headers["content-type"] == "text/html"
        assert headers.get("CONTENT-TYPE") == "text/html"

    def test_multiple_values(self) -> None:
        request = Request.from_asgi(_scope(), _receiver(b""))
        assert request.headers.get("x-tag") == "one"
        assert request.headers.get_list("x-tag") == ["one", "two"]

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("nope") is None
        assert "nope" not in headers

    def test_from_mapping(self) -> None:
        headers = Headers.from_mapping({"X-Api-Key": "secret"})
        assert headers["x-api-key"] == "secret"


class TestQueryParams:
    def test_first_value(self) -> None:
        assert QueryParams(b"a=1&a=2").get("a") == "1"

    def test_all_values(self) -> None:
        assert QueryParams("a=1&a=2").get_list("a") == ["1", "2"]

    def test_default(self) -> None:
        assert QueryParams(b"").get("a", "fallback") == "fallback"

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=").get("flag") == ""

    def test_raw(self) -> None:
        assert QueryParams("x=1").raw == b"x=1"


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.body_bytes == b""

    def test_chaining_is_immutable(self) -> None:
        base = Response("hi")
        changed = base.with_status(201).with_header("X-A", "1").with_content_type("text/html")
        assert base.status == 200
        assert base.headers == ()
        assert changed.status == 201
        assert changed.header("x-a") == "1"
        assert changed.content_type == "text/html"

    def test_with_headers(self) -> None:
        response = Response().with_headers({"X-A": "1", "X-B": "2"})
        assert response.headers == (("X-A", "1"), ("X-B", "2"))

    def test_text_and_bytes(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"raw").text == "raw"

    def test_json_response(self) -> None:
        response = json_response({"ok": True}, status=202, headers={"X-A": "1"})
        assert response.status == 202
        assert response.content_type == "application/json"
        assert response.json() == {"ok": True}
        assert response.header("X-A") == "1"

    def test_json_response_non_ascii(self) -> None:
        assert json_response({"name": "Zoë"}).text == '{"name": "Zoë"}'


class TestResponseProblem:
    def test_valid_responses(self) -> None:
        assert response_problem(Response("ok")) is None
        assert response_problem(Response(b"raw", status=599)) is None
        assert response_problem(json_response({"a": 1}, headers={"X-A": "1"})) is None

    @pytest.mark.parametrize(
        ("value", "reason"),
        [
            ("text", "expected Response, got str"),
            (None, "expected Response, got NoneType"),
            (Response(body={"a": 1}), "body must be str or bytes, got dict"),  # type: ignore[arg-type]
            (Response(status=99), "status must be an integer"),
            (Response(status=600), "status must be an integer"),
            (Response(status="200"), "status must be an integer"),  # type: ignore[arg-type]
            (Response(status=False), "status must be an integer"),
            (Response(content_type=b"text/plain"), "content type must be"),  # type: ignore[arg-type]
            (Response(headers={"X-A": "1"}), "headers must be (name, value) pairs"),  # type: ignore[arg-type]
            (Response(headers=(("X-A",),)), "header must be"),  # type: ignore[arg-type]
            (Response(headers=(("X-A", 1),)), "header must be"),  # type: ignore[arg-type]
            (Response(headers=(("X-A", "caf\u00e9 \u2603"),)), "header must be"),
        ],
    )
    def test_problems(self, value: object, reason: str) -> None:
        problem = response_problem(value)
        assert problem is not None
        assert reason in problem
