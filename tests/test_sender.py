"""Tests for faaspy.server.sender — Response to ASGI messages."""

from typing import Any

import pytest

from faaspy.http.response import Response
from faaspy.server.sender import send_response


async def _send(response: Response, *, head: bool = False) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, head=head)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_start_and_body(self) -> None:
        start, body = await _send(Response("hello", status=201).with_header("X-Trace", "t1"))
        assert start["type"] == "http.response.start"
        assert start["status"] == 201
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert headers[b"x-trace"] == b"t1"
        assert headers[b"content-length"] == b"5"
        assert body == {"type": "http.response.body", "body": b"hello"}

    @pytest.mark.asyncio
    async def test_content_length_counts_bytes(self) -> None:
        start, _ = await _send(Response("é"))
        assert dict(start["headers"])[b"content-length"] == b"2"

    @pytest.mark.asyncio
    async def test_head_keeps_length_drops_body(self) -> None:
        start, body = await _send(Response("hello"), head=True)
        assert dict(start["headers"])[b"content-length"] == b"5"
        assert body["body"] == b""

    @pytest.mark.asyncio
    async def test_no_content_has_no_body(self) -> None:
        start, body = await _send(Response("ignored", status=204))
        assert dict(start["headers"])[b"content-length"] == b"0"
        assert body["body"] == b""

    @pytest.mark.asyncio
    async def test_not_modified_has_no_body(self) -> None:
        _, body = await _send(Response("ignored", status=304))
        assert body["body"] == b""
