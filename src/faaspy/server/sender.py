"""Write a faaspy Response to an ASGI ``send`` channel."""

from faaspy._internal.asgi import Send
from faaspy.http.response import Response

# Statuses that never carry a message body.
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type), *response.headers]
    encoded = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]
    encoded.append((b"content-length", str(length).encode("latin-1")))
    return encoded


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as one start message and one body message.

    ``content-length`` always describes the body a ``GET`` would get, so a
    ``HEAD`` answer carries the same headers with an empty body.
    """
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes

    await send({
        "type": "http.response.start",
        "status": status,
        "headers": _encode_headers(response, len(body)),
    })
    await send({"type": "http.response.body", "body": b"" if head else body})
