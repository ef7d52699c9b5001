"""ASGI handler — translates ASGI scope/messages to faaspy types.

The only component that touches raw HTTP ASGI messages. Converts the scope
to a ``Request``, runs it through the dispatcher and sends the ``Response``
back through ``send()``.
"""

import logging

from faaspy._internal.asgi import Receive, Scope, Send
from faaspy.http.request import Request
from faaspy.server.dispatch import Dispatcher
from faaspy.server.errors import internal_error_response
from faaspy.server.sender import send_response

logger = logging.getLogger("faaspy.server")


async def handle_request(scope: Scope, receive: Receive, send: Send, *, dispatcher: Dispatcher) -> None:
    """Process a single HTTP request through the dispatch pipeline."""
    if scope["type"] != "http":
        return

    try:
        request = Request.from_asgi(scope, receive)
        response = await dispatcher.dispatch(request)
    except Exception:
        logger.exception("🔥 Server error: %s %s", scope.get("method"), scope.get("path"))
        response = internal_error_response()

    await send_response(response, send, head=scope.get("method", "").upper() == "HEAD")
