"""Invoke helpers — call sync or async handlers uniformly.

Handler files may define ``def`` or ``async def`` functions. Any code that
calls a user-provided handler goes through :func:`invoke` so the sync/async
check lives in exactly one place.

Sync handlers run in a worker thread (``anyio.to_thread``) so a blocking
handler does not stall other in-flight requests. Context variables are
copied into the worker, which keeps the request logger and output capture
attached to the right request.

Usage::

    from faaspy._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)

    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
