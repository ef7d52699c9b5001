"""Path-to-file routing: resolve, load, select."""

from faaspy.routing.loader import HandlerLoader
from faaspy.routing.resolve import HANDLER_FILENAMES, PathResolver
from faaspy.routing.select import select_handler
from faaspy.routing.types import HandlerModule

__all__ = [
    "HANDLER_FILENAMES",
    "HandlerLoader",
    "HandlerModule",
    "PathResolver",
    "select_handler",
]
