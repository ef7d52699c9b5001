"""Method-to-function selection over a loaded handler module."""

from faaspy.routing.types import HandlerFunc, HandlerModule


def select_handler(module: HandlerModule, method: str) -> HandlerFunc | None:
    """Pick the function that serves *method*.

    A ``default`` function wins unconditionally: a file that defines it
    handles every method, even ones it also defines by name. Otherwise the
    function named after the method is used. ``None`` means the method is
    not allowed for this file.
    """
    if module.default is not None:
        return module.default
    return module.handlers.get(method.upper())


def handler_label(module: HandlerModule, method: str) -> str:
    """Name of the export :func:`select_handler` picks, for log lines."""
    return "default" if module.default is not None else method.upper()
