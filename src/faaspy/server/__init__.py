"""ASGI server side of faaspy: dispatch, error responses, output capture."""
