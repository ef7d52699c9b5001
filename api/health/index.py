"""/api/health — liveness probe, served like any other handler file."""

from faaspy import Request, Response, json_response, uptime, utc_timestamp


def default(request: Request) -> Response:
    return json_response(
        {
            "status": "healthy",
            "service": "faaspy",
            "timestamp": utc_timestamp(),
            "uptime": uptime(),
        }
    )
