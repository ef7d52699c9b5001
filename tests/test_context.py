"""Tests for faaspy.context — request-scoped logger and request access."""

import logging

import pytest

from faaspy.context import RequestLogger, get_logger, get_request, logger_var, request_var
from faaspy.http.request import Request
from faaspy.server.terminal import SUCCESS


class TestOutsideHandler:
    def test_get_request_raises(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    def test_get_logger_falls_back(self) -> None:
        assert get_logger() is logging.getLogger("faaspy.handler")


class TestInsideHandler:
    def test_values_visible_until_reset(self) -> None:
        request = Request(method="GET", path="/x")
        request_logger = RequestLogger(logging.getLogger("faaspy.handler"), "abc123", "GET", "/x")
        request_token = request_var.set(request)
        logger_token = logger_var.set(request_logger)
        try:
            assert get_request() is request
            assert get_logger() is request_logger
        finally:
            logger_var.reset(logger_token)
            request_var.reset(request_token)
        with pytest.raises(LookupError):
            get_request()


class TestRequestLogger:
    def test_prefix_and_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG)
        request_logger = RequestLogger(logging.getLogger("faaspy.handler"), "r1d2c3", "POST", "/api/a")
        request_logger.warning("careful %s", "now", extra={"user": "ada"})
        record = caplog.records[-1]
        assert record.getMessage() == "[r1d2c3] POST /api/a - careful now"
        assert record.request_id == "r1d2c3"
        assert record.method == "POST"
        assert record.user == "ada"

    def test_success(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG)
        RequestLogger(logging.getLogger("faaspy.handler"), "id", "GET", "/").success("done")
        assert caplog.records[-1].levelno == SUCCESS
