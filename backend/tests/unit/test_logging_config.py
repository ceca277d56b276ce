"""
Unit tests for log formatting and request id propagation.
"""

import json
import logging

import pytest
from flask import Flask, g
from flask_login import LoginManager

from hms.core.logging_config import (
    REQUEST_ID_HEADER,
    ConsoleFormatter,
    JSONFormatter,
    setup_logging,
)


def _record(msg="Room claimed", context=None, level=logging.INFO):
    record = logging.LogRecord("hms.test", level, __file__, 10, msg, (), None)
    if context is not None:
        record.context = context
    return record


@pytest.fixture
def logged_app():
    app = Flask(__name__)
    LoginManager(app).request_loader(lambda request: None)
    setup_logging(app=app, log_level="DEBUG", log_to_file=False)

    @app.route("/ping")
    def ping():
        logging.getLogger("hms.test").info("inside request")
        return "pong"

    return app


class TestJSONFormatter:
    def test_context_is_nested(self):
        line = JSONFormatter().format(_record(context={"room_id": 12}))

        payload = json.loads(line)
        assert payload["message"] == "Room claimed"
        assert payload["level"] == "INFO"
        assert payload["context"] == {"room_id": 12}
        assert "request_id" not in payload

    def test_request_id_inside_request(self, logged_app):
        with logged_app.test_request_context("/ping"):
            g.request_id = "abc123"
            payload = json.loads(JSONFormatter().format(_record()))

        assert payload["request_id"] == "abc123"


class TestConsoleFormatter:
    def test_context_appended(self):
        formatter = ConsoleFormatter("%(levelname)s %(message)s")
        line = formatter.format(_record(context={"room_id": 12, "kind": "clinic"}))

        assert line.endswith("Room claimed [room_id=12 kind=clinic]")

    def test_levelname_restored(self):
        record = _record(level=logging.WARNING)
        ConsoleFormatter("%(levelname)s %(message)s").format(record)
        assert record.levelname == "WARNING"


class TestRequestIds:
    def test_generated_when_absent(self, logged_app):
        response = logged_app.test_client().get("/ping")

        request_id = response.headers[REQUEST_ID_HEADER]
        assert len(request_id) == 32

    def test_inbound_id_is_echoed(self, logged_app):
        response = logged_app.test_client().get(
            "/ping", headers={REQUEST_ID_HEADER: "gateway-7"}
        )
        assert response.headers[REQUEST_ID_HEADER] == "gateway-7"

    def test_inbound_id_is_truncated(self, logged_app):
        response = logged_app.test_client().get(
            "/ping", headers={REQUEST_ID_HEADER: "x" * 500}
        )
        assert response.headers[REQUEST_ID_HEADER] == "x" * 64
