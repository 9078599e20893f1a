# src/crm/tests/test_logging/test_middleware_integration.py
import json
import logging

from fastapi import FastAPI
from starlette.testclient import TestClient

from crm.core.logging.builder import setup_logging
from crm.core.logging.middleware import REQUEST_ID_HEADER, RequestIDMiddleware, resolve_request_id


class StdoutJsonSettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = True
    LOG_DIR = None
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "production"
    ENABLE_SQL_LOGGING = False


def json_lines(text: str) -> list[dict]:
    records = []
    for line in text.strip().splitlines():
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return records


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("crm.test").info("handling hello", extra={"password": "hunter22"})
        return {"ok": True}

    return app


def test_request_id_in_response_and_logs(capsys):
    setup_logging(StdoutJsonSettings())

    resp = TestClient(make_app()).get("/hello")
    assert resp.status_code == 200

    rid = resp.headers.get(REQUEST_ID_HEADER)
    assert rid is not None

    records = json_lines(capsys.readouterr().err)
    assert records, "Expected JSON log lines on stderr but nothing was captured."

    handled = [r for r in records if r["message"] == "handling hello"]
    assert handled and handled[0]["request_id"] == rid
    # credentials in extras never reach the output
    assert handled[0]["password"] == "***REDACTED***"

    completed = [r for r in records if r["message"] == "http.request.completed"]
    assert completed and completed[0]["request_id"] == rid
    assert completed[0]["status_code"] == 200
    assert completed[0]["path"] == "/hello"


def test_incoming_request_id_is_kept():
    resp = TestClient(make_app()).get("/hello", headers={REQUEST_ID_HEADER: "client-42"})
    assert resp.headers[REQUEST_ID_HEADER] == "client-42"


def test_resolve_request_id_rejects_unsafe_values():
    assert resolve_request_id("abc.DEF_1-2") == "abc.DEF_1-2"
    assert resolve_request_id("has space") != "has space"
    assert resolve_request_id("x" * 129) != "x" * 129
    assert resolve_request_id(None)
