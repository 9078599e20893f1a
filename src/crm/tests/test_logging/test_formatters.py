# src/crm/tests/test_logging/test_formatters.py
import json
import logging
import sys

from crm.core.logging.formatters import ColorFormatter, JsonFormatter, record_extras


def make_record():
    # create a LogRecord that simulates formatting with args
    return logging.LogRecord("crm", logging.INFO, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    # attach an extra (simulate extra param)
    rec.custom = "value"
    rec.request_id = "req-1"
    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "crm"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["custom"] == "value"
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    # non-serializable obj should be stringified
    assert data["obj"] == "<X>"


def test_json_formatter_extra_cannot_clobber_core_fields():
    rec = make_record()
    rec.service = "spoofed"
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    assert data["service"] == "svc"


def test_json_formatter_exception():
    try:
        raise ValueError("bad value")
    except ValueError:
        rec = logging.LogRecord("crm", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter(env="dev").format(rec))
    assert "ValueError: bad value" in data["exc_info"]


def test_record_extras_only_returns_extras():
    rec = make_record()
    rec.model = "Activity"
    rec.request_id = "req-1"
    assert record_extras(rec) == {"model": "Activity"}


def test_color_formatter_appends_extras():
    rec = make_record()
    rec.request_id = "req-9"
    rec.model = "Invoice"
    line = ColorFormatter().format(rec)

    assert "hello tester" in line
    assert "req-9" in line
    assert line.endswith("model=Invoice")
    assert "\033[32m" in line  # INFO is green
