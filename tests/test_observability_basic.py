import json

import pytest
import structlog

import observability as obs


def test_generate_request_id_length_and_uniqueness():
    a = obs.generate_request_id()
    b = obs.generate_request_id()
    assert len(a) == 8 and len(b) == 8
    assert a != b


def test_bind_request_id_round_trip():
    structlog.contextvars.clear_contextvars()
    try:
        obs.bind_request_id("abc12345")
        assert obs.get_request_id() == "abc12345"
    finally:
        structlog.contextvars.clear_contextvars()
    assert obs.get_request_id("none") == "none"


def test_emit_event_routes_to_severity_methods(monkeypatch):
    calls = {"info": [], "warning": [], "error": [], "debug": []}

    class _Logger:
        def info(self, **fields):
            calls["info"].append(fields)

        def warning(self, **fields):
            calls["warning"].append(fields)

        def error(self, **fields):
            calls["error"].append(fields)

        def debug(self, **fields):
            calls["debug"].append(fields)

    monkeypatch.setattr(obs.structlog, "get_logger", lambda: _Logger())

    obs.emit_event("evt_info", severity="info", a=1)
    obs.emit_event("evt_warn", severity="warn", b=2)
    obs.emit_event("evt_error", severity="error", c=3)
    obs.emit_event("evt_debug", severity="debug")

    assert calls["info"][0]["event"] == "evt_info"
    assert calls["warning"][0]["event"] == "evt_warn"
    assert calls["error"][0]["event"] == "evt_error"
    assert calls["debug"][0]["event"] == "evt_debug"


def test_error_events_are_buffered(monkeypatch):
    monkeypatch.setattr(obs.structlog, "get_logger", lambda: type("L", (), {"error": lambda self, **f: None})())
    obs.emit_event("unit_test_error", severity="error", operation="op", error="boom")
    recent = obs.get_recent_errors(limit=5)
    assert recent[-1]["event"] == "unit_test_error"
    assert recent[-1]["error"] == "boom"
    assert obs.get_recent_errors(limit=0) == []


def test_redact_sensitive_hides_tokens():
    out = obs._redact_sensitive(None, None, {"token": "x", "Password": "y", "normal": "z"})
    assert out["token"] == "[REDACTED]"
    assert out["Password"] == "[REDACTED]"
    assert out["normal"] == "z"


def test_setup_structlog_logging_renders_json(monkeypatch, capsys):
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    obs.setup_structlog_logging("INFO")

    obs.emit_event("redaction_check", severity="info", secret="s3cr3t", value=1)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "redaction_check"
    assert payload["secret"] == "[REDACTED]"
    assert payload["schema_version"] == obs.SCHEMA_VERSION
    assert payload["level"] == "info"


def test_setup_structlog_logging_console_renderer(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "console")
    obs.setup_structlog_logging("WARNING")
    structlog.get_logger().info("redaction_check")


def test_setup_structlog_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        obs.setup_structlog_logging("LOUD")
