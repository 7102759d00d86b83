"""
Structured logging and correlation IDs.

- structlog configuration with JSON/console rendering
- request_id binding via contextvars
- sensitive data redaction
- emit_event helper routing to severity methods
"""
from __future__ import annotations

import logging
import os
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Dict

import structlog

SCHEMA_VERSION = "1.0"

LOGGER = logging.getLogger(__name__)

# Lightweight in-memory buffer of recent error events
_RECENT_ERRORS: deque = deque(maxlen=200)


def _redact_sensitive(logger, method, event_dict: Dict[str, Any]):
    sensitive_keys = {"token", "password", "secret", "authorization", "cookie"}
    for key in list(event_dict.keys()):
        if any(s in str(key).lower() for s in sensitive_keys):
            event_dict[key] = "[REDACTED]"
    return event_dict


def _add_schema_version(logger, method, event_dict: Dict[str, Any]):
    event_dict.setdefault("schema_version", SCHEMA_VERSION)
    return event_dict


def _environment_adder(environment: str | None):
    def _add_environment(logger, method, event_dict: Dict[str, Any]):
        if environment:
            event_dict.setdefault("environment", environment)
        return event_dict

    return _add_environment


def _choose_renderer():
    debug = str(os.getenv("DEBUG", "")).lower() in {"1", "true", "yes"}
    fmt = (os.getenv("LOG_FORMAT") or "").lower().strip()
    if debug or fmt == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_structlog_logging(min_level: str | int = "INFO", environment: str | None = None) -> None:
    level = logging.getLevelName(min_level) if isinstance(min_level, str) else int(min_level)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {min_level!r}")

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, handlers=[logging.StreamHandler()])
    else:
        logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _redact_sensitive,
            _add_schema_version,
            _environment_adder(environment),
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _choose_renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def generate_request_id() -> str:
    return str(uuid.uuid4())[:8]


def bind_request_id(request_id: str) -> None:
    structlog.contextvars.bind_contextvars(request_id=request_id)


def get_request_id(default: str = "") -> str:
    ctx = structlog.contextvars.get_contextvars()
    return str(ctx.get("request_id") or default)


def emit_event(event: str, severity: str = "info", **fields: Any) -> None:
    logger = structlog.get_logger()
    fields.setdefault("event", event)

    if severity in {"error", "critical"}:
        request_id = str(fields.get("request_id") or get_request_id()).strip()
        if request_id and "request_id" not in fields:
            fields["request_id"] = request_id
        _RECENT_ERRORS.append({
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": str(event),
            "error": str(fields.get("error") or fields.get("message") or ""),
            "operation": str(fields.get("operation") or ""),
        })
        logger.error(**fields)
    elif severity in {"warn", "warning"}:
        logger.warning(**fields)
    elif severity == "debug":
        logger.debug(**fields)
    else:
        logger.info(**fields)


def get_recent_errors(limit: int = 10) -> list[Dict[str, Any]]:
    if limit <= 0:
        return []
    return list(_RECENT_ERRORS)[-limit:]
