"""
community_hub.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` (JSON lines, or a console renderer for local dev).
- Keep credentials out of log lines.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Event keys whose values never reach a log sink.
SENSITIVE_KEYS = frozenset({"password", "password_hash", "token", "authorization", "jwt_secret"})

# Library loggers that are chatty at INFO (per-connection / per-statement lines).
_QUIET_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "httpx", "httpcore")


def configure_logging(*, service_name: str, level: str, json: bool = True) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    # force: the app factory may run more than once per process (tests, reloads).
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer: Any = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            _redact_sensitive,
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _redact_sensitive(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata (request id, user id) is bound via contextvars in
# `observability.middleware` and `auth.deps`.
