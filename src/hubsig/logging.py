"""
Structured logging using structlog with:
- JSON/console switchable format
- Request context via contextvars
- Signature/secret redaction so digests never reach log sinks
- Safe defaults for Uvicorn

"""

from __future__ import annotations

import datetime
import logging
import logging.config
import re
import sys
from typing import Any, Dict, Iterable, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hubsig.config import get_settings

# ---------------------------------------------------------------------
# Redaction
# ---------------------------------------------------------------------


class SignatureRedactionProcessor:
    """
    Structlog processor that masks anything shaped like a signature header value
    (``sha1=<hex>``, ``sha256=<hex>``) and any field whose name hints at a secret.
    """
    P_SIGNATURE = re.compile(r"\b(sha1|sha256)=[0-9a-fA-F]+\b")
    SENSITIVE_KEYS = ("secret", "signature", "token", "password")

    def __call__(self, logger, method_name, event_dict):
        return {k: self._redact(k, v) for k, v in event_dict.items()}

    def _redact(self, key: str, value: Any) -> Any:
        if any(s in str(key).lower() for s in self.SENSITIVE_KEYS) and key != "event":
            return "***REDACTED***"
        if isinstance(value, dict):
            return {k: self._redact(k, v) for k, v in value.items()}
        if isinstance(value, str):
            return self.P_SIGNATURE.sub(lambda m: f"{m.group(1)}=***", value)
        return value


def add_timestamp(logger, method_name, event_dict):
    # UTC ISO8601 Z
    event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return event_dict


# ---------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------


def bind_request_context(
    *,
    path: Optional[str] = None,
    method: Optional[str] = None,
) -> None:
    """Bind request fields so every event logged while handling it carries them."""
    payload = {k: v for k, v in dict(path=path, method=method).items() if v is not None}
    if payload:
        structlog.contextvars.bind_contextvars(**payload)


def clear_request_context() -> None:
    """Clear all bound contextvars (call at end of request)."""
    structlog.contextvars.clear_contextvars()


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------

def _ensure_log_format(settings) -> str:
    fmt = getattr(settings, "LOG_FORMAT", None)
    if fmt in ("json", "console"):
        return fmt
    return "console" if getattr(settings, "is_dev", False) else "json"


def _level_name_to_int(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging() -> None:
    """Idempotent structured logging configuration."""
    settings = get_settings()
    log_format = _ensure_log_format(settings)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
            "console": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if log_format == "json" else "console",
                "stream": sys.stdout,
            },
        },
        "root": {
            "level": _level_name_to_int(settings.LOG_LEVEL),
            "handlers": ["console"],
        },
        "loggers": {
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }
    logging.config.dictConfig(logging_config)

    processors: Iterable[Any] = [
        structlog.contextvars.merge_contextvars,
        add_timestamp,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        SignatureRedactionProcessor(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        (structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


security_logger = structlog.get_logger("hubsig.security")


def log_security_event(
    event_type: str,
    *,
    details: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> None:
    """Log a gate decision. Callers must not pass secrets or signature values."""
    security_logger.warning(
        "Security event",
        event_type=event_type,
        details=details or {},
        **kwargs,
    )
