"""Structured logging configuration for the diagnostic service."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Session-scoped records carry their session id
        session_id = getattr(record, "session_id", None)
        if session_id:
            log_data["session_id"] = session_id

        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console_format: str | None = None,
) -> None:
    """
    Configure root logging for the service.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Rotating log file. Defaults to LOG_FILE env var or 04_logs/app.log.
        console_format: "json" or "text" for stdout. Defaults to LOG_FORMAT env var or json.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or os.getenv("LOG_FILE") or str(DEFAULT_LOG_PATH)
    console_format = (console_format or os.getenv("LOG_FORMAT", "json")).lower()

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "diagnostic.logging_config.JSONFormatter"},
                "text": {"format": TEXT_FORMAT},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,  # 10 MB
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "text" if console_format == "text" else "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                # SDK request logs are noisy at INFO
                "httpx": {"level": "WARNING"},
                "anthropic": {"level": "WARNING"},
            },
            "root": {
                "level": log_level,
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Return the module logger for `name`."""
    return logging.getLogger(name)


class SessionLoggerAdapter(logging.LoggerAdapter):
    """Attach a session id to every record."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("session_id", self.extra["session_id"])
        return msg, kwargs


def get_session_logger(name: str, session_id: str) -> SessionLoggerAdapter:
    """Return a logger that tags records with `session_id`."""
    return SessionLoggerAdapter(logging.getLogger(name), {"session_id": session_id})
