"""Structured logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("asyncio", "urllib3")


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    silence_noisy_loggers: bool = True,
) -> None:
    """Configure the root logger with a single stdout handler."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    if silence_noisy_loggers:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """Structured logger for dispatch events."""

    def __init__(self, name: str = __name__):
        """Initialize structured logger."""
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        event: str,
        query_id: str,
        duration_ms: float | None = None,
        level: int = logging.INFO,
        **fields: Any,
    ) -> None:
        """Log a terminal event for one query."""
        log_data: dict[str, Any] = {
            "event": event,
            "query_id": query_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if duration_ms is not None:
            log_data["duration_ms"] = round(duration_ms, 2)
        if fields:
            log_data.update(fields)

        self.logger.log(level, json.dumps(log_data, ensure_ascii=False, default=str))

    def log_error(
        self,
        event: str,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log an error with context."""
        log_data: dict[str, Any] = {
            "event": event,
            "error": str(error),
            "error_type": type(error).__name__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if context:
            log_data["context"] = context

        self.logger.error(json.dumps(log_data, ensure_ascii=False, default=str), exc_info=True)
