from __future__ import annotations

import datetime as dt
import json
import logging
import os
import sys
import uuid
from typing import Any, TextIO

UTC = dt.UTC

try:  # Optional: modern logging via loguru
    from loguru import logger as loguru_logger

    _HAS_LOGURU = True
except Exception:  # pragma: no cover - optional dependency
    loguru_logger = None
    _HAS_LOGURU = False

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_FIELDS = frozenset(
    {
        "args",
        "msg",
        "name",
        "levelno",
        "levelname",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "message",
    }
)

_PERFORMANCE_FIELDS = frozenset({"latency_ms", "processing_time_ms", "duration_ms"})
_RUN_FIELDS = frozenset({"run_id", "item_id", "completed", "total", "status"})


class EnhancedJsonFormatter(logging.Formatter):
    """JSON formatter that groups run-tracking and timing fields."""

    def __init__(self, include_location: bool = True, include_process_info: bool = False):
        super().__init__()
        self.include_location = include_location
        self.include_process_info = include_process_info
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "timestamp": dt.datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "hostname": self.hostname,
        }

        if self.include_location:
            base.update(
                {
                    "module": record.module,
                    "function": record.funcName,
                    "line": record.lineno,
                }
            )

        if self.include_process_info:
            base.update({"process": record.process, "thread": record.thread})

        if record.exc_info:
            base["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields: dict[str, Any] = {}
        performance_fields: dict[str, Any] = {}
        run_fields: dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _STANDARD_FIELDS or key in base:
                continue
            if key in _PERFORMANCE_FIELDS:
                performance_fields[key] = value
            elif key in _RUN_FIELDS:
                run_fields[key] = value
            else:
                extra_fields[key] = value

        if run_fields:
            base["run"] = run_fields
        if performance_fields:
            base["performance"] = performance_fields
        if extra_fields:
            base["extra"] = extra_fields

        if hasattr(record, "correlation_id") or hasattr(record, "cid"):
            base["correlation_id"] = getattr(record, "correlation_id", None) or getattr(
                record, "cid", None
            )

        return json.dumps(
            base, ensure_ascii=False, default=self._json_serializer, separators=(",", ":")
        )

    def _json_serializer(self, obj: Any) -> str:
        if hasattr(obj, "__dict__"):
            return f"<{obj.__class__.__name__}>"
        return str(obj)


def setup_json_logging(
    level: str = "INFO",
    *,
    use_loguru: bool = True,
    log_file: str | None = None,
    max_file_size: str = "10 MB",
    retention: str = "7 days",
    stream: TextIO | None = None,
) -> None:
    """Configure JSON logging for the whole process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_loguru: Route stdlib records through loguru when it is installed
        log_file: Optional log file path for persistent logging
        max_file_size: Rotation size for the file sink (loguru format)
        retention: Retention period for rotated files (loguru format)
        stream: Console stream for log records (defaults to stdout)

    """
    lvl = getattr(logging, level.upper(), logging.INFO)
    console = stream or sys.stdout

    if _HAS_LOGURU and use_loguru:
        loguru_logger.remove()
        loguru_logger.add(console, level=level.upper(), serialize=True, enqueue=True)
        if log_file:
            loguru_logger.add(
                log_file,
                level=level.upper(),
                serialize=True,
                rotation=max_file_size,
                retention=retention,
                enqueue=True,
            )

        class InterceptHandler(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                level_to_use: int | str
                try:
                    level_to_use = loguru_logger.level(record.levelname).name
                except ValueError:
                    level_to_use = record.levelno

                extra = {
                    key: value
                    for key, value in record.__dict__.items()
                    if not key.startswith("_") and key not in _STANDARD_FIELDS
                }
                loguru_logger.bind(**extra).opt(depth=6, exception=record.exc_info).log(
                    level_to_use, record.getMessage()
                )

        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(lvl)
        root.addHandler(InterceptHandler())
        loguru_logger.info("json_logging_initialized", backend="loguru", level=level)
        return

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()

    console_handler = logging.StreamHandler(console)
    console_handler.setFormatter(EnhancedJsonFormatter())
    root.addHandler(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=3)
        file_handler.setFormatter(EnhancedJsonFormatter())
        root.addHandler(file_handler)

    logging.getLogger(__name__).info(
        "json_logging_initialized", extra={"backend": "stdlib", "level": level}
    )


def generate_correlation_id() -> str:
    """Generate a short correlation ID for tracing one batch run across logs."""
    return uuid.uuid4().hex[:12]


def truncate_log_content(content: str | None, max_length: int = 200) -> str | None:
    """Truncate large content (titles, generated descriptions) before logging it."""
    if not content or len(content) <= max_length:
        return content
    return content[:max_length] + "... [truncated]"


__all__ = [
    "EnhancedJsonFormatter",
    "generate_correlation_id",
    "setup_json_logging",
    "truncate_log_content",
]
