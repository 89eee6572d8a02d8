from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

# Context variable for the id of the request being analyzed
_request_id: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Get the current request ID."""
    return _request_id.get()


def set_request_id(rid: Optional[str] = None) -> str:
    """Set a request ID for tracing one analysis through the logs.

    Args:
        rid: Request ID to set. If None, generates a new UUID.

    Returns:
        The request ID that was set.
    """
    if rid is None:
        rid = str(uuid.uuid4())[:8]
    _request_id.set(rid)
    return rid


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter for production use."""

    extra_fields = (
        "reason",
        "error",
        "error_type",
        "sentiment",
        "confidence",
        "sentence_count",
        "text_length",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = get_request_id()
        if rid:
            log_data["request_id"] = rid

        for key in self.extra_fields:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ContextFilter(logging.Filter):
    """Filter that adds the request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Set up logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, use JSON structured format (for production)
        log_file: Optional file path to write logs to

    Examples:
        # Development with rich console output
        setup_logging("DEBUG")

        # Production with JSON output
        setup_logging("INFO", json_output=True)
    """
    if os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes"):
        json_output = True

    root = logging.getLogger()
    root.setLevel(level)

    root.handlers = []

    if json_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))

    console_handler.addFilter(ContextFilter())
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        file_handler.addFilter(ContextFilter())
        root.addHandler(file_handler)

    # Reduce noise from the HTTP stack used by the LLM classifier
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a package logger by short name (e.g. "guard", "service")."""
    return logging.getLogger(f"sentiment_analyzer.{name}")


def log_rejection(
    logger: logging.Logger,
    reason: str,
    error: Exception,
    level: int = logging.WARNING,
    **context: Any,
) -> None:
    """Log a rejected or failed analysis with structured context.

    The full error detail only ever goes to the log; callers must not echo
    it back to whoever submitted the text.

    Args:
        logger: Logger instance
        reason: Short machine-friendly reason (e.g. "suspicious_content")
        error: Exception that caused the rejection
        level: Log level for the record
        **context: Additional fields (text_length, ...)
    """
    if not logger.isEnabledFor(level):
        return

    extra = {"reason": reason, "error": str(error), "error_type": type(error).__name__}
    extra.update(context)

    record = logger.makeRecord(
        logger.name,
        level,
        "(rejection)",
        0,
        f"[{reason.upper()}] {error}",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)

    logger.handle(record)
