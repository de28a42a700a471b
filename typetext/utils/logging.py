"""Structured logging infrastructure for the practice text generator."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Context variable for practice session tracking
_session_id: ContextVar[Optional[str]] = ContextVar("session_id", default=None)


def get_session_id() -> Optional[str]:
    """Get the current practice session ID."""
    return _session_id.get()


def set_session_id(session_id: Optional[str] = None) -> str:
    """Set a new session ID, generating one if not provided."""
    if session_id is None:
        session_id = str(uuid.uuid4())[:8]
    _session_id.set(session_id)
    return session_id


class StructuredFormatter(logging.Formatter):
    """JSON-formatted log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        session_id = get_session_id()
        if session_id:
            log_data["session_id"] = session_id

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class HumanFormatter(logging.Formatter):
    """Human-readable log output for the terminal."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        session_id = get_session_id()
        session_str = f"[{session_id}] " if session_id else ""

        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname:8}{self.RESET}"

        message = record.getMessage()

        extra_str = ""
        if hasattr(record, "extra_data") and record.extra_data:
            extra_items = [f"{k}={v}" for k, v in record.extra_data.items()]
            extra_str = f" | {', '.join(extra_items)}"

        return f"{level} {session_str}{record.name}: {message}{extra_str}"


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that supports structured extra data."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = {**self.extra, **kwargs.pop("extra_data", {})}

        extra = kwargs.get("extra", {})
        extra["extra_data"] = extra_data
        kwargs["extra"] = extra

        return msg, kwargs

    def with_context(self, **context) -> "ContextLogger":
        """Create a new logger with additional default context."""
        new_extra = {**self.extra, **context}
        return ContextLogger(self.logger, new_extra)


def get_logger(name: str) -> ContextLogger:
    """Get a structured logger for the given name."""
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None
) -> None:
    """Set up logging configuration.

    Logs go to stderr so that generated practice text on stdout stays clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise human-readable
        log_file: Optional file path for logging output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        # Always use JSON format for file logs
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)


def log_trie_build(
    logger: ContextLogger,
    num_words: int,
    nodes_before: int,
    nodes_after: int,
    duration_ms: int,
) -> None:
    """Log a completed trie build (insertion plus compression)."""
    extra = {
        "num_words": num_words,
        "nodes_before": nodes_before,
        "nodes_after": nodes_after,
        "duration_ms": duration_ms,
    }

    if num_words == 0:
        logger.warning("Built trie from an empty corpus", extra_data=extra)
        return

    logger.info(
        f"Trie built: {num_words} words, {nodes_before} -> {nodes_after} nodes "
        f"in {duration_ms}ms",
        extra_data=extra
    )
