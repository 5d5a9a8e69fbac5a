"""Structured logging configuration for the chemotaxis simulator.

Configurable via environment variables:
- CHEMOTAXIS_LOG_LEVEL (or LOG_LEVEL): DEBUG, INFO, WARNING, ERROR. Default: INFO
- CHEMOTAXIS_LOG_FORMAT (or LOG_FORMAT): 'text' or 'json'. Default: text

Usage:
    from chemotaxis.logging_config import configure_logging
    configure_logging()  # Call once at startup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import IO, Any, ClassVar

NAMESPACE = "chemotaxis"

# Attributes every LogRecord carries; anything else was passed via extra=
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "msecs",
        "relativeCreated",
        "taskName",
    }
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _short_name(name: str) -> str:
    prefix = NAMESPACE + "."
    return name[len(prefix) :] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """JSON lines formatter; extra= fields (e.g. tick) land under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Text formatter: TIMESTAMP LEVEL [LOGGER] MESSAGE.

    DEBUG and ERROR lines also carry file:line.
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold red
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = True, stream: IO[str] | None = None) -> None:
        super().__init__()
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname

        if self.use_colors:
            level_str = f"{self.LEVEL_COLORS.get(level, '')}{level:8s}{self.RESET}"
        else:
            level_str = f"{level:8s}"

        parts = [f"{timestamp} {level_str} [{_short_name(record.name)}] {record.getMessage()}"]

        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            parts.append(f" ({record.filename}:{record.lineno})")

        if record.exc_info:
            parts.append(f"\n{self.formatException(record.exc_info)}")

        return "".join(parts)


def _env(name: str, default: str) -> str:
    return os.environ.get(f"CHEMOTAXIS_{name}", os.environ.get(name, default))


def get_log_level() -> int:
    """Log level from CHEMOTAXIS_LOG_LEVEL / LOG_LEVEL; unknown names fall back to INFO."""
    return _LEVELS.get(_env("LOG_LEVEL", "INFO").upper(), logging.INFO)


def get_log_format() -> str:
    """Log format from CHEMOTAXIS_LOG_FORMAT / LOG_FORMAT ('text' or 'json')."""
    format_name = _env("LOG_FORMAT", "text").lower()
    if format_name not in ("text", "json"):
        return "text"
    return format_name


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    use_colors: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Configure the chemotaxis logger namespace.

    Should be called once at startup before any logging.

    Args:
        level: Log level. If None, read from the environment.
        format_type: 'text' or 'json'. If None, read from the environment.
        use_colors: Colorize text output when the stream is a TTY.
        stream: Destination stream. Defaults to stderr.
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()
    if stream is None:
        stream = sys.stderr

    handler = logging.StreamHandler(stream)
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(use_colors=use_colors, stream=stream))

    root_logger = logging.getLogger(NAMESPACE)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False

    # Route the server's request log through the same handler
    for name in ("uvicorn.error", "uvicorn.access"):
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.setLevel(level)
        server_logger.propagate = False

    root_logger.debug(
        "Logging configured: level=%s, format=%s",
        logging.getLevelName(level),
        format_type,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the chemotaxis namespace."""
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
