"""Logging setup for syskit.

Library modules log through ``get_logger``; nothing is printed until an
application calls ``configure_logging``. Collector loggers carry a
``domain`` context field, which the structured format appends to each line.
"""

import logging
import sys
from typing import IO, Any

LOGGER_NAME = "syskit"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as sorted key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{message} {pairs}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Send syskit log records to a stream (standard error by default).

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Timestamped lines with context fields appended
        stream: Destination stream

    Returns:
        The configured ``syskit`` logger

    Raises:
        ValueError: If the level name is unknown
    """
    level_value = logging.getLevelName(level.upper())
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")

    if format_string is None:
        format_string = STRUCTURED_FORMAT if structured else DEFAULT_FORMAT
    formatter_class = StructuredFormatter if structured else logging.Formatter

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter_class(format_string))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``syskit`` hierarchy ('shell' becomes 'syskit.shell')."""
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Attaches fixed context fields to every record it logs.

    Fields passed per call as ``extra={"context": {...}}`` are merged over
    the fixed ones.
    """

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Logger whose records carry ``context`` (e.g. ``domain="security"``)."""
    return ContextAdapter(get_logger(name), context)
