"""Logging setup for editmend.

Log output goes to stderr (or a file) so that stdout carries only command
output, such as the corrected edit printed by the CLI. Records can be
written as text or as one JSON object per line.
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
import sys
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "asyncio")

# Attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class StructuredJSONFormatter(logging.Formatter):
    """Formats each record as a JSON object.

    Shape::

        {"level": "WARNING", "message": "...", "timestamp": "<ISO 8601, UTC>",
         "context": {"logger_name": ..., "module": ..., "function": ...,
                     "line": ..., <extra fields>}}
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            context["error_type"] = exc_type.__name__ if exc_type else None
            context["error_message"] = str(exc) if exc else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        context.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "context": context,
            },
            default=str,
        )


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure the root logger, replacing any earlier configuration.

    Args:
        level: Level name, case-insensitive
        format_string: Text format (ignored when structured)
        filename: Log file; stderr if None
        structured: Emit JSON lines via StructuredJSONFormatter

    Example:
        >>> configure_logging(level="DEBUG", structured=True, filename="editmend.jsonl")
    """
    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stderr)
    )
    handler.setFormatter(
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_FORMAT)
    )

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)
