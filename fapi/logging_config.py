"""Structured logging for the client (JSON and text formatters)."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from fapi.config import settings
from fapi.request_context import get_request_id

# Fields the dispatcher attaches to its records via ``extra``.
REQUEST_FIELDS: tuple[str, ...] = (
    "method",
    "target",
    "status_code",
    "elapsed_ms",
    "ratelimit_reset",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the request fields lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for name in REQUEST_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``2024-01-01 12:00:00 DEBUG    [1a2b3c4d5e6f] fapi.client - GET /pathlist``"""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(rid)s%(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        request_id = get_request_id()
        record.rid = f"[{request_id[:12]}] " if request_id else ""
        return super().format(record)


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    logger_name: str = "fapi",
) -> logging.Logger:
    """Attach a stderr handler to the ``fapi`` logger.

    Level and format default to ``FAPI_LOG_LEVEL`` / ``FAPI_LOG_FORMAT``.
    Calling it again replaces the handler instead of stacking another one.
    """
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    return logger
