"""
Logging for the scorer and its API.

The engine logs one DEBUG line per analyzed email and the API logs one INFO
line per request. Only the fields named in LOGGED_FIELDS leave a record, so
subject and body text never reach the log output even when a caller passes
them through ``extra``.

Environment:
    SPAMSCORE_LOG_LEVEL   DEBUG | INFO | WARNING | ... (default INFO)
    SPAMSCORE_LOG_FORMAT  json | text (default json)

Usage:
    from spamscore.logging import get_logger
    logger = get_logger("analyzer")
    logger.debug("Email analyzed", extra={"combined_score": 12.5, "tier": "critical"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO


ROOT_LOGGER = "spamscore"

# Scores, counts and request metadata. Never message content.
LOGGED_FIELDS = (
    "combined_score", "tier", "matches_count", "text_length", "items",
    "duration_ms", "status_code", "method", "path", "error",
)


def _fields(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in LOGGED_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, timestamped when the record was created."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_fields(record),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Console format: the message followed by its fields as key=value."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a single handler to the spamscore root logger.

    Arguments override SPAMSCORE_LOG_LEVEL and SPAMSCORE_LOG_FORMAT. The
    calibration CLI passes stream=sys.stderr so its --json output on stdout
    stays parseable. Calling this again replaces the previous handler.
    """
    level = (level or os.getenv("SPAMSCORE_LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("SPAMSCORE_LOG_FORMAT", "json")).lower()

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)

    # uvicorn's access log repeats what the request middleware already records
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Named logger under the spamscore namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
