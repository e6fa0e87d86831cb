"""Logging configuration for the calculator and its Streamlit front end."""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Optional

LOG_LEVEL_ENV = "UO_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"

PLAIN_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# Lookup context callers may attach with `extra=`
CONTEXT_FIELDS = ("table", "area", "distance", "category")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any lookup context passed via `extra`."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def resolve_level(level: Optional[str] = None) -> int:
    """Explicit level, else $UO_LOG_LEVEL, else INFO; unknown names fall back to INFO."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Optional[str] = None,
    json_output: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """
    Route the root logger to a single stream handler

    Args:
        level: Level name; see resolve_level for the fallbacks
        json_output: Emit JSONFormatter records instead of plain text
        stream: Destination, stdout by default

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))

    root.handlers = [handler]
    return handler
