"""
Centralized Logging

Architectural Intent:
- Provides structured JSON logging for CPI boundary diagnostics
- CPI request, response, stderr and log traffic is emitted at DEBUG on the
  "cpiwire.cpi" logger, whose level can be set independently of the package
- Supports configurable log levels via CLI flags (--verbose, --debug)
  or the configured log_level name
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional, Union

TRAFFIC_LOGGER = "cpiwire.cpi"


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def parse_level(level: Union[int, str]) -> int:
    """Resolve a level name such as "debug" or "WARNING" to its number."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    traffic_level: Optional[Union[int, str]] = None,
) -> None:
    """Configure logging for the cpiwire package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.), number or name.
        json_format: If True, use JSON structured output. Otherwise human-readable.
        traffic_level: Level for the CPI traffic logger. None inherits `level`,
            DEBUG shows every request and response without debugging the rest.
    """
    level = parse_level(level)
    root = logging.getLogger("cpiwire")
    root.setLevel(level)
    root.handlers.clear()

    traffic = logging.getLogger(TRAFFIC_LOGGER)
    if traffic_level is None:
        traffic.setLevel(logging.NOTSET)
        handler_level = level
    else:
        traffic_level = parse_level(traffic_level)
        traffic.setLevel(traffic_level)
        handler_level = min(level, traffic_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(handler_level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
