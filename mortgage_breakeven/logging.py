"""Log setup for the breakeven engines.

The engines only ever call ``get_logger``; applications opt into output
with ``setup_logging`` or ``configure_logging``. Only the package logger is
touched, so a host application's root handlers are left alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mortgage_breakeven.config import EngineConfig

PACKAGE_LOGGER = "mortgage_breakeven"

_STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = "INFO", format_type: str = "standard") -> logging.Logger:
    """Send package logs to stdout at ``level`` ("standard" or "json" format).

    Calling it again replaces the handler installed by the previous call.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(_STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, "_breakeven", False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler._breakeven = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger


def configure_logging(config: "EngineConfig") -> logging.Logger:
    return setup_logging(config.log_level, config.log_format)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
