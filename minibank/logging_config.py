"""
Logging setup for minibank

Ledger events are logged through log_action, which attaches the action,
the affected resource and a dict of details to the record. JSONFormatter
writes those as one JSON object per line.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

ACTION_FIELDS = ("action", "resource", "extra")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, ledger fields included when set"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in ACTION_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: str = "INFO", log_format: str = "json",
                  logger_name: str = "minibank") -> logging.Logger:
    """
    Attach a single stream handler to the minibank logger

    Safe to call again: earlier handlers are replaced.

    Args:
        level: Level name, unknown names fall back to INFO
        log_format: "json" or "text"
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(log_format))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger


def get_logger(name: str = "minibank") -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               extra: Optional[dict] = None):
    """Log a ledger event, e.g. action="transfer", resource="account:AC100000" """
    fields = {"action": action, "resource": resource, "extra": extra}
    logger.log(
        getattr(logging, level.upper()), message,
        extra={name: value for name, value in fields.items() if value}
    )
