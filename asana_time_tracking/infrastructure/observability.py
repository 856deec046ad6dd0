"""Structured Logging — JSON formatter and setup for client observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, retry_count, error_code) surfaced when present
    - Access tokens are never passed to the logger, so no redaction happens here
    - JSON format by default, human-readable when fmt != "json"
    - setup_logging owns one PackageLogHandler per logger and disables propagation to root
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "method", "path", "status_code", "retry_count",
    "max_retries", "retry_after_seconds", "error_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class PackageLogHandler(logging.StreamHandler):
    """Stream handler owned by setup_logging; found again by type on reconfiguration."""


def setup_logging(level: str = "INFO", fmt: str = "json", logger_name: str = "asana_time_tracking"):
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler instead of stacking a new one.
    Propagation is switched off so records are not printed a second time by
    handlers the host application put on the root logger.
    """
    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if isinstance(existing, PackageLogHandler):
            logger.removeHandler(existing)
    handler = PackageLogHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
