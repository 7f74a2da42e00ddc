"""Structured logging configuration"""
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict

# Context attributes copied from `extra={...}` into the JSON payload
_EXTRA_FIELDS = (
    "request_id",
    "action",
    "char_id",
    "admin",
    "srp_request_id",
    "killmail_id",
    "path",
    "method",
    "client",
    "upstream",
)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """Setup structured logging (JSON by default, plain text on request)"""
    logger = logging.getLogger("eve_srp")
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    return logger


# Global logger instance
logger = setup_logging()
