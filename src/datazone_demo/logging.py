"""Structured logging with secret redaction and domain tagging."""

import json
import logging
import re
from typing import Any, Dict, Optional

ROOT_LOGGER = "datazone_demo"


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging with secret redaction."""

    def __init__(self, redact_secrets: bool = False):
        super().__init__()
        self.redact_secrets = redact_secrets
        # Patterns for common secret fields
        self.secret_patterns = [
            r'(secret_?access_?key["\']?\s*[:=]\s*["\']?)([^"\',\s]+)',
            r'(session_?token["\']?\s*[:=]\s*["\']?)([^"\',\s]+)',
            r'(password["\']?\s*[:=]\s*["\']?)([^"\',\s]+)',
            r'(token["\']?\s*[:=]\s*["\']?)([^"\',\s]+)',
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with optional secret redaction."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "domain_id"):
            log_data["domain_id"] = record.domain_id

        if hasattr(record, "event_type"):
            log_data["event_type"] = record.event_type

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_str = json.dumps(log_data, default=str)
        if self.redact_secrets:
            for pattern in self.secret_patterns:
                log_str = re.sub(pattern, r"\1[REDACTED]", log_str, flags=re.IGNORECASE)
        return log_str


def _install_domain_factory(domain_id: str) -> None:
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.domain_id = domain_id
        return record

    logging.setLogRecordFactory(record_factory)


def setup_logging(
    level: str = "INFO",
    redact_secrets: bool = False,
    domain_id: Optional[str] = None,
) -> logging.Logger:
    """Set up structured JSON logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        redact_secrets: Whether to redact secrets in logs
        domain_id: Optional DataZone domain id to include in all logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJSONFormatter(redact_secrets=redact_secrets))
    logger.addHandler(handler)

    if domain_id:
        _install_domain_factory(domain_id)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Optional logger name (defaults to 'datazone_demo')

    Returns:
        Logger instance
    """
    return logging.getLogger(name or ROOT_LOGGER)
