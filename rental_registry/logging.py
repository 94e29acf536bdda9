"""Logging setup for rental-registry.

Registry log calls attach the affected identifiers through ``extra``::

    logger.info("Issued %s", prop, extra={"tenant_id": "TH.2026.07"})

The JSON format lifts those identifiers into top-level fields so rentals
can be traced per tenant or per property.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from rental_registry.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")
STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Identifier fields copied from LogRecord attributes into JSON output
CONTEXT_FIELDS = ("tenant_id", "property_code", "event_type")

QUIET_LOGGERS = ("confluent_kafka", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure the root logger and the ``rental_registry`` loggers.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        ``"standard"`` for pipe-separated text or ``"json"`` for one JSON
        object per line.

    Raises
    ------
    ConfigurationError
        If ``format_type`` is not a known format.
    """
    if format_type not in LOG_FORMATS:
        raise ConfigurationError(
            f"Log format must be one of {', '.join(LOG_FORMATS)}, got {format_type!r}"
        )
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("rental_registry").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render records as JSON with registry identifiers as fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = str(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
