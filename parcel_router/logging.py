"""Structured logging configuration for parcel-router."""

import logging
import sys
from typing import TYPE_CHECKING, Any

from parcel_router.exceptions import ConfigurationError

if TYPE_CHECKING:
    from parcel_router.config import ParcelRouterConfig

# Routing identifiers services attach through ``extra=``; JSON output lifts
# them to top-level keys so log lines can be filtered per container or parcel.
CONTEXT_FIELDS = ("container_id", "parcel_id", "department", "rule_id")

LOG_FORMATS = ("standard", "json")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for parcel-router.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names fall
        back to INFO.
    format_type : str
        ``"standard"`` for one human-readable line per record, ``"json"`` for
        one JSON object per record.

    Raises
    ------
    ConfigurationError
        If ``format_type`` is not a known format.
    """
    if format_type not in LOG_FORMATS:
        raise ConfigurationError(f"Unknown log format {format_type!r}; expected one of {LOG_FORMATS}")
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        # Stores are shared across threads, so the thread name is part of every line
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("parcel_router").setLevel(log_level)

    # Faker logs locale resolution at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def configure_logging(config: "ParcelRouterConfig") -> None:
    """Apply ``config.log_level`` and ``config.log_format``."""
    setup_logging(config.log_level, config.log_format)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with routing identifiers as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    return logging.getLogger(name)
