"""Centralized logging configuration for pamsched.

Loggers live under the ``pamsched`` namespace and are configured either
programmatically through :func:`configure_logging` or through environment
variables. Scheduling itself is pure, so logging is limited to DEBUG summaries
of generated schedules and batch-level timing and failure reports.
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "pamsched"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_LOG_LEVEL = "PAMSCHED_LOG_LEVEL"
ENV_LOG_FILE = "PAMSCHED_LOG_FILE"
ENV_LOG_FORMAT = "PAMSCHED_LOG_FORMAT"
ENV_STRUCTURED_LOGS = "PAMSCHED_STRUCTURED_LOGS"
ENV_PERF_LOG_LEVEL = "PAMSCHED_PERF_LOG_LEVEL"

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}


def _resolve_level(level: str | None, env_var: str = ENV_LOG_LEVEL, default: str = DEFAULT_LOG_LEVEL) -> int:
    name = level or os.getenv(env_var) or default
    return getattr(logging, name.upper(), logging.INFO)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


class StructuredFormatter(logging.Formatter):
    """Formatter that renders each record as one JSON object per line.

    Fields passed through ``extra`` (for example ``contract_id`` or
    ``num_events``) are emitted as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_FIELDS and key not in payload:
                payload[key] = value

        return json.dumps(payload, default=str)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Return a logger in the pamsched namespace.

    Loggers obtained here propagate to the ``pamsched`` root logger, which
    owns the handlers installed by :func:`configure_logging`.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Optional level override (DEBUG, INFO, ...)

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Generated schedule", extra={"contract_id": "PAM-001"})
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_resolve_level(level))
    return logger


def configure_logging(
    level: str | None = None,
    log_file: str | None = None,
    console: bool = True,
    structured: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure handlers for the whole pamsched package.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Logging level. Defaults to ``PAMSCHED_LOG_LEVEL`` or INFO.
        log_file: Path of a rotating log file. Defaults to ``PAMSCHED_LOG_FILE``;
                  no file handler is installed when neither is given.
        console: Whether to log to stdout
        structured: Emit JSON lines. ``PAMSCHED_STRUCTURED_LOGS`` also enables it.
        max_bytes: Size at which the log file is rotated
        backup_count: Number of rotated files to keep

    Example:
        >>> configure_logging(level="DEBUG", structured=True)
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()

    log_level = _resolve_level(level)
    logger.setLevel(log_level)

    formatter: logging.Formatter
    if structured or _env_flag(ENV_STRUCTURED_LOGS):
        formatter = StructuredFormatter(datefmt=DEFAULT_DATE_FORMAT)
    else:
        formatter = logging.Formatter(
            os.getenv(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT), datefmt=DEFAULT_DATE_FORMAT
        )

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    log_file_path = log_file or os.getenv(ENV_LOG_FILE)
    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False


def get_performance_logger(name: str) -> logging.Logger:
    """Return a logger for timing information.

    Performance loggers sit under ``pamsched.performance`` and default to
    DEBUG, controlled separately through ``PAMSCHED_PERF_LOG_LEVEL``.

    Example:
        >>> perf_logger = get_performance_logger("engine.batch")
        >>> perf_logger.debug("Portfolio scheduled", extra={"duration_ms": 12.5})
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.performance.{name}")
    logger.setLevel(_resolve_level(None, ENV_PERF_LOG_LEVEL, "DEBUG"))
    return logger


def disable_logging() -> None:
    """Silence all pamsched logging (useful in tests and embedding applications)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Sensible defaults without explicit configuration
if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
    configure_logging()
