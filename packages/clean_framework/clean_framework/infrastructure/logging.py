"""Centralized logging configuration for clean_framework."""

import json
import logging
import logging.handlers
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

FRAMEWORK_LOGGER_NAME = "clean_framework"

# Above CRITICAL, so nothing passes.
_NOTHING = logging.CRITICAL + 10


class LogLevel(str, Enum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    NOTHING = "NOTHING"

    @property
    def numeric(self) -> int:
        """Numeric level understood by the logging module."""
        if self is LogLevel.NOTHING:
            return _NOTHING
        return logging.getLevelName(self.value)


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Global log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log messages",
    )
    console_enabled: bool = Field(default=True, description="Enable console logging")
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: Path | None = Field(default=None, description="Log file path")
    max_bytes: int = Field(
        default=10_485_760,  # 10MB
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        default=5,
        description="Number of backup log files to keep",
    )
    json_format: bool = Field(
        default=False,
        description="Use JSON format for structured logging",
    )

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, v: Path | None) -> Path | None:
        """Ensure file path directory exists."""
        if v is not None:
            v.parent.mkdir(parents=True, exist_ok=True)
        return v


_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
    }
)


class StructuredFormatter(logging.Formatter):
    """Renders a record as one JSON object per line.

    The timestamp is the record's creation time, not the time of formatting.
    Values passed through `extra=` become top-level keys; values JSON cannot
    encode are rendered with `str`.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(_extra_fields(record))
        return json.dumps(entry, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_KEYS
    }


# Handlers added by setup_logging, replaced on the next call. Handlers
# installed by the host application are left alone.
_installed_handlers: list[logging.Handler] = []


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if config.console_enabled:
        handlers.append(logging.StreamHandler(sys.stdout))
    if config.file_enabled and config.file_path:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=config.file_path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    formatter: logging.Formatter
    if config.json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(config.format, datefmt=config.date_format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: LoggingConfig | None = None) -> list[logging.Handler]:
    """
    Install the framework's log handlers on the root logger.

    Calling it again swaps out the handlers from the previous call, so an
    application can reconfigure logging at runtime.

    Args:
        config: Logging configuration. If None, uses defaults.

    Returns:
        The handlers that were installed
    """
    config = config or LoggingConfig()
    root_logger = logging.getLogger()

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers[:] = _build_handlers(config)

    root_logger.setLevel(config.level.numeric)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": config.level.value, "json_format": config.json_format},
    )
    return list(_installed_handlers)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_log_level(level: LogLevel, name: str = FRAMEWORK_LOGGER_NAME) -> int:
    """
    Change the level of a logger and return the previous one.

    Args:
        level: New level; NOTHING silences the logger completely
        name: Logger name, the framework's root logger by default

    Returns:
        The numeric level that was set before the call
    """
    logger = logging.getLogger(name)
    previous = logger.level
    logger.setLevel(level.numeric)
    return previous


@contextmanager
def suppressed_logging(
    name: str = FRAMEWORK_LOGGER_NAME, level: LogLevel = LogLevel.NOTHING
) -> Iterator[logging.Logger]:
    """
    Lower a logger's verbosity for the duration of a block.

    Used around code paths that are expected to fail, so their diagnostics do
    not pollute the output. The previous level is restored on exit.

    Args:
        name: Logger name, the framework's root logger by default
        level: Level applied inside the block

    Yields:
        The affected logger
    """
    logger = logging.getLogger(name)
    previous = logger.level
    logger.setLevel(level.numeric)
    try:
        yield logger
    finally:
        logger.setLevel(previous)


def log_with_context(logger: logging.Logger, message: str, **context) -> None:
    """
    Log a message with additional context.

    Args:
        logger: Logger instance
        message: Log message
        **context: Additional context to include
    """
    logger.info(message, extra=context)


def log_error_with_trace(
    logger: logging.Logger, error: Exception, message: str = "Error occurred"
) -> None:
    """
    Log an error with full traceback.

    Args:
        logger: Logger instance
        error: Exception instance
        message: Error message
    """
    logger.error(message, exc_info=error, extra={"error_type": type(error).__name__})
