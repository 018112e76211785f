"""Centralized logging configuration for tasker.

The library itself only emits records through module loggers; nothing in
tasker.core installs handlers. Applications (and the tasker CLI) call
configure_logging() once at startup.

Usage:
    from tasker.core.logging_config import configure_logging, get_logger

    configure_logging(level="DEBUG", format="json")
    logger = get_logger(__name__)

Environment Variables:
    TASKER_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TASKER_LOG_FORMAT: Output format ("text" or "json")
    TASKER_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_FORMAT_WITH_MS = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else was passed via extra=
_STANDARD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

_configured = False


@dataclass
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: Output format ("text" or "json").
        file_path: Optional file path for file logging.
        include_ms: Include milliseconds in timestamp.
    """

    level: str = "INFO"
    format: Literal["text", "json"] = "text"
    file_path: str | None = None
    include_ms: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> LogConfig:
        """Build a config from TASKER_LOG_* variables.

        Explicit (non-None) overrides win over the environment.
        """
        config = cls(
            level=os.environ.get("TASKER_LOG_LEVEL", "INFO"),
            format=os.environ.get("TASKER_LOG_FORMAT", "text"),  # type: ignore[arg-type]
            file_path=os.environ.get("TASKER_LOG_FILE"),
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return config

    def formatter(self) -> logging.Formatter:
        if self.format == "json":
            return JsonFormatter()
        fmt = TEXT_FORMAT_WITH_MS if self.include_ms else TEXT_FORMAT
        return logging.Formatter(fmt, datefmt=DATE_FORMAT)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs logs as JSON objects with consistent structure:
    {
        "timestamp": "2025-12-28T14:30:00.123000",
        "level": "DEBUG",
        "logger": "tasker.core.dag.graph",
        "message": "[build] task_start: depends_on=[]",
        "extra": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    include_ms: bool = True,
    force: bool = False,
    logger_name: str | None = None,
) -> LogConfig | None:
    """Configure logging for an application using tasker.

    Subsequent calls are ignored unless force=True.

    Args:
        level: Log level. Defaults to TASKER_LOG_LEVEL or "INFO".
        format: Output format. Defaults to TASKER_LOG_FORMAT or "text".
        file_path: Optional file path. Defaults to TASKER_LOG_FILE.
        include_ms: Include milliseconds in timestamp.
        force: Force reconfiguration even if already configured.
        logger_name: Logger to configure. None for root logger.

    Returns:
        The applied config, or None if logging was already configured.
    """
    global _configured
    if _configured and not force:
        return None

    config = LogConfig.from_env(
        level=level, format=format, file_path=file_path, include_ms=include_ms
    )

    target = logging.getLogger(logger_name)
    target.setLevel(getattr(logging, config.level.upper()))
    target.handlers.clear()

    formatter = config.formatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    target.addHandler(console_handler)

    if config.file_path:
        file_handler = logging.FileHandler(config.file_path)
        file_handler.setFormatter(formatter)
        target.addHandler(file_handler)

    _configured = True
    return config


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (typically __name__)."""
    return logging.getLogger(name)


def set_level(level: str, logger_name: str | None = None) -> None:
    """Set log level for a specific logger or the root logger."""
    logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))


def add_file_handler(
    file_path: str,
    level: str = "DEBUG",
    json_format: bool = False,
    logger_name: str | None = None,
) -> logging.FileHandler:
    """Add a file handler to a logger.

    Args:
        file_path: Path to log file.
        level: Log level for this handler.
        json_format: Use JSON format.
        logger_name: Logger name. None for root logger.

    Returns:
        The created file handler.
    """
    handler = logging.FileHandler(file_path)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(LogConfig(format="json" if json_format else "text").formatter())
    logging.getLogger(logger_name).addHandler(handler)
    return handler
