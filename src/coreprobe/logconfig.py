"""Centralized logging setup for coreprobe.

Modules log through ``logging.getLogger(__name__)``; this facade attaches
the single handler on the ``coreprobe`` logger. The display owns stdout, so
records go to stderr or a file.

Usage:
    from coreprobe.logconfig import Logger

    Logger.configure(level="DEBUG", output="coreprobe.log")
    log = Logger.get("sampler")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class Logger:
    """Configures and hands out loggers under the ``coreprobe`` namespace."""

    _configured: bool = False
    _root_name: str = "coreprobe"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
    ) -> None:
        """Configure the coreprobe logger.

        Args:
            level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL" or a
                LogLevel value.
            output: None for stderr, a file path, or any file-like object.
            timestamps: Include timestamps in messages.

        Raises:
            ValueError: If level or output is invalid.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None:
            new_handler = logging.StreamHandler(sys.stderr)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        parts = ["%(asctime)s"] if timestamps else []
        parts += ["%(levelname)s", "[%(name)s]", "%(message)s"]
        new_handler.setFormatter(logging.Formatter(" ".join(parts)))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get the coreprobe logger, or the child named ``coreprobe.<name>``."""
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change the log level of the logger and its handlers."""
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if configure() has been called."""
        return cls._configured
