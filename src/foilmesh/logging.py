"""Logging system for foilmesh using Loguru.

The package logger stays disabled until :func:`setup_logging` is called, so
importing foilmesh as a library never writes to the host application's sinks.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .exceptions import ConfigurationError

logger.disable("foilmesh")


class FoilMeshLogger:
    """Owns the loguru sinks installed for foilmesh."""

    def __init__(self):
        self._configured = False
        self._handler_ids = []

    def configure(self, config=None) -> None:
        """Configure logging from a ``LoggingConfig`` (defaults when None)."""
        if config is None:
            from .config import LoggingConfig
            config = LoggingConfig()

        self.reset()
        # Remove default handler
        logger.remove()

        self._handler_ids.append(logger.add(
            sys.stdout,
            level=config.level,
            format=config.format,
            colorize=True,
        ))

        if config.file_path:
            file_path = Path(config.file_path)
            try:
                file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot create log directory: {e}",
                    details={"file_path": str(file_path)}
                ) from e

            self._handler_ids.append(logger.add(
                str(file_path),
                level=config.level,
                format=config.format,
                rotation=config.rotation,
                retention=config.retention,
                encoding="utf-8",
            ))

        logger.enable("foilmesh")
        self._configured = True

        logger.debug("foilmesh logging configured", extra={
            "level": config.level,
            "file": str(config.file_path) if config.file_path else None,
        })

    def reset(self) -> None:
        """Remove the sinks this instance installed."""
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error with context."""
        context = context or {}
        logger.error("{error_type}: {error_message}", error_type=type(error).__name__,
                     error_message=str(error), context=context)


# Global logger instance
foilmesh_logger = FoilMeshLogger()


def get_logger(name: Optional[str] = None):
    """Get a logger bound to a specific component."""
    return logger.bind(component=name or "foilmesh")


def setup_logging(config=None) -> None:
    """Setup logging for the entire foilmesh package."""
    foilmesh_logger.configure(config)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log error with context."""
    foilmesh_logger.log_error(error, context)
