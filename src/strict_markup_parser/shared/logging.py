"""Correlation-aware logging helpers for the markup parser.

Every record emitted through :class:`CorrelationLogger` carries the component
that produced it and the correlation ID of the call, so log lines from
concurrent parses can be told apart.
"""

import logging
from typing import Any, Dict, Optional, Union

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CorrelationLogger:
    """Logger that attaches correlation ID and component to each record."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: Union[int, str] = "WARNING") -> None:
    """Install a basic stderr handler on the root logger.

    The library itself never installs handlers; this is meant for
    applications such as the command-line tool.
    """
    if isinstance(level, str):
        level_name = level.upper()
        if level_name not in VALID_LEVELS:
            raise ValueError(f"logging level must be one of {list(VALID_LEVELS)}")
        level = getattr(logging, level_name)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(component)s] %(message)s",
    )
    # Records from other libraries lack our extra fields.
    root = logging.getLogger()
    for handler in root.handlers:
        if not any(isinstance(f, _ComponentDefaults) for f in handler.filters):
            handler.addFilter(_ComponentDefaults())


class _ComponentDefaults(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name
        if not hasattr(record, "correlation_id"):
            record.correlation_id = None
        return True
