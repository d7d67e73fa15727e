"""Shared utilities for strict markup parsing.

This module provides the configuration object, result and diagnostic types,
error types, position tracking and logging helpers used across the
tokenization, tree and API layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .position import TokenPosition
from .errors import (
    ErrorKind,
    MarkupError,
    TokenizationError,
    TreeBuildingError,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "TokenPosition",
    "ErrorKind",
    "MarkupError",
    "TokenizationError",
    "TreeBuildingError",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
