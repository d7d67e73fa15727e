"""Configuration for the markup parser.

Configuration only controls bookkeeping (positions, metrics, logging). The
grammar and the structural checks are fixed and cannot be relaxed.
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .logging import VALID_LEVELS


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Immutable parser configuration.

    Frozen, so one instance can be shared by parsers running on different
    threads.

    Attributes:
        track_positions: Attach line/column/offset to tokens and nodes
        collect_metrics: Fill in PerformanceMetrics on ParseResult objects
        logging_level: Level used by the command-line tool
        correlation_id: Default correlation ID for log records and diagnostics
        name: Optional label for the configuration
    """

    track_positions: bool = True
    collect_metrics: bool = True
    logging_level: str = "WARNING"
    correlation_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for flag in ("track_positions", "collect_metrics"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigValidationError(f"{flag} must be a boolean", field_name=flag)
        if self.logging_level not in VALID_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(VALID_LEVELS)}",
                field_name="logging_level",
                suggestions=list(VALID_LEVELS),
            )
        if self.correlation_id is not None and not isinstance(self.correlation_id, str):
            raise ConfigValidationError(
                "correlation_id must be a string or None", field_name="correlation_id"
            )

    @classmethod
    def default(cls) -> "ParserConfig":
        """Positions and metrics enabled."""
        return cls(name="default")

    @classmethod
    def minimal(cls) -> "ParserConfig":
        """Skip position tracking and metrics collection."""
        return cls(track_positions=False, collect_metrics=False, name="minimal")

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(track_positions=False)
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a JSON object")
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        path_obj = Path(path)
        try:
            content = path_obj.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path_obj}: {e}") from e
        return cls.from_json(content)
