"""Tests for parser configuration."""

import json
from dataclasses import FrozenInstanceError

import pytest

from strict_markup_parser.shared.config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)


class TestParserConfig:
    """Test ParserConfig defaults, validation and presets."""

    def test_defaults(self):
        config = ParserConfig()
        assert config.track_positions is True
        assert config.collect_metrics is True
        assert config.logging_level == "WARNING"
        assert config.correlation_id is None
        assert config.name is None

    def test_is_frozen(self):
        config = ParserConfig()
        with pytest.raises(FrozenInstanceError):
            config.track_positions = False  # type: ignore[misc]

    def test_presets(self):
        assert ParserConfig.default().name == "default"
        minimal = ParserConfig.minimal()
        assert minimal.track_positions is False
        assert minimal.collect_metrics is False

    def test_invalid_logging_level(self):
        with pytest.raises(ConfigValidationError, match="logging_level must be one of") as exc_info:
            ParserConfig(logging_level="LOUD")
        assert exc_info.value.field_name == "logging_level"
        assert "DEBUG" in exc_info.value.suggestions

    def test_invalid_flag_type(self):
        with pytest.raises(ConfigValidationError, match="track_positions must be a boolean"):
            ParserConfig(track_positions="yes")  # type: ignore[arg-type]

    def test_invalid_correlation_id(self):
        with pytest.raises(ConfigValidationError, match="correlation_id"):
            ParserConfig(correlation_id=42)  # type: ignore[arg-type]

    def test_validation_error_is_config_error(self):
        assert issubclass(ConfigValidationError, ConfigError)


class TestConfigOverride:
    """Test creating modified copies."""

    def test_override_returns_new_instance(self):
        config = ParserConfig()
        changed = config.override(track_positions=False, correlation_id="abc")

        assert changed is not config
        assert changed.track_positions is False
        assert changed.correlation_id == "abc"
        assert config.track_positions is True

    def test_override_rejects_unknown_fields(self):
        with pytest.raises(ConfigValidationError, match="Unknown configuration fields: bogus"):
            ParserConfig().override(bogus=True)

    def test_override_validates(self):
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(logging_level="nope")


class TestConfigSerialization:
    """Test dict, JSON and file round trips."""

    def test_to_dict(self):
        assert ParserConfig(name="x").to_dict() == {
            "track_positions": True,
            "collect_metrics": True,
            "logging_level": "WARNING",
            "correlation_id": None,
            "name": "x",
        }

    def test_json_round_trip(self):
        config = ParserConfig(collect_metrics=False, logging_level="DEBUG", name="dev")
        assert ParserConfig.from_json(config.to_json()) == config

    def test_from_dict_partial(self):
        config = ParserConfig.from_dict({"track_positions": False})
        assert config.track_positions is False
        assert config.collect_metrics is True

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigValidationError, match="must be a JSON object"):
            ParserConfig.from_dict([1, 2])  # type: ignore[arg-type]

    def test_from_json_invalid(self):
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            ParserConfig.from_json("{not json")

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging_level": "INFO", "correlation_id": "job-7"}))

        config = ParserConfig.from_file(path)

        assert config.logging_level == "INFO"
        assert config.correlation_id == "job-7"

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not read config file"):
            ParserConfig.from_file(tmp_path / "missing.json")
