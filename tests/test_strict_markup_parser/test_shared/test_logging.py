"""Tests for correlation-aware logging."""

import logging

import pytest

from strict_markup_parser.shared.logging import configure_logging, get_logger
from strict_markup_parser.tokenization import MarkupTokenizer


class TestCorrelationLogger:
    """Test extra fields attached to log records."""

    def test_component_defaults_to_module_name(self):
        logger = get_logger("strict_markup_parser.tree.builder")
        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_records_carry_component_and_correlation_id(self, caplog):
        logger = get_logger("strict_markup_parser.test", "req-1", "unit")
        with caplog.at_level(logging.INFO, logger="strict_markup_parser.test"):
            logger.info("hello", extra={"answer": 42})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-1"
        assert record.answer == 42

    def test_tokenizer_logs_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="strict_markup_parser"):
            MarkupTokenizer(correlation_id="tok-1").tokenize("<p>x</p>")

        messages = [
            r.getMessage() for r in caplog.records
            if getattr(r, "component", None) == "tokenizer"
        ]
        assert messages == ["Tokenization started", "Tokenization completed"]
        assert all(
            getattr(r, "correlation_id", None) == "tok-1" for r in caplog.records
        )


class TestConfigureLogging:
    """Test the application-level logging setup helper."""

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="logging level must be one of"):
            configure_logging("CHATTY")

    def test_accepts_names_and_numbers(self):
        configure_logging("warning")
        configure_logging(logging.ERROR)
