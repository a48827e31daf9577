"""
Unit tests for negotiation diagnostics.
"""

import json
import logging

import pytest

from negotiator.logging import (
    NegotiationLog,
    configure_logging,
    logger as negotiator_logger,
    logging_printer,
    silent_printer,
)


@pytest.fixture
def restore_logger():
    """Undo configure_logging() on the negotiator logger."""
    handlers = list(negotiator_logger.handlers)
    level = negotiator_logger.level
    propagate = negotiator_logger.propagate
    yield negotiator_logger
    negotiator_logger.handlers[:] = handlers
    negotiator_logger.setLevel(level)
    negotiator_logger.propagate = propagate


class TestNegotiationLog:
    """Tests for NegotiationLog."""

    def test_to_dict(self):
        """Test that the message comes first, then the context."""
        entry = NegotiationLog("matched", {"via": "exact", "offers": ["text/csv"]})

        assert entry.to_dict() == {"message": "matched", "via": "exact", "offers": ["text/csv"]}

    def test_to_text(self):
        """Test the key=value rendering."""
        entry = NegotiationLog("matched", {"via": "exact", "depth": 3})

        assert entry.to_text() == "matched via='exact' depth=3"

    def test_to_text_without_context(self):
        """Test a bare message."""
        assert NegotiationLog("not acceptable").to_text() == "not acceptable"


class TestLoggingPrinter:
    """Tests for logging_printer()."""

    def test_text_format(self, caplog):
        """Test that events are logged as text at their level."""
        target = logging.getLogger("tests.negotiation")
        printer = logging_printer(target)

        with caplog.at_level(logging.DEBUG, logger="tests.negotiation"):
            printer(logging.INFO, "not acceptable", {"accept": "image/png"})

        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].getMessage() == "not acceptable accept='image/png'"

    def test_json_format(self, caplog):
        """Test that events can be logged as JSON."""
        target = logging.getLogger("tests.negotiation")
        printer = logging_printer(target, log_format="json")

        with caplog.at_level(logging.DEBUG, logger="tests.negotiation"):
            printer(logging.DEBUG, "matched", {"offers": ["text/csv"], "level": object})

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry["message"] == "matched"
        assert entry["offers"] == ["text/csv"]
        assert entry["level"] == str(object)

    def test_disabled_level_skipped(self, caplog):
        """Test that events below the logger's level are not formatted."""
        target = logging.getLogger("tests.negotiation")
        printer = logging_printer(target)

        with caplog.at_level(logging.WARNING, logger="tests.negotiation"):
            printer(logging.DEBUG, "matched", {})

        assert caplog.records == []

    def test_default_logger(self):
        """Test that the printer targets the negotiator logger by default."""
        assert negotiator_logger.name == "negotiator"
        assert callable(logging_printer())

    def test_silent_printer(self):
        """Test that the silent printer accepts events."""
        assert silent_printer(logging.ERROR, "processing failed", {}) is None


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level_and_handler(self, restore_logger):
        """Test the configured logger."""
        configure_logging("debug")

        assert restore_logger.level == logging.DEBUG
        assert len(restore_logger.handlers) == 1
        assert restore_logger.propagate is False

    def test_replaces_handlers(self, restore_logger):
        """Test that calling twice does not duplicate output."""
        configure_logging("INFO")
        configure_logging("INFO", log_format="json")

        assert len(restore_logger.handlers) == 1
        assert restore_logger.handlers[0].formatter._fmt == "%(message)s"

    def test_unknown_level_defaults_to_info(self, restore_logger):
        """Test the fallback level."""
        configure_logging("LOUD")

        assert restore_logger.level == logging.INFO
