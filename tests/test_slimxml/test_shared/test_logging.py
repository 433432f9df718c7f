"""Tests for correlation-aware logging."""

import logging

from slimxml.shared.logging import (
    CorrelationLogger,
    get_logger,
    new_correlation_id,
    resolve_logger,
)


class TestCorrelationLogger:
    """Test CorrelationLogger record enrichment."""

    def test_records_carry_component_and_correlation_id(self, caplog):
        """Test that extra fields are attached to every record."""
        logger = get_logger("slimxml.test", "abc123", "tester")

        with caplog.at_level(logging.DEBUG, logger="slimxml.test"):
            logger.info("hello", extra={"answer": 42})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tester"
        assert record.correlation_id == "abc123"
        assert record.answer == 42

    def test_default_component_from_name(self):
        """Test that the component defaults to the last name segment."""
        logger = CorrelationLogger("slimxml.tree.builder")

        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_for_component_keeps_correlation_id(self):
        """Test deriving a sibling logger for another component."""
        logger = get_logger("slimxml.api", "id-1", "loader")

        child = logger.for_component("document_parser")

        assert child.component == "document_parser"
        assert child.correlation_id == "id-1"
        assert child.logger is logger.logger

    def test_levels(self, caplog):
        """Test that each level method emits at its level."""
        logger = get_logger("slimxml.levels", "x")

        with caplog.at_level(logging.DEBUG, logger="slimxml.levels"):
            logger.debug("d")
            logger.warning("w")
            logger.error("e")

        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.WARNING, logging.ERROR
        ]

    def test_extra_overrides_stamps(self, caplog):
        """Test that explicit extra keys win over the logger's stamps."""
        logger = get_logger("slimxml.override", "x", "tester")

        with caplog.at_level(logging.INFO, logger="slimxml.override"):
            logger.log(logging.INFO, "m", extra={"component": "other"})

        assert caplog.records[-1].component == "other"
        assert caplog.records[-1].correlation_id == "x"

    def test_exception_includes_traceback(self, caplog):
        """Test that exception() attaches the active exception."""
        logger = get_logger("slimxml.exc")

        with caplog.at_level(logging.ERROR, logger="slimxml.exc"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("failed")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info[0] is RuntimeError

    def test_is_enabled_for(self):
        """Test level checks delegate to the wrapped logger."""
        logger = get_logger("slimxml.enabled")
        logger.logger.setLevel(logging.WARNING)

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)


class TestResolveLogger:
    """Test logger injection helpers."""

    def test_injected_logger_is_used(self):
        """Test that an injected logger keeps its correlation ID."""
        injected = get_logger("slimxml.api", "corr", "loader")

        resolved = resolve_logger(injected, "slimxml.tokenization", "tag_tokenizer")

        assert resolved.correlation_id == "corr"
        assert resolved.component == "tag_tokenizer"

    def test_fallback_module_logger(self):
        """Test that a module logger is built when nothing is injected."""
        resolved = resolve_logger(None, "slimxml.query", "value_resolver", "c2")

        assert resolved.logger.name == "slimxml.query"
        assert resolved.correlation_id == "c2"

    def test_new_correlation_id(self):
        """Test generated correlation IDs are short and unique."""
        first, second = new_correlation_id(), new_correlation_id()

        assert len(first) == 12
        assert first != second
