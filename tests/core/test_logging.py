"""Tests for mastery.core.logging module."""

from __future__ import annotations

import importlib
import json
import logging

import pytest

from mastery.core.logging import (
    JSONFormatter,
    OperationLogger,
    StandardFormatter,
    configure_logging,
    correlation_context,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def restore_root_logger():
    """Keep configure_logging from leaking handlers into other tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("mastery.test", level, "/src/x.py", 10, msg, None, None)


# ============================================================================
# Correlation ID Tests
# ============================================================================


class TestCorrelationId:
    """Tests for correlation ID functionality."""

    def test_default_none(self):
        set_correlation_id(None)
        assert get_correlation_id() is None

    def test_set_and_get(self):
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        set_correlation_id(None)

    def test_generate_unique(self):
        id1 = generate_correlation_id()
        id2 = generate_correlation_id()
        assert id1 != id2
        assert len(id1) == 36

    def test_context_generates_and_resets(self):
        set_correlation_id(None)
        with correlation_context() as cid:
            assert get_correlation_id() == cid
        assert get_correlation_id() is None

    def test_context_uses_given_id(self):
        with correlation_context("fixed-id") as cid:
            assert cid == "fixed-id"


# ============================================================================
# Formatter Tests
# ============================================================================


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "mastery.test"
        assert data["message"] == "hello"
        assert "timestamp" in data
        assert "source" not in data

    def test_includes_correlation_id(self):
        with correlation_context("cid-1"):
            data = json.loads(JSONFormatter().format(_record()))
        assert data["correlation_id"] == "cid-1"

    def test_warning_includes_source(self):
        data = json.loads(JSONFormatter().format(_record(level=logging.WARNING)))
        assert data["source"]["line"] == 10

    def test_extra_data(self):
        record = _record()
        record.extra_data = {"operation": "set_fee"}
        data = json.loads(JSONFormatter().format(record))
        assert data["extra"] == {"operation": "set_fee"}


class TestStandardFormatter:
    """Tests for StandardFormatter."""

    def test_prefixes_short_correlation_id(self):
        formatter = StandardFormatter(use_colors=False)
        with correlation_context("abcdef1234567890"):
            output = formatter.format(_record())
        assert "[abcdef12] hello" in output

    def test_does_not_mutate_record(self):
        formatter = StandardFormatter(use_colors=False)
        record = _record()
        with correlation_context("abcdef1234567890"):
            formatter.format(record)
        assert record.msg == "hello"


# ============================================================================
# configure_logging
# ============================================================================


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_explicit_level_and_json(self, clean_env, restore_root_logger):
        configure_logging(level="DEBUG", json_format=True)
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_level_from_settings(self, clean_env, monkeypatch, restore_root_logger):
        monkeypatch.setenv("MASTERY_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("MASTERY_LOG_FORMAT", "text")
        configure_logging()
        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, StandardFormatter)

    def test_log_file_handler(self, clean_env, tmp_path, restore_root_logger):
        log_file = tmp_path / "mastery.log"
        configure_logging(level="INFO", json_format=False, log_file=str(log_file))

        handlers = restore_root_logger.handlers
        assert len(handlers) == 2
        assert isinstance(handlers[1], logging.FileHandler)
        assert isinstance(handlers[1].formatter, JSONFormatter)
        handlers[1].close()


# ============================================================================
# OperationLogger
# ============================================================================


class TestOperationLogger:
    """Tests for OperationLogger sanitization and output."""

    def test_sanitizes_bytes(self):
        sanitized = OperationLogger()._sanitize({"proof_hash": bytes(range(32))})
        assert sanitized["proof_hash"] == "0x0001020304050607... (32 bytes)"

    def test_truncates_long_strings(self):
        sanitized = OperationLogger()._sanitize({"metadata": "m" * 100})
        assert sanitized["metadata"] == "m" * 64 + "..."

    def test_leaves_short_values(self):
        sanitized = OperationLogger()._sanitize({"score": 85, "tags": ("a", "b")})
        assert sanitized == {"score": 85, "tags": ["a", "b"]}

    def test_log_call_emits_extra(self, caplog):
        op_logger = OperationLogger(logging.getLogger("mastery.test.ops"))
        with caplog.at_level(logging.DEBUG, logger="mastery.test.ops"):
            op_logger.log_call("set_fee", "ST1TEST", {"value": 0})

        record = caplog.records[-1]
        assert record.getMessage() == "Ledger call: set_fee by ST1TEST"
        assert record.extra_data["arguments"] == {"value": 0}

    def test_log_result_failure(self, caplog):
        op_logger = OperationLogger(logging.getLogger("mastery.test.ops"))
        with caplog.at_level(logging.DEBUG, logger="mastery.test.ops"):
            op_logger.log_result("submit_verification", False, "InvalidScore")

        assert caplog.records[-1].getMessage() == "Ledger result: submit_verification -> err(InvalidScore)"


# ============================================================================
# Module loggers
# ============================================================================


class TestModuleLoggers:
    """Modules log through plain stdlib loggers named after themselves."""

    @pytest.mark.parametrize(
        "module_name",
        [
            "mastery.core.store",
            "mastery.core.ledger.configuration",
            "mastery.core.ledger.rewards",
            "mastery.core.ledger.service",
            "mastery.cli.main",
        ],
    )
    def test_module_logger_name(self, module_name):
        module = importlib.import_module(module_name)
        assert module.logger is logging.getLogger(module_name)

    def test_no_logger_factory_exported(self):
        import mastery.core
        import mastery.core.logging

        assert not hasattr(mastery.core.logging, "get_logger")
        assert not hasattr(mastery.core, "get_logger")
