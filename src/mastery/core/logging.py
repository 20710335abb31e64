# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Structured logging configuration for the mastery ledger.

Provides:
- JSON formatter for production (machine-parseable)
- Standard formatter for development (human-readable)
- Correlation IDs so every log line of one ledger operation can be grouped
- Sanitized logging of public ledger operations
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context variable for correlation ID (thread/async-safe)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new unique correlation ID."""
    return str(uuid.uuid4())


@contextmanager
def correlation_context(
    correlation_id: str | None = None,
) -> Generator[str, None, None]:
    """Context manager for correlation ID scope.

    Args:
        correlation_id: Optional correlation ID to use. If None, generates a new one.

    Yields:
        The correlation ID being used.

    Example:
        with correlation_context() as cid:
            logger.info("Submitting verification")  # Will include cid
    """
    cid = correlation_id or generate_correlation_id()
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for production environments.

    Includes correlation ID when present in context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        # Source location for warnings and errors
        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Standard log formatter for development.

    Human-readable format with colors for terminal output.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    CORRELATION_COLOR = "\033[90m"  # Gray

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers see the original record
        record = logging.makeLogRecord(record.__dict__)

        correlation_id = get_correlation_id()
        if correlation_id:
            short_cid = correlation_id[:8]
            if self.use_colors:
                cid_str = f"{self.CORRELATION_COLOR}[{short_cid}]{self.RESET} "
            else:
                cid_str = f"[{short_cid}] "
            record.msg = cid_str + str(record.msg)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"

        return super().format(record)


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure root logging for the ledger and its CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); settings value if None
        json_format: Use JSON format (auto-detect if None)
        log_file: Optional file to write logs to

    Environment variables:
        MASTERY_LOG_LEVEL: Default log level
        MASTERY_LOG_FORMAT: Log format ("json" or "text", auto-detect if unset)
        MASTERY_LOG_FILE: Log file path
    """
    from .config import get_config

    config = get_config()

    if level is None:
        level = config.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        format_env = config.log_format.lower()
        if format_env == "json":
            json_format = True
        elif format_env == "text":
            json_format = False
        else:
            json_format = not sys.stderr.isatty()

    log_file = config.log_file if log_file is None else log_file

    formatter: logging.Formatter
    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = StandardFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        # Always use JSON for file output
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


class OperationLogger:
    """Logger for public ledger operations.

    Logs each call with sanitized arguments so proofs and long metadata
    never end up verbatim in the logs.
    """

    MAX_TEXT_LENGTH = 64
    BYTES_PREVIEW = 8

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("mastery.operations")

    def log_call(
        self,
        operation: str,
        caller: str,
        arguments: dict[str, Any],
        level: int = logging.DEBUG,
    ) -> None:
        """Log an operation call with sanitized arguments."""
        sanitized = self._sanitize(arguments)
        self.logger.log(
            level,
            f"Ledger call: {operation} by {caller}",
            extra={
                "extra_data": {
                    "operation": operation,
                    "caller": caller,
                    "arguments": sanitized,
                }
            },
        )

    def log_result(
        self,
        operation: str,
        success: bool,
        error: str | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        """Log an operation outcome."""
        status = "ok" if success else f"err({error})"
        self.logger.log(
            level,
            f"Ledger result: {operation} -> {status}",
            extra={
                "extra_data": {
                    "operation": operation,
                    "success": success,
                    "error": error,
                }
            },
        )

    def _sanitize(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: self._sanitize(value) for key, value in data.items()}
        elif isinstance(data, (list, tuple)):
            return [self._sanitize(item) for item in data]
        elif isinstance(data, (bytes, bytearray)):
            return f"0x{bytes(data[: self.BYTES_PREVIEW]).hex()}... ({len(data)} bytes)"
        elif isinstance(data, str) and len(data) > self.MAX_TEXT_LENGTH:
            return data[: self.MAX_TEXT_LENGTH] + "..."
        else:
            return data


# Default operation logger
operation_logger = OperationLogger()
