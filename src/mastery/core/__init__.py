# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Mastery Core - configuration, logging, storage and the verification ledger."""

from .exceptions import (
    MasteryException,
    ValidationException,
    ConfigException,
    NotFoundError,
    StoreError,
    LedgerError,
    CollaboratorError,
)
from .logging import (
    configure_logging,
    OperationLogger,
    operation_logger,
)
from .response import LedgerResponse, ok, err
from .store import KeyValueStore, MemoryStore, UnitOfWork, Transactional

__all__ = [
    # Exceptions
    "MasteryException",
    "ValidationException",
    "ConfigException",
    "NotFoundError",
    "StoreError",
    "LedgerError",
    "CollaboratorError",
    # Logging
    "configure_logging",
    "OperationLogger",
    "operation_logger",
    # Responses
    "LedgerResponse",
    "ok",
    "err",
    # Storage
    "KeyValueStore",
    "MemoryStore",
    "UnitOfWork",
    "Transactional",
]
