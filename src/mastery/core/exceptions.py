# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for the mastery ledger.

Exceptions are raised inside the ledger and its collaborators and are
converted into tagged ``LedgerResponse`` values at the public boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ledger.enums import ErrorKind


class MasteryException(Exception):  # noqa: N818
    """Base exception for all mastery ledger errors.

    All ledger-specific exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MasteryException):
    """Exception for malformed input that never reaches the ledger.

    Raised when:
    - A record cannot be rebuilt from a dict
    - A scenario file is missing required fields
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ConfigException(MasteryException):
    """Exception for configuration errors.

    Raised when:
    - Settings cannot be loaded
    - A ledger is constructed without an admin principal
    """

    def __init__(self, message: str, missing_vars: list[str] | None = None):
        details = {}
        if missing_vars:
            details["missing_vars"] = missing_vars
        super().__init__(message, details)
        self.missing_vars = missing_vars or []


class NotFoundError(MasteryException):
    """Exception for lookups of records that must exist."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} not found: {resource_id}"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class StoreError(MasteryException):
    """Exception for key-value store misuse.

    Raised when:
    - A unit of work is used after commit or rollback
    - A namespace is not registered
    """

    pass


class LedgerError(MasteryException):
    """A ledger operation failed with a taxonomy error kind.

    Raising this inside a unit of work discards every staged write.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None):
        super().__init__(message or kind.value, {"kind": kind.value, "code": kind.code})
        self.kind = kind

    @property
    def code(self) -> int:
        return self.kind.code


class CollaboratorError(LedgerError):
    """An external collaborator (fee, NFT, reward) reported a failure."""

    def __init__(self, kind: ErrorKind, collaborator: str, message: str | None = None):
        super().__init__(kind, message or f"{collaborator}: {kind.value}")
        self.details["collaborator"] = collaborator
        self.collaborator = collaborator
