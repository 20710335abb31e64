# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Standard response envelope for public ledger operations.

Every mutating ledger operation returns a ``LedgerResponse`` so callers
always receive a tagged ``{success, data, error, code}`` structure instead
of a raised exception.

Usage::

    from mastery.core.response import ok, err

    # Success
    return ok(data=verification_id)

    # Failure
    return err(ErrorKind.INVALID_SCORE)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ledger.enums import ErrorKind


@dataclass
class LedgerResponse:
    """Tagged result of a public ledger operation.

    Attributes:
        success: True when the operation committed.
        data:    Payload on success (new id, ``True`` for setters/updates).
        error:   Error kind on failure.  None on success.
        message: Optional human-readable detail for the failure.
    """

    success: bool
    data: Any = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def code(self) -> int | None:
        """Numeric error code, or None on success."""
        return self.error.code if self.error else None

    def unwrap(self) -> Any:
        """Return ``data`` or raise ``LedgerError`` for a failed response."""
        if not self.success:
            from .exceptions import LedgerError

            raise LedgerError(self.error, self.message)
        return self.data

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict.

        ``success`` is always present; ``data`` only when not None;
        ``error``/``code``/``message`` only on failure.
        """
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error:
            d["error"] = self.error.value
            d["code"] = self.error.code
        if self.message:
            d["message"] = self.message
        return d


def ok(data: Any = None) -> LedgerResponse:
    """Create a successful LedgerResponse."""
    return LedgerResponse(success=True, data=data)


def err(error: ErrorKind, message: str | None = None) -> LedgerResponse:
    """Create a failed LedgerResponse.

    Args:
        error:   Error kind from the ledger taxonomy.
        message: Optional detail; defaults to nothing.

    Returns:
        LedgerResponse with success=False.
    """
    return LedgerResponse(success=False, error=error, message=message)
