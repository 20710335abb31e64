# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Validation functions for ledger submissions and updates.

Each validator returns the first failing ``ErrorKind`` or None. Checks run
in a fixed order and never touch the store, so a rejected operation leaves
no partial writes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .constants import LedgerConstants
from .enums import ErrorKind, VerificationType
from .models import LedgerConfig


def is_int(value: Any) -> bool:
    """True for plain integers; bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool)


def score_in_bounds(score: Any) -> bool:
    return is_int(score) and LedgerConstants.MIN_SCORE <= score <= LedgerConstants.MAX_SCORE


def threshold_in_bounds(threshold: Any) -> bool:
    return (
        is_int(threshold)
        and LedgerConstants.MIN_THRESHOLD_EXCLUSIVE < threshold <= LedgerConstants.MAX_THRESHOLD
    )


def validate_submission(
    *,
    caller: str,
    block_height: int,
    config: LedgerConfig,
    next_id: int,
    already_verified: Callable[[], bool],
    course_id: Any,
    score: Any,
    threshold: Any,
    proof_hash: Any,
    verification_type: Any,
    difficulty: Any,
    expiry: Any,
    metadata: Any,
) -> ErrorKind | None:
    """Validate a verification submission.

    ``already_verified`` is only called once every field check has passed,
    so the uniqueness lookup never sees a malformed course id.

    Checks, first failure wins:
    1. Cap not reached
    2. Course id positive
    3. Score in [0, 100]
    4. Threshold in (0, 100]
    5. Proof hash is exactly 32 bytes
    6. Known verification type
    7. Difficulty in [1, 10]
    8. Expiry after the current block
    9. Metadata at most 256 characters
    10. No existing verification for (caller, course)
    11. Oracle submissions come from the configured oracle
    """
    if next_id >= config.max_verifications:
        return ErrorKind.MAX_VERIFICATIONS_EXCEEDED
    if not is_int(course_id) or course_id <= 0:
        return ErrorKind.INVALID_COURSE_ID
    if not score_in_bounds(score):
        return ErrorKind.INVALID_SCORE
    if not threshold_in_bounds(threshold):
        return ErrorKind.INVALID_THRESHOLD
    if not isinstance(proof_hash, (bytes, bytearray)) or len(proof_hash) != LedgerConstants.PROOF_HASH_LENGTH:
        return ErrorKind.INVALID_PROOF

    vtype = VerificationType.parse(verification_type)
    if vtype is None:
        return ErrorKind.INVALID_VERIFICATION_TYPE

    if not is_int(difficulty) or not (
        LedgerConstants.MIN_DIFFICULTY <= difficulty <= LedgerConstants.MAX_DIFFICULTY
    ):
        return ErrorKind.INVALID_DIFFICULTY
    if not is_int(expiry) or expiry <= block_height:
        return ErrorKind.INVALID_EXPIRY
    if not isinstance(metadata, str) or len(metadata) > LedgerConstants.MAX_METADATA_LENGTH:
        return ErrorKind.INVALID_METADATA

    if already_verified():
        return ErrorKind.ALREADY_VERIFIED

    # An unset oracle authorizes nobody
    if vtype == VerificationType.ORACLE and (config.oracle is None or caller != config.oracle):
        return ErrorKind.ORACLE_NOT_AUTHORIZED

    return None


def validate_update(
    *,
    caller: str,
    owner: str | None,
    new_score: Any,
    new_threshold: Any,
) -> ErrorKind | None:
    """Validate a correction to an existing verification.

    ``owner`` is None when the verification id is unknown.
    """
    if owner is None:
        return ErrorKind.NOT_VERIFIED
    if caller != owner:
        return ErrorKind.NOT_AUTHORIZED
    if not score_in_bounds(new_score):
        return ErrorKind.INVALID_SCORE
    if not threshold_in_bounds(new_threshold):
        return ErrorKind.INVALID_THRESHOLD
    return None
