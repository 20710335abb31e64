# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Constants for the mastery verification ledger."""

from __future__ import annotations


class LedgerConstants:
    """Bounds and fixed values used by validation and rewards."""

    # Reserved principal meaning "no address"
    NULL_PRINCIPAL = "SP000000000000000000002Q6VF78"

    # Score bounds (inclusive) and threshold bounds (exclusive min, inclusive max)
    MIN_SCORE = 0
    MAX_SCORE = 100
    MIN_THRESHOLD_EXCLUSIVE = 0
    MAX_THRESHOLD = 100

    # Difficulty bounds (inclusive)
    MIN_DIFFICULTY = 1
    MAX_DIFFICULTY = 10

    PROOF_HASH_LENGTH = 32
    MAX_METADATA_LENGTH = 256

    # Defaults used when settings are not overridden
    DEFAULT_FEE = 500
    DEFAULT_MAX_VERIFICATIONS = 10000
    REWARD_PER_DIFFICULTY = 100


class Namespaces:
    """Store namespaces, one per owned map."""

    META = "meta"
    VERIFICATIONS = "verifications"
    VERIFICATIONS_BY_USER = "verifications_by_user"
    VERIFICATION_UPDATES = "verification_updates"
    CERTIFICATES = "certificates"
    MINT_EVENTS = "mint_events"
    REWARD_PAYOUTS = "reward_payouts"

    NEXT_VERIFICATION_ID = "next_verification_id"
