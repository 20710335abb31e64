# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Mastery Ledger - credential verification for course mastery.

A user records proof of mastery for a course (quiz score, oracle
attestation, or challenge). Passing submissions mint a one-time certificate
and trigger a reward proportional to course difficulty.

Architecture:
  Configuration Store (admin, oracle, collaborators, fee, cap)
    → Verification Ledger (validate, allocate id, store)
    → Certificate Issuer (one certificate per passing verification)
    → Reward Trigger (difficulty × 100 payout)

CLI entry point: ``mastery``
"""

__version__ = "0.1.0"

from . import (
    core as core,
)
