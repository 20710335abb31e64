# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Mastery verification ledger.

This package implements the credential-verification state machine:
- Users submit a verification per course (quiz, oracle attestation, challenge)
- Passing submissions mint exactly one certificate
- A mint triggers a reward proportional to course difficulty
- Later updates can flip pass/fail status without re-issuing or revoking

Submodules:
- constants: Bounds, defaults and store namespaces
- enums: Verification types and the error taxonomy
- models: Data models for verifications, certificates, payouts, config
- validators: Ordered validation for submissions and updates
- configuration: Admin-gated configuration store
- collaborators: Fee / NFT / reward protocols and in-memory implementations
- certificates: Idempotent certificate issuer
- rewards: Reward calculation and trigger
- service: VerificationLedger, the public interface
"""

from .constants import LedgerConstants, Namespaces

from .enums import ErrorKind, VerificationType

from .models import (
    Certificate,
    LedgerConfig,
    MintEvent,
    RewardPayout,
    TxContext,
    Verification,
    VerificationUpdate,
)

from .validators import validate_submission, validate_update

from .configuration import ConfigurationStore

from .collaborators import (
    FeeCollaborator,
    FeeTransfer,
    InMemoryFeeCollector,
    InMemoryNftRegistry,
    InMemoryRewardPool,
    NftCollaborator,
    NftMint,
    Payout,
    RewardCollaborator,
)

from .rewards import RewardTrigger, calculate_reward

from .certificates import CertificateIssuer

from .service import VerificationLedger

__all__ = [
    # Constants
    "LedgerConstants",
    "Namespaces",
    # Enums
    "ErrorKind",
    "VerificationType",
    # Models
    "Certificate",
    "LedgerConfig",
    "MintEvent",
    "RewardPayout",
    "TxContext",
    "Verification",
    "VerificationUpdate",
    # Validation
    "validate_submission",
    "validate_update",
    # Components
    "ConfigurationStore",
    "CertificateIssuer",
    "RewardTrigger",
    "calculate_reward",
    # Collaborators
    "FeeCollaborator",
    "NftCollaborator",
    "RewardCollaborator",
    "InMemoryFeeCollector",
    "InMemoryNftRegistry",
    "InMemoryRewardPool",
    "FeeTransfer",
    "NftMint",
    "Payout",
    # Service
    "VerificationLedger",
]
