# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Data models for the verification ledger.

Records are plain dataclasses. ``to_dict`` / ``from_dict`` define the
serialized form, which is also where the internal ``None`` principal is
mapped to and from the reserved null sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import ValidationException
from .constants import LedgerConstants
from .enums import VerificationType


def principal_to_wire(principal: str | None) -> str:
    """Serialize an optional principal, using the null sentinel for None."""
    return principal if principal is not None else LedgerConstants.NULL_PRINCIPAL


def principal_from_wire(value: str | None) -> str | None:
    """Inverse of ``principal_to_wire``."""
    if value is None or value == LedgerConstants.NULL_PRINCIPAL:
        return None
    return value


def is_null_principal(principal: str | None) -> bool:
    return not principal or principal == LedgerConstants.NULL_PRINCIPAL


def _require(data: dict[str, Any], *fields: str) -> None:
    for name in fields:
        if name not in data:
            raise ValidationException(f"Missing required field: {name}", name)


# ============================================================================
# Execution context
# ============================================================================

@dataclass(frozen=True)
class TxContext:
    """Caller and logical clock for one ledger operation."""
    caller: str
    block_height: int = 0

    def advance(self, blocks: int = 1) -> TxContext:
        return TxContext(caller=self.caller, block_height=self.block_height + blocks)

    def as_caller(self, caller: str) -> TxContext:
        return TxContext(caller=caller, block_height=self.block_height)


# ============================================================================
# Verification
# ============================================================================

@dataclass
class Verification:
    """A user's recorded proof of mastery for one course."""
    course_id: int
    user: str
    score: int
    threshold: int
    proof_hash: bytes
    timestamp: int
    verification_type: VerificationType
    difficulty: int
    expiry: int
    metadata: str
    status: bool
    verifier: str | None = None  # Oracle principal for oracle submissions

    def to_dict(self) -> dict[str, Any]:
        return {
            "course_id": self.course_id,
            "user": self.user,
            "score": self.score,
            "threshold": self.threshold,
            "proof_hash": self.proof_hash.hex(),
            "timestamp": self.timestamp,
            "verifier": principal_to_wire(self.verifier),
            "verification_type": self.verification_type.value,
            "difficulty": self.difficulty,
            "expiry": self.expiry,
            "metadata": self.metadata,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Verification:
        _require(data, "course_id", "user", "score", "threshold", "proof_hash", "verification_type")
        proof_hash = data["proof_hash"]
        if isinstance(proof_hash, str):
            proof_hash = bytes.fromhex(proof_hash)

        score = int(data["score"])
        threshold = int(data["threshold"])
        return cls(
            course_id=int(data["course_id"]),
            user=data["user"],
            score=score,
            threshold=threshold,
            proof_hash=bytes(proof_hash),
            timestamp=int(data.get("timestamp", 0)),
            verifier=principal_from_wire(data.get("verifier")),
            verification_type=VerificationType(data["verification_type"]),
            difficulty=int(data.get("difficulty", LedgerConstants.MIN_DIFFICULTY)),
            expiry=int(data.get("expiry", 0)),
            metadata=data.get("metadata", ""),
            status=bool(data.get("status", score >= threshold)),
        )


@dataclass
class VerificationUpdate:
    """Audit record of the most recent correction to a verification."""
    update_score: int
    update_threshold: int
    update_timestamp: int
    updater: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "update_score": self.update_score,
            "update_threshold": self.update_threshold,
            "update_timestamp": self.update_timestamp,
            "updater": self.updater,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerificationUpdate:
        _require(data, "update_score", "update_threshold", "update_timestamp", "updater")
        return cls(
            update_score=int(data["update_score"]),
            update_threshold=int(data["update_threshold"]),
            update_timestamp=int(data["update_timestamp"]),
            updater=data["updater"],
        )


# ============================================================================
# Certificates and rewards
# ============================================================================

@dataclass
class Certificate:
    """Immutable proof that a verification passed when it was submitted."""
    verification_id: int
    owner: str
    issued_at: int
    metadata: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "verification_id": self.verification_id,
            "owner": self.owner,
            "issued_at": self.issued_at,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Certificate:
        _require(data, "verification_id", "owner", "issued_at")
        return cls(
            verification_id=int(data["verification_id"]),
            owner=data["owner"],
            issued_at=int(data["issued_at"]),
            metadata=data.get("metadata", ""),
        )


@dataclass
class MintEvent:
    """A certificate token minted through the NFT collaborator."""
    verification_id: int
    owner: str
    token_id: int
    block_height: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "verification_id": self.verification_id,
            "owner": self.owner,
            "token_id": self.token_id,
            "block_height": self.block_height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MintEvent:
        _require(data, "verification_id", "owner", "token_id")
        return cls(
            verification_id=int(data["verification_id"]),
            owner=data["owner"],
            token_id=int(data["token_id"]),
            block_height=int(data.get("block_height", 0)),
        )


@dataclass
class RewardPayout:
    """A payout triggered by a certificate mint."""
    verification_id: int
    user: str
    amount: int
    block_height: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "verification_id": self.verification_id,
            "user": self.user,
            "amount": self.amount,
            "block_height": self.block_height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RewardPayout:
        _require(data, "verification_id", "user", "amount")
        return cls(
            verification_id=int(data["verification_id"]),
            user=data["user"],
            amount=int(data["amount"]),
            block_height=int(data.get("block_height", 0)),
        )


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class LedgerConfig:
    """Per-ledger configuration. ``admin`` is fixed at construction."""
    admin: str
    verification_fee: int = LedgerConstants.DEFAULT_FEE
    max_verifications: int = LedgerConstants.DEFAULT_MAX_VERIFICATIONS
    reward_per_difficulty: int = LedgerConstants.REWARD_PER_DIFFICULTY
    oracle: str | None = None
    reward_collaborator: str | None = None
    nft_collaborator: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "oracle": principal_to_wire(self.oracle),
            "reward_collaborator": principal_to_wire(self.reward_collaborator),
            "nft_collaborator": principal_to_wire(self.nft_collaborator),
            "verification_fee": self.verification_fee,
            "max_verifications": self.max_verifications,
            "reward_per_difficulty": self.reward_per_difficulty,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerConfig:
        _require(data, "admin")
        return cls(
            admin=data["admin"],
            verification_fee=int(data.get("verification_fee", LedgerConstants.DEFAULT_FEE)),
            max_verifications=int(data.get("max_verifications", LedgerConstants.DEFAULT_MAX_VERIFICATIONS)),
            reward_per_difficulty=int(data.get("reward_per_difficulty", LedgerConstants.REWARD_PER_DIFFICULTY)),
            oracle=principal_from_wire(data.get("oracle")),
            reward_collaborator=principal_from_wire(data.get("reward_collaborator")),
            nft_collaborator=principal_from_wire(data.get("nft_collaborator")),
        )
