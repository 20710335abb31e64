# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""External collaborators consumed by the ledger.

The ledger only depends on the protocols below. The in-memory
implementations record every call and support staging, so when they are
enlisted in a ``UnitOfWork`` their effects roll back with the ledger's own
writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..exceptions import CollaboratorError
from .enums import ErrorKind

logger = logging.getLogger(__name__)


# ============================================================================
# Protocols
# ============================================================================

@runtime_checkable
class FeeCollaborator(Protocol):
    """Moves the verification fee. Raises CollaboratorError(TransferFailed)."""

    def transfer(self, amount: int, sender: str, recipient: str) -> None: ...


@runtime_checkable
class NftCollaborator(Protocol):
    """Mints certificate tokens. Raises CollaboratorError on failure."""

    def mint(self, owner: str, token_id: int) -> None: ...


@runtime_checkable
class RewardCollaborator(Protocol):
    """Pays out rewards. Raises CollaboratorError on failure."""

    def payout(self, user: str, amount: int) -> None: ...


# ============================================================================
# Call records
# ============================================================================

@dataclass(frozen=True)
class FeeTransfer:
    amount: int
    sender: str
    recipient: str


@dataclass(frozen=True)
class NftMint:
    owner: str
    token_id: int


@dataclass(frozen=True)
class Payout:
    user: str
    amount: int


# ============================================================================
# In-memory implementations
# ============================================================================

class _StagedRecorder:
    """Append-only call log with begin/commit/rollback staging."""

    name = "collaborator"

    def __init__(self) -> None:
        self._records: list[Any] = []
        self._staged: list[Any] | None = None
        self.failure: ErrorKind | None = None

    def begin(self) -> None:
        self._staged = []

    def commit(self) -> None:
        if self._staged:
            self._records.extend(self._staged)
        self._staged = None

    def rollback(self) -> None:
        if self._staged:
            logger.debug(f"{self.name}: discarding {len(self._staged)} staged calls")
        self._staged = None

    def fail_with(self, kind: ErrorKind | None) -> None:
        """Make every following call fail with ``kind`` (None to recover)."""
        self.failure = kind

    def _check_failure(self) -> None:
        if self.failure is not None:
            raise CollaboratorError(self.failure, self.name)

    def _record(self, entry: Any) -> None:
        if self._staged is not None:
            self._staged.append(entry)
        else:
            self._records.append(entry)

    def _visible(self) -> list[Any]:
        return self._records + (self._staged or [])

    @property
    def records(self) -> list[Any]:
        """Committed calls only."""
        return list(self._records)


class InMemoryFeeCollector(_StagedRecorder):
    """Records fee transfers instead of moving funds."""

    name = "fee"

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        self._check_failure()
        self._record(FeeTransfer(amount=amount, sender=sender, recipient=recipient))
        logger.debug(f"Fee transfer {amount} from {sender} to {recipient}")

    @property
    def transfers(self) -> list[FeeTransfer]:
        return self.records

    def total_collected(self, recipient: str) -> int:
        return sum(t.amount for t in self._records if t.recipient == recipient)


class InMemoryNftRegistry(_StagedRecorder):
    """Tracks minted token ids; minting an existing id fails."""

    name = "nft"

    def mint(self, owner: str, token_id: int) -> None:
        self._check_failure()
        if any(m.token_id == token_id for m in self._visible()):
            raise CollaboratorError(ErrorKind.NFT_ALREADY_ISSUED, self.name)
        self._record(NftMint(owner=owner, token_id=token_id))
        logger.debug(f"Minted token {token_id} to {owner}")

    @property
    def mints(self) -> list[NftMint]:
        return self.records

    def owner_of(self, token_id: int) -> str | None:
        for minted in self._records:
            if minted.token_id == token_id:
                return minted.owner
        return None


class InMemoryRewardPool(_StagedRecorder):
    """Records reward payouts."""

    name = "reward"

    def payout(self, user: str, amount: int) -> None:
        self._check_failure()
        self._record(Payout(user=user, amount=amount))
        logger.debug(f"Paid {amount} to {user}")

    @property
    def payouts(self) -> list[Payout]:
        return self.records
