# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Verification ledger: the public interface of the mastery ledger.

Submissions flow configuration → validation → storage → certificate
issuance → reward trigger inside one unit of work. Any failure after
validation (fee transfer, mint) discards every staged write, including the
id counter and the uniqueness index entry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from ..exceptions import CollaboratorError, LedgerError
from ..logging import correlation_context, operation_logger
from ..response import LedgerResponse, err, ok
from ..store import KeyValueStore, MemoryStore, UnitOfWork
from .certificates import CertificateIssuer
from .collaborators import (
    FeeCollaborator,
    InMemoryFeeCollector,
    InMemoryNftRegistry,
    InMemoryRewardPool,
    NftCollaborator,
    RewardCollaborator,
)
from .configuration import ConfigurationStore
from .constants import Namespaces
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
from .rewards import RewardTrigger
from .validators import is_int, validate_submission, validate_update

logger = logging.getLogger(__name__)


class VerificationLedger:
    """Credential-verification ledger.

    Mutating operations take an explicit ``TxContext`` (caller and block
    height) and return a ``LedgerResponse``; read-only queries return plain
    values and see committed state only.
    """

    def __init__(
        self,
        admin: str,
        store: KeyValueStore | None = None,
        fee_collaborator: FeeCollaborator | None = None,
        nft_collaborator: NftCollaborator | None = None,
        reward_collaborator: RewardCollaborator | None = None,
        verification_fee: int | None = None,
        max_verifications: int | None = None,
    ):
        self._store = store if store is not None else MemoryStore()
        self.configuration = ConfigurationStore(
            admin,
            verification_fee=verification_fee,
            max_verifications=max_verifications,
        )
        self.fees: FeeCollaborator = fee_collaborator or InMemoryFeeCollector()
        self.rewards = RewardTrigger(self.configuration, reward_collaborator or InMemoryRewardPool())
        self.issuer = CertificateIssuer(
            self.configuration,
            nft_collaborator or InMemoryNftRegistry(),
            self.rewards,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> LedgerConfig:
        return self.configuration.config

    def set_oracle(self, ctx: TxContext, oracle: str | None) -> LedgerResponse:
        return self._configure("set_oracle", ctx, oracle, self.configuration.set_oracle)

    def set_reward_collaborator(self, ctx: TxContext, address: str | None) -> LedgerResponse:
        return self._configure(
            "set_reward_collaborator", ctx, address, self.configuration.set_reward_collaborator
        )

    def set_nft_collaborator(self, ctx: TxContext, address: str | None) -> LedgerResponse:
        return self._configure("set_nft_collaborator", ctx, address, self.configuration.set_nft_collaborator)

    def set_fee(self, ctx: TxContext, fee: int) -> LedgerResponse:
        return self._configure("set_fee", ctx, fee, self.configuration.set_fee)

    def set_max_verifications(self, ctx: TxContext, max_verifications: int) -> LedgerResponse:
        return self._configure(
            "set_max_verifications", ctx, max_verifications, self.configuration.set_max_verifications
        )

    def _configure(
        self,
        operation: str,
        ctx: TxContext,
        value: Any,
        setter: Callable[[TxContext, Any], LedgerResponse],
    ) -> LedgerResponse:
        with correlation_context():
            operation_logger.log_call(operation, ctx.caller, {"value": value})
            response = setter(ctx, value)
            operation_logger.log_result(
                operation, response.success, response.error.value if response.error else None
            )
            return response

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _transact(
        self,
        operation: str,
        ctx: TxContext,
        arguments: dict[str, Any],
        body: Callable[[UnitOfWork], Any],
    ) -> LedgerResponse:
        """Run ``body`` in a unit of work and convert the outcome to a response."""
        with correlation_context():
            operation_logger.log_call(operation, ctx.caller, arguments)
            participants = [self.fees, self.issuer.collaborator, self.rewards.collaborator]
            try:
                with UnitOfWork(self._store, participants) as txn:
                    data = body(txn)
            except LedgerError as e:
                logger.warning(f"{operation} by {ctx.caller} rejected: {e.kind.value}")
                operation_logger.log_result(operation, False, e.kind.value)
                message = e.message if e.message != e.kind.value else None
                return err(e.kind, message)

            operation_logger.log_result(operation, True)
            return ok(data)

    def _next_id(self, store: KeyValueStore) -> int:
        return store.get(Namespaces.META, Namespaces.NEXT_VERIFICATION_ID, 0)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit_verification(
        self,
        ctx: TxContext,
        course_id: int,
        score: int,
        threshold: int,
        proof_hash: bytes,
        verification_type: VerificationType | str,
        difficulty: int,
        expiry: int,
        metadata: str,
    ) -> LedgerResponse:
        """Record a new verification for ``(ctx.caller, course_id)``.

        Returns:
            ok(verification_id) or err(kind), see ``validate_submission``
            for the check order. ``TransferFailed`` / ``NftAlreadyIssued``
            come from collaborators and leave no trace in the ledger.
        """
        arguments = {
            "course_id": course_id,
            "score": score,
            "threshold": threshold,
            "proof_hash": proof_hash,
            "verification_type": verification_type,
            "difficulty": difficulty,
            "expiry": expiry,
            "metadata": metadata,
        }

        def body(txn: UnitOfWork) -> int:
            config = self.configuration.config
            next_id = self._next_id(txn)
            error = validate_submission(
                caller=ctx.caller,
                block_height=ctx.block_height,
                config=config,
                next_id=next_id,
                already_verified=lambda: txn.contains(Namespaces.VERIFICATIONS_BY_USER, (ctx.caller, course_id)),
                **arguments,
            )
            if error is not None:
                raise LedgerError(error)

            if config.verification_fee > 0:
                try:
                    self.fees.transfer(config.verification_fee, ctx.caller, config.admin)
                except CollaboratorError as e:
                    raise CollaboratorError(ErrorKind.TRANSFER_FAILED, e.collaborator, e.message) from e

            vtype = VerificationType(verification_type)
            verification = Verification(
                course_id=course_id,
                user=ctx.caller,
                score=score,
                threshold=threshold,
                proof_hash=bytes(proof_hash),
                timestamp=ctx.block_height,
                verifier=ctx.caller if vtype == VerificationType.ORACLE else None,
                verification_type=vtype,
                difficulty=difficulty,
                expiry=expiry,
                metadata=metadata,
                status=score >= threshold,
            )
            txn.put(Namespaces.VERIFICATIONS, next_id, verification)
            txn.put(Namespaces.VERIFICATIONS_BY_USER, (ctx.caller, course_id), next_id)
            txn.put(Namespaces.META, Namespaces.NEXT_VERIFICATION_ID, next_id + 1)

            logger.info(
                f"Verification {next_id} submitted by {ctx.caller} for course {course_id} "
                f"({vtype.value}, status={verification.status})"
            )

            if verification.status:
                self.issuer.issue_certificate(txn, next_id, ctx.caller, metadata, ctx.block_height)
            return next_id

        return self._transact("submit_verification", ctx, arguments, body)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update_verification(
        self,
        ctx: TxContext,
        verification_id: int,
        new_score: int,
        new_threshold: int,
    ) -> LedgerResponse:
        """Correct score and threshold of an existing verification.

        Only the original submitter may update. Status is recomputed but
        certificates and rewards are never issued or revoked here.
        """
        arguments = {
            "verification_id": verification_id,
            "new_score": new_score,
            "new_threshold": new_threshold,
        }

        def body(txn: UnitOfWork) -> bool:
            verification: Verification | None = None
            if is_int(verification_id):
                verification = txn.get(Namespaces.VERIFICATIONS, verification_id)
            error = validate_update(
                caller=ctx.caller,
                owner=verification.user if verification else None,
                new_score=new_score,
                new_threshold=new_threshold,
            )
            if error is not None:
                raise LedgerError(error)

            updated = replace(
                verification,
                score=new_score,
                threshold=new_threshold,
                timestamp=ctx.block_height,
                status=new_score >= new_threshold,
            )
            txn.put(Namespaces.VERIFICATIONS, verification_id, updated)
            txn.put(
                Namespaces.VERIFICATION_UPDATES,
                verification_id,
                VerificationUpdate(
                    update_score=new_score,
                    update_threshold=new_threshold,
                    update_timestamp=ctx.block_height,
                    updater=ctx.caller,
                ),
            )

            if updated.status != verification.status:
                logger.info(f"Verification {verification_id} status changed to {updated.status}")
            return True

        return self._transact("update_verification", ctx, arguments, body)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _lookup(self, namespace: str, verification_id: Any) -> Any:
        # Records are keyed by integer id; anything else is simply absent
        if not is_int(verification_id):
            return None
        return self._store.get(namespace, verification_id)

    def get_verification(self, verification_id: int) -> Verification | None:
        """Get a verification by id."""
        return self._lookup(Namespaces.VERIFICATIONS, verification_id)

    def get_verification_count(self) -> int:
        """Number of verifications ever submitted (the next id)."""
        return self._next_id(self._store)

    def check_verification_status(self, user: str, course_id: int) -> bool:
        """Current pass status for ``(user, course_id)``; False when absent."""
        verification_id = self.get_verification_id(user, course_id)
        if verification_id is None:
            return False
        verification = self.get_verification(verification_id)
        return verification.status if verification else False

    def get_verification_id(self, user: str, course_id: int) -> int | None:
        if not isinstance(user, str) or not is_int(course_id):
            return None
        return self._store.get(Namespaces.VERIFICATIONS_BY_USER, (user, course_id))

    def get_verification_update(self, verification_id: int) -> VerificationUpdate | None:
        return self._lookup(Namespaces.VERIFICATION_UPDATES, verification_id)

    def get_certificate(self, verification_id: int) -> Certificate | None:
        return self._lookup(Namespaces.CERTIFICATES, verification_id)

    def get_reward_payout(self, verification_id: int) -> RewardPayout | None:
        return self._lookup(Namespaces.REWARD_PAYOUTS, verification_id)

    def get_mint_events(self) -> list[MintEvent]:
        return [event for _, event in self._store.items(Namespaces.MINT_EVENTS)]

    def snapshot(self) -> dict[str, Any]:
        """JSON-safe view of configuration and every ledger map."""

        def dump(namespace: str) -> dict[str, Any]:
            return {str(key): value.to_dict() for key, value in self._store.items(namespace)}

        return {
            "config": self.config.to_dict(),
            "verification_count": self.get_verification_count(),
            "verifications": dump(Namespaces.VERIFICATIONS),
            "verification_updates": dump(Namespaces.VERIFICATION_UPDATES),
            "certificates": dump(Namespaces.CERTIFICATES),
            "mint_events": dump(Namespaces.MINT_EVENTS),
            "reward_payouts": dump(Namespaces.REWARD_PAYOUTS),
        }
