# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Reward calculation and the reward trigger run after a certificate mint."""

from __future__ import annotations

import logging

from ..exceptions import CollaboratorError
from ..store import KeyValueStore
from .collaborators import RewardCollaborator
from .configuration import ConfigurationStore
from .constants import LedgerConstants, Namespaces
from .models import RewardPayout, Verification

logger = logging.getLogger(__name__)


def calculate_reward(difficulty: int, per_difficulty: int = LedgerConstants.REWARD_PER_DIFFICULTY) -> int:
    """Reward for a minted certificate.

    Formula: reward = difficulty × per_difficulty (100 by default)
    """
    return difficulty * per_difficulty


class RewardTrigger:
    """Pays the verification's user once a certificate has been minted.

    Owns the ``reward_payouts`` namespace. A ``CollaboratorError`` from the
    payout is logged and does not unwind the mint that triggered it. Any other
    exception is a defect in the collaborator: it propagates and the whole
    submission rolls back, mint included.
    """

    def __init__(self, configuration: ConfigurationStore, collaborator: RewardCollaborator):
        self._configuration = configuration
        self._collaborator = collaborator

    @property
    def collaborator(self) -> RewardCollaborator:
        return self._collaborator

    def distribute_reward(
        self,
        txn: KeyValueStore,
        verification_id: int,
        block_height: int,
    ) -> RewardPayout | None:
        """Record and pay the reward for ``verification_id``.

        Returns None when skipped: no reward collaborator configured, the
        verification is missing, its status is not passing, or the payout
        failed.
        """
        config = self._configuration.config
        if config.reward_collaborator is None:
            logger.debug(f"No reward collaborator configured; skipping reward for {verification_id}")
            return None

        verification: Verification | None = txn.get(Namespaces.VERIFICATIONS, verification_id)
        if verification is None or not verification.status:
            return None

        amount = calculate_reward(verification.difficulty, config.reward_per_difficulty)
        try:
            self._collaborator.payout(verification.user, amount)
        except CollaboratorError as e:
            logger.warning(f"Reward payout for verification {verification_id} failed: {e.message}")
            return None

        payout = RewardPayout(
            verification_id=verification_id,
            user=verification.user,
            amount=amount,
            block_height=block_height,
        )
        txn.put(Namespaces.REWARD_PAYOUTS, verification_id, payout)
        logger.info(f"Reward of {amount} recorded for {verification.user} (verification {verification_id})")
        return payout
