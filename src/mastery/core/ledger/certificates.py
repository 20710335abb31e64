# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Certificate issuance for passing verifications."""

from __future__ import annotations

import logging

from ..store import KeyValueStore
from .collaborators import NftCollaborator
from .configuration import ConfigurationStore
from .constants import Namespaces
from .models import Certificate, MintEvent
from .rewards import RewardTrigger

logger = logging.getLogger(__name__)


class CertificateIssuer:
    """Mints at most one certificate per verification id.

    Owns the ``certificates`` and ``mint_events`` namespaces. Must be called
    inside the unit of work of the submission that passed; a mint failure
    propagates so that submission rolls back as a whole.
    """

    def __init__(
        self,
        configuration: ConfigurationStore,
        collaborator: NftCollaborator,
        reward_trigger: RewardTrigger,
    ):
        self._configuration = configuration
        self._collaborator = collaborator
        self._reward_trigger = reward_trigger

    @property
    def collaborator(self) -> NftCollaborator:
        return self._collaborator

    def issue_certificate(
        self,
        txn: KeyValueStore,
        verification_id: int,
        owner: str,
        metadata: str,
        block_height: int,
    ) -> Certificate | None:
        """Mint the certificate for ``verification_id``.

        Returns None without side effects when no NFT collaborator is
        configured or a certificate already exists for the id.

        Raises:
            CollaboratorError: If the NFT collaborator rejects the mint
        """
        if self._configuration.config.nft_collaborator is None:
            logger.debug(f"No NFT collaborator configured; no certificate for {verification_id}")
            return None

        if txn.contains(Namespaces.CERTIFICATES, verification_id):
            logger.debug(f"Certificate for verification {verification_id} already issued")
            return None

        certificate = Certificate(
            verification_id=verification_id,
            owner=owner,
            issued_at=block_height,
            metadata=metadata,
        )
        txn.put(Namespaces.CERTIFICATES, verification_id, certificate)

        token_id = verification_id
        self._collaborator.mint(owner, token_id)
        txn.put(
            Namespaces.MINT_EVENTS,
            verification_id,
            MintEvent(
                verification_id=verification_id,
                owner=owner,
                token_id=token_id,
                block_height=block_height,
            ),
        )
        logger.info(f"Certificate {token_id} minted for {owner}")

        self._reward_trigger.distribute_reward(txn, verification_id, block_height)
        return certificate
