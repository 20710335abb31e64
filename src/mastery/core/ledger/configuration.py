# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Admin-gated configuration store for one ledger instance."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import get_config
from ..exceptions import ConfigException
from ..response import LedgerResponse, err, ok
from .enums import ErrorKind
from .models import LedgerConfig, TxContext, is_null_principal
from .validators import is_int

logger = logging.getLogger(__name__)


class ConfigurationStore:
    """Holds the admin, oracle, collaborator addresses, fee and cap.

    Every setter requires the caller to be the admin principal fixed at
    construction. Failed setters leave the configuration untouched.
    """

    def __init__(
        self,
        admin: str,
        verification_fee: int | None = None,
        max_verifications: int | None = None,
    ):
        if is_null_principal(admin):
            raise ConfigException("A ledger requires a non-null admin principal")

        settings = get_config()
        if verification_fee is None:
            verification_fee = settings.default_fee
        if max_verifications is None:
            max_verifications = settings.default_max_verifications

        if not is_int(verification_fee) or verification_fee < 0:
            raise ConfigException(f"Verification fee must be a non-negative integer, got {verification_fee!r}")
        if not is_int(max_verifications) or max_verifications <= 0:
            raise ConfigException(f"Maximum verifications must be a positive integer, got {max_verifications!r}")

        # The reward rate is fixed for the lifetime of the ledger
        self._config = LedgerConfig(
            admin=admin,
            verification_fee=verification_fee,
            max_verifications=max_verifications,
            reward_per_difficulty=settings.reward_per_difficulty,
        )

    @property
    def config(self) -> LedgerConfig:
        """Current configuration (a copy; mutate only through setters)."""
        return replace(self._config)

    @property
    def admin(self) -> str:
        return self._config.admin

    def is_admin(self, principal: str) -> bool:
        return principal == self._config.admin

    def _set_principal(self, ctx: TxContext, field_name: str, principal: str | None) -> LedgerResponse:
        if not self.is_admin(ctx.caller):
            logger.warning(f"Rejected {field_name} change by non-admin {ctx.caller}")
            return err(ErrorKind.NOT_AUTHORIZED)
        if is_null_principal(principal):
            return err(ErrorKind.NOT_VERIFIED, f"{field_name} cannot be the null principal")

        setattr(self._config, field_name, principal)
        logger.info(f"Configuration {field_name} set to {principal}")
        return ok(True)

    def set_oracle(self, ctx: TxContext, oracle: str | None) -> LedgerResponse:
        return self._set_principal(ctx, "oracle", oracle)

    def set_reward_collaborator(self, ctx: TxContext, address: str | None) -> LedgerResponse:
        return self._set_principal(ctx, "reward_collaborator", address)

    def set_nft_collaborator(self, ctx: TxContext, address: str | None) -> LedgerResponse:
        return self._set_principal(ctx, "nft_collaborator", address)

    def set_fee(self, ctx: TxContext, fee: int) -> LedgerResponse:
        if not self.is_admin(ctx.caller):
            logger.warning(f"Rejected fee change by non-admin {ctx.caller}")
            return err(ErrorKind.NOT_AUTHORIZED)
        if not is_int(fee) or fee < 0:
            return err(ErrorKind.INVALID_UPDATE_PARAM, "Fee must be a non-negative integer")

        self._config.verification_fee = fee
        logger.info(f"Verification fee set to {fee}")
        return ok(True)

    def set_max_verifications(self, ctx: TxContext, max_verifications: int) -> LedgerResponse:
        if not self.is_admin(ctx.caller):
            logger.warning(f"Rejected cap change by non-admin {ctx.caller}")
            return err(ErrorKind.NOT_AUTHORIZED)
        if not is_int(max_verifications) or max_verifications <= 0:
            return err(ErrorKind.INVALID_UPDATE_PARAM, "Cap must be a positive integer")

        self._config.max_verifications = max_verifications
        logger.info(f"Maximum verifications set to {max_verifications}")
        return ok(True)
