# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core configuration - centralized settings for the mastery package.

All environment-based configuration flows through this module.

Usage:
    from mastery.core.config import get_config
    config = get_config()

    fee = config.default_fee
    log_level = config.log_level
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Process-level settings for the mastery ledger.

    These only seed new ledger instances; once constructed, a ledger owns
    its own ``LedgerConfig`` and changes it through admin-gated setters.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # LEDGER DEFAULTS
    # ==========================================================================

    default_fee: int = Field(
        default=500,
        ge=0,
        description="Verification fee charged to the submitter",
        validation_alias="MASTERY_DEFAULT_FEE",
    )
    default_max_verifications: int = Field(
        default=10000,
        gt=0,
        description="Cap on the total number of verifications",
        validation_alias="MASTERY_DEFAULT_MAX_VERIFICATIONS",
    )
    reward_per_difficulty: int = Field(
        default=100,
        gt=0,
        description="Reward units paid per difficulty level",
        validation_alias="MASTERY_REWARD_PER_DIFFICULTY",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="MASTERY_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="MASTERY_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="MASTERY_LOG_FILE",
    )


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: LedgerSettings | None = None


def get_config() -> LedgerSettings:
    """Get the global settings instance."""
    global _config
    if _config is None:
        _config = LedgerSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
