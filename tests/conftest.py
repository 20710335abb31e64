"""Global test fixtures for the mastery ledger test suite."""

from __future__ import annotations

import os

import pytest

from mastery.core.config import clear_config_cache
from mastery.core.ledger import (
    InMemoryFeeCollector,
    InMemoryNftRegistry,
    InMemoryRewardPool,
    TxContext,
    VerificationLedger,
)

ADMIN = "ST1TEST"
ORACLE = "ST2ORACLE"
NFT_ADDRESS = "ST3NFT"
REWARD_ADDRESS = "ST4REWARD"
OTHER_USER = "ST3FAKE"

ZERO_PROOF = bytes(32)


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all MASTERY_ environment variables and reset cached settings."""
    for key in list(os.environ.keys()):
        if key.startswith("MASTERY_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Settings are cached per process; never leak them between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


# ============================================================================
# Ledger Fixtures
# ============================================================================


@pytest.fixture
def admin_ctx() -> TxContext:
    return TxContext(caller=ADMIN, block_height=0)


@pytest.fixture
def fees() -> InMemoryFeeCollector:
    return InMemoryFeeCollector()


@pytest.fixture
def nft() -> InMemoryNftRegistry:
    return InMemoryNftRegistry()


@pytest.fixture
def reward_pool() -> InMemoryRewardPool:
    return InMemoryRewardPool()


@pytest.fixture
def ledger(clean_env, fees, nft, reward_pool) -> VerificationLedger:
    """Fresh ledger with default fee (500) and cap (10000), nothing configured."""
    return VerificationLedger(
        ADMIN,
        fee_collaborator=fees,
        nft_collaborator=nft,
        reward_collaborator=reward_pool,
    )


@pytest.fixture
def configured_ledger(ledger, admin_ctx) -> VerificationLedger:
    """Ledger with oracle, NFT and reward collaborators configured."""
    ledger.set_oracle(admin_ctx, ORACLE).unwrap()
    ledger.set_nft_collaborator(admin_ctx, NFT_ADDRESS).unwrap()
    ledger.set_reward_collaborator(admin_ctx, REWARD_ADDRESS).unwrap()
    return ledger


@pytest.fixture
def submission():
    """Factory for valid submission keyword arguments."""

    def factory(**overrides):
        kwargs = {
            "course_id": 1,
            "score": 85,
            "threshold": 70,
            "proof_hash": ZERO_PROOF,
            "verification_type": "quiz",
            "difficulty": 5,
            "expiry": 1000,
            "metadata": "Mastery in Algebra",
        }
        kwargs.update(overrides)
        return kwargs

    return factory
