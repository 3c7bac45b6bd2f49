"""
Integration Test Configuration
==============================
Fixtures for orchestrator wiring tests against the in-memory ledger.
"""

import pytest

from tests.mocks.fake_ledger import FakeLedger


@pytest.fixture
def ledger():
    """All-or-nothing in-memory ledger."""
    return FakeLedger()


@pytest.fixture
def provisioner(ledger, payer, pool_state, pool_token_account):
    from pool_orchestrator.orchestration.provisioner import PoolProvisioner

    return PoolProvisioner(
        client=ledger,
        payer=payer,
        pool_state=pool_state,
        pool_token_account=pool_token_account,
    )


@pytest.fixture
def swapper(ledger):
    from pool_orchestrator.orchestration.swapper import PoolSwapper

    return PoolSwapper(ledger)
