"""
Pool Orchestrator Test Configuration
====================================
Shared fixtures and pytest markers for the test suite.
"""

import os
import sys
import tempfile

import pytest

# Keep per-run log files out of the working tree
os.environ.setdefault("POOL_LOG_DIR", tempfile.mkdtemp(prefix="pool-logs-"))

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from solders.keypair import Keypair  # noqa: E402


# ============================================================================
# PYTEST MARKERS
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "network: marks tests that require network access"
    )
    config.addinivalue_line(
        "markers", "integration: marks integration tests"
    )


# ============================================================================
# SHARED FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def quiet_console():
    """Suppress Rich console output; file logging still runs."""
    from pool_orchestrator.shared.system.logging import Logger

    Logger.set_silent(True)
    yield
    Logger.set_silent(False)


@pytest.fixture
def payer():
    return Keypair()


@pytest.fixture
def pool_state():
    return Keypair()


@pytest.fixture
def pool_token_account():
    return Keypair()


@pytest.fixture
def mint_a():
    return Keypair().pubkey()


@pytest.fixture
def mint_b():
    return Keypair().pubkey()


@pytest.fixture
def fee_owner():
    return Keypair().pubkey()
