"""
Pool Orchestrator Test Mocks
============================
Reusable fakes for isolated testing.
"""

from tests.mocks.fake_ledger import FakeLedger, FakeAccount

__all__ = [
    "FakeLedger",
    "FakeAccount",
]
