"""
Execution Layer
===============
Addressing, instruction building and submission.

Components:
- KeyStore: Keypair loading
- RpcNetworkClient: Balances, rent, submission
- resolve_associated_account / derive_authority: Deterministic addressing
- token_swap: Swap program instruction layouts
- TransactionComposer: Atomic instruction buffer
"""

from pool_orchestrator.execution.keystore import KeyStore
from pool_orchestrator.execution.network_client import NetworkClient, RpcNetworkClient
from pool_orchestrator.execution.associated_accounts import (
    derive_associated_address,
    resolve_associated_account,
)
from pool_orchestrator.execution.authority import ProgramAuthority, derive_authority
from pool_orchestrator.execution.transaction_composer import (
    ComposedTransaction,
    TransactionComposer,
)

__all__ = [
    "KeyStore",
    "NetworkClient",
    "RpcNetworkClient",
    "derive_associated_address",
    "resolve_associated_account",
    "ProgramAuthority",
    "derive_authority",
    "ComposedTransaction",
    "TransactionComposer",
]
