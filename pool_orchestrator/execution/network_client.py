"""
Network Client
==============
Thin async wrapper around the Solana RPC.

Responsibilities:
- Read token account balances
- Read rent-exemption minimums
- Compile, sign, send and confirm composed transactions

Errors are mapped onto the orchestrator taxonomy; nothing is retried.
"""

from __future__ import annotations

import time
from typing import Optional, Protocol, TYPE_CHECKING, runtime_checkable

from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException, UnconfirmedTxError
from solana.rpc.types import TxOpts

from pool_orchestrator.config.settings import Settings
from pool_orchestrator.shared.execution.execution_result import (
    AccountNotFoundError,
    ErrorCode,
    RejectedTransactionError,
)
from pool_orchestrator.shared.system.logging import Logger

if TYPE_CHECKING:
    from pool_orchestrator.execution.transaction_composer import ComposedTransaction


@runtime_checkable
class NetworkClient(Protocol):
    """Interface the orchestrators depend on."""

    async def get_account_balance(self, address: Pubkey) -> int:
        ...

    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        ...

    async def submit(self, transaction: "ComposedTransaction") -> str:
        ...


class RpcNetworkClient:
    """
    RPC-backed NetworkClient.

    Usage:
        async with RpcNetworkClient.from_settings() as client:
            balance = await client.get_account_balance(holding)
    """

    def __init__(self, client: AsyncClient, commitment: Optional[str] = None):
        self.client = client
        self.commitment = Commitment(commitment or Settings.COMMITMENT)

        # Stats
        self.submitted = 0
        self.rejected = 0

    @classmethod
    def from_settings(cls, rpc_url: Optional[str] = None, commitment: Optional[str] = None) -> "RpcNetworkClient":
        url = rpc_url or Settings.RPC_URL
        resolved = Commitment(commitment or Settings.COMMITMENT)
        Logger.debug(f"[RPC] Connecting to {url} ({resolved})")
        return cls(AsyncClient(url, commitment=resolved), commitment=resolved)

    async def __aenter__(self) -> "RpcNetworkClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.close()

    # =========================================================================
    # READS
    # =========================================================================

    async def get_account_balance(self, address: Pubkey) -> int:
        """Raw token amount held by a token account."""
        try:
            resp = await self.client.get_token_account_balance(address, self.commitment)
        except RPCException as e:
            raise AccountNotFoundError(str(address), payload=e.args[0] if e.args else None) from e
        amount = int(resp.value.amount)
        Logger.debug(f"[RPC] Balance {address}: {amount}")
        return amount

    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        resp = await self.client.get_minimum_balance_for_rent_exemption(size, self.commitment)
        return resp.value

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    async def submit(self, transaction: "ComposedTransaction") -> str:
        """Sign, send and wait for confirmation. Returns the signature."""
        start = time.time()

        blockhash_resp = await self.client.get_latest_blockhash(self.commitment)
        blockhash = blockhash_resp.value.blockhash
        message = MessageV0.try_compile(
            payer=transaction.payer,
            instructions=list(transaction.instructions),
            address_lookup_table_accounts=[],
            recent_blockhash=blockhash,
        )
        tx = VersionedTransaction(message, list(transaction.signers))

        try:
            resp = await self.client.send_transaction(
                tx,
                opts=TxOpts(skip_confirmation=True, preflight_commitment=self.commitment),
            )
        except RPCException as e:
            self.rejected += 1
            payload = e.args[0] if e.args else None
            raise RejectedTransactionError(f"Transaction rejected: {payload}", payload=payload) from e

        signature = resp.value
        self.submitted += 1

        try:
            confirmation = await self.client.confirm_transaction(
                signature,
                self.commitment,
                last_valid_block_height=blockhash_resp.value.last_valid_block_height,
            )
        except UnconfirmedTxError as e:
            self.rejected += 1
            raise RejectedTransactionError(
                f"Transaction {signature} not confirmed: {e}",
                payload=str(e),
                code=ErrorCode.CONFIRMATION_TIMEOUT,
            ) from e

        status = confirmation.value[0] if confirmation.value else None
        if status is not None and status.err is not None:
            self.rejected += 1
            raise RejectedTransactionError(
                f"Transaction {signature} failed: {status.err}", payload=status.err
            )

        latency_ms = (time.time() - start) * 1000
        Logger.debug(f"[RPC] Confirmed {signature} in {latency_ms:.0f}ms")
        return str(signature)
