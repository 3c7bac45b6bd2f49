"""
Pool Swapper
============
Single-instruction swap against an already provisioned pool.

The trader's source tokens go into the pool's token A holding and the
output comes out of the pool's token B holding. No local balance or
slippage check is made: the swap program enforces minimum_amount_out and
rejects the transaction when it is not met.

minimum_amount_out == NO_SLIPPAGE_PROTECTION (0) disables that guard.
It is accepted but logged as a warning and reported on the result.
"""

from __future__ import annotations

import time
from typing import Optional, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from pool_orchestrator.config.settings import Settings
from pool_orchestrator.execution.authority import ProgramAuthority
from pool_orchestrator.execution.network_client import NetworkClient
from pool_orchestrator.execution.token_swap import SwapData, swap_instruction
from pool_orchestrator.execution.transaction_composer import TransactionComposer
from pool_orchestrator.shared.execution.execution_result import SwapResult
from pool_orchestrator.shared.system.logging import Logger

NO_SLIPPAGE_PROTECTION = 0


class PoolSwapper:
    """Builds and submits swaps for a provisioned pool."""

    def __init__(
        self,
        client: NetworkClient,
        swap_program_id: Optional[Pubkey] = None,
        token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    ):
        self.client = client
        self.swap_program_id = swap_program_id or Pubkey.from_string(Settings.TOKEN_SWAP_PROGRAM_ID)
        self.token_program_id = token_program_id

    async def swap(
        self,
        pool_state: Pubkey,
        token_a_holding: Pubkey,
        token_b_holding: Pubkey,
        authority: Union[Pubkey, ProgramAuthority],
        trader: Keypair,
        trader_source: Pubkey,
        trader_destination: Pubkey,
        lp_mint: Pubkey,
        fee_account: Pubkey,
        amount_in: int,
        minimum_amount_out: int,
        host_fee_account: Optional[Pubkey] = None,
    ) -> SwapResult:
        """
        Swap amount_in of the trader's source token for at least
        minimum_amount_out of the destination token.

        Raises:
            ValueError: amounts outside u64 bounds or amount_in == 0
            RejectedTransactionError: the program refused the swap
        """
        if isinstance(authority, ProgramAuthority):
            authority = authority.address

        data = SwapData(amount_in=amount_in, minimum_amount_out=minimum_amount_out)
        protected = minimum_amount_out != NO_SLIPPAGE_PROTECTION
        if not protected:
            Logger.warning("[SWAP] minimum_amount_out is 0: swap has NO slippage protection")

        instruction = swap_instruction(
            pool_state=pool_state,
            authority=authority,
            user_transfer_authority=trader.pubkey(),
            user_source=trader_source,
            pool_source=token_a_holding,
            pool_destination=token_b_holding,
            user_destination=trader_destination,
            lp_mint=lp_mint,
            fee_account=fee_account,
            data=data,
            host_fee_account=host_fee_account,
            token_program_id=self.token_program_id,
            swap_program_id=self.swap_program_id,
        )

        Logger.info(f"[SWAP] {amount_in} in, min out {minimum_amount_out} on pool {pool_state}")
        start = time.time()
        composer = TransactionComposer(self.client, label="swap")
        composer.add(instruction)
        signature = await composer.submit([trader])

        return SwapResult(
            tx_signature=signature,
            amount_in=amount_in,
            minimum_amount_out=minimum_amount_out,
            slippage_protected=protected,
            latency_ms=(time.time() - start) * 1000,
        )
