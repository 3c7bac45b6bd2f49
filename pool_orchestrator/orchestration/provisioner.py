"""
Pool Provisioner
================
Two-phase provisioning of a token-swap pool.

Phase 1 (provision):
1. Allocate the pool state account (owned by the swap program)
2. Derive the swap authority from the pool state address
3. Create token A / token B associated accounts owned by the authority
4. Submit atomically, signed by payer + pool state

Between phases the holding accounts are funded by an external deposit.

Phase 2 (finalize):
0. Require non-zero balances on both holding accounts
1. Create the LP mint controlled by the authority (own transaction)
2. Create + initialize the pool LP token account
3. Create the fee ATA for the LP mint, owned by the fee owner
4. Initialize the swap with the configured fee schedule and curve
5. Submit 2-4 atomically, signed by payer + pool LP account + pool state

A failed Phase 2 leaves no pool behind, but Phase 1 accounts persist and
must be reused or abandoned by the caller.
"""

from __future__ import annotations

from typing import Optional, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID, MINT_LEN, ACCOUNT_LEN

from pool_orchestrator.config.pool_config import PoolConfig, DEFAULT_POOL_CONFIG
from pool_orchestrator.config.settings import Settings
from pool_orchestrator.execution.associated_accounts import resolve_associated_account
from pool_orchestrator.execution.authority import ProgramAuthority, derive_authority
from pool_orchestrator.execution.keystore import KeyStore
from pool_orchestrator.execution.network_client import NetworkClient
from pool_orchestrator.execution.token_accounts import (
    allocate_account_instruction,
    create_mint_instructions,
    create_token_account_instructions,
)
from pool_orchestrator.execution.token_swap import (
    TOKEN_SWAP_STATE_SIZE,
    InitializeSwapData,
    initialize_swap_instruction,
)
from pool_orchestrator.execution.transaction_composer import TransactionComposer
from pool_orchestrator.shared.execution.execution_result import (
    FinalizeResult,
    ProvisionResult,
    UnfundedPoolError,
)
from pool_orchestrator.shared.system.logging import Logger


class PoolProvisioner:
    """
    Sequences authority derivation, account creation and pool
    initialization into two atomic phases.

    Keypairs are held by reference for signing only.
    """

    def __init__(
        self,
        client: NetworkClient,
        payer: Keypair,
        pool_state: Keypair,
        pool_token_account: Keypair,
        swap_program_id: Optional[Pubkey] = None,
        token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    ):
        self.client = client
        self.payer = payer
        self.pool_state = pool_state
        self.pool_token_account = pool_token_account
        self.swap_program_id = swap_program_id or Pubkey.from_string(Settings.TOKEN_SWAP_PROGRAM_ID)
        self.token_program_id = token_program_id

    @classmethod
    def from_settings(
        cls,
        client: NetworkClient,
        keystore: Optional[KeyStore] = None,
    ) -> "PoolProvisioner":
        """Build a provisioner from the configured key identifiers."""
        keystore = keystore or KeyStore()
        return cls(
            client=client,
            payer=keystore.load_keypair(Settings.PAYER_KEY),
            pool_state=keystore.load_keypair(Settings.POOL_STATE_KEY),
            pool_token_account=keystore.load_keypair(Settings.POOL_TOKEN_ACCOUNT_KEY),
            swap_program_id=Pubkey.from_string(Settings.TOKEN_SWAP_PROGRAM_ID),
        )

    # =========================================================================
    # PHASE 1: AUTHORITY ESTABLISHMENT
    # =========================================================================

    def derive_authority(self) -> ProgramAuthority:
        return derive_authority(self.pool_state.pubkey(), self.swap_program_id)

    async def provision(self, token_a_mint: Pubkey, token_b_mint: Pubkey) -> ProvisionResult:
        """
        Create the pool state account and the authority-owned holding
        accounts for both mints in one transaction.
        """
        Logger.section("Phase 1: Authority Establishment")
        payer = self.payer.pubkey()
        pool_state = self.pool_state.pubkey()

        rent = await self.client.get_minimum_balance_for_rent_exemption(TOKEN_SWAP_STATE_SIZE)
        composer = TransactionComposer(self.client, label="provision")
        composer.add(
            allocate_account_instruction(
                payer, pool_state, TOKEN_SWAP_STATE_SIZE, rent, self.swap_program_id
            )
        )

        authority = self.derive_authority()
        Logger.info(f"[POOL] Swap authority {authority.address} (bump {authority.bump})")

        token_a_holding, token_a_ix = resolve_associated_account(
            payer, authority.address, token_a_mint, self.token_program_id
        )
        composer.add(token_a_ix)
        token_b_holding, token_b_ix = resolve_associated_account(
            payer, authority.address, token_b_mint, self.token_program_id
        )
        composer.add(token_b_ix)

        signature = await composer.submit([self.payer, self.pool_state])

        Logger.info(f"[POOL] Token A holding: {token_a_holding}")
        Logger.info(f"[POOL] Token B holding: {token_b_holding}")
        return ProvisionResult(
            authority=authority.address,
            bump=authority.bump,
            token_a_holding=token_a_holding,
            token_b_holding=token_b_holding,
            pool_state=pool_state,
            tx_signature=signature,
        )

    # =========================================================================
    # PHASE 2: POOL INITIALIZATION
    # =========================================================================

    async def check_funded(self, token_a_holding: Pubkey, token_b_holding: Pubkey) -> None:
        """Raise UnfundedPoolError unless both holdings carry a balance."""
        balances = {
            str(token_a_holding): await self.client.get_account_balance(token_a_holding),
            str(token_b_holding): await self.client.get_account_balance(token_b_holding),
        }
        for address, amount in balances.items():
            Logger.info(f"[POOL] Holding {address} balance: {amount}")
        if any(amount == 0 for amount in balances.values()):
            error = UnfundedPoolError(balances)
            Logger.error(f"[POOL] {error}")
            raise error

    async def create_lp_mint(self, authority: Pubkey, decimals: int) -> tuple:
        """Create the LP mint in its own transaction. Returns (mint, signature)."""
        mint = Keypair()
        rent = await self.client.get_minimum_balance_for_rent_exemption(MINT_LEN)
        composer = TransactionComposer(self.client, label="lp-mint")
        composer.extend(
            create_mint_instructions(
                self.payer.pubkey(),
                mint.pubkey(),
                mint_authority=authority,
                decimals=decimals,
                rent_lamports=rent,
                token_program_id=self.token_program_id,
            )
        )
        signature = await composer.submit([self.payer, mint])
        Logger.info(f"[POOL] LP mint {mint.pubkey()} ({decimals} decimals)")
        return mint.pubkey(), signature

    async def finalize(
        self,
        authority: Union[Pubkey, ProgramAuthority],
        token_a_holding: Pubkey,
        token_b_holding: Pubkey,
        fee_owner: Pubkey,
        config: Optional[PoolConfig] = None,
    ) -> FinalizeResult:
        """
        Initialize the pool. Requires both holding accounts to be funded;
        otherwise raises UnfundedPoolError without submitting anything.
        """
        config = config or DEFAULT_POOL_CONFIG
        if isinstance(authority, ProgramAuthority):
            authority = authority.address

        Logger.section("Phase 2: Pool Initialization")
        await self.check_funded(token_a_holding, token_b_holding)

        payer = self.payer.pubkey()
        lp_mint, mint_signature = await self.create_lp_mint(authority, config.lp_decimals)

        composer = TransactionComposer(self.client, label="finalize")
        rent = await self.client.get_minimum_balance_for_rent_exemption(ACCOUNT_LEN)
        composer.extend(
            create_token_account_instructions(
                payer,
                self.pool_token_account.pubkey(),
                lp_mint,
                owner=payer,
                rent_lamports=rent,
                token_program_id=self.token_program_id,
            )
        )

        fee_account, fee_ix = resolve_associated_account(
            payer, fee_owner, lp_mint, self.token_program_id
        )
        composer.add(fee_ix)

        composer.add(
            initialize_swap_instruction(
                pool_state=self.pool_state.pubkey(),
                authority=authority,
                token_a_holding=token_a_holding,
                token_b_holding=token_b_holding,
                lp_mint=lp_mint,
                fee_account=fee_account,
                pool_token_account=self.pool_token_account.pubkey(),
                data=InitializeSwapData(fees=config.fees, curve_type=config.curve_type),
                token_program_id=self.token_program_id,
                swap_program_id=self.swap_program_id,
            )
        )

        signature = await composer.submit([self.payer, self.pool_token_account, self.pool_state])
        Logger.success(f"[POOL] Pool {self.pool_state.pubkey()} active ({config.curve_type.name})")

        return FinalizeResult(
            pool_state=self.pool_state.pubkey(),
            lp_mint=lp_mint,
            fee_account=fee_account,
            pool_token_account=self.pool_token_account.pubkey(),
            tx_signatures=[mint_signature, signature],
        )
