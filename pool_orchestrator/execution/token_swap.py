"""
Token-Swap Program Instructions
===============================
Pure, deterministic instruction building for the SPL Token-Swap program.

100% testable without RPC or wallet connections.

Layouts (little-endian):
- InitializeSwap: u8 tag=0, 8 x u64 fees, u8 curve_type, 32-byte curve params
- Swap:           u8 tag=1, u64 amount_in, u64 minimum_amount_out
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from pool_orchestrator.config.pool_config import FeeSchedule, CurveType, U64_MAX


# ═══════════════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════════

TOKEN_SWAP_PROGRAM_ID = Pubkey.from_string("SwaPpA9LAaLfeLi3a68M4DjnLqgtticKg6CnyNwgAC8")

# version(1) + is_initialized(1) + bump(1) + 7 pubkeys + 8 u64 fees + curve_type(1) + params(32)
TOKEN_SWAP_STATE_SIZE = 324

CURVE_PARAMETERS_SIZE = 32


class SwapInstructionTag(IntEnum):
    INITIALIZE = 0
    SWAP = 1


# ═══════════════════════════════════════════════════════════════════════════════
# INSTRUCTION PAYLOADS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InitializeSwapData:
    """Fee schedule and curve selection for pool initialization."""

    fees: FeeSchedule
    curve_type: CurveType = CurveType.CONSTANT_PRODUCT
    curve_parameters: bytes = field(default=bytes(CURVE_PARAMETERS_SIZE))

    def to_bytes(self) -> bytes:
        if len(self.curve_parameters) > CURVE_PARAMETERS_SIZE:
            raise ValueError(f"curve parameters exceed {CURVE_PARAMETERS_SIZE} bytes")
        params = self.curve_parameters.ljust(CURVE_PARAMETERS_SIZE, b"\x00")
        return (
            struct.pack("<B8QB", SwapInstructionTag.INITIALIZE, *self.fees.as_tuple(), int(self.curve_type))
            + params
        )


@dataclass(frozen=True)
class SwapData:
    """Input amount and minimum acceptable output."""

    amount_in: int
    minimum_amount_out: int

    def __post_init__(self):
        if not 0 < self.amount_in <= U64_MAX:
            raise ValueError(f"amount_in must be a positive u64, got {self.amount_in}")
        if not 0 <= self.minimum_amount_out <= U64_MAX:
            raise ValueError(f"minimum_amount_out must be a u64, got {self.minimum_amount_out}")

    def to_bytes(self) -> bytes:
        return struct.pack("<BQQ", SwapInstructionTag.SWAP, self.amount_in, self.minimum_amount_out)


# ═══════════════════════════════════════════════════════════════════════════════
# INSTRUCTION BUILDERS
# ═══════════════════════════════════════════════════════════════════════════════

def initialize_swap_instruction(
    pool_state: Pubkey,
    authority: Pubkey,
    token_a_holding: Pubkey,
    token_b_holding: Pubkey,
    lp_mint: Pubkey,
    fee_account: Pubkey,
    pool_token_account: Pubkey,
    data: InitializeSwapData,
    pool_state_signs: bool = True,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    swap_program_id: Pubkey = TOKEN_SWAP_PROGRAM_ID,
) -> Instruction:
    """
    Build the pool initialization instruction.

    pool_state_signs marks the state account as a co-signer so the state
    keypair authorizes initialization of the account it created.
    """
    accounts = [
        AccountMeta(pool_state, is_signer=pool_state_signs, is_writable=True),
        AccountMeta(authority, is_signer=False, is_writable=False),
        AccountMeta(token_a_holding, is_signer=False, is_writable=False),
        AccountMeta(token_b_holding, is_signer=False, is_writable=False),
        AccountMeta(lp_mint, is_signer=False, is_writable=True),
        AccountMeta(fee_account, is_signer=False, is_writable=False),
        AccountMeta(pool_token_account, is_signer=False, is_writable=True),
        AccountMeta(token_program_id, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id=swap_program_id, accounts=accounts, data=data.to_bytes())


def swap_instruction(
    pool_state: Pubkey,
    authority: Pubkey,
    user_transfer_authority: Pubkey,
    user_source: Pubkey,
    pool_source: Pubkey,
    pool_destination: Pubkey,
    user_destination: Pubkey,
    lp_mint: Pubkey,
    fee_account: Pubkey,
    data: SwapData,
    host_fee_account: Optional[Pubkey] = None,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    swap_program_id: Pubkey = TOKEN_SWAP_PROGRAM_ID,
) -> Instruction:
    """Build a swap instruction (user_source -> pool_source, pool_destination -> user_destination)."""
    accounts: List[AccountMeta] = [
        AccountMeta(pool_state, is_signer=False, is_writable=False),
        AccountMeta(authority, is_signer=False, is_writable=False),
        AccountMeta(user_transfer_authority, is_signer=True, is_writable=False),
        AccountMeta(user_source, is_signer=False, is_writable=True),
        AccountMeta(pool_source, is_signer=False, is_writable=True),
        AccountMeta(pool_destination, is_signer=False, is_writable=True),
        AccountMeta(user_destination, is_signer=False, is_writable=True),
        AccountMeta(lp_mint, is_signer=False, is_writable=True),
        AccountMeta(fee_account, is_signer=False, is_writable=True),
        AccountMeta(token_program_id, is_signer=False, is_writable=False),
    ]
    if host_fee_account is not None:
        accounts.append(AccountMeta(host_fee_account, is_signer=False, is_writable=True))
    return Instruction(program_id=swap_program_id, accounts=accounts, data=data.to_bytes())
