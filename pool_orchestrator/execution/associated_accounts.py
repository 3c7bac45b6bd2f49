"""
Associated Token Account Resolver
=================================
Deterministic (owner, mint) -> holding account derivation plus the
instruction that creates it.

No existence check is made. Creating an account twice fails on-chain and
surfaces as a rejected transaction.
"""

from typing import Tuple

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    create_associated_token_account,
    get_associated_token_address,
)

from pool_orchestrator.shared.system.logging import Logger


def derive_associated_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Associated token address; owner may be off-curve (program authority)."""
    return get_associated_token_address(owner, mint, token_program_id)


def resolve_associated_account(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Tuple[Pubkey, Instruction]:
    """
    Compute an associated holding account and its creation instruction.

    Args:
        payer: Funds the rent deposit and signs
        owner: Account owner (wallet or program authority)
        mint: Token mint held by the account
        token_program_id: Token program that owns the mint

    Returns:
        (associated address, create instruction)
    """
    address = derive_associated_address(owner, mint, token_program_id)
    instruction = create_associated_token_account(payer, owner, mint, token_program_id=token_program_id)
    Logger.debug(f"[POOL] ATA {address} for owner={owner} mint={mint}")
    return address, instruction
