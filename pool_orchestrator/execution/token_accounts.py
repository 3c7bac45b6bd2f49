"""
Token Account Builders
======================
System + SPL Token instruction pairs for creating mints and plain token
accounts. Rent amounts are supplied by the caller (read from the network).
"""

from typing import List, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import create_account, CreateAccountParams
from spl.token.constants import TOKEN_PROGRAM_ID, MINT_LEN, ACCOUNT_LEN
from spl.token.instructions import (
    initialize_mint,
    InitializeMintParams,
    initialize_account,
    InitializeAccountParams,
)


def allocate_account_instruction(
    payer: Pubkey,
    new_account: Pubkey,
    space: int,
    lamports: int,
    owner_program: Pubkey,
) -> Instruction:
    """System-program create_account; both payer and new account sign."""
    return create_account(
        CreateAccountParams(
            from_pubkey=payer,
            to_pubkey=new_account,
            lamports=lamports,
            space=space,
            owner=owner_program,
        )
    )


def create_mint_instructions(
    payer: Pubkey,
    mint: Pubkey,
    mint_authority: Pubkey,
    decimals: int,
    rent_lamports: int,
    freeze_authority: Optional[Pubkey] = None,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[Instruction]:
    return [
        allocate_account_instruction(payer, mint, MINT_LEN, rent_lamports, token_program_id),
        initialize_mint(
            InitializeMintParams(
                decimals=decimals,
                program_id=token_program_id,
                mint=mint,
                mint_authority=mint_authority,
                freeze_authority=freeze_authority,
            )
        ),
    ]


def create_token_account_instructions(
    payer: Pubkey,
    account: Pubkey,
    mint: Pubkey,
    owner: Pubkey,
    rent_lamports: int,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[Instruction]:
    return [
        allocate_account_instruction(payer, account, ACCOUNT_LEN, rent_lamports, token_program_id),
        initialize_account(
            InitializeAccountParams(
                program_id=token_program_id,
                account=account,
                mint=mint,
                owner=owner,
            )
        ),
    ]
