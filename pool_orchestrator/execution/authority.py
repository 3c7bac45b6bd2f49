"""
Swap Authority Derivation
=========================
Program-derived authority for a pool state account.

The authority has no private key. Only the owning program can authorize
transfers out of accounts it controls, so it is modelled as a plain
(address, bump) value that can never be passed as a signer.

Formula: find_program_address([pool_state], swap_program_id)
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from pool_orchestrator.shared.execution.execution_result import DerivationExhaustedError
from pool_orchestrator.shared.system.logging import Logger


@dataclass(frozen=True)
class ProgramAuthority:
    """Keyless, program-derived address plus its bump seed."""

    address: Pubkey
    bump: int

    def __str__(self) -> str:
        return str(self.address)


def derive_authority(pool_state: Pubkey, program_id: Pubkey) -> ProgramAuthority:
    """Derive the swap authority controlling a pool's token accounts."""
    seeds = [bytes(pool_state)]
    try:
        pda, bump = Pubkey.find_program_address(seeds, program_id)
    except Exception as e:
        Logger.error(f"[POOL] Authority derivation failed for {pool_state}: {e}")
        raise DerivationExhaustedError(
            f"No valid program address for pool {pool_state} under program {program_id}"
        ) from e
    return ProgramAuthority(address=pda, bump=bump)
