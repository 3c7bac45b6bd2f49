"""
Transaction Composer
====================
Ordered instruction buffer submitted as one atomic transaction.

Responsibilities:
- Preserve insertion order of instructions
- Check the signer set against the accounts flagged as signers
- Hand the composed transaction to the network client

The network applies the whole sequence or none of it; the composer relies
on that and never retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pool_orchestrator.execution.network_client import NetworkClient
from pool_orchestrator.shared.execution.execution_result import RejectedTransactionError
from pool_orchestrator.shared.system.logging import Logger


@dataclass(frozen=True)
class ComposedTransaction:
    """Instructions plus signing keypairs; the first signer pays fees."""

    instructions: Tuple[Instruction, ...]
    signers: Tuple[Keypair, ...]

    @property
    def payer(self) -> Pubkey:
        return self.signers[0].pubkey()


def required_signers(instructions: Iterable[Instruction]) -> List[Pubkey]:
    """Accounts flagged as signers, in first-seen order."""
    seen: List[Pubkey] = []
    for ix in instructions:
        for meta in ix.accounts:
            if meta.is_signer and meta.pubkey not in seen:
                seen.append(meta.pubkey)
    return seen


class TransactionComposer:
    """
    Append-only instruction buffer.

    Usage:
        composer = TransactionComposer(client)
        composer.add(create_ix)
        composer.extend(ata_ixs)
        signature = await composer.submit([payer, pool_state])
    """

    def __init__(self, client: NetworkClient, label: str = "tx"):
        self.client = client
        self.label = label
        self._instructions: List[Instruction] = []

    def add(self, instruction: Instruction) -> "TransactionComposer":
        self._instructions.append(instruction)
        return self

    def extend(self, instructions: Iterable[Instruction]) -> "TransactionComposer":
        for ix in instructions:
            self.add(ix)
        return self

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return tuple(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def build(self, signers: Sequence[Keypair]) -> ComposedTransaction:
        """Validate the signer set and freeze the buffer into a transaction."""
        if not self._instructions:
            raise ValueError(f"{self.label}: no instructions to submit")
        if not signers:
            raise ValueError(f"{self.label}: at least one signer (the fee payer) is required")

        unique: List[Keypair] = []
        for signer in signers:
            if not isinstance(signer, Keypair):
                raise TypeError(
                    f"{self.label}: signer {signer!r} is not a Keypair; "
                    "program-derived authorities cannot sign"
                )
            if signer.pubkey() not in [k.pubkey() for k in unique]:
                unique.append(signer)

        provided = {k.pubkey() for k in unique}
        required = set(required_signers(self._instructions))
        required.add(unique[0].pubkey())

        missing = required - provided
        if missing:
            raise ValueError(f"{self.label}: missing signatures for {sorted(str(k) for k in missing)}")
        extra = provided - required
        if extra:
            raise ValueError(f"{self.label}: keypairs not required by any instruction: {sorted(str(k) for k in extra)}")

        return ComposedTransaction(instructions=tuple(self._instructions), signers=tuple(unique))

    async def submit(self, signers: Sequence[Keypair]) -> str:
        """Submit the buffer atomically; returns the confirmation signature."""
        transaction = self.build(signers)
        Logger.info(
            f"[TX] Submitting {self.label}: {len(transaction.instructions)} instructions, "
            f"{len(transaction.signers)} signers"
        )
        try:
            signature = await self.client.submit(transaction)
        except RejectedTransactionError as e:
            Logger.error(f"[TX] {self.label} rejected ({e.code.value}): {e}")
            raise
        Logger.success(f"[TX] {self.label} confirmed: {signature}")
        return signature
