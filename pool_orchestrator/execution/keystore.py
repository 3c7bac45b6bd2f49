"""
Key Store
=========
Keypair and static address loading.

Identifiers resolve, in order, to:
1. An existing file path (Solana CLI JSON byte array)
2. <keys_dir>/<identifier>.json
3. An environment variable holding a base58 secret key
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pool_orchestrator.config.settings import Settings
from pool_orchestrator.shared.execution.execution_result import KeyNotFoundError
from pool_orchestrator.shared.system.logging import Logger


class KeyStore:
    """
    Responsibility: Keypair loading from persisted material.

    Loaded keypairs are handed out by reference and never written back.
    """

    def __init__(self, keys_dir: Optional[Union[str, Path]] = None):
        self.keys_dir = Path(keys_dir or Settings.KEYS_DIR)

    def _resolve_path(self, identifier: str) -> Optional[Path]:
        direct = Path(identifier)
        if direct.is_file():
            return direct
        name = identifier if identifier.endswith(".json") else f"{identifier}.json"
        candidate = self.keys_dir / name
        if candidate.is_file():
            return candidate
        return None

    @staticmethod
    def _read_key_file(path: Path) -> Keypair:
        try:
            secret = json.loads(path.read_text())
            return Keypair.from_bytes(bytes(secret))
        except (OSError, ValueError, TypeError) as e:
            raise KeyNotFoundError(f"Unreadable key file {path}: {e}") from e

    def load_keypair(self, identifier: str) -> Keypair:
        """Load a keypair by identifier, raising KeyNotFoundError if absent."""
        path = self._resolve_path(identifier)
        if path is not None:
            keypair = self._read_key_file(path)
            Logger.debug(f"[KEYS] Loaded {identifier} from {path}: {keypair.pubkey()}")
            return keypair

        encoded = os.getenv(identifier)
        if encoded:
            try:
                keypair = Keypair.from_base58_string(encoded.strip())
            except ValueError as e:
                raise KeyNotFoundError(f"Invalid base58 key in ${identifier}: {e}") from e
            Logger.debug(f"[KEYS] Loaded {identifier} from environment: {keypair.pubkey()}")
            return keypair

        raise KeyNotFoundError(f"No key material for '{identifier}' (searched {self.keys_dir})")

    @staticmethod
    def static_address(literal: Union[str, Pubkey]) -> Pubkey:
        """Parse an externally fixed address (fee owner, existing pools)."""
        if isinstance(literal, Pubkey):
            return literal
        return Pubkey.from_string(literal.strip())
