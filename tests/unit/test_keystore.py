"""
KeyStore Unit Tests
===================
"""

import json

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pool_orchestrator.execution.keystore import KeyStore
from pool_orchestrator.shared.execution.execution_result import ErrorCode, KeyNotFoundError


def _write_key(path, keypair):
    path.write_text(json.dumps(list(bytes(keypair))))


class TestLoadKeypair:

    def test_loads_from_keys_dir_by_name(self, tmp_path):
        keypair = Keypair()
        _write_key(tmp_path / "payer.json", keypair)

        loaded = KeyStore(tmp_path).load_keypair("payer")

        assert loaded.pubkey() == keypair.pubkey()

    def test_loads_from_explicit_path(self, tmp_path):
        keypair = Keypair()
        path = tmp_path / "elsewhere.json"
        _write_key(path, keypair)

        loaded = KeyStore(tmp_path / "unused").load_keypair(str(path))

        assert loaded.pubkey() == keypair.pubkey()

    def test_loads_base58_from_environment(self, tmp_path, monkeypatch):
        keypair = Keypair()
        monkeypatch.setenv("POOL_TEST_TRADER_KEY", str(keypair))

        loaded = KeyStore(tmp_path).load_keypair("POOL_TEST_TRADER_KEY")

        assert loaded.pubkey() == keypair.pubkey()

    def test_missing_key_raises(self, tmp_path):
        with pytest.raises(KeyNotFoundError) as exc_info:
            KeyStore(tmp_path).load_keypair("does_not_exist")

        assert exc_info.value.code == ErrorCode.KEY_NOT_FOUND

    def test_corrupt_file_raises(self, tmp_path):
        (tmp_path / "broken.json").write_text("not json")

        with pytest.raises(KeyNotFoundError, match="Unreadable"):
            KeyStore(tmp_path).load_keypair("broken")


class TestStaticAddress:

    def test_parses_literal(self):
        literal = "HfoTxFR1Tm6kGmWgYWD6J7YHVy1UwqSULUGVLXkJqaKN"
        assert KeyStore.static_address(literal) == Pubkey.from_string(literal)

    def test_passes_pubkey_through(self):
        pubkey = Keypair().pubkey()
        assert KeyStore.static_address(pubkey) is pubkey

    @pytest.mark.parametrize("literal", ["notanaddress", "0OIl", "1" * 60])
    def test_malformed_literal_raises(self, literal):
        with pytest.raises(ValueError):
            KeyStore.static_address(literal)
