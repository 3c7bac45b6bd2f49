"""
CLI Tests
=========
Commands run against the in-memory ledger with keys from a temp directory.
"""

import json

import pytest
from solders.keypair import Keypair
from typer.testing import CliRunner

from pool_orchestrator import cli
from pool_orchestrator.config.settings import Settings
from tests.mocks.fake_ledger import FakeLedger

runner = CliRunner()


@pytest.fixture
def ledger(monkeypatch):
    fake = FakeLedger()
    monkeypatch.setattr(cli, "_client_factory", lambda: fake)
    return fake


@pytest.fixture
def keys_dir(tmp_path, monkeypatch):
    for name in ("payer", "pool_state", "pool_token_account", "trader"):
        (tmp_path / f"{name}.json").write_text(json.dumps(list(bytes(Keypair()))))
    monkeypatch.setattr(Settings, "KEYS_DIR", str(tmp_path))
    return tmp_path


class TestBalance:

    def test_prints_balance(self, ledger, mint_a):
        address = Keypair().pubkey()
        ledger.create_token_account(address, mint_a, Keypair().pubkey(), balance=42)

        result = runner.invoke(cli.app, ["balance", str(address)])

        assert result.exit_code == 0
        assert "42" in result.output

    def test_unknown_account_exits_nonzero(self, ledger):
        result = runner.invoke(cli.app, ["balance", str(Keypair().pubkey())])

        assert result.exit_code == 1
        assert "ACCOUNT_NOT_FOUND" in result.output

    def test_malformed_address_is_usage_error(self, ledger):
        result = runner.invoke(cli.app, ["balance", "notanaddress"])

        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)
        assert ledger.balance_queries == 0


class TestProvisioning:

    def test_provision_renders_result(self, ledger, keys_dir, mint_a, mint_b):
        result = runner.invoke(cli.app, ["provision", str(mint_a), str(mint_b)])

        assert result.exit_code == 0, result.output
        assert "Pool Provisioned" in result.output
        assert len(ledger.confirmed) == 1

    def test_missing_keys_exit_nonzero(self, ledger, tmp_path, monkeypatch, mint_a, mint_b):
        monkeypatch.setattr(Settings, "KEYS_DIR", str(tmp_path / "empty"))

        result = runner.invoke(cli.app, ["provision", str(mint_a), str(mint_b)])

        assert result.exit_code == 1
        assert "KEY_NOT_FOUND" in result.output
        assert ledger.submitted == []

    def test_finalize_unfunded_pool(self, ledger, keys_dir, mint_a, mint_b):
        authority = Keypair().pubkey()
        holding_a, holding_b = Keypair().pubkey(), Keypair().pubkey()
        ledger.create_token_account(holding_a, mint_a, authority, balance=0)
        ledger.create_token_account(holding_b, mint_b, authority, balance=100)

        result = runner.invoke(
            cli.app, ["finalize", str(authority), str(holding_a), str(holding_b)]
        )

        assert result.exit_code == 1
        assert "UNFUNDED_POOL" in result.output
        assert ledger.submitted == []

    def test_finalize_rejects_unknown_curve(self, ledger, keys_dir):
        keys = [str(Keypair().pubkey()) for _ in range(3)]

        result = runner.invoke(cli.app, ["finalize", *keys, "--curve", "parabolic"])

        assert result.exit_code != 0
        assert ledger.submitted == []


class TestSwapCommand:

    def test_zero_amount_rejected_by_parser(self, ledger, keys_dir):
        keys = [str(Keypair().pubkey()) for _ in range(8)]

        result = runner.invoke(cli.app, ["swap", *keys, "--amount-in", "0", "--min-out", "1"])

        assert result.exit_code != 0
        assert ledger.submitted == []

    def test_missing_trader_key(self, ledger, keys_dir):
        keys = [str(Keypair().pubkey()) for _ in range(8)]

        result = runner.invoke(
            cli.app,
            ["swap", *keys, "--amount-in", "10", "--min-out", "1", "--trader-key", "nobody"],
        )

        assert result.exit_code == 1
        assert "KEY_NOT_FOUND" in result.output

    def test_malformed_pool_address_rejected(self, ledger, keys_dir):
        keys = ["notanaddress"] + [str(Keypair().pubkey()) for _ in range(7)]

        result = runner.invoke(cli.app, ["swap", *keys, "--amount-in", "10", "--min-out", "1"])

        assert result.exit_code == 2
        assert ledger.submitted == []


class TestAddressValidation:

    def test_malformed_fee_owner_rejected(self, ledger, keys_dir):
        keys = [str(Keypair().pubkey()) for _ in range(3)]

        result = runner.invoke(cli.app, ["finalize", *keys, "--fee-owner", "0OIl"])

        assert result.exit_code == 2
        assert ledger.submitted == []
        assert ledger.balance_queries == 0

    def test_malformed_mint_rejected(self, ledger, keys_dir, mint_a):
        result = runner.invoke(cli.app, ["provision", str(mint_a), "notanaddress"])

        assert result.exit_code == 2
        assert ledger.submitted == []
