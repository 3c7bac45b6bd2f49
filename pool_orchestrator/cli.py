"""
Pool Orchestrator CLI
=====================
Command-line entry points for the provisioning and swap workflow.

Commands:
    pool-orchestrator provision MINT_A MINT_B
    pool-orchestrator finalize AUTHORITY HOLDING_A HOLDING_B [--fee-owner ADDR]
    pool-orchestrator swap POOL HOLDING_A HOLDING_B AUTHORITY ... --amount-in N --min-out M
    pool-orchestrator balance ADDRESS
"""

import asyncio
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from pool_orchestrator.config.pool_config import CurveType, PoolConfig
from pool_orchestrator.config.settings import Settings
from pool_orchestrator.execution.keystore import KeyStore
from pool_orchestrator.execution.network_client import RpcNetworkClient
from pool_orchestrator.orchestration.provisioner import PoolProvisioner
from pool_orchestrator.orchestration.swapper import PoolSwapper
from pool_orchestrator.shared.execution.execution_result import OrchestratorError

app = typer.Typer(
    name="pool-orchestrator",
    help="Provision and operate SPL Token-Swap constant-product pools",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _client_factory() -> RpcNetworkClient:
    return RpcNetworkClient.from_settings()


def _render(title: str, data: Dict[str, Any]) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value", style="white")
    for key, value in data.items():
        table.add_row(key, str(value))
    console.print(table)


def _address(value: Optional[str]) -> Optional[str]:
    """Typer callback: reject malformed base58 addresses as usage errors."""
    if value is None:
        return value
    try:
        KeyStore.static_address(value)
    except ValueError as e:
        raise typer.BadParameter(f"not a valid address: {value!r} ({e})")
    return value


def _run(coro) -> Any:
    try:
        return asyncio.run(coro)
    except OrchestratorError as e:
        console.print(f"[red bold]{e.code.value}[/]: {e}")
        raise typer.Exit(code=1)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: PROVISION (Phase 1)
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def provision(
    token_a_mint: str = typer.Argument(..., callback=_address, help="Token A mint address"),
    token_b_mint: str = typer.Argument(..., callback=_address, help="Token B mint address"),
):
    """
    Create the pool state account and authority-owned holding accounts.

    Fund both printed holding accounts before running [bold]finalize[/bold].
    """
    keystore = KeyStore()

    async def _provision():
        async with _client_factory() as client:
            provisioner = PoolProvisioner.from_settings(client, keystore)
            return await provisioner.provision(
                keystore.static_address(token_a_mint),
                keystore.static_address(token_b_mint),
            )

    result = _run(_provision())
    _render("Pool Provisioned", result.to_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: FINALIZE (Phase 2)
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def finalize(
    authority: str = typer.Argument(..., callback=_address, help="Swap authority from provision"),
    token_a_holding: str = typer.Argument(..., callback=_address, help="Token A holding account"),
    token_b_holding: str = typer.Argument(..., callback=_address, help="Token B holding account"),
    fee_owner: Optional[str] = typer.Option(None, "--fee-owner", callback=_address, help="Owner of the LP fee account"),
    curve: str = typer.Option(
        "constant_product", "--curve", help="Curve kind: constant_product, constant_price, stable, offset"
    ),
    lp_decimals: int = typer.Option(2, "--lp-decimals", min=0, max=255, help="LP mint decimals"),
):
    """
    Create the LP mint and initialize the pool once both holdings are funded.
    """
    keystore = KeyStore()
    try:
        curve_type = CurveType[curve.upper()]
    except KeyError:
        raise typer.BadParameter(f"unknown curve {curve!r}", param_hint="--curve")
    config = PoolConfig(curve_type=curve_type, lp_decimals=lp_decimals)

    async def _finalize():
        async with _client_factory() as client:
            provisioner = PoolProvisioner.from_settings(client, keystore)
            return await provisioner.finalize(
                keystore.static_address(authority),
                keystore.static_address(token_a_holding),
                keystore.static_address(token_b_holding),
                keystore.static_address(fee_owner or Settings.FEE_OWNER),
                config=config,
            )

    result = _run(_finalize())
    _render("Pool Active", result.to_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: SWAP
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def swap(
    pool_state: str = typer.Argument(..., callback=_address, help="Pool state address"),
    token_a_holding: str = typer.Argument(..., callback=_address, help="Pool token A holding (receives input)"),
    token_b_holding: str = typer.Argument(..., callback=_address, help="Pool token B holding (pays output)"),
    authority: str = typer.Argument(..., callback=_address, help="Swap authority"),
    trader_source: str = typer.Argument(..., callback=_address, help="Trader's input token account"),
    trader_destination: str = typer.Argument(..., callback=_address, help="Trader's output token account"),
    lp_mint: str = typer.Argument(..., callback=_address, help="Pool LP mint"),
    fee_account: str = typer.Argument(..., callback=_address, help="Pool fee account"),
    amount_in: int = typer.Option(..., "--amount-in", min=1, help="Input amount (base units)"),
    min_out: int = typer.Option(..., "--min-out", min=0, help="Minimum output; 0 disables slippage protection"),
    trader_key: str = typer.Option("trader", "--trader-key", help="Trader key identifier"),
):
    """
    Swap against a provisioned pool.
    """
    keystore = KeyStore()
    try:
        trader = keystore.load_keypair(trader_key)
    except OrchestratorError as e:
        console.print(f"[red bold]{e.code.value}[/]: {e}")
        raise typer.Exit(code=1)

    async def _swap():
        async with _client_factory() as client:
            swapper = PoolSwapper(client)
            return await swapper.swap(
                keystore.static_address(pool_state),
                keystore.static_address(token_a_holding),
                keystore.static_address(token_b_holding),
                keystore.static_address(authority),
                trader,
                keystore.static_address(trader_source),
                keystore.static_address(trader_destination),
                keystore.static_address(lp_mint),
                keystore.static_address(fee_account),
                amount_in,
                min_out,
            )

    result = _run(_swap())
    _render("Swap Confirmed", result.to_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: BALANCE
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def balance(address: str = typer.Argument(..., callback=_address, help="Token account address")):
    """Show the raw token balance of an account."""

    async def _balance():
        async with _client_factory() as client:
            return await client.get_account_balance(KeyStore.static_address(address))

    amount = _run(_balance())
    console.print(f"{address}: [bold]{amount}[/]")


def main():
    app()


if __name__ == "__main__":
    main()
