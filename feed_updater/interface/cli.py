"""
Feed Updater CLI
================
Command-line front end using Typer + Rich.

Commands:
    python main.py update SOL/USD 123.45
    python main.py feeds
    python main.py encode 123.45
"""

import asyncio
import sys
from dataclasses import replace

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from solders.pubkey import Pubkey

from config.settings import Settings
from feed_updater.execution.execution_result import FeedUpdateError
from feed_updater.execution.fixed_point import FixedPointEncoder
from feed_updater.execution.instruction_factory import InstructionPayloadBuilder
from feed_updater.execution.transaction_submitter import RetryPolicy
from feed_updater.execution.wallet import load_credential
from feed_updater.services.price_update_service import FeedContext, PriceUpdateService
from feed_updater.shared.infrastructure.explorer_endpoints import ExplorerEndpoints, short_address
from feed_updater.shared.infrastructure.feed_registry import FeedRegistry
from feed_updater.shared.infrastructure.rpc_client import LedgerRpc

app = typer.Typer(
    name="feed-updater",
    help="Push price updates to a mock Solana price feed program",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _load_registry(feeds_file: str) -> FeedRegistry:
    try:
        return FeedRegistry.from_file(feeds_file)
    except FileNotFoundError:
        console.print(
            f"[bold red]❌ Price feed list not found: {feeds_file}[/bold red]\n"
            "[dim]Run `anchor test` in the mock price feed project or set PRICE_FEEDS_FILE.[/dim]"
        )
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/bold red]")
        raise typer.Exit(1)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: UPDATE
# ═══════════════════════════════════════════════════════════════════════════════

async def _run_update(
    symbol: str,
    price: str,
    rpc_url: str,
    registry: FeedRegistry,
    program_id: Pubkey,
    policy: RetryPolicy,
) -> None:
    credential = load_credential(Settings.SOLANA_PRIVATE_KEY, Settings.SOLANA_KEYPAIR_PATH)
    links = ExplorerEndpoints(rpc_url)

    rpc = LedgerRpc.connect(rpc_url, policy.commitment, Settings.CONFIRM_POLL_INTERVAL_S)
    async with rpc:
        service = PriceUpdateService(FeedContext(
            rpc=rpc,
            credential=credential,
            registry=registry,
            program_id=program_id,
            exponent=Settings.PRICE_EXPONENT,
            policy=policy,
            priority_fee=Settings.PRIORITY_FEE_MICRO_LAMPORTS,
            compute_units=Settings.COMPUTE_UNIT_LIMIT,
        ))

        # Reject bad input before touching the network
        service.prepare(symbol, price)
        await rpc.check_connection()

        signature = await service.request_price_update(symbol, price)

    feed_address = str(registry.lookup(symbol))
    console.print(f"\n[bold green]✅ Successfully updated price for {symbol}![/bold green]")
    console.print(f"Transaction: [link={links.solscan_url('tx', signature)}]{signature}[/link]")
    console.print(f"  {links.solscan_url('tx', signature)}")
    console.print(f"  {links.explorer_url('tx', signature)}")
    console.print(f"Price Feed Account: {short_address(feed_address)}")
    console.print(f"  {links.solscan_url('account', feed_address)}")
    console.print(f"  {links.explorer_url('account', feed_address)}\n")


@app.command()
def update(
    symbol: str = typer.Argument(..., help="Feed symbol, e.g. SOL/USD"),
    price: str = typer.Argument(..., help="New display price, e.g. 123.45"),
    rpc_url: str = typer.Option(Settings.RPC_URL, "--rpc-url", help="Solana RPC endpoint"),
    feeds_file: str = typer.Option(Settings.PRICE_FEEDS_FILE, "--feeds-file", help="Symbol -> address JSON"),
    program_id: str = typer.Option(Settings.FEED_PROGRAM_ID, "--program-id", help="Mock price feed program id"),
    max_attempts: int = typer.Option(Settings.TX_MAX_ATTEMPTS, "--max-attempts", min=1, max=20),
    retry_delay: float = typer.Option(Settings.TX_RETRY_DELAY_S, "--retry-delay", min=0.0),
    retry_failed_confirmation: bool = typer.Option(
        Settings.RETRY_ON_CONFIRMATION_FAILURE,
        "--retry-failed-confirmation/--no-retry-failed-confirmation",
        help="Retry when the network reports the transaction failed (may duplicate the update)",
    ),
):
    """
    Sign and submit an update_price transaction.

    \b
    Examples:
        python main.py update SOL/USD 123.45
        python main.py update BTC/USD 64000 --max-attempts 5
    """
    if not program_id:
        console.print("[bold red]❌ FEED_PROGRAM_ID not configured (use --program-id)[/bold red]")
        raise typer.Exit(1)

    try:
        program = Pubkey.from_string(program_id)
    except ValueError:
        console.print(f"[bold red]❌ Invalid program id: {program_id}[/bold red]")
        raise typer.Exit(1)

    registry = _load_registry(feeds_file)
    policy = replace(
        Settings.retry_policy(),
        max_attempts=max_attempts,
        inter_attempt_delay_s=retry_delay,
        retry_on_confirmation_failure=retry_failed_confirmation,
    )

    console.print(Panel.fit(
        f"[bold cyan]📈 Price Update[/bold cyan]\n"
        f"Feed: {symbol} | Price: {price} | RPC: {rpc_url}",
        border_style="cyan"
    ))

    try:
        asyncio.run(_run_update(symbol, price, rpc_url, registry, program, policy))
    except FeedUpdateError as e:
        console.print(f"[bold red]❌ Update failed: {escape(str(e))}[/bold red]")
        raise typer.Exit(1)
    except Exception as e:
        # Credential, connection and other setup problems
        console.print(f"[bold red]❌ Initialization failed: {escape(str(e))}[/bold red]")
        raise typer.Exit(1)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: FEEDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def feeds(
    feeds_file: str = typer.Option(Settings.PRICE_FEEDS_FILE, "--feeds-file", help="Symbol -> address JSON"),
    rpc_url: str = typer.Option(Settings.RPC_URL, "--rpc-url", help="Used for explorer links"),
):
    """List registered price feeds."""
    registry = _load_registry(feeds_file)
    links = ExplorerEndpoints(rpc_url)

    table = Table(title="Price Feeds")
    table.add_column("Symbol", style="cyan")
    table.add_column("Address")
    table.add_column("Solscan", style="dim")

    for symbol, address in registry.items():
        table.add_row(symbol, str(address), links.solscan_url("account", str(address)))

    console.print(table)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND: ENCODE (offline)
# ═══════════════════════════════════════════════════════════════════════════════

@app.command()
def encode(
    price: str = typer.Argument(..., help="Display price, e.g. 123.45"),
    exponent: int = typer.Option(Settings.PRICE_EXPONENT, "--exponent", help="Fixed-point exponent"),
):
    """Show the scaled integer and instruction payload for a price (no network)."""
    try:
        amount = FixedPointEncoder(exponent).encode(price)
        payload = InstructionPayloadBuilder().build(amount, exponent)
    except FeedUpdateError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/bold red]")
        raise typer.Exit(1)

    console.print(f"Scaled price: [bold]{amount}[/bold] (exponent {exponent})")
    console.print(f"Payload ({len(payload)} bytes): {payload.hex()}")


def main():
    """Entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
