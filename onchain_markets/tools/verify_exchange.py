"""Source adapter verification CLI.

Calls one adapter against the live API and shows how its markets resolve
against the asset registry.

Usage: python -m onchain_markets.tools.verify_exchange <exchange_id>
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from onchain_markets.coordinators.market_normalizer import split_tradable
from onchain_markets.exchanges import EXCHANGES
from onchain_markets.registry import AssetRegistry, RegistryError, load_registry
from onchain_markets.shared.models import NormalizedMarket
from onchain_markets.tools.render import format_price, format_volume

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify a source adapter with real API calls")
    parser.add_argument(
        "exchange_id",
        nargs="?",
        help="Exchange ID from EXCHANGES registry (for example: lighter)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available exchange IDs and exit",
    )
    parser.add_argument(
        "--registry",
        type=str,
        default=None,
        help="Asset registry JSON (default: bundled registry)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the adapter (default: 30)",
    )
    parser.add_argument(
        "--preview-limit",
        type=int,
        default=20,
        help="How many markets to show per table (default: 20)",
    )
    return parser


def _render_markets(title: str, markets: list[NormalizedMarket], preview_limit: int) -> None:
    table = Table(show_header=True, header_style="bold magenta", title=title)
    table.add_column("Raw Ticker", style="cyan")
    table.add_column("Exchange", style="yellow")
    table.add_column("Resolved", style="green")
    table.add_column("Category")
    table.add_column("Leverage", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("24h Volume", justify="right")

    for market in markets[:preview_limit]:
        table.add_row(
            market.raw.raw_ticker,
            market.exchange_id,
            market.ticker if market.is_registered else f"[dim]{market.ticker}[/dim]",
            market.category.value,
            f"{market.max_leverage}x",
            format_price(market.raw.price),
            format_volume(market.raw.volume_24h),
        )

    if len(markets) > preview_limit:
        table.add_row("...", "...", "...", "...", "...", "...", "...")

    console.print(table)


def _missing_listings(
    registry: AssetRegistry, exchange_ids: list[str], tradable: list[NormalizedMarket]
) -> list[tuple[str, str, str]]:
    """Registry listings on these exchanges that the API did not return."""
    seen = {(market.ticker, market.exchange_id) for market in tradable}
    missing = []
    for asset in registry.assets:
        for exchange_id in exchange_ids:
            raw_ticker = registry.exchange_raw_ticker(asset.canonical, exchange_id)
            if raw_ticker and (asset.canonical, exchange_id) not in seen:
                missing.append((asset.canonical, exchange_id, raw_ticker))
    return missing


async def verify_exchange(
    exchange_id: str,
    registry: AssetRegistry,
    timeout: float,
    preview_limit: int,
) -> bool:
    console.print(f"\n[bold cyan]Verifying source adapter: {exchange_id}[/bold cyan]\n")

    if exchange_id not in EXCHANGES:
        available = ", ".join(EXCHANGES)
        console.print(
            f"[bold red][FAIL][/bold red] Exchange '{exchange_id}' "
            "not found in EXCHANGES registry.\n"
            f"Available exchanges: {available}"
        )
        return False

    adapter = EXCHANGES[exchange_id]
    exchange_ids = list(getattr(adapter, "reported_exchanges", [adapter.EXCHANGE_ID]))

    console.print("[bold]Step 1: Protocol Validation[/bold]")
    console.print(f"  [green][OK][/green] EXCHANGE_ID: {adapter.EXCHANGE_ID}")
    console.print(f"  [green][OK][/green] Reports exchanges: {', '.join(exchange_ids)}")

    console.print("\n[bold]Step 2: API - fetch_markets()[/bold]")
    try:
        raw_markets = await asyncio.wait_for(adapter.fetch_markets(), timeout=timeout)
    except Exception as exc:
        console.print(f"  [bold red][FAIL][/bold red] fetch_markets() raised: {exc!r}")
        return False

    console.print(f"  [green][OK][/green] Retrieved {len(raw_markets)} markets")
    if not raw_markets:
        console.print("  [bold red][FAIL][/bold red] fetch_markets() returned empty list")
        return False

    console.print("\n[bold]Step 3: Registry resolution[/bold]")
    tradable, excluded = split_tradable(registry, raw_markets)
    console.print(
        f"  [green][OK][/green] {len(tradable)} tradable, "
        f"{len(excluded)} excluded (unregistered or crypto)"
    )
    _render_markets("Tradable markets", tradable, preview_limit)

    console.print("\n[bold]Step 4: Registry coverage[/bold]")
    missing = _missing_listings(registry, exchange_ids, tradable)
    if missing:
        console.print(
            f"  [yellow][WARN][/yellow] {len(missing)} registry listing(s) not returned by the API:"
        )
        for canonical, missing_exchange, raw_ticker in missing[:preview_limit]:
            console.print(f"    {canonical} on {missing_exchange} (raw: {raw_ticker})")
    else:
        console.print("  [green][OK][/green] Every registry listing was returned")

    if not tradable:
        console.print("\n[bold red]No tradable markets resolved[/bold red]")
        return False

    console.print(f"\n[bold green]{exchange_id} verified[/bold green]")
    return True


def main() -> None:
    args = _build_parser().parse_args()

    if args.list or not args.exchange_id:
        console.print("Available exchanges: " + ", ".join(EXCHANGES))
        sys.exit(0 if args.list else 1)

    try:
        registry = load_registry(args.registry)
    except RegistryError as e:
        console.print(f"[bold red]Registry error:[/bold red] {e}")
        sys.exit(1)

    ok = asyncio.run(verify_exchange(args.exchange_id, registry, args.timeout, args.preview_limit))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
