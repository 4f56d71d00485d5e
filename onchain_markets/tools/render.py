"""Rich console rendering for sync results."""

from rich.console import Console
from rich.table import Table

from onchain_markets.orchestration.market_sync import SyncResult
from onchain_markets.shared.models import SyncSummary


def format_price(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:,.4f}" if value < 1 else f"{value:,.2f}"


def format_volume(value: float | None) -> str:
    if value is None:
        return "-"
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if value >= threshold:
            return f"${value / threshold:.2f}{suffix}"
    return f"${value:.0f}"


def format_change(value: float | None) -> str:
    if value is None:
        return "-"
    color = "green" if value >= 0 else "red"
    return f"[{color}]{value:+.2f}%[/{color}]"


def render_summary(summary: SyncSummary, console: Console) -> None:
    table = Table(show_header=True, header_style="bold magenta", title="Sync summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Assets", str(summary.total_assets))
    table.add_row("Listings", str(summary.total_listings))
    table.add_row("With price", str(summary.with_price))
    table.add_row("With volume", str(summary.with_volume))
    for category, count in summary.by_category.items():
        table.add_row(f"Category: {category}", str(count))
    for exchange, count in summary.by_exchange.items():
        table.add_row(f"Exchange: {exchange}", str(count))

    console.print(table)


def render_result(result: SyncResult, console: Console) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Ticker", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="yellow")
    table.add_column("Price", justify="right")
    table.add_column("24h Volume", justify="right")
    table.add_column("24h Change", justify="right")
    table.add_column("Exchanges", style="green")

    for asset in sorted(result.assets, key=lambda a: (a.category.value, a.ticker)):
        exchanges = ", ".join(
            f"{listing.exchange} {listing.max_leverage}x"
            + ("" if listing.is_active else " (inactive)")
            for listing in asset.listings
        )
        table.add_row(
            asset.ticker,
            asset.name,
            asset.category.value,
            format_price(asset.price),
            format_volume(asset.volume_24h),
            format_change(asset.change_24h),
            exchanges,
        )

    console.print(table)
    render_summary(result.summary, console)

    if result.failed_exchanges:
        console.print(
            f"[bold red]Failed exchanges:[/bold red] {', '.join(result.failed_exchanges)}"
        )
