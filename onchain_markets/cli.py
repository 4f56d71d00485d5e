"""CLI argument parsing for the market sync service."""

from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser used by the main entrypoint."""
    parser = argparse.ArgumentParser(
        description="On-chain markets - traditional-asset perpetuals across DEXes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sync every exchange now and every 30 minutes (default)
  onchain-markets

  # One cycle, rendered as a table
  onchain-markets --once

  # One cycle from two exchanges, as JSON
  onchain-markets --once --json --exchanges hyperliquid,lighter

  # Keep the latest snapshot on disk
  onchain-markets --output /var/lib/onchain-markets/latest.json

Environment Variables:
  EXCHANGES              Comma-separated list of exchanges (overridden by CLI)
  DEBUG_EXCHANGES        Comma-separated list for debug logging
  REGISTRY_PATH          Asset registry JSON (default: bundled registry)
  ADAPTER_TIMEOUT        Seconds allowed per exchange fetch (default: 20)
  HTTP_MAX_ATTEMPTS      Attempts per HTTP call, 1 disables retry (default: 1)
  SYNC_INTERVAL_MINUTES  Minutes between scheduled cycles (default: 30)
  OUTPUT_PATH            Latest snapshot JSON path
        """,
    )

    parser.add_argument(
        "--exchanges",
        type=str,
        default=None,
        help="Comma-separated list of exchanges to sync (default: all).",
    )
    parser.add_argument(
        "--debug-exchanges",
        type=str,
        default=None,
        help="Comma-separated list of exchanges for DEBUG logging.",
    )
    parser.add_argument(
        "--registry",
        type=str,
        default=None,
        help="Path to an asset registry JSON document.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed per exchange fetch.",
    )
    parser.add_argument(
        "--interval-minutes",
        type=int,
        default=None,
        help="Minutes between scheduled sync cycles.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the latest snapshot JSON to this path after each cycle.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single sync cycle and exit.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="With --once, print the result as JSON instead of a table.",
    )

    return parser
