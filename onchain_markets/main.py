"""Entry point for the on-chain markets sync service."""

import asyncio
import json
import logging
import sys

from rich.console import Console

from onchain_markets.bootstrap import bootstrap
from onchain_markets.cli import build_parser
from onchain_markets.exchanges import EXCHANGES
from onchain_markets.infrastructure.http_client import configure_retries
from onchain_markets.logging_setup import configure_exchange_debug_logging, configure_logging
from onchain_markets.orchestration.market_sync import MarketSync
from onchain_markets.registry import RegistryError, load_registry
from onchain_markets.runtime import RuntimeConfig, build_runtime_config
from onchain_markets.settings import Settings
from onchain_markets.snapshot import write_snapshot
from onchain_markets.tools.render import render_result

logger = logging.getLogger(__name__)


async def run_scheduler(market_sync: MarketSync, config: RuntimeConfig) -> None:
    """Bootstrap and run the periodic sync scheduler."""
    scheduler = bootstrap(
        market_sync,
        interval_minutes=config.sync_interval_minutes,
        output_path=config.output_path,
    )
    scheduler.start()
    logger.info("Scheduler started, waiting for jobs...")

    # Block forever, keeping the scheduler running
    await asyncio.Event().wait()


def run_once(market_sync: MarketSync, config: RuntimeConfig) -> None:
    """Run a single cycle and print it; any cycle-level failure exits 1."""
    try:
        result = asyncio.run(market_sync.run())
    except Exception as e:
        logger.error(f"Market sync failed: {e}", exc_info=True)
        sys.exit(1)

    if config.output_path:
        write_snapshot(result, config.output_path)

    if config.as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        render_result(result, Console())


def main() -> None:
    """Main entry point for the on-chain markets service."""
    args = build_parser().parse_args()
    configure_logging()

    try:
        settings = Settings()
        config = build_runtime_config(args, settings, list(EXCHANGES))
    except Exception as e:
        sys.exit(f"Configuration error: {e}")

    configure_exchange_debug_logging(config.debug_exchanges)
    configure_retries(config.http_max_attempts)

    try:
        registry = load_registry(config.registry_path)
    except RegistryError as e:
        sys.exit(f"Registry error: {e}")

    market_sync = MarketSync(
        registry,
        [EXCHANGES[exchange_id] for exchange_id in config.exchanges],
        adapter_timeout=config.adapter_timeout,
    )

    if config.run_once:
        run_once(market_sync, config)
        return

    logger.info("Starting on-chain markets sync service...")
    try:
        asyncio.run(run_scheduler(market_sync, config))
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
