"""Bootstrap function for setting up the periodic market sync scheduler."""

import logging
from pathlib import Path

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from onchain_markets.orchestration.market_sync import MarketSync, SyncResult
from onchain_markets.snapshot import write_snapshot

logger = logging.getLogger(__name__)


async def run_cycle(
    market_sync: MarketSync, output_path: str | Path | None = None
) -> SyncResult | None:
    """Run one scheduled cycle; a failed cycle is logged and leaves the last snapshot in place."""
    try:
        result = await market_sync.run()
    except Exception as e:
        logger.error(f"Market sync cycle failed: {e}", exc_info=True)
        return None

    if output_path is not None:
        try:
            write_snapshot(result, output_path)
        except OSError as e:
            logger.error(f"Failed to write snapshot to {output_path}: {e}", exc_info=True)

    return result


def bootstrap(
    market_sync: MarketSync,
    interval_minutes: int = 30,
    output_path: str | Path | None = None,
) -> AsyncIOScheduler:
    """Set up the scheduler with the market sync job.

    Job registered:
    - market_sync: immediate on start + every `interval_minutes`

    Args:
        market_sync: Configured sync runner (registry and adapters injected)
        interval_minutes: Minutes between cycles (default: 30)
        output_path: Optional snapshot path rewritten after every successful cycle

    Returns:
        Configured AsyncIOScheduler ready to start

    Example:
        scheduler = bootstrap(MarketSync(load_registry(), EXCHANGES))
        scheduler.start()
        await asyncio.Event().wait()
    """
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Skip missed runs if overlapping
            "max_instances": 1,  # Only one cycle at a time
            "misfire_grace_time": 60 * interval_minutes,
        }
    )

    scheduler.add_job(
        run_cycle,
        trigger=OrTrigger(
            [
                DateTrigger(),  # Run immediately on start
                IntervalTrigger(minutes=interval_minutes),
            ]
        ),
        args=[market_sync, output_path],
        name="market_sync",
    )

    logger.info(
        f"Registered market sync for {len(market_sync.exchange_ids)} exchange(s) "
        f"(immediate + every {interval_minutes} min)"
    )
    return scheduler
