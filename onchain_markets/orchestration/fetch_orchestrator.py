"""Concurrent fan-out over source adapters with per-adapter isolation."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from onchain_markets.exchanges.dto import RawMarket

if TYPE_CHECKING:
    from onchain_markets.exchanges.protocol import SourceAdapter

logger = logging.getLogger(__name__)

DEFAULT_ADAPTER_TIMEOUT = 20.0


@dataclass
class AdapterOutcome:
    exchange_id: str
    markets: list[RawMarket] = field(default_factory=list)
    error: Exception | None = None
    duration: timedelta = timedelta(0)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FetchReport:
    """Per-adapter outcomes, in adapter order."""

    outcomes: list[AdapterOutcome]

    @property
    def markets(self) -> list[RawMarket]:
        """Markets from successful adapters, concatenated in adapter order."""
        return [market for outcome in self.outcomes if outcome.ok for market in outcome.markets]

    @property
    def failed(self) -> list[AdapterOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


async def _run_adapter(adapter: "SourceAdapter", timeout: float | None) -> AdapterOutcome:
    exchange_id = adapter.EXCHANGE_ID
    start_time = datetime.now()

    try:
        if timeout is None:
            markets = await adapter.fetch_markets()
        else:
            markets = await asyncio.wait_for(adapter.fetch_markets(), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Fetch from {exchange_id} timed out after {timeout}s")
        return AdapterOutcome(exchange_id, error=e, duration=datetime.now() - start_time)
    except Exception as e:
        logger.error(f"Fetch from {exchange_id} failed: {e}", exc_info=True)
        return AdapterOutcome(exchange_id, error=e, duration=datetime.now() - start_time)

    duration = datetime.now() - start_time
    logger.debug(f"Fetched {len(markets)} markets from {exchange_id} in {duration}")
    return AdapterOutcome(exchange_id, markets=list(markets), duration=duration)


async def fetch_all(
    adapters: Sequence["SourceAdapter"],
    timeout: float | None = DEFAULT_ADAPTER_TIMEOUT,
) -> FetchReport:
    """Run every adapter concurrently and wait for all of them to settle.

    A failing or timed-out adapter contributes no markets and never cancels
    its siblings. Outcomes keep the order of `adapters` regardless of
    completion order.

    Args:
        adapters: Source adapters to call
        timeout: Per-adapter bound in seconds; None waits indefinitely
    """
    outcomes = await asyncio.gather(*(_run_adapter(adapter, timeout) for adapter in adapters))
    report = FetchReport(outcomes=list(outcomes))

    if report.failed:
        logger.warning(
            f"{len(report.failed)}/{len(report.outcomes)} exchange fetch(es) failed: "
            f"{[outcome.exchange_id for outcome in report.failed]}"
        )
    return report
