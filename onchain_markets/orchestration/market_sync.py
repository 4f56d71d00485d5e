"""One sync cycle: fetch, normalize, deduplicate, merge, summarize."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from onchain_markets.coordinators.deduplicator import deduplicate
from onchain_markets.coordinators.market_normalizer import split_tradable
from onchain_markets.coordinators.merger import merge_markets
from onchain_markets.coordinators.summary import summarize
from onchain_markets.orchestration.fetch_orchestrator import DEFAULT_ADAPTER_TIMEOUT, fetch_all
from onchain_markets.registry.asset_registry import AssetRegistry
from onchain_markets.shared.models import MergedAsset, NormalizedMarket, SyncSummary

if TYPE_CHECKING:
    from onchain_markets.exchanges.protocol import SourceAdapter

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    assets: list[MergedAsset]
    summary: SyncSummary
    failed_exchanges: list[str] = field(default_factory=list)
    excluded: list[NormalizedMarket] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """JSON payload for the presentation layer."""
        return {
            "success": True,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.summary.to_dict(),
            "failed_exchanges": self.failed_exchanges,
            "assets": [asset.to_dict() for asset in self.assets],
        }


class MarketSync:
    """Runs sync cycles over a fixed registry and adapter set.

    Cycles share no state; each run() builds its result from scratch.
    Exceptions outside the per-adapter fan-out (bad registry data, bugs)
    propagate to the caller.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        adapters: "Sequence[SourceAdapter] | Mapping[str, SourceAdapter]",
        adapter_timeout: float | None = DEFAULT_ADAPTER_TIMEOUT,
    ) -> None:
        if isinstance(adapters, Mapping):
            adapters = list(adapters.values())
        self._registry = registry
        self._adapters = list(adapters)
        self._adapter_timeout = adapter_timeout

    @property
    def exchange_ids(self) -> list[str]:
        return [adapter.EXCHANGE_ID for adapter in self._adapters]

    async def run(self) -> SyncResult:
        start_time = datetime.now()
        logger.info(f"Starting market sync for {len(self._adapters)} exchange(s)")

        report = await fetch_all(self._adapters, timeout=self._adapter_timeout)

        tradable, excluded = split_tradable(self._registry, report.markets)
        listings = deduplicate(tradable)
        assets = merge_markets(listings)
        summary = summarize(assets)

        duration = datetime.now() - start_time
        logger.info(
            f"Market sync completed in {duration}: "
            f"{summary.total_assets} assets, {summary.total_listings} listings, "
            f"{len(excluded)} markets excluded, {len(report.failed)} exchange(s) failed"
        )
        logger.debug(f"Sync summary by category: {summary.by_category}")
        logger.debug(f"Sync summary by exchange: {summary.by_exchange}")

        return SyncResult(
            assets=assets,
            summary=summary,
            failed_exchanges=[outcome.exchange_id for outcome in report.failed],
            excluded=excluded,
        )
