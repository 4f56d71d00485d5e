"""Collapse duplicate listings per (canonical ticker, exchange)."""

import logging
from collections.abc import Iterable

from onchain_markets.shared.models import NormalizedMarket

logger = logging.getLogger(__name__)


def deduplicate(markets: Iterable[NormalizedMarket]) -> list[NormalizedMarket]:
    """Keep one record per (ticker, exchange): highest max leverage, first seen on a tie.

    A main listing and a deployer-prefixed listing can both resolve to the same
    canonical ticker on one exchange. Output keeps first-seen key order.
    """
    best: dict[tuple[str, str], NormalizedMarket] = {}
    seen = 0

    for market in markets:
        seen += 1
        key = (market.ticker, market.exchange_id)
        existing = best.get(key)
        if existing is None or market.max_leverage > existing.max_leverage:
            best[key] = market

    if seen != len(best):
        logger.debug(f"Deduplicated {seen} markets into {len(best)} listings")
    return list(best.values())
