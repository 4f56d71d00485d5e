"""Per-record registry resolution of raw markets."""

import logging
from collections.abc import Iterable

from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.registry.asset_registry import AssetRegistry
from onchain_markets.registry.normalizer import Unresolved, classify, display_name, normalize
from onchain_markets.shared.models import NormalizedMarket

logger = logging.getLogger(__name__)

DEFAULT_LEVERAGE = 20


def normalize_market(registry: AssetRegistry, raw: RawMarket) -> NormalizedMarket:
    """Resolve, classify and name one raw market, scoped to its own exchange.

    Leverage the venue did not report comes from the exchange's registry
    metadata for the resolved category.
    """
    resolution = normalize(registry, raw.resolution_key, raw.exchange_id)
    if isinstance(resolution, Unresolved) and raw.lookup_ticker:
        resolution = normalize(registry, raw.raw_ticker, raw.exchange_id)

    category = classify(registry, resolution)

    max_leverage = raw.max_leverage
    if max_leverage is None:
        meta = registry.exchange_meta(raw.exchange_id)
        max_leverage = meta.leverage_for(category) if meta else DEFAULT_LEVERAGE

    return NormalizedMarket(
        raw=raw,
        resolution=resolution,
        name=display_name(registry, resolution),
        category=category,
        max_leverage=max_leverage,
    )


def split_tradable(
    registry: AssetRegistry, raw_markets: Iterable[RawMarket]
) -> tuple[list[NormalizedMarket], list[NormalizedMarket]]:
    """Normalize every record; return (tradable, catch-all) preserving input order."""
    tradable: list[NormalizedMarket] = []
    excluded: list[NormalizedMarket] = []

    for raw in raw_markets:
        market = normalize_market(registry, raw)
        if market.is_tradable:
            tradable.append(market)
        else:
            excluded.append(market)

    logger.debug(f"Normalized markets: {len(tradable)} tradable, {len(excluded)} excluded")
    return tradable, excluded
