"""Group deduplicated listings into merged assets and aggregate market data."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from onchain_markets.shared.models import MergedAsset, MergedListing, NormalizedMarket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Aggregate:
    price: float | None = None
    volume_24h: float | None = None
    change_24h: float | None = None


def _has_price(listing: MergedListing) -> bool:
    return listing.price is not None and listing.price > 0


def _has_volume(listing: MergedListing) -> bool:
    return listing.volume_24h is not None and listing.volume_24h > 0


def _weighted_mean(pairs: Sequence[tuple[float, float]]) -> float:
    """Mean of value weighted by weight over (value, weight) pairs."""
    total_weight = sum(weight for _, weight in pairs)
    return sum(value * weight for value, weight in pairs) / total_weight


def aggregate(listings: Sequence[MergedListing]) -> Aggregate:
    """Cross-exchange consensus price, 24h volume and 24h change.

    Inactive listings count. Price and change are volume-weighted where volume
    is reported and fall back to a plain mean where it is not. Nothing is
    reported without at least one positive price.
    """
    with_price = [listing for listing in listings if _has_price(listing)]
    if not with_price:
        return Aggregate()

    with_volume = [listing for listing in listings if _has_volume(listing)]
    total_volume = sum(listing.volume_24h for listing in with_volume) if with_volume else None

    # A listing with volume but no usable price cannot weigh in on price
    priced_volume = [
        (listing.price, listing.volume_24h) for listing in with_volume if _has_price(listing)
    ]
    if priced_volume and total_volume:
        price = _weighted_mean(priced_volume)
    else:
        price = sum(listing.price for listing in with_price) / len(with_price)

    change = None
    with_change = [listing for listing in listings if listing.change_24h is not None]
    if with_change:
        change_volume = [
            (listing.change_24h, listing.volume_24h)
            for listing in with_change
            if _has_volume(listing)
        ]
        if change_volume and total_volume:
            change = _weighted_mean(change_volume)
        else:
            change = sum(listing.change_24h for listing in with_change) / len(with_change)

    return Aggregate(price=price, volume_24h=total_volume, change_24h=change)


def listing_order(listing: MergedListing) -> tuple[bool, str]:
    """Active listings first, then exchange id."""
    return (not listing.is_active, listing.exchange)


def merge_markets(markets: Iterable[NormalizedMarket]) -> list[MergedAsset]:
    """One MergedAsset per canonical ticker, in first-encounter order.

    Expects deduplicated input; name and category come from the first record
    seen for each ticker.
    """
    assets: dict[str, MergedAsset] = {}

    for market in markets:
        asset = assets.get(market.ticker)
        if asset is None:
            asset = MergedAsset(ticker=market.ticker, name=market.name, category=market.category)
            assets[market.ticker] = asset
        asset.listings.append(MergedListing.from_market(market))

    for asset in assets.values():
        asset.listings.sort(key=listing_order)
        agg = aggregate(asset.listings)
        asset.price = agg.price
        asset.volume_24h = agg.volume_24h
        asset.change_24h = agg.change_24h

    logger.debug(f"Merged listings into {len(assets)} assets")
    return list(assets.values())
