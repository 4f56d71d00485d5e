"""Cycle-level statistics over merged assets, for observability only."""

from collections import Counter
from collections.abc import Sequence

from onchain_markets.shared.models import MergedAsset, SyncSummary


def summarize(assets: Sequence[MergedAsset]) -> SyncSummary:
    by_category = Counter(asset.category.value for asset in assets)
    by_exchange = Counter(listing.exchange for asset in assets for listing in asset.listings)

    return SyncSummary(
        total_assets=len(assets),
        total_listings=sum(len(asset.listings) for asset in assets),
        by_category=dict(sorted(by_category.items())),
        by_exchange=dict(sorted(by_exchange.items())),
        with_price=sum(1 for asset in assets if asset.price is not None),
        with_volume=sum(1 for asset in assets if asset.volume_24h is not None),
    )
