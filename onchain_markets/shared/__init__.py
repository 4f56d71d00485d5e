from onchain_markets.shared.models import (
    MergedAsset,
    MergedListing,
    NormalizedMarket,
    SyncSummary,
)

__all__ = ["MergedAsset", "MergedListing", "NormalizedMarket", "SyncSummary"]
