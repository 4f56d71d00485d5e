"""Pipeline records: normalized markets in, merged assets out."""

from dataclasses import asdict, dataclass, field
from typing import Any

from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.registry.models import AssetCategory
from onchain_markets.registry.normalizer import Resolved, TickerResolution, ticker_of


@dataclass
class NormalizedMarket:
    """A RawMarket annotated with its registry resolution."""

    raw: RawMarket
    resolution: TickerResolution
    name: str
    category: AssetCategory
    max_leverage: int

    @property
    def ticker(self) -> str:
        return ticker_of(self.resolution)

    @property
    def exchange_id(self) -> str:
        return self.raw.exchange_id

    @property
    def is_registered(self) -> bool:
        return isinstance(self.resolution, Resolved)

    @property
    def is_tradable(self) -> bool:
        """Registered and not in the catch-all category."""
        return self.is_registered and self.category is not AssetCategory.CRYPTO


@dataclass
class MergedListing:
    """One exchange's contribution to a merged asset."""

    exchange: str
    raw_ticker: str
    max_leverage: int
    is_active: bool
    margin_mode: str | None = None
    deployer: str | None = None
    price: float | None = None
    volume_24h: float | None = None
    change_24h: float | None = None
    funding: float | None = None
    open_interest: float | None = None

    @classmethod
    def from_market(cls, market: NormalizedMarket) -> "MergedListing":
        raw = market.raw
        return cls(
            exchange=raw.exchange_id,
            raw_ticker=raw.raw_ticker,
            max_leverage=market.max_leverage,
            is_active=raw.is_active,
            margin_mode=raw.margin_mode,
            deployer=raw.deployer,
            price=raw.price,
            volume_24h=raw.volume_24h,
            change_24h=raw.change_24h,
            funding=raw.funding,
            open_interest=raw.open_interest,
        )


@dataclass
class MergedAsset:
    """One canonical ticker's unified cross-exchange view for a sync cycle."""

    ticker: str
    name: str
    category: AssetCategory
    listings: list[MergedListing] = field(default_factory=list)
    price: float | None = None
    volume_24h: float | None = None
    change_24h: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


@dataclass
class SyncSummary:
    total_assets: int
    total_listings: int
    by_category: dict[str, int]
    by_exchange: dict[str, int]
    with_price: int
    with_volume: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
