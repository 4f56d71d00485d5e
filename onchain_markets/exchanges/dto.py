"""Data Transfer Objects for exchange adapters."""

from dataclasses import dataclass


@dataclass
class RawMarket:
    """One perpetual market as reported by a venue, before registry resolution."""

    raw_ticker: str  # Exchange spelling, e.g. "xyz:TSLA", "XAU/USD", "AAPL-USD-PERP"
    exchange_id: str
    is_active: bool
    max_leverage: int | None  # None when the venue does not report leverage
    margin_mode: str | None = None
    deployer: str | None = None  # HIP-3 deployer: "xyz", "flx", "km", ...
    price: float | None = None
    volume_24h: float | None = None  # USD notional
    change_24h: float | None = None  # Percent: 1.5 = +1.5%
    funding: float | None = None
    open_interest: float | None = None
    lookup_ticker: str | None = None  # Resolve this instead of raw_ticker when set

    @property
    def resolution_key(self) -> str:
        return self.lookup_ticker or self.raw_ticker
