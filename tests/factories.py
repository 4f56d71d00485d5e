"""
Test data builders shared across test modules
"""

import asyncio
from typing import Any

from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.registry.models import AssetCategory
from onchain_markets.registry.normalizer import Resolved, Unresolved
from onchain_markets.shared.models import NormalizedMarket

REGISTRY_DOCUMENT: dict[str, Any] = {
    "exchangeMeta": {
        "hyperliquid": {
            "name": "Hyperliquid",
            "urlTemplate": "https://app.hyperliquid.xyz/trade/{TICKER}",
        },
        "tradexyz": {"name": "trade.xyz", "isHip3": True, "deployer": "xyz"},
        "flx": {"name": "Felix", "isHip3": True, "deployer": "flx"},
        "lighter": {"name": "Lighter"},
        "ostium": {
            "name": "Ostium",
            "urlTemplate": "https://app.ostium.com/trade?pair={TICKER}",
            "defaultLeverage": {"forex": 500, "commodity": 200, "stock": 200, "index": 200},
            "fallbackLeverage": 100,
        },
        "qfex": {"name": "QFEX"},
        "vest": {"name": "Vest"},
    },
    "assets": [
        {
            "canonical": "TSLA",
            "name": "Tesla",
            "category": "stock",
            "exchanges": {
                "hyperliquid": None,
                "tradexyz": "xyz:TSLA",
                "lighter": "TSLA",
                "ostium": "TSLA/USD",
                "qfex": "TSLA-USD",
                "vest": "TSLA-USD-PERP",
            },
        },
        {
            "canonical": "NATGAS",
            "name": "Natural Gas",
            "category": "commodity",
            "exchanges": {"tradexyz": "xyz:NATGAS", "flx": "flx:GAS"},
        },
        {
            "canonical": "SPX",
            "name": "S&P 500",
            "category": "index",
            "exchanges": {"hyperliquid": None, "ostium": "SPX/USD"},
        },
        {
            "canonical": "XAU",
            "name": "Gold",
            "category": "commodity",
            "exchanges": {"tradexyz": "xyz:GOLD", "lighter": "XAU", "ostium": "XAU/USD"},
        },
        {
            "canonical": "EURUSD",
            "name": "Euro / US Dollar",
            "category": "forex",
            "exchanges": {"lighter": "EURUSD", "ostium": "EUR/USD"},
        },
    ],
}


def make_raw(raw_ticker: str, exchange_id: str, **kwargs: Any) -> RawMarket:
    kwargs.setdefault("is_active", True)
    kwargs.setdefault("max_leverage", 20)
    return RawMarket(raw_ticker=raw_ticker, exchange_id=exchange_id, **kwargs)


def make_market(
    ticker: str,
    exchange_id: str,
    max_leverage: int = 20,
    category: AssetCategory = AssetCategory.STOCK,
    name: str | None = None,
    registered: bool = True,
    **raw_kwargs: Any,
) -> NormalizedMarket:
    """Already-normalized market, bypassing the registry"""
    raw_ticker = raw_kwargs.pop("raw_ticker", ticker)
    raw = make_raw(raw_ticker, exchange_id, max_leverage=max_leverage, **raw_kwargs)
    resolution = Resolved(ticker) if registered else Unresolved(ticker, exchange_id)
    return NormalizedMarket(
        raw=raw,
        resolution=resolution,
        name=name or ticker,
        category=category,
        max_leverage=max_leverage,
    )


class StubAdapter:
    """In-memory source adapter returning fixed markets, or raising"""

    def __init__(
        self,
        exchange_id: str,
        markets: list[RawMarket] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.EXCHANGE_ID = exchange_id
        self._markets = list(markets or [])
        self._error = error
        self._delay = delay
        self.calls = 0

    async def fetch_markets(self) -> list[RawMarket]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return list(self._markets)
