"""Vest exchange adapter.

/ticker/24hr carries live data, /exchangeInfo carries margin ratios and the
venue's own asset class. Both are fetched concurrently; exchangeInfo is
optional (defaults apply without it), ticker data is not.

Tradfi symbols look like "AAPL-USD-PERP", crypto like "BTC-PERP".
"""

import asyncio
import logging
import re
from typing import Any

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.utils import (
    leverage_from_margin,
    parse_float,
    parse_positive,
    pct_change,
)
from onchain_markets.infrastructure import http_client

logger = logging.getLogger(__name__)

_PERP_SUFFIX = re.compile(r"(-USD)?-PERP$", re.IGNORECASE)


class VestExchange(BaseExchange):
    """Vest exchange adapter."""

    EXCHANGE_ID = "vest"
    API_ENDPOINT = "https://server-prod.hz.vestmarkets.com/v2"
    HEADERS = {"xrestservermm": "restserver0"}

    _DEFAULT_LEVERAGE = 20

    def _parse_exchange_info(self, info: Any) -> tuple[dict[str, int], dict[str, str]]:
        leverage: dict[str, int] = {}
        asset_types: dict[str, str] = {}
        if not isinstance(info, dict):
            return leverage, asset_types

        for sym in info.get("symbols") or []:
            symbol = sym.get("symbol")
            if not symbol:
                continue
            leverage[symbol] = leverage_from_margin(
                sym.get("initMarginRatio"), self._DEFAULT_LEVERAGE
            )
            if sym.get("asset"):
                asset_types[symbol] = sym["asset"]
        return leverage, asset_types

    @staticmethod
    def _change_24h(ticker: dict[str, Any]) -> float | None:
        # priceChangePercent is often null; derive from open/close then
        if ticker.get("priceChangePercent") is not None:
            return parse_float(ticker["priceChangePercent"])
        return pct_change(
            parse_float(ticker.get("closePrice")), parse_float(ticker.get("openPrice"))
        )

    async def fetch_markets(self) -> list[RawMarket]:
        ticker_result, info_result = await asyncio.gather(
            http_client.get(f"{self.API_ENDPOINT}/ticker/24hr", headers=self.HEADERS),
            http_client.get(f"{self.API_ENDPOINT}/exchangeInfo", headers=self.HEADERS),
            return_exceptions=True,
        )

        if isinstance(info_result, Exception):
            self.logger.warning(
                f"{self.EXCHANGE_ID} exchangeInfo failed, using default leverage: {info_result!r}"
            )
            info_result = None
        elif isinstance(info_result, BaseException):
            raise info_result
        leverage_map, asset_types = self._parse_exchange_info(info_result)

        if isinstance(ticker_result, BaseException):
            raise ticker_result

        tickers = ticker_result if isinstance(ticker_result, list) else None
        if tickers is None and isinstance(ticker_result, dict):
            tickers = ticker_result.get("tickers")
        if tickers is None:
            raise RuntimeError(f"Vest ticker API error: unexpected response {ticker_result!r:.200}")

        markets = []
        for ticker in tickers:
            symbol = ticker.get("symbol")
            if not symbol:
                continue
            # Vest labels its own crypto markets; no need to resolve those
            if asset_types.get(symbol) == "crypto":
                continue

            markets.append(
                RawMarket(
                    raw_ticker=symbol,
                    exchange_id=self.EXCHANGE_ID,
                    is_active=True,
                    max_leverage=leverage_map.get(symbol, self._DEFAULT_LEVERAGE),
                    price=parse_positive(ticker.get("closePrice") or ticker.get("lastPrice")),
                    volume_24h=parse_positive(ticker.get("quoteVolume")),
                    change_24h=self._change_24h(ticker),
                    lookup_ticker=_PERP_SUFFIX.sub("", symbol),
                )
            )

        self.logger.debug(f"Fetched {len(markets)} non-crypto markets from {self.EXCHANGE_ID}")
        return markets
