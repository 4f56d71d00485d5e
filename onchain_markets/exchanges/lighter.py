"""Lighter exchange adapter.

orderBookDetails returns every market with live stats in one call.
Leverage is derived from the minimum initial margin fraction (basis points).
"""

import logging
import math

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.utils import parse_float, parse_nonzero
from onchain_markets.infrastructure import http_client

logger = logging.getLogger(__name__)


class LighterExchange(BaseExchange):
    """Lighter exchange adapter."""

    EXCHANGE_ID = "lighter"
    API_ENDPOINT = "https://mainnet.zklighter.elliot.ai/api/v1"

    _DEFAULT_LEVERAGE = 50

    def _max_leverage(self, book: dict) -> int:
        margin_bps = parse_float(book.get("min_initial_margin_fraction")) or parse_float(
            book.get("default_initial_margin_fraction")
        )
        if not margin_bps or margin_bps <= 0:
            return self._DEFAULT_LEVERAGE
        return math.floor(10000 / margin_bps)

    async def fetch_markets(self) -> list[RawMarket]:
        response = await http_client.get(f"{self.API_ENDPOINT}/orderBookDetails")

        assert isinstance(response, dict)

        markets = []
        for book in response.get("order_book_details") or []:
            # Only perps, not spot
            if book.get("market_type") != "perp":
                continue

            markets.append(
                RawMarket(
                    raw_ticker=book["symbol"],
                    exchange_id=self.EXCHANGE_ID,
                    is_active=book.get("status") == "active",
                    max_leverage=self._max_leverage(book),
                    price=parse_nonzero(book.get("last_trade_price")),
                    volume_24h=parse_nonzero(book.get("daily_quote_token_volume")),
                    change_24h=parse_float(book.get("daily_price_change")),
                    open_interest=parse_nonzero(book.get("open_interest")),
                )
            )

        self.logger.debug(f"Fetched {len(markets)} perp markets from {self.EXCHANGE_ID}")
        return markets
