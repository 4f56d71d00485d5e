"""Ostium exchange adapter.

The price publisher reports a mid price per feed. Volume, 24h change, funding
and leverage are not exposed over REST; leverage falls back to the registry's
per-category defaults for Ostium.
"""

import logging

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.utils import parse_nonzero
from onchain_markets.infrastructure import http_client

logger = logging.getLogger(__name__)


class OstiumExchange(BaseExchange):
    """Ostium exchange adapter."""

    EXCHANGE_ID = "ostium"
    API_ENDPOINT = "https://metadata-backend.ostium.io"

    async def fetch_markets(self) -> list[RawMarket]:
        response = await http_client.get(
            f"{self.API_ENDPOINT}/PricePublish/latest-prices",
            headers={"Content-Type": "application/json"},
        )

        if not isinstance(response, list):
            raise RuntimeError(f"Ostium API error: unexpected response {type(response).__name__}")

        self.logger.debug(f"Received {len(response)} price feeds from {self.EXCHANGE_ID}")

        markets = []
        for item in response:
            base, quote = item.get("from"), item.get("to")
            if not base or not quote:
                continue

            markets.append(
                RawMarket(
                    raw_ticker=f"{base}/{quote}",
                    exchange_id=self.EXCHANGE_ID,
                    is_active=True,
                    max_leverage=None,
                    price=parse_nonzero(item.get("mid")),
                )
            )

        return markets
