"""QFEX exchange adapter.

refdata is market discovery only (no live prices over REST).
Symbols look like "AAPL-USD"; base_asset is what the registry resolves.
"""

import logging

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.utils import leverage_from_margin
from onchain_markets.infrastructure import http_client

logger = logging.getLogger(__name__)


class QfexExchange(BaseExchange):
    """QFEX exchange adapter."""

    EXCHANGE_ID = "qfex"
    API_ENDPOINT = "https://http.qfex.com"

    _DEFAULT_LEVERAGE = 20

    async def fetch_markets(self) -> list[RawMarket]:
        response = await http_client.get(f"{self.API_ENDPOINT}/refdata")

        if not isinstance(response, list):
            raise RuntimeError(f"QFEX API error: unexpected response {type(response).__name__}")

        markets = []
        for item in response:
            base_asset = item.get("base_asset")
            if not base_asset:
                continue

            markets.append(
                RawMarket(
                    raw_ticker=item.get("symbol") or base_asset,
                    exchange_id=self.EXCHANGE_ID,
                    is_active=item.get("status") == "active",
                    max_leverage=leverage_from_margin(
                        item.get("initial_margin"), self._DEFAULT_LEVERAGE
                    ),
                    lookup_ticker=base_asset,
                )
            )

        self.logger.debug(f"Fetched {len(markets)} markets from {self.EXCHANGE_ID}")
        return markets
