"""Hyperliquid exchange adapter.

Covers the main perp dex plus every HIP-3 deployer dex. Each deployer gets its
own exchange column in the registry (xyz -> tradexyz, flx -> flx, ...), so one
adapter reports markets under several exchange ids.

API docs: https://hyperliquid.gitbook.io/hyperliquid-docs/for-developers/api
"""

import asyncio
import logging
from typing import Any

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.utils import parse_nonzero, pct_change
from onchain_markets.infrastructure import http_client
from onchain_markets.registry.normalizer import split_deployer

logger = logging.getLogger(__name__)

# HIP-3 deployer prefix -> exchange id
DEPLOYER_EXCHANGES: dict[str, str] = {
    "xyz": "tradexyz",
    "cash": "cash",
    "hyna": "hyna",
    "vntl": "vntl",
    "flx": "flx",
    "km": "km",
}


class HyperliquidExchange(BaseExchange):
    """Hyperliquid main dex and HIP-3 deployer dexes."""

    EXCHANGE_ID = "hyperliquid"
    API_ENDPOINT = "https://api.hyperliquid.xyz/info"

    def __init__(self, deployer_exchanges: dict[str, str] | None = None) -> None:
        self._deployer_exchanges = dict(deployer_exchanges or DEPLOYER_EXCHANGES)

    @property
    def reported_exchanges(self) -> list[str]:
        return [self.EXCHANGE_ID, *self._deployer_exchanges.values()]

    async def _fetch_dex(
        self, dex: str | None
    ) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        body = {"type": "metaAndAssetCtxs"}
        if dex:
            body["dex"] = dex

        response = await http_client.post(
            self.API_ENDPOINT,
            json=body,
            headers={"Content-Type": "application/json"},
        )

        # Response: [meta, contexts] - parallel arrays
        if not isinstance(response, list) or len(response) < 2:
            raise RuntimeError(f"Hyperliquid API error (dex={dex or 'main'}): {response!r:.200}")

        meta, contexts = response[0], response[1]
        return (meta or {}).get("universe", []), contexts or []

    def _exchange_for(self, raw_ticker: str, dex: str | None) -> tuple[str, str | None]:
        prefix, _ = split_deployer(raw_ticker)
        deployer = prefix or dex
        if not deployer:
            return self.EXCHANGE_ID, None
        return self._deployer_exchanges.get(deployer, self.EXCHANGE_ID), deployer

    def _parse_markets(
        self,
        universe: list[dict[str, Any]],
        contexts: list[dict[str, Any]],
        dex: str | None,
    ) -> list[RawMarket]:
        markets = []
        for idx, asset in enumerate(universe):
            if not asset or asset.get("isDelisted"):
                continue

            ctx = contexts[idx] if idx < len(contexts) and contexts[idx] else {}
            raw_ticker = asset["name"]
            exchange_id, deployer = self._exchange_for(raw_ticker, dex)

            mark_px = parse_nonzero(ctx.get("markPx"))
            prev_day_px = parse_nonzero(ctx.get("prevDayPx"))
            max_leverage = asset.get("maxLeverage")

            markets.append(
                RawMarket(
                    raw_ticker=raw_ticker,
                    exchange_id=exchange_id,
                    is_active=True,
                    max_leverage=int(max_leverage) if max_leverage is not None else None,
                    margin_mode=asset.get("marginMode"),
                    deployer=deployer,
                    price=mark_px,
                    volume_24h=parse_nonzero(ctx.get("dayNtlVlm")),
                    change_24h=pct_change(mark_px, prev_day_px),
                    funding=parse_nonzero(ctx.get("funding")),
                    open_interest=parse_nonzero(ctx.get("openInterest")),
                )
            )
        return markets

    async def fetch_markets(self) -> list[RawMarket]:
        dexes: list[str | None] = [None, *self._deployer_exchanges]
        self.logger.debug(f"Fetching {len(dexes)} dexes from {self.EXCHANGE_ID}")

        results = await asyncio.gather(
            *(self._fetch_dex(dex) for dex in dexes), return_exceptions=True
        )

        markets: list[RawMarket] = []
        failed: list[str] = []
        for dex, result in zip(dexes, results):
            dex_name = dex or "main"
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failed.append(dex_name)
                self.logger.error(f"{self.EXCHANGE_ID} dex={dex_name} fetch failed: {result!r}")
                continue

            universe, contexts = result
            dex_markets = self._parse_markets(universe, contexts, dex)
            self.logger.debug(f"{self.EXCHANGE_ID} dex={dex_name}: {len(dex_markets)} markets")
            markets.extend(dex_markets)

        if len(failed) == len(dexes):
            raise RuntimeError(f"All {self.EXCHANGE_ID} dex fetches failed: {failed}")

        self.logger.info(
            f"Fetched {len(markets)} markets from {self.EXCHANGE_ID} "
            f"({len(dexes) - len(failed)}/{len(dexes)} dexes)"
        )
        return markets
