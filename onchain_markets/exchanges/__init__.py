"""Exchange adapters registry.

This module maintains a registry of all available source adapters.
Each adapter is a BaseExchange subclass instance implementing the
SourceAdapter protocol.

To add a new exchange:
1. Create exchanges/{exchange_name}.py with a BaseExchange subclass
2. Implement fetch_markets() returning RawMarket records (no registry filtering)
3. Add its raw tickers to data/asset_registry.json
4. Register an instance in _build_registry() below
"""

import inspect
import logging

from onchain_markets.exchanges.base import BaseExchange
from onchain_markets.exchanges.dto import RawMarket
from onchain_markets.exchanges.hyperliquid import HyperliquidExchange
from onchain_markets.exchanges.lighter import LighterExchange
from onchain_markets.exchanges.ostium import OstiumExchange
from onchain_markets.exchanges.protocol import SourceAdapter
from onchain_markets.exchanges.qfex import QfexExchange
from onchain_markets.exchanges.vest import VestExchange

logger = logging.getLogger(__name__)


def validate_adapter(adapter: object, name: str) -> None:
    """Validate that an object implements the SourceAdapter protocol.

    Fails fast at startup rather than on the first sync cycle.

    Raises:
        TypeError: If EXCHANGE_ID is missing or not a string, if it does not
            match the registry key, or if fetch_markets() is not a coroutine
            function.
    """
    exchange_id = getattr(adapter, "EXCHANGE_ID", None)
    if not isinstance(exchange_id, str):
        raise TypeError(f"{name}: EXCHANGE_ID must be str, got {type(exchange_id)}")

    if exchange_id != name:
        raise TypeError(f"{name}: registered under a different EXCHANGE_ID ({exchange_id})")

    fetch_markets = getattr(adapter, "fetch_markets", None)
    if fetch_markets is None or not inspect.iscoroutinefunction(fetch_markets):
        raise TypeError(f"{name}: fetch_markets() must be an async method")

    logger.debug(f"✓ {name}: validated")


def _build_registry() -> dict[str, SourceAdapter]:
    """Build EXCHANGES registry with validation.

    Registration order is the order markets are concatenated in each cycle.

    Raises:
        TypeError: If any adapter fails validation
    """
    adapters: list[SourceAdapter] = [
        HyperliquidExchange(),
        LighterExchange(),
        OstiumExchange(),
        QfexExchange(),
        VestExchange(),
    ]

    registry: dict[str, SourceAdapter] = {}
    for adapter in adapters:
        validate_adapter(adapter, adapter.EXCHANGE_ID)
        registry[adapter.EXCHANGE_ID] = adapter

    logger.debug(f"Source adapter registry initialized with {len(registry)} exchanges")
    return registry


# Registry mapping exchange_id to adapter instance (with validation)
EXCHANGES: dict[str, SourceAdapter] = _build_registry()

__all__ = [
    "EXCHANGES",
    "BaseExchange",
    "RawMarket",
    "SourceAdapter",
    "validate_adapter",
]
