"""Ticker normalization and classification over an AssetRegistry.

Raw tickers arrive in many spellings: "xyz:TSLA" (HIP-3 deployer prefix),
"XAU/USD" (pair), plain "NVDA". normalize() maps them to the registry's
canonical ticker.

With an exchange id the lookup is exchange-scoped and exclusive: only raw
tickers registered for that exchange can match. "SPX" on Hyperliquid main is
the SPX6900 memecoin, not the S&P 500, and the registry only knows that
because the S&P 500 row has no Hyperliquid main ticker.
"""

import re
from dataclasses import dataclass

from onchain_markets.registry.asset_registry import AssetRegistry
from onchain_markets.registry.models import AssetCategory

_QUOTE_SUFFIX = re.compile(r"/USDC?$", re.IGNORECASE)


@dataclass(frozen=True)
class Resolved:
    canonical: str


@dataclass(frozen=True)
class Unresolved:
    """No registry match; `symbol` is the uppercased, stripped raw symbol."""

    symbol: str
    exchange_id: str | None = None


TickerResolution = Resolved | Unresolved


def split_deployer(raw: str) -> tuple[str | None, str]:
    """Split "deployer:SYMBOL" into ("deployer", "SYMBOL"); no prefix gives (None, raw)."""
    deployer, sep, symbol = raw.partition(":")
    if not sep:
        return None, raw
    return deployer, symbol


def strip_quote_suffix(symbol: str) -> str:
    return _QUOTE_SUFFIX.sub("", symbol)


def normalize(
    registry: AssetRegistry, raw: str, exchange_id: str | None = None
) -> TickerResolution:
    """Resolve a raw exchange ticker to its canonical identity.

    Candidates are tried in order: symbol without deployer prefix, the full
    raw string, then the symbol with a trailing /USD or /USDC removed.
    """
    _, symbol = split_deployer(raw)
    stripped = strip_quote_suffix(symbol)

    for candidate in (symbol, raw, stripped):
        if exchange_id is not None:
            canonical = registry.lookup_exchange(exchange_id, candidate)
        else:
            canonical = registry.lookup_global(candidate)
        if canonical is not None:
            return Resolved(canonical)

    return Unresolved(symbol=stripped.upper(), exchange_id=exchange_id)


def classify(registry: AssetRegistry, ticker: "str | TickerResolution") -> AssetCategory:
    """Registry category, or the catch-all category for anything unregistered."""
    if isinstance(ticker, Unresolved):
        return AssetCategory.CRYPTO
    canonical = ticker.canonical if isinstance(ticker, Resolved) else ticker

    asset = registry.get(canonical)
    if asset is None:
        return AssetCategory.CRYPTO
    return asset.category


def display_name(registry: AssetRegistry, ticker: "str | TickerResolution") -> str:
    if isinstance(ticker, Unresolved):
        return ticker.symbol
    canonical = ticker.canonical if isinstance(ticker, Resolved) else ticker

    asset = registry.get(canonical)
    return asset.name if asset is not None else canonical


def ticker_of(resolution: TickerResolution) -> str:
    """Ticker string for either variant (canonical, or the unresolved symbol)."""
    if isinstance(resolution, Resolved):
        return resolution.canonical
    return resolution.symbol
