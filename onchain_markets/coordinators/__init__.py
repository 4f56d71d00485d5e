"""Pipeline stages between the fetch fan-out and the merged asset list."""

from onchain_markets.coordinators.deduplicator import deduplicate
from onchain_markets.coordinators.market_normalizer import normalize_market, split_tradable
from onchain_markets.coordinators.merger import Aggregate, aggregate, merge_markets
from onchain_markets.coordinators.summary import summarize

__all__ = [
    "Aggregate",
    "aggregate",
    "deduplicate",
    "merge_markets",
    "normalize_market",
    "split_tradable",
    "summarize",
]
