"""Canonical asset registry and the ticker normalizer built on it."""

from onchain_markets.registry.asset_registry import (
    AssetRegistry,
    RegistryError,
    load_registry,
)
from onchain_markets.registry.models import (
    AssetCategory,
    ExchangeMeta,
    RegistryAsset,
    RegistryDocument,
)
from onchain_markets.registry.normalizer import (
    Resolved,
    TickerResolution,
    Unresolved,
    classify,
    display_name,
    normalize,
)

__all__ = [
    "AssetCategory",
    "AssetRegistry",
    "ExchangeMeta",
    "RegistryAsset",
    "RegistryDocument",
    "RegistryError",
    "Resolved",
    "TickerResolution",
    "Unresolved",
    "classify",
    "display_name",
    "load_registry",
    "normalize",
]
