"""Read-only asset registry with exchange-scoped and global lookup indexes."""

import logging
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from onchain_markets.registry.models import ExchangeMeta, RegistryAsset, RegistryDocument

logger = logging.getLogger(__name__)

BUNDLED_REGISTRY = "asset_registry.json"


class RegistryError(Exception):
    """Registry document cannot be loaded or violates its invariants."""


def _strip_pair(raw_ticker: str) -> str | None:
    """Return the base of a pair-style ticker ("XAU/USD" -> "XAU"), else None."""
    if "/" not in raw_ticker:
        return None
    return raw_ticker.split("/")[0]


class AssetRegistry:
    """Immutable lookup object built once from a registry document.

    Two reverse indexes are kept:

    - exchange-scoped: (exchange_id, key) -> canonical, where key is the raw
      ticker, the canonical ticker itself, or the base of a "/"-pair ticker.
      Only exchanges that actually list the asset get entries, which is what
      keeps "GAS" on one venue from resolving to natural gas on another.
    - global: key -> canonical across all exchanges, for callers without
      exchange context.

    Explicit raw tickers take precedence over derived keys in both indexes.
    """

    def __init__(self, document: RegistryDocument) -> None:
        assets: dict[str, RegistryAsset] = {}
        for asset in document.assets:
            if asset.canonical in assets:
                raise RegistryError(f"Duplicate canonical ticker in registry: {asset.canonical}")
            assets[asset.canonical] = asset

        self._assets: Mapping[str, RegistryAsset] = MappingProxyType(assets)
        self._exchange_meta: Mapping[str, ExchangeMeta] = MappingProxyType(
            dict(document.exchange_meta)
        )
        self._exchange_index: Mapping[tuple[str, str], str] = MappingProxyType(
            self._build_exchange_index(assets.values())
        )
        self._global_index: Mapping[str, str] = MappingProxyType(
            self._build_global_index(assets.values())
        )

    @staticmethod
    def _build_exchange_index(assets: Iterable[RegistryAsset]) -> dict[tuple[str, str], str]:
        explicit: dict[tuple[str, str], str] = {}
        derived: dict[tuple[str, str], str] = {}

        for asset in assets:
            for exchange_id, raw_ticker in asset.exchanges.items():
                if not raw_ticker:
                    continue

                key = (exchange_id, raw_ticker)
                existing = explicit.get(key)
                if existing is not None and existing != asset.canonical:
                    raise RegistryError(
                        f"Raw ticker {raw_ticker!r} on {exchange_id} is registered to both "
                        f"{existing} and {asset.canonical}"
                    )
                explicit[key] = asset.canonical

                derived.setdefault((exchange_id, asset.canonical), asset.canonical)
                stripped = _strip_pair(raw_ticker)
                if stripped:
                    derived.setdefault((exchange_id, stripped), asset.canonical)

        return {**derived, **explicit}

    @staticmethod
    def _build_global_index(assets: Iterable[RegistryAsset]) -> dict[str, str]:
        assets = list(assets)
        index = {asset.canonical: asset.canonical for asset in assets}

        for asset in assets:
            for raw_ticker in asset.exchanges.values():
                if raw_ticker:
                    index.setdefault(raw_ticker, asset.canonical)

        for asset in assets:
            for raw_ticker in asset.exchanges.values():
                stripped = _strip_pair(raw_ticker) if raw_ticker else None
                if stripped:
                    index.setdefault(stripped, asset.canonical)

        return index

    @property
    def assets(self) -> tuple[RegistryAsset, ...]:
        return tuple(self._assets.values())

    @property
    def exchange_ids(self) -> list[str]:
        """Exchanges known to the registry, from metadata and asset columns."""
        ids = set(self._exchange_meta)
        for asset in self._assets.values():
            ids.update(exchange_id for exchange_id, raw in asset.exchanges.items() if raw)
        return sorted(ids)

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, ticker: object) -> bool:
        return ticker in self._assets

    def get(self, ticker: str) -> RegistryAsset | None:
        return self._assets.get(ticker)

    def is_registered(self, ticker: str) -> bool:
        return ticker in self._assets

    def exchange_meta(self, exchange_id: str) -> ExchangeMeta | None:
        return self._exchange_meta.get(exchange_id)

    def lookup_exchange(self, exchange_id: str, key: str) -> str | None:
        return self._exchange_index.get((exchange_id, key))

    def lookup_global(self, key: str) -> str | None:
        return self._global_index.get(key)

    def exchange_raw_ticker(self, canonical: str, exchange_id: str) -> str | None:
        """Raw spelling of a canonical ticker on one exchange, if listed there."""
        asset = self._assets.get(canonical)
        if asset is None:
            return None
        return asset.exchanges.get(exchange_id) or None

    def trading_url(self, exchange_id: str, canonical: str) -> str | None:
        meta = self._exchange_meta.get(exchange_id)
        if meta is None or not meta.url_template:
            return None
        raw_ticker = self.exchange_raw_ticker(canonical, exchange_id) or canonical
        return meta.url_template.replace("{TICKER}", raw_ticker)


def load_registry(path: str | Path | None = None) -> AssetRegistry:
    """Load the registry from `path`, or the bundled document when omitted.

    Raises:
        RegistryError: If the document cannot be read, fails schema
            validation or breaks a registry invariant.
    """
    source = str(path) if path is not None else f"<bundled {BUNDLED_REGISTRY}>"
    try:
        if path is None:
            raw = (
                resources.files("onchain_markets")
                .joinpath("data")
                .joinpath(BUNDLED_REGISTRY)
                .read_text(encoding="utf-8")
            )
        else:
            raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryError(f"Cannot read asset registry {source}: {e}") from e

    try:
        document = RegistryDocument.model_validate_json(raw)
    except ValidationError as e:
        raise RegistryError(f"Invalid asset registry {source}: {e}") from e

    registry = AssetRegistry(document)
    logger.info(
        f"Loaded asset registry from {source}: "
        f"{len(registry)} assets, {len(registry.exchange_ids)} exchanges"
    )
    return registry
