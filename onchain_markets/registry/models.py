"""Registry document schema.

The asset registry JSON is the single source of truth for canonical tickers,
names, categories and per-exchange raw tickers.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AssetCategory(str, Enum):
    STOCK = "stock"
    COMMODITY = "commodity"
    INDEX = "index"
    FOREX = "forex"
    BOND = "bond"
    CRYPTO = "crypto"  # catch-all: anything the registry does not vouch for


class RegistryAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonical: str
    name: str
    category: AssetCategory
    exchanges: dict[str, str | None] = Field(default_factory=dict)


class ExchangeMeta(BaseModel):
    """Display metadata for one exchange column."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    color: str = "#888888"
    url_template: str = Field(default="", alias="urlTemplate")
    is_hip3: bool = Field(default=False, alias="isHip3")
    deployer: str | None = None
    # Used only when the source cannot report leverage (Ostium price feed)
    default_leverage: dict[AssetCategory, int] = Field(
        default_factory=dict, alias="defaultLeverage"
    )
    fallback_leverage: int = Field(default=20, alias="fallbackLeverage")

    def leverage_for(self, category: AssetCategory) -> int:
        return self.default_leverage.get(category, self.fallback_leverage)


class RegistryDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    assets: list[RegistryAsset]
    exchange_meta: dict[str, ExchangeMeta] = Field(default_factory=dict, alias="exchangeMeta")
