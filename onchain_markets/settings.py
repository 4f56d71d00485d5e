"""Environment-backed settings for the market sync service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    exchanges: str | None = Field(default=None, alias="EXCHANGES")
    debug_exchanges: str | None = Field(default=None, alias="DEBUG_EXCHANGES")
    registry_path: str | None = Field(default=None, alias="REGISTRY_PATH")
    adapter_timeout: float = Field(default=20.0, alias="ADAPTER_TIMEOUT")
    http_max_attempts: int = Field(default=1, alias="HTTP_MAX_ATTEMPTS")
    sync_interval_minutes: int = Field(default=30, alias="SYNC_INTERVAL_MINUTES")
    output_path: str | None = Field(default=None, alias="OUTPUT_PATH")
