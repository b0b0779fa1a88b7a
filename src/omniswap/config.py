"""Application configuration using pydantic-settings.

Covers provider credentials, fan-out timeouts and the price oracle cache.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Quote Aggregation
    # ======================
    provider_timeout_seconds: float = Field(
        default=15.0, description="Upper bound for a single provider quote"
    )
    provider_http_timeout_seconds: float = Field(
        default=12.0, description="HTTP timeout for provider API calls"
    )
    default_slippage_bps: int = Field(
        default=100, description="Default slippage tolerance in basis points (1%)"
    )
    disabled_providers: str = Field(
        default="", description="Comma-separated provider ids to disable"
    )

    # ======================
    # Provider API Keys
    # ======================
    oneinch_api_key: Optional[str] = Field(default=None, description="1inch API key")
    socket_api_key: Optional[str] = Field(default=None, description="Socket (Bungee) API key")
    rango_api_key: Optional[str] = Field(default=None, description="Rango API key")
    changenow_api_key: Optional[str] = Field(default=None, description="ChangeNOW API key")

    # ======================
    # Rate-only CEX Fees
    # ======================
    mexc_fee_rate: float = Field(default=0.001, description="MEXC trading fee (0.1%)")
    changelly_fee_rate: float = Field(default=0.0025, description="Changelly fee (0.25%)")

    # ======================
    # Price Oracle
    # ======================
    price_cache_ttl_seconds: float = Field(
        default=60.0, description="Age after which a cached price is refreshed"
    )
    price_stale_ttl_seconds: float = Field(
        default=300.0, description="Age after which a cached price is unusable"
    )
    price_cache_max_entries: int = Field(default=5000, description="Price cache capacity")
    price_refresh_batch_size: int = Field(default=20, description="Tokens per refresh batch")
    price_refresh_batch_delay_seconds: float = Field(
        default=2.0, description="Pause between refresh batches"
    )
    price_http_timeout_seconds: float = Field(
        default=10.0, description="HTTP timeout for price source calls"
    )

    @property
    def disabled_provider_ids(self) -> list[str]:
        """Parse disabled provider ids into a list."""
        if not self.disabled_providers:
            return []
        return [p.strip().lower() for p in self.disabled_providers.split(",") if p.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "quotes": {
                "provider_timeout_seconds": self.provider_timeout_seconds,
                "provider_http_timeout_seconds": self.provider_http_timeout_seconds,
                "default_slippage_bps": self.default_slippage_bps,
                "disabled_providers": self.disabled_provider_ids,
            },
            "api_keys": {
                "1inch": self._redact(self.oneinch_api_key),
                "socket": self._redact(self.socket_api_key),
                "rango": self._redact(self.rango_api_key),
                "changenow": self._redact(self.changenow_api_key),
            },
            "pricing": {
                "cache_ttl_seconds": self.price_cache_ttl_seconds,
                "stale_ttl_seconds": self.price_stale_ttl_seconds,
                "cache_max_entries": self.price_cache_max_entries,
            },
        }

    @staticmethod
    def _redact(secret: Optional[str]) -> str:
        return "***" if secret else "(not set)"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
