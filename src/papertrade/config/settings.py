"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".papertrade"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAPERTRADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Paper Trading Ledger"
    app_version: str = "0.1.0"

    # Data directory (SQLite database lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Ledger behavior
    starting_cash: Decimal = Decimal("10000.00")
    position_update_retries: int = Field(default=3, ge=1)
    transaction_history_limit: int = Field(default=50, ge=1)

    # Quote cache
    quote_cache_ttl_seconds: int = 300
    quote_cache_backend: Literal["memory", "database"] = "memory"

    # Quote providers
    quote_provider: Literal["alphavantage", "yahoo", "stub"] = "stub"
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    crypto_provider: Literal["coingecko", "stub"] = "stub"
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    quote_fetch_timeout_seconds: float = 10.0

    # Batch pricing (reference deployment allows 5 calls/minute)
    provider_min_interval_seconds: float = 12.0
    batch_max_fetches: int = Field(default=5, ge=1)
    batch_time_budget_seconds: float = 30.0

    # Bearer token -> user id (development identity verifier)
    api_tokens: dict[str, str] = Field(default_factory=dict)

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "papertrade.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
