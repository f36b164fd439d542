from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Service settings, read from the environment or a local .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Binance
    BINANCE_API_KEY: Optional[str] = None
    BINANCE_API_SECRET: Optional[str] = None
    BINANCE_BASE_URL: str = "https://api.binance.com"
    REQUEST_TIMEOUT: float = 10

    # Pairs are assumed to be quoted in this asset
    QUOTE_ASSET: str = "USDT"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_credentials(settings: Settings) -> None:
    if not settings.BINANCE_API_KEY or not settings.BINANCE_API_SECRET:
        raise ConfigurationError("Missing Binance API credentials (BINANCE_API_KEY / BINANCE_API_SECRET)")
