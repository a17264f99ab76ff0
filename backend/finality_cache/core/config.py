from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # App
    APP_NAME: str = "Finality Cache"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    # Ledger RPC
    RPC_URL: str = "https://api.mainnet-beta.solana.com"
    RPC_API_KEY: str | None = None
    RPC_TIMEOUT_SECONDS: float = Field(10.0, gt=0)
    RPC_COMMITMENT: str = "finalized"

    # Cache & poller
    CACHE_CAPACITY: int = Field(1000, gt=0)
    POLL_INTERVAL_SECONDS: float = Field(2.0, gt=0)
    INITIAL_LOOKBACK: int = Field(10, ge=0)
    STARTUP_BACKOFF_SECONDS: float = Field(5.0, ge=0)
    STARTUP_RETRY_FOREVER: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def rpc_endpoint(self) -> str:
        """RPC URL with the provider API key appended, if one is configured."""
        return f"{self.RPC_URL}{self.RPC_API_KEY or ''}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
