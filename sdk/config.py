"""Client settings read from the environment (PRODUCTOS_*) or a .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api-movile.onrender.com/"


class ClientSettings(BaseSettings):
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Root of the productos API")
    timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    max_workers: int = Field(default=4, ge=1, description="Threads used by ProductClient.enqueue")
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PRODUCTOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> ClientSettings:
    return ClientSettings()
