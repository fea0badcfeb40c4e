"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_FILE = Path(__file__).resolve().parent.parent / "data" / "movies.json"

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:8080",
    "http://localhost:3000",
    "http://localhost:4200",
    "https://movies.com",
    "https://midudev.com",
]


class Settings(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=4200)
    allowed_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    seed_file: Path = Field(default=DEFAULT_SEED_FILE, alias="MOVIES_SEED_FILE")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
