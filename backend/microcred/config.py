"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Every setting has a default: the API runs out of the box against ./data.json

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - MICROCRED_ prefix keeps variables from colliding with host tooling (PORT, ENV)
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from microcred.core.domain_types import SortKey


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MICROCRED_",
        case_sensitive=False,
        extra="ignore",
    )

    # Data source
    data_file: str = "data.json"
    static_dir: str = "static"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    environment: str = "development"

    # API
    api_version: str = "1.0.0"
    data_version: str = "1.0"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:5500",
        "http://127.0.0.1:3001",
    ]

    # Query defaults
    default_sort: SortKey = SortKey.NEWEST
    search_default_limit: int = 50

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("default_sort", mode="before")
    @classmethod
    def lowercase_sort(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()
