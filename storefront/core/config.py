# storefront/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    All values have local-development defaults; override them in `.env`
    or the process environment.

      - DATABASE_URL: SQLAlchemy URL (SQLite file by default, Postgres in prod)
      - DB_SSLMODE: appended as `sslmode=` to Postgres URLs when set
      - CART_ENFORCE_MERGED_INVENTORY: also reject an add whose merged
        quantity (existing + requested) exceeds product inventory
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DB_ECHO: bool = False
    DB_SSLMODE: str | None = None

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Cart rules
    CART_ENFORCE_MERGED_INVENTORY: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
