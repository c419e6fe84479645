from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Marketplace Inventory Engine"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    API_KEYS: Optional[str] = None
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None

    # ==============================
    # Inventory defaults
    # ==============================
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10
    DEFAULT_RESTOCK_LEVEL: int = 50

    # ==============================
    # Listing limits
    # ==============================
    ALERT_LIST_LIMIT: int = 200
    HISTORY_LIST_LIMIT: int = 500

    # ==============================
    # Legacy migration
    # ==============================
    LEGACY_INVENTORY_SNAPSHOT: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
