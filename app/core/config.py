"""
Application settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from decimal import Decimal
from typing import List


class Settings(BaseSettings):
    # App
    PROJECT_NAME: str = "FoodHub"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    APP_NAME: str = "FOODHUB"

    # Database
    DATABASE_URL: str = "sqlite:///./foodhub.db"
    DB_ECHO: bool = False
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a free connection

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Orders
    AMOUNT_TOLERANCE: Decimal = Decimal("0.005")  # half a cent
    STATUS_UPDATE_MAX_RETRIES: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=True
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
