"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Eco Mission API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Local storage: "memory", "file" or "mongo"
    STORAGE_BACKEND: str = "file"
    DATA_DIR: str = "./data"

    # MongoDB (only used when STORAGE_BACKEND=mongo)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "ecomission"
    MONGO_COLLECTION: str = "local_store"

    # Remote backup sheet (Apps Script web app). Empty disables backup.
    BACKUP_SHEET_URL: str = ""
    BACKUP_TIMEOUT_SECONDS: float = 10.0

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"

    # OpenWeatherMap
    OPENWEATHER_API_KEY: str = ""

    # Reverse/forward geocoding
    GEOCODING_TIMEOUT_SECONDS: float = 5.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
