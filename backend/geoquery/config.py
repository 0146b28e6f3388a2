"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "MongoDB Geospatial Queries"
    LOG_LEVEL: str = "INFO"

    # Database
    MONGODB_URI: str = "mongodb://localhost:27017/mongodb-geospatial-queries"
    MONGODB_COLLECTION: str = "test"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 30000

    # Reference documents used by the demo queries
    NEAR_REFERENCE: str = "pedestrian2"
    WITHIN_REFERENCE: str = "building2"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
