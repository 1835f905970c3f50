"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RECIPES_PATH = Path(__file__).parent / "data" / "recipes.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Recipe data source
    recipes_data_path: Path = DEFAULT_RECIPES_PATH

    # Display defaults
    default_unit_system: Literal["metric", "imperial"] = "metric"

    # Pagination
    default_page_limit: int = 20
    max_page_limit: int = 100
    featured_limit: int = 6
    search_limit: int = 10

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def origins(self) -> list[str]:
        """Get the CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
