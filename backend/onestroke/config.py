"""Application configuration settings."""
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    """Level service settings loaded from environment variables."""

    # App settings
    app_name: str = "One Stroke Level Service"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Comma-separated list of allowed browser origins
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Level range served by the API (1..max_level_id)
    max_level_id: int = 200

    # Default upper bound for verify_levels.py
    verify_range_end: int = 200

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def is_served(self, level_id: int) -> bool:
        """Whether the API serves level_id."""
        return 1 <= level_id <= self.max_level_id


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings instance (re-read on every call when DEBUG=true)."""
    global _settings
    if _settings is None or os.getenv("DEBUG", "false").lower() == "true":
        _settings = Settings()
    return _settings
