"""API dependencies."""
from ..config import Settings, get_settings
from ..core.generator import get_generator, LevelGenerator


def get_level_generator() -> LevelGenerator:
    """Dependency for level generator."""
    return get_generator()


def get_app_settings() -> Settings:
    """Dependency for application settings."""
    return get_settings()
