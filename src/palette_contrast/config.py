"""Defaults loaded from environment variables (or a .env file)."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Every field can be overridden with a ``PALETTE_CONTRAST_`` variable."""

    log_level: str = "WARNING"

    # --- Contrast fallbacks ---
    light_key: str = "contrast-light"  # palette entry consulted first
    dark_key: str = "contrast-dark"
    contrast_light: str = "#ffffff"  # used when the palette has no light_key
    contrast_dark: str = "#000000"

    model_config = SettingsConfigDict(
        env_prefix="PALETTE_CONTRAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
