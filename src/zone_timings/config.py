"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    zones_table: str = "zones"
    profiles_table: str = "profiles"
    images_bucket: str = "images"
    placeholder_photo_url: str = "https://via.placeholder.com/400x300"
    timezone: str = "UTC"
    countdown_interval_seconds: float = 1.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
