"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    api_base_url: str = "https://mpl-server-t9ib.onrender.com"
    cloudinary_cloud_name: str = "du7iys3nx"
    cloudinary_upload_preset: str = "MPL_UPLOAD"
    cloudinary_api_key: str | None = None
    token_path: Path = Path.home() / ".mpl_site" / "admin_token.json"
    request_timeout_seconds: float = 15
    upload_timeout_seconds: float = 60
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MPL_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def cloudinary_upload_url(settings: Settings) -> str:
    """Build the unsigned image upload endpoint for the configured cloud."""
    cloud = settings.cloudinary_cloud_name.strip()
    return f"https://api.cloudinary.com/v1_1/{cloud}/image/upload"
