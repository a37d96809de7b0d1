"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    secret_key: str
    mongodb_uri: str
    mongodb_database: str | None = None
    site_collection: str = "web data"
    user_collection: str = "user"
    cloud_name: str
    cloud_api_key: str
    cloud_secret: str
    cloudinary_folder: str = "magang"
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    allowed_origin: str = "https://frontend-skb.vercel.app"
    cookie_secure: bool = False
    session_ttl_hours: int = 24
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
