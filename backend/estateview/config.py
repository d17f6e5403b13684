"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---------------- DATABASE ----------------
    database_url: str = "sqlite+aiosqlite:///./estateview.db"

    # ---------------- ADMIN AUTH ----------------
    admin_username: str = "admin"
    admin_password_hash: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 720

    # ---------------- APP ----------------
    app_name: str = "EstateView"
    app_version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]

    # ---------------- UPLOADS ----------------
    uploads_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    max_property_images: int = 10


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
