"""
Configuration management for the package editor.
Points the service at a hosted REST backend (Supabase/PostgREST).
"""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend Configuration
    backend_url: str = "http://localhost:54321"
    backend_key: str = ""
    backend_rest_path: str = "/rest/v1"
    request_timeout: float = 10.0

    # Form limits
    max_duration_days: int = 365

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_backend_config() -> dict:
    """Get backend connection configuration."""
    base_url = settings.backend_url.rstrip("/") + "/" + settings.backend_rest_path.strip("/")

    headers = {
        "apikey": settings.backend_key,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if settings.backend_key:
        headers["Authorization"] = f"Bearer {settings.backend_key}"

    return {
        "base_url": base_url,
        "headers": headers,
        "timeout": settings.request_timeout,
    }
