"""
Configuration management for the trip budget service.
Holds credentials and endpoints for the Gemini and geocoding APIs.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini (generative language) Configuration
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-pro"

    # Geocoding Configuration
    geocoding_api_key: str = ""
    geocoding_base_url: str = "https://maps.googleapis.com"

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    # Start with the demo trip loaded
    seed_demo_trip: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
