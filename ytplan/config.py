"""Configuration management and environment variable loading."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file (don't override existing env vars)
load_dotenv(override=False)


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(',') if part.strip()]


class Config:
    """Application configuration."""

    # Optional - without an API key playlists are read with yt-dlp
    YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
    YOUTUBE_COOKIES_TXT: str = os.getenv("YOUTUBE_COOKIES_TXT", "")
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "2"))

    OUT_DIR: Path = Path(os.getenv("OUT_DIR", "./out")).resolve()
    PLANS_FILE: Path = Path(os.getenv("PLANS_FILE", str(OUT_DIR / "plans.json"))).resolve()

    # Proxy server
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))
    MAX_REQUESTS_PER_MINUTE: int = int(os.getenv("MAX_REQUESTS_PER_MINUTE", "10"))
    CORS_ALLOWED_ORIGINS: str = os.getenv("CORS_ALLOWED_ORIGINS", "")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Client side: proxy endpoints tried in order (empty = fetch directly)
    BACKEND_API_URLS: str = os.getenv("BACKEND_API_URLS", "")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "8"))

    @classmethod
    def backend_urls(cls) -> list[str]:
        return _split_list(cls.BACKEND_API_URLS)

    @classmethod
    def allowed_origins(cls) -> list[str]:
        return _split_list(cls.CORS_ALLOWED_ORIGINS)

    @classmethod
    def validate(cls) -> None:
        """Validate that numeric settings are usable."""
        if cls.CACHE_TTL_SECONDS <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be a positive number of seconds.")
        if cls.MAX_REQUESTS_PER_MINUTE <= 0:
            raise ValueError("MAX_REQUESTS_PER_MINUTE must be a positive integer.")
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be a positive number of seconds.")
