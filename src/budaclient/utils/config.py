"""Configuration management."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Environment-backed defaults for the Buda API client."""

    # API credentials
    API_KEY: str = os.getenv("BUDA_API_KEY", "")
    API_SECRET: str = os.getenv("BUDA_API_SECRET", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # REST API
    REST_BASE_URL: str = os.getenv("BUDA_BASE_URL", "https://www.buda.com/api/v2")
    REST_TIMEOUT: float = float(os.getenv("BUDA_REST_TIMEOUT", "10"))  # seconds

    # Pagination
    PAGE_SIZE: int = int(os.getenv("BUDA_PAGE_SIZE", "300"))
    MAX_CONCURRENT_PAGES: int = int(os.getenv("BUDA_MAX_CONCURRENT_PAGES", "8"))

    # Raise APIError on HTTP status >= 400 instead of decoding the body
    RAISE_FOR_STATUS: bool = _env_bool("BUDA_RAISE_FOR_STATUS", "true")

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration."""
        if not cls.API_KEY or not cls.API_SECRET:
            return False
        return True


@dataclass(frozen=True)
class ClientConfig:
    """Per-client settings, fixed at construction."""

    base_url: str = "https://www.buda.com/api/v2"
    page_size: int = 300
    max_concurrent_pages: int = 8
    timeout: float = 10.0
    raise_for_status: bool = True

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build settings from the environment-backed defaults in Config."""
        return cls(
            base_url=Config.REST_BASE_URL,
            page_size=Config.PAGE_SIZE,
            max_concurrent_pages=Config.MAX_CONCURRENT_PAGES,
            timeout=Config.REST_TIMEOUT,
            raise_for_status=Config.RAISE_FOR_STATUS,
        )

    def validate(self) -> None:
        """Raise ValueError on unusable settings."""
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.max_concurrent_pages < 1:
            raise ValueError(
                f"max_concurrent_pages must be positive, got {self.max_concurrent_pages}"
            )
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
