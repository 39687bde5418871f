"""
Configuration for Browser Tests
================================
Centralized configuration for URLs, timeouts, credentials and settings.

Runtime knobs live on the ``Config`` dataclass. Credentials and the target
URLs come from the environment (or a ``.env`` file) through ``EnvSettings``.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EnvSettings(BaseSettings):
    """Environment-provided settings for the suite.

    Attributes:
        email: Login email of the test account.
        password: Login password of the test account.
        work_mode: Work mode stored alongside the credentials by the app.
        test_url: Frontend URL of the application under test.
        test_backend_url: Backend API URL of the application under test.
        password_hashed: Pre-hashed password (used by some auth flows).
        headless: Run the browser headless.
    """

    email: str = ""
    password: str = ""
    work_mode: str = ""
    test_url: str = "http://localhost:3000"
    test_backend_url: str = ""
    password_hashed: str = ""
    headless: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_env_settings() -> EnvSettings:
    """Factory for the EnvSettings singleton."""
    return EnvSettings()


@dataclass
class Config:
    """Test configuration settings"""

    # Frontend URL of the application
    base_url: str = "http://localhost:3000"

    # Backend URL, used by the preflight check when set
    backend_url: str = ""

    # Credentials for the cached login session
    email: str = ""
    password: str = ""

    # Timeouts (milliseconds)
    page_load_timeout: int = 30000
    ready_timeout: int = 35000
    element_timeout: int = 10000
    login_timeout: int = 100000

    # Browser settings
    headless: bool = True
    slow_mo: int = 0  # Slow down operations (ms)
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1280, "height": 720})

    # Retry settings: extra attempts per scenario case
    max_retries: int = 3

    # Session cache (storage state shared across suites and runs)
    session_cache_path: Path = Path(".cache/login-session.json")
    # A cached login older than this (seconds) is not reused
    session_max_age: int = 8 * 60 * 60

    # Where browser downloads (exports) are saved
    downloads_dir: Path = Path("downloads")

    def page_url(self, path: str) -> str:
        """Build full URL for a page path"""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls, settings: Optional[EnvSettings] = None, **overrides) -> "Config":
        """Build a Config from environment settings, applying overrides last."""
        settings = settings or get_env_settings()
        values = {
            "base_url": settings.test_url,
            "backend_url": settings.test_backend_url,
            "email": settings.email,
            "password": settings.password,
            "headless": settings.headless,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        if not values["email"] or not values["password"]:
            logger.warning("EMAIL/PASSWORD not set - login will fail against a real instance")
        return cls(**values)


# Default configuration
DEFAULT_CONFIG = Config()
