"""
Application Configuration

Settings are read from environment variables (and a local .env file)
via pydantic-settings. Import the module-level ``settings`` instance, or
call ``get_settings()`` where a cached accessor is more convenient.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class Settings(BaseSettings):
    """Runtime configuration for the school website API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    python_env: str = "development"
    cors_origins: str = "http://localhost:3000"

    # Redis backs the per-visitor session store and rate limiting
    redis_url: str = "redis://localhost:6379/0"

    # Session handling
    session_cookie_name: str = "ais_session"
    session_ttl_seconds: int = 60 * 60 * 24

    # Static images served to the landing page
    images_dir: Path = Path("public/images")

    # Admissions form
    admissions_schema_path: Path | None = None
    admissions_block_on_step1_errors: bool = True
    max_attachment_bytes: int = 5 * MIB
    submission_delay_seconds: float = 1.5
    preview_ttl_seconds: int = 60 * 60

    # Contact and newsletter forms
    contact_delay_seconds: float = 1.5
    contact_rate_limit: int = 5
    contact_rate_limit_window_seconds: int = 600

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list (the env var is comma separated)."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


settings = get_settings()
