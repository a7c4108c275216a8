"""
Application configuration.

A single pydantic-settings model read from the environment (and a local
``.env`` file) that every other module obtains through ``get_config()``.
"""
from typing import Dict, List
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Single source of truth for all application configuration.

    Field names double as environment variable names (case-insensitive),
    e.g. ``BACKEND_URL`` populates ``backend_url``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field("development")
    debug: bool = Field(False)
    app_name: str = Field("TestLab")
    app_version: str = Field("1.0.0")
    log_level: str = Field("INFO")

    # Hosted backend
    backend_url: str = Field(..., description="Base URL of the hosted backend, e.g. https://xyz.supabase.co")
    backend_anon_key: str = Field(..., description="Public (anon) API key sent with every request")
    http_timeout_seconds: float = Field(30.0)

    # Auth
    confirmation_token_marker: str = Field("access_token")
    session_refresh_margin_seconds: int = Field(10)

    # Remote procedure creating a company together with its admin membership
    company_rpc_name: str = Field("create_company_with_admin")

    # UI
    locale: str = Field("nb")

    # CORS - the browser page talking to this app
    cors_origins: str = Field("http://localhost:5173")

    @property
    def auth_url(self) -> str:
        return f"{self.backend_url.rstrip('/')}/auth/v1"

    @property
    def rest_url(self) -> str:
        return f"{self.backend_url.rstrip('/')}/rest/v1"

    @property
    def default_headers(self) -> Dict[str, str]:
        """Headers every backend request carries."""
        return {"apikey": self.backend_anon_key}

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration.

    Cached so the environment is read once; tests clear it with
    ``get_config.cache_clear()``.
    """
    return AppConfig()
