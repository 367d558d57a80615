# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # The contacts collection and the auth users both live in Supabase

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key (used for password sign-in)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret for verifying access tokens"
    )

    CONTACTS_TABLE: str = Field(
        default="contacts",
        min_length=1,
        description="Table holding Contact documents"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    DASHBOARD_RECENT_LIMIT: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many recent contacts the dashboard shows"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    AUTH_COOKIE_NAME: str = Field(
        default="access_token",
        description="Cookie carrying the access token for page navigation"
    )

    AUTH_COOKIE_SECURE: bool = Field(
        default=False,
        description="Only send the auth cookie over HTTPS"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
