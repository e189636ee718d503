# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.SERVER_PORT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are validated when first requested; a missing or invalid
# required variable raises pydantic.ValidationError and the server
# does not start.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Route-definition files shipped with the service
DEFAULT_ROUTES_DIR = Path(__file__).resolve().parent / "routes"

LOCALHOST_BASE_PATH = "http://localhost:3000"
PUBLIC_BASE_PATH = "https://shinyspells.com"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The resolved instance is decorated onto every request context as `env`
    and is never mutated after startup.
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    NODE_ENV: Literal["development", "test", "production"] = Field(
        default="development",
        description="Current run mode"
    )

    SERVER_PORT: int = Field(
        ...,  # required
        ge=0,
        le=65535,
        description="TCP port to bind (0 picks a free port)"
    )

    SERVER_HOST: str = Field(
        default="0.0.0.0",
        description="Interface to bind the server to"
    )

    DEBUG: bool = Field(
        default=False,
        description="Verbose logging for third-party libraries"
    )

    ROUTES_DIR: Path | None = Field(
        default=None,
        description="Directory of route-definition files (defaults to app/routes)"
    )

    # -------------------------------------------------------------------------
    # Blink Actions
    # -------------------------------------------------------------------------

    LOCALHOST: bool = Field(
        default=False,
        description="Build action links against http://localhost:3000"
    )

    BASE_PATH: str | None = Field(
        default=None,
        description="Explicit public base URL for action links (overrides LOCALHOST)"
    )

    ACTIONS_JSON_ENABLED: bool = Field(
        default=True,
        description="Serve GET /actions.json"
    )

    RPC_URL: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Solana JSON-RPC endpoint used for recent blockhashes"
    )

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def base_path(self) -> str:
        """
        Public base URL that action links are built from.

        Example: LOCALHOST=true -> "http://localhost:3000"
        """
        if self.BASE_PATH:
            return self.BASE_PATH.rstrip("/")
        return LOCALHOST_BASE_PATH if self.LOCALHOST else PUBLIC_BASE_PATH

    @property
    def routes_dir(self) -> Path:
        """Absolute directory the route autoloader scans."""
        if self.ROUTES_DIR is not None:
            return self.ROUTES_DIR.resolve()
        return DEFAULT_ROUTES_DIR


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Raises:
        pydantic.ValidationError: If a required variable is missing or invalid
    """
    return Settings()
