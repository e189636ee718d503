# =============================================================================
# lib/database.py - Supabase Database Handle
# =============================================================================
# Lazily connected Supabase client shared by every request handler.
# One instance is created at startup and decorated onto the application
# context; the underlying client is only built on first use, so the service
# can start (and be tested) without reaching the database.
#
# Usage:
#   db = Database(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   rows = db.get_client().table("donations").select("*").execute()
# =============================================================================

from __future__ import annotations

from typing import Any

from supabase import Client, create_client

from lib.logger import logger


class DatabaseError(Exception):
    """
    Error while creating or using the Supabase client.

    Carries a code and a suggestion so callers can surface how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "DATABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class Database:
    """
    Supabase client holder.

    Uses the service_role key, which bypasses Row Level Security.
    This is appropriate for server-side operations only.
    """

    def __init__(self, url: str, service_key: str):
        self.url = url
        self._service_key = service_key
        self._client: Client | None = None

    @property
    def connected(self) -> bool:
        """True once the client has been created."""
        return self._client is not None

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Returns:
            Client: Supabase client instance

        Raises:
            DatabaseError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self.url, self._service_key)
            except Exception as e:
                raise DatabaseError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                    details={"url": self.url},
                ) from e
            logger.info(f"Supabase client initialized for {self.url}")
        return self._client
