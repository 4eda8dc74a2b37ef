# =============================================================================
# lib/supabase_client.py - Supabase Client Factory
# =============================================================================
# Creates the Supabase client used by the task store.
#
# The client is built once per process (cold start) by the entry point and
# injected into TaskStore; nothing here holds global state.
#
# Usage:
#   from lib.supabase_client import create_supabase_client
#   client = create_supabase_client(settings)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

from app.config import Settings

logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
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


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client from settings.

    Uses the service_role key, which bypasses Row Level Security (RLS).
    Ownership is enforced by the operation handlers instead.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in the environment"
        ) from e

    logger.info("Supabase client initialized successfully")
    return client
