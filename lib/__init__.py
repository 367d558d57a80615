# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
]
