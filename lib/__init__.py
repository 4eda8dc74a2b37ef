# =============================================================================
# lib/ - Store Access Modules
# =============================================================================
# This package contains the persistence adapters:
# - supabase_client.py: Supabase client factory and base store error
# - task_store.py: Task store gateway (put, get_by_id, scan, update, delete)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClientError, create_supabase_client
from lib.task_store import (
    ScanResult,
    TaskStore,
    TaskStoreConditionError,
    TaskStoreConflictError,
    TaskStoreError,
)

__all__ = [
    # Supabase
    "SupabaseClientError",
    "create_supabase_client",
    # Task store
    "ScanResult",
    "TaskStore",
    "TaskStoreConditionError",
    "TaskStoreConflictError",
    "TaskStoreError",
]
