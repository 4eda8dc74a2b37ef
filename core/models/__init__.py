# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - task.py: Task record, status enum and list response
#
# These models define the "contract" between API and clients.
# =============================================================================

from .task import (
    ANONYMOUS_USER_ID,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskList,
    TaskStatus,
    new_task_id,
    utc_timestamp,
)

__all__ = [
    "ANONYMOUS_USER_ID",
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Task",
    "TaskList",
    "TaskStatus",
    "new_task_id",
    "utc_timestamp",
]
