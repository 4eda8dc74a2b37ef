# =============================================================================
# lib/task_store.py - Task Store Gateway
# =============================================================================
# Thin adapter over the Supabase "tasks" table. One method per store
# primitive: put, get_by_id, scan, update, delete.
#
# The gateway never retries. Conditions the handlers care about (duplicate
# key on insert, no row matched on update) get their own error types;
# everything else surfaces as a generic TaskStoreError.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

MIN_SCAN_LIMIT = 1
MAX_SCAN_LIMIT = 100


class TaskStoreError(SupabaseClientError):
    """Generic failure talking to the task table."""

    def __init__(self, message: str, code: str = "TASK_STORE_ERROR", **kwargs: Any):
        super().__init__(message, code=code, **kwargs)


class TaskStoreConflictError(TaskStoreError):
    """Insert refused because a record with the same id exists."""

    def __init__(self, task_id: str):
        super().__init__(
            message=f"Task already exists: {task_id}",
            code="TASK_EXISTS",
            suggestion="Retry the create; a new id will be generated",
            details={"task_id": task_id},
        )


class TaskStoreConditionError(TaskStoreError):
    """Conditional write matched no record."""

    def __init__(self, task_id: str):
        super().__init__(
            message=f"No task matched the conditional write: {task_id}",
            code="CONDITION_FAILED",
            details={"task_id": task_id},
        )


@dataclass
class ScanResult:
    """Records returned by a scan plus the store-reported match count."""
    items: list[dict[str, Any]] = field(default_factory=list)
    count: int = 0


class TaskStore:
    """
    Gateway for task records.

    Example:
        store = TaskStore(create_supabase_client(settings), settings.TASKS_TABLE)
        store.put(task.to_record())
        record = store.get_by_id(task.id)
    """

    def __init__(self, client: Client, table_name: str, default_page_size: int = 100):
        self._client = client
        self.table_name = table_name
        self.default_page_size = default_page_size

    def _table(self):
        return self._client.table(self.table_name)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def put(self, task: dict[str, Any], prevent_overwrite: bool = True) -> dict[str, Any]:
        """
        Insert a task record.

        Args:
            task: Record in store shape (camelCase keys, must include "id")
            prevent_overwrite: Refuse to replace an existing record with the
                same id. When False, the record is upserted.

        Returns:
            The stored record

        Raises:
            TaskStoreConflictError: If prevent_overwrite is set and the id exists
            TaskStoreError: On any other failure
        """
        task_id = task["id"]

        try:
            if prevent_overwrite:
                response = self._table().insert(task).execute()
            else:
                response = self._table().upsert(task).execute()
        except APIError as e:
            if prevent_overwrite and e.code == UNIQUE_VIOLATION:
                raise TaskStoreConflictError(task_id) from e
            raise TaskStoreError(
                message=f"Failed to put task: {e.message}",
                details={"task_id": task_id, "store_code": e.code},
            ) from e
        except Exception as e:
            raise TaskStoreError(
                message=f"Failed to put task: {e}",
                details={"task_id": task_id},
            ) from e

        logger.debug(f"Put task {task_id} into {self.table_name}")
        return response.data[0] if response.data else task

    def update(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Rewrite fields on an existing record.

        Returns:
            The record as stored after the update

        Raises:
            TaskStoreConditionError: If no record has this id
            TaskStoreError: On any other failure
        """
        try:
            response = (
                self._table()
                .update(fields)
                .eq("id", task_id)
                .execute()
            )
        except Exception as e:
            raise TaskStoreError(
                message=f"Failed to update task: {e}",
                details={"task_id": task_id},
            ) from e

        if not response.data:
            raise TaskStoreConditionError(task_id)

        return response.data[0]

    def delete(self, task_id: str) -> None:
        """Remove a record. Deleting a missing id is not an error here."""
        try:
            self._table().delete().eq("id", task_id).execute()
        except Exception as e:
            raise TaskStoreError(
                message=f"Failed to delete task: {e}",
                details={"task_id": task_id},
            ) from e

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_id(self, task_id: str) -> dict[str, Any] | None:
        """Fetch one record, or None if there is no such id."""
        try:
            response = (
                self._table()
                .select("*")
                .eq("id", task_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise TaskStoreError(
                message=f"Failed to fetch task: {e}",
                details={"task_id": task_id},
            ) from e

        return response.data[0] if response.data else None

    def scan(
        self,
        owner_id: str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> ScanResult:
        """
        Read every record matching the optional filters.

        Filters are equality predicates evaluated by the store; this is a
        full table scan, not an indexed lookup.

        Args:
            owner_id: Only records whose userId matches
            status: Only records with this status
            limit: Store page size (1-100). Bounds each round trip, not the
                number of records returned.

        Returns:
            ScanResult with all matching records in store order (by id)
        """
        if limit is not None and not MIN_SCAN_LIMIT <= limit <= MAX_SCAN_LIMIT:
            raise ValueError(f"limit must be between {MIN_SCAN_LIMIT} and {MAX_SCAN_LIMIT}")

        page_size = limit or self.default_page_size
        items: list[dict[str, Any]] = []
        reported: int | None = None
        start = 0

        try:
            while True:
                query = self._table().select("*", count="exact")
                if owner_id is not None:
                    query = query.eq("userId", owner_id)
                if status is not None:
                    query = query.eq("status", status)

                response = (
                    query
                    .order("id")
                    .range(start, start + page_size - 1)
                    .execute()
                )

                page = response.data or []
                if reported is None:
                    reported = response.count
                items.extend(page)

                if len(page) < page_size:
                    break
                start += page_size

        except Exception as e:
            raise TaskStoreError(
                message=f"Failed to scan tasks: {e}",
                details={"owner_id": owner_id, "status": status, "limit": limit},
            ) from e

        logger.debug(f"Scanned {len(items)} tasks from {self.table_name} in pages of {page_size}")
        return ScanResult(items=items, count=reported if reported is not None else len(items))
