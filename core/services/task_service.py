# =============================================================================
# core/services/task_service.py - Task Operation Handlers
# =============================================================================
# Handles task CRUD operations and business logic:
# validation, ownership checks and store gateway calls.
# Separates event/HTTP concerns from store logic; the router maps the
# return values and raised exceptions to status codes.
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any

from app.exceptions import (
    InvalidTaskIdError,
    TaskConflictError,
    TaskForbiddenError,
    TaskNotFoundError,
    TaskValidationError,
)
from app.identity import Identity
from core.models.task import Task, TaskList, TaskStatus, utc_timestamp
from core.validation import validate_task_payload
from lib.task_store import (
    MAX_SCAN_LIMIT,
    MIN_SCAN_LIMIT,
    TaskStore,
    TaskStoreConditionError,
    TaskStoreConflictError,
)

logger = logging.getLogger(__name__)


def _require_task_id(task_id: Any) -> str:
    if not isinstance(task_id, str) or not task_id.strip():
        raise InvalidTaskIdError()
    return task_id


def _parse_limit(raw: Any) -> int | None:
    """Integer 1-100, or None when missing or out of range."""
    if raw is None:
        return None
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-integer limit: {raw!r}")
        return None
    if not MIN_SCAN_LIMIT <= limit <= MAX_SCAN_LIMIT:
        logger.debug(f"Ignoring out-of-range limit: {limit}")
        return None
    return limit


class TaskService:
    """
    Service for task operations.

    Provides a clean interface between the request router and the store.
    The store gateway is injected once per process.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_owned(self, task_id: str, identity: Identity | None) -> dict[str, Any]:
        """
        Fetch a task and check the caller may touch it.

        Raises:
            TaskNotFoundError: If the id doesn't exist
            TaskForbiddenError: If an authenticated caller doesn't own it
        """
        record = self.store.get_by_id(task_id)
        if record is None:
            raise TaskNotFoundError(task_id)

        if identity is not None and record.get("userId") != identity.sub:
            logger.warning(f"User {identity.sub} denied access to task {task_id}")
            raise TaskForbiddenError()

        return record

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create_task(self, payload: Any, identity: Identity | None = None) -> dict[str, Any]:
        """
        Create a new task.

        Returns:
            The stored record

        Raises:
            TaskValidationError: If the payload is invalid
            TaskConflictError: If the generated id already exists
        """
        errors = validate_task_payload(payload)
        if errors:
            raise TaskValidationError(errors)

        task = Task.new(
            title=payload["title"],
            description=payload.get("description"),
            status=payload.get("status"),
            user_id=identity.sub if identity else None,
        )
        record = task.to_record()

        try:
            self.store.put(record, prevent_overwrite=True)
        except TaskStoreConflictError:
            raise TaskConflictError(task.id)

        logger.info(f"Created task: {task.id} for user: {task.user_id}")
        return record

    def get_task(self, task_id: Any, identity: Identity | None = None) -> dict[str, Any]:
        """
        Get a task by ID.

        Raises:
            InvalidTaskIdError: If task_id is empty or not a string
            TaskNotFoundError: If the task doesn't exist
            TaskForbiddenError: If the caller doesn't own it
        """
        task_id = _require_task_id(task_id)
        return self._get_owned(task_id, identity)

    def list_tasks(
        self,
        identity: Identity | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        List tasks, newest first.

        Authenticated callers only see their own tasks. An unknown status
        filter or an out-of-range limit is ignored rather than rejected.

        The limit sets the store page size only; the full sorted result is
        returned regardless.
        """
        query = query or {}

        status = query.get("status")
        if status is not None and not TaskStatus.is_valid(status):
            logger.debug(f"Ignoring unknown status filter: {status!r}")
            status = None

        limit = _parse_limit(query.get("limit"))

        result = self.store.scan(
            owner_id=identity.sub if identity else None,
            status=status,
            limit=limit,
        )

        # sorted() is stable with reverse=True, so equal timestamps keep store order
        tasks = sorted(result.items, key=lambda t: t.get("createdAt") or "", reverse=True)

        if limit is not None and len(tasks) > limit:
            logger.debug(f"Returning {len(tasks)} tasks although limit={limit}")

        return TaskList(tasks=tasks, count=len(tasks), total=result.count).model_dump()

    def update_task(
        self,
        task_id: Any,
        payload: Any,
        identity: Identity | None = None,
    ) -> dict[str, Any]:
        """
        Overwrite a task's title, description and status.

        There is no partial update: title is required and a missing
        description/status resets to "" / "pending".

        Raises:
            InvalidTaskIdError, TaskValidationError, TaskNotFoundError,
            TaskForbiddenError
        """
        task_id = _require_task_id(task_id)

        errors = validate_task_payload(payload)
        if errors:
            raise TaskValidationError(errors)

        self._get_owned(task_id, identity)

        fields = {
            "title": payload["title"].strip(),
            "description": (payload.get("description") or "").strip(),
            "status": payload.get("status") or TaskStatus.PENDING.value,
            "updatedAt": utc_timestamp(),
        }

        try:
            record = self.store.update(task_id, fields)
        except TaskStoreConditionError:
            # Deleted between the ownership read and the write
            raise TaskNotFoundError(task_id)

        logger.info(f"Updated task: {task_id}")
        return record

    def delete_task(self, task_id: Any, identity: Identity | None = None) -> None:
        """
        Delete a task.

        Raises:
            InvalidTaskIdError, TaskNotFoundError, TaskForbiddenError
        """
        task_id = _require_task_id(task_id)
        self._get_owned(task_id, identity)
        self.store.delete(task_id)
        logger.info(f"Deleted task: {task_id}")
