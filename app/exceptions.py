# =============================================================================
# app/exceptions.py - Domain Exceptions
# =============================================================================
# Centralized error taxonomy for the task API.
# Each exception carries the HTTP status it maps to, so the router can turn
# any of them into a response envelope without a lookup table.
# =============================================================================

from typing import Any


class TaskApiException(Exception):
    """
    Base exception for the task API.

    All domain exceptions inherit from this class.
    Provides structured error responses with a machine-readable code.
    """

    def __init__(
        self,
        message: str,
        code: str = "TASK_API_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        result.update(self.details)
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class TaskValidationError(TaskApiException):
    """Raised when a task payload fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_FAILED",
            status_code=400,
            details={"errors": list(errors)}
        )
        self.errors = list(errors)


class InvalidTaskIdError(TaskApiException):
    """Raised when the path id is missing, empty or not a string."""

    def __init__(self):
        super().__init__(
            message="Task ID is required and must be a non-empty string",
            code="INVALID_TASK_ID",
            status_code=400,
        )


class MethodNotAllowedError(TaskApiException):
    """Raised for HTTP methods the router does not serve."""

    def __init__(self, method: str | None, allowed: list[str]):
        super().__init__(
            message="Method Not Allowed",
            code="METHOD_NOT_ALLOWED",
            status_code=405,
            details={"method": method, "allowedMethods": list(allowed)}
        )


# =============================================================================
# Task Exceptions
# =============================================================================

class TaskNotFoundError(TaskApiException):
    """Raised when a task ID doesn't exist."""

    def __init__(self, task_id: str):
        super().__init__(
            message="Task not found",
            code="TASK_NOT_FOUND",
            status_code=404,
            details={"taskId": task_id}
        )


class TaskForbiddenError(TaskApiException):
    """Raised when the caller does not own the task."""

    def __init__(self):
        # No task id in the body: a 403 says nothing beyond "not yours"
        super().__init__(
            message="Forbidden",
            code="FORBIDDEN",
            status_code=403,
        )


class TaskConflictError(TaskApiException):
    """Raised when a new task's id collides with an existing record."""

    def __init__(self, task_id: str):
        super().__init__(
            message="Task already exists",
            code="TASK_CONFLICT",
            status_code=409,
            details={"taskId": task_id}
        )
