# =============================================================================
# core/validation.py - Task Payload Validation
# =============================================================================
# Checks a candidate task payload and returns human-readable errors.
# Every rule runs; nothing short-circuits. Output order is fixed
# (title, description, status) so responses are reproducible.
# =============================================================================

from collections.abc import Mapping
from typing import Any

from core.models.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskStatus

TITLE_REQUIRED = "Title is required and must be a non-empty string"
TITLE_TOO_LONG = f"Title must be less than {TITLE_MAX_LENGTH} characters"
DESCRIPTION_NOT_STRING = "Description must be a string"
DESCRIPTION_TOO_LONG = f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters"
STATUS_INVALID = f"Status must be one of: {', '.join(TaskStatus.values())}"


def validate_task_payload(payload: Any) -> list[str]:
    """
    Validate a task payload.

    Args:
        payload: Decoded JSON body. Anything that is not an object is
            treated as an object with no fields.

    Returns:
        List of error messages, empty if the payload is valid.

    Example:
        >>> validate_task_payload({"title": "", "status": "nope"})
        ['Title is required and must be a non-empty string',
         'Status must be one of: pending, in-progress, completed, cancelled']
    """
    if not isinstance(payload, Mapping):
        payload = {}

    errors: list[str] = []

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        errors.append(TITLE_REQUIRED)
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(TITLE_TOO_LONG)

    # null counts as absent
    description = payload.get("description")
    if description is not None:
        if not isinstance(description, str):
            errors.append(DESCRIPTION_NOT_STRING)
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(DESCRIPTION_TOO_LONG)

    status = payload.get("status")
    if status is not None and not TaskStatus.is_valid(status):
        errors.append(STATUS_INVALID)

    return errors
