# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# These models define the API contract for task operations:
# - TaskStatus: Enum for task states (declaration order is part of the contract)
# - Task: The stored record, serialized with camelCase keys
# - TaskList: Output of the list operation
#
# Field names are snake_case in Python and camelCase on the wire and in the
# store. Always dump with by_alias=True.
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

ANONYMOUS_USER_ID = "anonymous"

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskStatus(str, Enum):
    """
    Possible states for a task.

    Any status can move to any other; the enum only constrains membership.
    """
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        """Member values in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


def utc_timestamp() -> str:
    """
    Current UTC time as sortable ISO-8601 text.

    Millisecond precision with a Z suffix, e.g. "2024-01-15T10:30:00.000Z".
    Fixed width, so lexical order equals chronological order.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_task_id() -> str:
    return str(uuid4())


class Task(BaseModel):
    """
    A stored task record.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "Buy milk",
            "description": "",
            "status": "pending",
            "createdAt": "2024-01-15T10:30:00.000Z",
            "updatedAt": "2024-01-15T10:30:00.000Z",
            "userId": "u1"
        }
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(
        default_factory=new_task_id,
        min_length=1,
        description="Unique task identifier (server generated)"
    )

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Task title, trimmed"
    )

    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Task description, trimmed"
    )

    status: TaskStatus = Field(
        default=TaskStatus.PENDING,
        description="Current task status"
    )

    created_at: str = Field(
        default_factory=utc_timestamp,
        alias="createdAt",
        description="Creation timestamp (immutable)"
    )

    updated_at: str = Field(
        default_factory=utc_timestamp,
        alias="updatedAt",
        description="Timestamp of the last successful update"
    )

    user_id: str = Field(
        default=ANONYMOUS_USER_ID,
        min_length=1,
        alias="userId",
        description="Owner's subject id, or 'anonymous'"
    )

    @classmethod
    def new(
        cls,
        title: str,
        description: str | None = None,
        status: str | None = None,
        user_id: str | None = None,
    ) -> "Task":
        """
        Build a fresh task from validated input.

        Trims text fields, applies defaults and stamps both timestamps with
        the same instant so createdAt == updatedAt.
        """
        now = utc_timestamp()
        return cls(
            id=new_task_id(),
            title=title.strip(),
            description=(description or "").strip(),
            status=status or TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
            user_id=user_id or ANONYMOUS_USER_ID,
        )

    def to_record(self) -> dict:
        """Serialize to the store/wire shape (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")


class TaskList(BaseModel):
    """
    Schema for the list operation.

    count is the number of tasks returned; total is what the store
    reported for the scan.
    """

    tasks: list[dict] = Field(
        default_factory=list,
        description="Task records, newest first"
    )

    count: int = Field(
        default=0,
        ge=0,
        description="Number of tasks in this response"
    )

    total: int = Field(
        default=0,
        ge=0,
        description="Store-reported number of matching records"
    )
