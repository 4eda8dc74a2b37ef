# =============================================================================
# tests/test_task_service.py - Task Operation Handler Tests
# =============================================================================
# Exercises TaskService against the in-memory FakeTaskStore:
# - Validation and defaults on create/update
# - Ownership checks (403 vs 404)
# - List filtering and ordering
# =============================================================================

import pytest

from app.exceptions import (
    InvalidTaskIdError,
    TaskConflictError,
    TaskForbiddenError,
    TaskNotFoundError,
    TaskValidationError,
)
from app.identity import Identity
from core.services.task_service import TaskService
from core.validation import STATUS_INVALID, TITLE_REQUIRED, TITLE_TOO_LONG
from lib.task_store import TaskStoreError
from tests.fakes import FakeTaskStore, VanishingTaskStore, store_failure


def record(task_id, created_at, user_id="user-123", status="pending"):
    return {
        "id": task_id,
        "title": f"Task {task_id}",
        "description": "",
        "status": status,
        "createdAt": created_at,
        "updatedAt": created_at,
        "userId": user_id,
    }


# =============================================================================
# Create
# =============================================================================

class TestCreateTask:
    """Tests for TaskService.create_task."""

    def test_create_with_identity(self, service, store):
        created = service.create_task({"title": "Buy milk"}, Identity(sub="u1"))

        assert created["status"] == "pending"
        assert created["userId"] == "u1"
        assert created["description"] == ""
        assert created["id"]
        assert created["createdAt"] == created["updatedAt"]
        assert store.records[created["id"]] == created

    def test_create_anonymous(self, service):
        created = service.create_task({"title": "Buy milk"})

        assert created["userId"] == "anonymous"

    def test_create_trims_and_keeps_status(self, service, user):
        created = service.create_task(
            {"title": "  Test Task ", "description": " Test Description ", "status": "in-progress"},
            user,
        )

        assert created["title"] == "Test Task"
        assert created["description"] == "Test Description"
        assert created["status"] == "in-progress"

    def test_missing_title(self, service, store, user):
        with pytest.raises(TaskValidationError) as exc_info:
            service.create_task({"description": "Test Description"}, user)

        assert TITLE_REQUIRED in exc_info.value.errors
        assert store.records == {}

    def test_long_title(self, service, user):
        with pytest.raises(TaskValidationError) as exc_info:
            service.create_task({"title": "a" * 201}, user)

        assert exc_info.value.errors == [TITLE_TOO_LONG]

    def test_invalid_status(self, service, user):
        with pytest.raises(TaskValidationError) as exc_info:
            service.create_task({"title": "Test Task", "status": "invalid-status"}, user)

        assert exc_info.value.errors == [STATUS_INVALID]

    def test_id_collision_is_conflict(self, store, user, monkeypatch):
        store.records["fixed-id"] = record("fixed-id", "2024-01-01T00:00:00.000Z")
        monkeypatch.setattr("core.models.task.new_task_id", lambda: "fixed-id")

        with pytest.raises(TaskConflictError):
            TaskService(store).create_task({"title": "Test Task"}, user)

    def test_store_failure_propagates(self, service, store, user):
        store.fail_with = store_failure()

        with pytest.raises(TaskStoreError):
            service.create_task({"title": "Test Task"}, user)


# =============================================================================
# Get
# =============================================================================

class TestGetTask:
    """Tests for TaskService.get_task."""

    def test_round_trip(self, service, user):
        created = service.create_task({"title": "Buy milk", "description": "2L"}, user)

        assert service.get_task(created["id"], user) == created

    def test_not_found(self, service, user):
        with pytest.raises(TaskNotFoundError):
            service.get_task("non-existent", user)

    def test_other_owner_forbidden(self, store, user):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z", user_id="different-user")

        with pytest.raises(TaskForbiddenError):
            TaskService(store).get_task("test-id", user)

    def test_anonymous_can_read_any(self, store):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z", user_id="someone")

        assert TaskService(store).get_task("test-id")["userId"] == "someone"

    @pytest.mark.parametrize("task_id", ["", "   ", None, 123])
    def test_invalid_id(self, service, user, task_id):
        with pytest.raises(InvalidTaskIdError):
            service.get_task(task_id, user)


# =============================================================================
# List
# =============================================================================

class TestListTasks:
    """Tests for TaskService.list_tasks."""

    def test_newest_first(self, user):
        store = FakeTaskStore([
            record("t1", "2024-01-01T00:00:00.000Z"),
            record("t3", "2024-03-01T00:00:00.000Z"),
            record("t2", "2024-02-01T00:00:00.000Z"),
        ])

        body = TaskService(store).list_tasks(user)

        assert [t["id"] for t in body["tasks"]] == ["t3", "t2", "t1"]
        assert body["count"] == 3
        assert body["total"] == 3

    def test_ties_keep_store_order(self, user):
        same = "2024-01-01T00:00:00.000Z"
        store = FakeTaskStore([record("a", same), record("b", same), record("c", same)])

        body = TaskService(store).list_tasks(user)

        assert [t["id"] for t in body["tasks"]] == ["a", "b", "c"]

    def test_owner_filter_from_identity(self, user):
        store = FakeTaskStore([
            record("mine", "2024-01-01T00:00:00.000Z"),
            record("theirs", "2024-01-02T00:00:00.000Z", user_id="other"),
        ])

        body = TaskService(store).list_tasks(user)

        assert [t["id"] for t in body["tasks"]] == ["mine"]
        assert store.scan_calls[0]["owner_id"] == "user-123"

    def test_no_identity_lists_everything(self):
        store = FakeTaskStore([
            record("mine", "2024-01-01T00:00:00.000Z"),
            record("theirs", "2024-01-02T00:00:00.000Z", user_id="other"),
        ])

        body = TaskService(store).list_tasks()

        assert body["count"] == 2
        assert store.scan_calls[0]["owner_id"] is None

    def test_status_filter(self, user):
        store = FakeTaskStore([
            record("done", "2024-01-01T00:00:00.000Z", status="completed"),
            record("todo", "2024-01-02T00:00:00.000Z"),
        ])

        body = TaskService(store).list_tasks(user, {"status": "completed"})

        assert [t["id"] for t in body["tasks"]] == ["done"]

    def test_unknown_status_ignored(self, user):
        store = FakeTaskStore([
            record("done", "2024-01-01T00:00:00.000Z", status="completed"),
            record("todo", "2024-01-02T00:00:00.000Z"),
        ])

        body = TaskService(store).list_tasks(user, {"status": "archived"})

        assert body["count"] == 2
        assert store.scan_calls[0]["status"] is None

    def test_limit_sets_page_size_only(self, user):
        store = FakeTaskStore([
            record(f"task-{i}", f"2024-01-{i + 1:02d}T00:00:00.000Z") for i in range(10)
        ])

        body = TaskService(store).list_tasks(user, {"limit": "5"})

        assert store.scan_calls[0]["limit"] == 5
        assert len(body["tasks"]) == 10

    @pytest.mark.parametrize("limit", ["0", "101", "abc", "", "2.5"])
    def test_invalid_limit_ignored(self, service, store, user, limit):
        service.list_tasks(user, {"limit": limit})

        assert store.scan_calls[0]["limit"] is None

    def test_empty(self, service, user):
        assert service.list_tasks(user) == {"tasks": [], "count": 0, "total": 0}


# =============================================================================
# Update
# =============================================================================

class TestUpdateTask:
    """Tests for TaskService.update_task."""

    def test_update(self, store, user):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z")

        updated = TaskService(store).update_task(
            "test-id",
            {"title": " New Title ", "description": "Updated description", "status": "completed"},
            user,
        )

        assert updated["title"] == "New Title"
        assert updated["description"] == "Updated description"
        assert updated["status"] == "completed"
        assert updated["createdAt"] == "2024-01-01T00:00:00.000Z"
        assert updated["updatedAt"] > updated["createdAt"]
        assert updated["userId"] == "user-123"
        assert updated["id"] == "test-id"

    def test_update_resets_omitted_fields(self, store, user):
        existing = record("test-id", "2024-01-01T00:00:00.000Z", status="completed")
        existing["description"] = "old"
        store.records["test-id"] = existing

        updated = TaskService(store).update_task("test-id", {"title": "Only title"}, user)

        assert updated["description"] == ""
        assert updated["status"] == "pending"

    def test_validation_runs_before_lookup(self, service, user):
        with pytest.raises(TaskValidationError) as exc_info:
            service.update_task("non-existent", {"title": "", "status": "invalid"}, user)

        assert exc_info.value.errors == [TITLE_REQUIRED, STATUS_INVALID]

    def test_not_found(self, service, user):
        with pytest.raises(TaskNotFoundError):
            service.update_task("non-existent", {"title": "New Title"}, user)

    def test_other_owner_forbidden(self, store):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z", user_id="u2")

        with pytest.raises(TaskForbiddenError):
            TaskService(store).update_task("test-id", {"title": "Mine now"}, Identity(sub="u1"))

        assert store.records["test-id"]["title"] == "Task test-id"

    def test_vanished_record_is_not_found(self, user):
        store = VanishingTaskStore([record("test-id", "2024-01-01T00:00:00.000Z")])

        with pytest.raises(TaskNotFoundError):
            TaskService(store).update_task("test-id", {"title": "New Title"}, user)

    def test_invalid_id(self, service, user):
        with pytest.raises(InvalidTaskIdError):
            service.update_task("", {"title": "New Title"}, user)


# =============================================================================
# Delete
# =============================================================================

class TestDeleteTask:
    """Tests for TaskService.delete_task."""

    def test_delete_then_not_found(self, store, user):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z")
        service = TaskService(store)

        service.delete_task("test-id", user)

        assert "test-id" not in store.records
        with pytest.raises(TaskNotFoundError):
            service.delete_task("test-id", user)

    def test_other_owner_forbidden(self, store, user):
        store.records["test-id"] = record("test-id", "2024-01-01T00:00:00.000Z", user_id="different-user")

        with pytest.raises(TaskForbiddenError):
            TaskService(store).delete_task("test-id", user)

        assert "test-id" in store.records

    def test_invalid_id(self, service, user):
        with pytest.raises(InvalidTaskIdError):
            service.delete_task(None, user)
