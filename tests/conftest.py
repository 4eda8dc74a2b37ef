# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory task store and event builders
# =============================================================================

import json
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main resolves settings at import time

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("TASKS_TABLE", "test-tasks-table")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from app.identity import Identity
from core.services.task_service import TaskService
from tests.fakes import FakeTaskStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory task store."""
    return FakeTaskStore()


@pytest.fixture
def service(store):
    """Task service wired to the in-memory store."""
    return TaskService(store)


@pytest.fixture
def user():
    """Authenticated caller."""
    return Identity(sub="user-123", email="test@example.com")


@pytest.fixture
def make_event():
    """
    Build an API Gateway proxy event.

    Usage:
        make_event("POST", body={"title": "x"}, sub="u1")
    """
    def _make_event(
        method,
        task_id=None,
        body=None,
        query=None,
        sub="user-123",
        raw_body=None,
    ):
        request_context = {"requestId": "test-request-id"}
        if sub is not None:
            request_context["authorizer"] = {
                "claims": {"sub": sub, "email": f"{sub}@example.com"}
            }

        if raw_body is not None:
            body_text = raw_body
        elif body is not None:
            body_text = json.dumps(body)
        else:
            body_text = None

        return {
            "httpMethod": method,
            "path": "/tasks" if task_id is None else f"/tasks/{task_id}",
            "pathParameters": {"id": task_id} if task_id is not None else None,
            "queryStringParameters": query,
            "body": body_text,
            "requestContext": request_context,
        }

    return _make_event


@pytest.fixture
def sample_task_record():
    """Stored task owned by user-123."""
    return {
        "id": "test-id",
        "title": "Test Task",
        "description": "Test Description",
        "status": "pending",
        "createdAt": "2024-01-15T10:00:00.000Z",
        "updatedAt": "2024-01-15T10:00:00.000Z",
        "userId": "user-123",
    }
