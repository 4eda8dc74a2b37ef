# =============================================================================
# app/handler.py - Serverless Entry Point
# =============================================================================
# The function the compute platform invokes for every API Gateway request.
#
# Cold start resolves settings, logging and the store gateway once; every
# invocation reuses them. handle_event is the single error boundary: no
# invocation ends without a well-formed response envelope.
#
# Handler setting:  app.handler.handler
# =============================================================================

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any
from uuid import uuid4

from app.config import get_settings
from app.logging_config import configure_logging
from app.responses import build_response
from app.router import route_request
from core.services.task_service import TaskService
from lib.supabase_client import create_supabase_client
from lib.task_store import TaskStore

logger = logging.getLogger(__name__)


@lru_cache
def get_task_service() -> TaskService:
    """
    Build the process-wide task service.

    Runs once per process; the result is reused across invocations.
    """
    settings = get_settings()
    configure_logging(settings)

    client = create_supabase_client(settings)
    store = TaskStore(client, settings.TASKS_TABLE, default_page_size=settings.SCAN_PAGE_SIZE)
    logger.info(f"Task service ready (table={settings.TASKS_TABLE}, env={settings.ENVIRONMENT})")
    return TaskService(store)


def _correlation_id(event: Any, context: Any) -> str:
    if isinstance(event, Mapping):
        request_context = event.get("requestContext")
        if isinstance(request_context, Mapping) and request_context.get("requestId"):
            return str(request_context["requestId"])
    request_id = getattr(context, "aws_request_id", None)
    return str(request_id) if request_id else str(uuid4())


def handle_event(
    event: Mapping[str, Any],
    context: Any = None,
    service: TaskService | None = None,
) -> dict[str, Any]:
    """
    Handle one request event.

    Args:
        event: API Gateway proxy event
        context: Platform invocation context (optional)
        service: Task service to use; defaults to the process-wide one

    Returns:
        Response envelope. Unexpected failures become a 500 carrying only
        a correlation id; details go to the log.
    """
    request_id = _correlation_id(event, context)

    try:
        if service is None:
            service = get_task_service()
        return route_request(event, service)

    except Exception as e:
        logger.exception(f"Unhandled error (requestId={request_id}): {e}")
        return build_response(500, {
            "message": "Internal Server Error",
            "code": "INTERNAL_ERROR",
            "requestId": request_id,
        })


def handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler for task API requests."""
    return handle_event(event, context)
