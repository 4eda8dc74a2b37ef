# =============================================================================
# app/router.py - Request Router
# =============================================================================
# Dispatches a platform request event to one of the task operations based on
# the HTTP method and whether the path carries an id.
#
#   GET    /tasks        -> list
#   GET    /tasks/{id}   -> get
#   POST   /tasks        -> create
#   PUT    /tasks/{id}   -> update
#   DELETE /tasks/{id}   -> delete
#   OPTIONS *            -> CORS preflight
#
# Request bodies are decoded here without pre-validation. A malformed body
# raises out of the router and becomes a 500 at the entry point.
# =============================================================================

import base64
import json
import logging
from collections.abc import Mapping
from typing import Any

from app.exceptions import MethodNotAllowedError, TaskApiException
from app.identity import extract_identity
from app.responses import ALLOWED_METHODS, build_response
from core.services.task_service import TaskService

logger = logging.getLogger(__name__)

TASK_METHODS = ("GET", "POST", "PUT", "DELETE")


def _parse_body(event: Mapping[str, Any]) -> Any:
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def _path_id(event: Mapping[str, Any]) -> Any:
    path_parameters = event.get("pathParameters") or {}
    return path_parameters.get("id")


def route_request(event: Mapping[str, Any], service: TaskService) -> dict[str, Any]:
    """
    Route one request event to its operation and build the response.

    Domain errors become their mapped status codes. Anything else
    propagates to the caller.
    """
    method = event.get("httpMethod")
    logger.info(f"{method} {event.get('path') or ''}")

    if method == "OPTIONS":
        return build_response(200, {})

    try:
        if method not in TASK_METHODS:
            raise MethodNotAllowedError(method, ALLOWED_METHODS)

        identity = extract_identity(event)
        task_id = _path_id(event)

        if method == "GET":
            if task_id is not None:
                return build_response(200, service.get_task(task_id, identity))
            query = event.get("queryStringParameters") or {}
            return build_response(200, service.list_tasks(identity, query))

        if method == "POST":
            return build_response(201, service.create_task(_parse_body(event), identity))

        if method == "PUT":
            return build_response(200, service.update_task(task_id, _parse_body(event), identity))

        # DELETE
        service.delete_task(task_id, identity)
        return build_response(204)

    except TaskApiException as e:
        logger.info(f"{method} rejected with {e.status_code}: {e.code}")
        return build_response(e.status_code, e.to_dict())
