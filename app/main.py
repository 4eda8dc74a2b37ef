# =============================================================================
# app/main.py - Local Development Server
# =============================================================================
# Runs the task API over plain HTTP for local development and integration
# tests. Each request is turned into the same proxy event the platform would
# deliver and passed through handle_event, so behavior matches production.
#
# Bearer tokens are read WITHOUT verification and their claims attached as
# authorizer claims, standing in for the platform's authorizer.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, Response
from jose import JWTError, jwt
from pydantic import BaseModel

from app.config import get_settings
from app.handler import get_task_service, handle_event
from app.logging_config import configure_logging
from core.services.task_service import TaskService

configure_logging(get_settings())
logger = logging.getLogger(__name__)

# Unsupported verbs are routed too, so the 405 comes from the task router
SERVED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]

app = FastAPI(
    title="Task API (local)",
    description="Local HTTP front for the serverless task handler.",
    version="1.0.0",
)


# =============================================================================
# Dependencies
# =============================================================================

def get_service() -> TaskService:
    """Process-wide task service (overridden in tests)."""
    return get_task_service()


ServiceDep = Annotated[TaskService, Depends(get_service)]


# =============================================================================
# Event Translation
# =============================================================================

def claims_from_authorization(authorization: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Read JWT claims from an Authorization header, unverified.

    Returns None if there is no bearer token or it cannot be decoded.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None

    try:
        return jwt.get_unverified_claims(token.strip())
    except JWTError as e:
        logger.warning(f"Ignoring undecodable bearer token: {e}")
        return None


async def build_event(request: Request, task_id: Optional[str] = None) -> dict[str, Any]:
    """Translate an HTTP request into a proxy event."""
    raw_body = await request.body()

    request_context: dict[str, Any] = {"requestId": str(uuid4())}
    claims = claims_from_authorization(request.headers.get("authorization"))
    if claims is not None:
        request_context["authorizer"] = {"claims": claims}

    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "pathParameters": {"id": task_id} if task_id is not None else None,
        "queryStringParameters": dict(request.query_params) or None,
        "body": raw_body.decode("utf-8") if raw_body else None,
        "isBase64Encoded": False,
        "requestContext": request_context,
    }


def envelope_to_response(envelope: dict[str, Any]) -> Response:
    return Response(
        content=envelope["body"],
        status_code=envelope["statusCode"],
        headers=envelope["headers"],
    )


# =============================================================================
# Routes
# =============================================================================

@app.api_route("/tasks", methods=SERVED_METHODS, tags=["Tasks"])
async def tasks_collection(request: Request, service: ServiceDep):
    """List (GET) or create (POST) tasks."""
    event = await build_event(request)
    return envelope_to_response(handle_event(event, service=service))


@app.api_route("/tasks/{task_id}", methods=SERVED_METHODS, tags=["Tasks"])
async def tasks_item(task_id: str, request: Request, service: ServiceDep):
    """Get (GET), replace (PUT) or delete (DELETE) one task."""
    event = await build_event(request, task_id)
    return envelope_to_response(handle_event(event, service=service))


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness check for the local server."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=get_settings().ENVIRONMENT,
        version="1.0.0",
    )


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
