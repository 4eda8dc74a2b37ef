# =============================================================================
# app/identity.py - Caller Identity
# =============================================================================
# Pulls the caller's identity out of the platform request metadata.
#
# The upstream authorizer has already verified the token; we only read the
# claims it attached. No identity is a normal state (anonymous caller), so
# this never raises.
#
# Supported claim locations:
#   requestContext.authorizer.claims       (REST API, Cognito authorizer)
#   requestContext.authorizer.jwt.claims   (HTTP API, JWT authorizer)
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """
    Authenticated caller extracted from authorizer claims.

    This is the minimal user info available from the claims themselves.
    """
    model_config = ConfigDict(frozen=True)

    sub: str
    email: Optional[str] = None


def _find_claims(event: Mapping[str, Any]) -> Any:
    request_context = event.get("requestContext")
    if not isinstance(request_context, Mapping):
        return None

    authorizer = request_context.get("authorizer")
    if not isinstance(authorizer, Mapping):
        return None

    if "claims" in authorizer:
        return authorizer["claims"]

    jwt_context = authorizer.get("jwt")
    if isinstance(jwt_context, Mapping):
        return jwt_context.get("claims")

    return None


def extract_identity(event: Mapping[str, Any]) -> Identity | None:
    """
    Derive the caller's identity from a request event.

    Returns:
        Identity if the claims carry a non-empty "sub", None otherwise.
        Malformed claims are logged as a warning.
    """
    claims = _find_claims(event)
    if claims is None:
        return None

    if not isinstance(claims, Mapping):
        logger.warning(f"Ignoring authorizer claims of type {type(claims).__name__}")
        return None

    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        logger.warning("Authorizer claims present but missing 'sub'")
        return None

    email = claims.get("email")
    return Identity(sub=sub, email=email if isinstance(email, str) else None)
