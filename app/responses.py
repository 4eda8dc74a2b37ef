# =============================================================================
# app/responses.py - Response Envelope Builder
# =============================================================================
# Every response, errors included, goes through build_response so the CORS
# headers are always present.
# =============================================================================

import json
from typing import Any

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": ",".join(ALLOWED_METHODS),
}


def build_response(status_code: int, body: Any = None) -> dict[str, Any]:
    """
    Assemble a platform response envelope.

    Args:
        status_code: HTTP status code
        body: JSON-serializable payload. None (and any 204) gives an empty body.

    Returns:
        {"statusCode": ..., "headers": {...}, "body": "<json text>"}
    """
    headers = {"Content-Type": "application/json", **CORS_HEADERS}

    if status_code == 204 or body is None:
        text = ""
    else:
        text = json.dumps(body, default=str)

    return {
        "statusCode": status_code,
        "headers": headers,
        "body": text,
    }
