"""API Gateway proxy event parsing and response shaping."""

import base64
import binascii
import json
import logging
from typing import Any

from core.errors import USER_MESSAGES, BookingPaymentsError, ErrorCode

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def request_method(event: dict[str, Any]) -> str:
    """HTTP method for REST API (v1) and HTTP API (v2) payloads."""
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method", "")
    return str(method).upper()


def parse_json_body(event: dict[str, Any]) -> Any:
    """Decode the JSON body, returning None when it is absent or unparseable."""
    body = event.get("body")
    if body is None:
        return None
    if event.get("isBase64Encoded") and isinstance(body, str):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            logger.warning("Failed to base64-decode event body")
            return None
    if not isinstance(body, (str, bytes)):
        return body
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        logger.warning("Failed to JSON-decode event body")
        return None


def json_response(status_code: int, payload: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "headers": dict(JSON_HEADERS), "body": json.dumps(payload)}


def method_not_allowed() -> dict[str, Any]:
    return {"statusCode": 405, "headers": {"Content-Type": "text/plain"}, "body": "Method not allowed"}


def error_response(error: BookingPaymentsError) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": error.user_message}
    if error.details is not None:
        payload["details"] = error.details
    return json_response(error.status_code, payload)


def unexpected_error_response(exc: Exception) -> dict[str, Any]:
    return json_response(500, {"error": USER_MESSAGES[ErrorCode.INTERNAL_ERROR], "details": str(exc)})
