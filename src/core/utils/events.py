"""Helpers for reading API Gateway proxy events."""

import json
from typing import Any


def request_log_fields(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Structured log fields identifying an invocation."""
    get_remaining = getattr(context, "get_remaining_time_in_millis", None)

    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "request_id": getattr(context, "aws_request_id", None),
        "function_name": getattr(context, "function_name", None),
        "remaining_time_ms": get_remaining() if callable(get_remaining) else None,
    }


def json_body(event: dict[str, Any]) -> Any:
    """Decode the JSON request body; a missing body reads as `{}`.

    Raises:
        ValueError: If the body is not valid JSON
    """
    try:
        return json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON body") from exc


def path_parameter(event: dict[str, Any], name: str) -> str | None:
    return (event.get("pathParameters") or {}).get(name)
