"""
API Gateway proxy responses for the image endpoints.

Bodies are always JSON. Errors share one envelope:

    {"error": "<CODE>", "message": "...", "timestamp": "...", "details": {...}}

`request_id` is added to any body when the caller knows it.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import ImageServiceError
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]

_BASE_HEADERS: dict[str, str] = {
    "Content-Type": DEFAULT_CONTENT_TYPE,
    "Access-Control-Allow-Origin": CORS_ORIGIN,
    "Access-Control-Allow-Headers": CORS_HEADERS,
    "Access-Control-Allow-Methods": CORS_METHODS,
    "Access-Control-Expose-Headers": EXPOSE_HEADERS,
}


def _headers(cors_origin: str | None) -> dict[str, str]:
    headers = dict(_BASE_HEADERS)
    if cors_origin:
        headers["Access-Control-Allow-Origin"] = cors_origin
    return headers


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    @staticmethod
    def json(
        status: HTTPStatus,
        body: JsonDict | None = None,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = dict(body or {})
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": _headers(cors_origin),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(body: JsonDict, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.json(HTTPStatus.OK, body, **kwargs)

    @staticmethod
    def created(body: JsonDict, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.json(HTTPStatus.CREATED, body, **kwargs)

    @staticmethod
    def no_content(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": _headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return ResponseBuilder.json(
            status, payload, request_id=request_id, cors_origin=cors_origin
        )

    @staticmethod
    def service_error(
        exc: ImageServiceError,
        *,
        status: HTTPStatus,
        message: str | None = None,
        **kwargs: Any,
    ) -> JsonDict:
        """Error response carrying the domain error code of `exc`.

        `details` stay in the logs; they may contain storage keys.
        """
        return ResponseBuilder.error(
            status=status,
            error=exc.error_code,
            message=message or exc.message,
            **kwargs,
        )

    @staticmethod
    def bad_request(message: str, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.BAD_REQUEST, message=message, **kwargs)

    @staticmethod
    def validation_error(*, message: str, **kwargs: Any) -> JsonDict:
        """400 carrying field-level validation errors."""
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            error=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            **kwargs,
        )

    @staticmethod
    def not_found(message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @staticmethod
    def internal_error(message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs
        )
