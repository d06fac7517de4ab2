"""
Error boundary shared by the API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, NamedTuple

from aws_lambda_powertools import Logger

from core.models.errors import (
    DependencyError,
    DuplicateImageError,
    ImageServiceError,
    OperationCancelledError,
)
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(UTC=True)

TIMEOUT_MESSAGE = "The request took too long to process. Please try again."
UNAVAILABLE_MESSAGE = "Unable to connect to required services. Please try again later."
UNEXPECTED_MESSAGE = "Something went wrong on our side. Please retry shortly."

# Messages that already read well to an API client and are returned verbatim.
_FRIENDLY_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Image",
    "File",
)

INVALID_INPUT_MESSAGE = "The provided data is invalid. Check the request and try again."

_GENERIC_CLIENT_MESSAGES: tuple[tuple[type[Exception] | tuple[type[Exception], ...], str], ...] = (
    (UnicodeError, "The file could not be decoded. Check its encoding."),
    ((KeyError, AttributeError), "A required field is missing from the request."),
    (TypeError, "A request field has the wrong type."),
)


class _ErrorRoute(NamedTuple):
    types: tuple[type[BaseException], ...]
    status: HTTPStatus
    log_message: str
    client_error: bool = False


# First match wins; order from most to least specific.
_ERROR_ROUTES: tuple[_ErrorRoute, ...] = (
    _ErrorRoute((OperationCancelledError,), HTTPStatus.GATEWAY_TIMEOUT, "Operation cancelled"),
    _ErrorRoute(
        (DependencyError, DuplicateImageError),
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "Dependency failure in handler",
    ),
    _ErrorRoute(
        (ValueError, KeyError, TypeError, AttributeError),
        HTTPStatus.BAD_REQUEST,
        "Client error in handler",
        client_error=True,
    ),
    _ErrorRoute((TimeoutError,), HTTPStatus.GATEWAY_TIMEOUT, "Request timeout"),
    _ErrorRoute(
        (ConnectionError, OSError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Connection error",
    ),
)


def _client_message(exc: Exception) -> str:
    """Return `exc`'s own message if it is fit for clients, else a generic one."""
    text = str(exc)
    if text.startswith(_FRIENDLY_PREFIXES):
        return text

    for types, message in _GENERIC_CLIENT_MESSAGES:
        if isinstance(exc, types):
            return message

    return INVALID_INPUT_MESSAGE


def _error_response(
    exc: Exception,
    *,
    handler_name: str,
    request_id: str | None,
    cors_origin: str | None,
) -> JsonDict:
    route = next(
        (r for r in _ERROR_ROUTES if isinstance(exc, r.types)),
        None,
    )

    log_extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, ImageServiceError):
        log_extra["error_code"] = exc.error_code
        log_extra["details"] = exc.details

    if route is None:
        logger.exception("Unexpected error in handler", extra=log_extra)
        return ResponseBuilder.internal_error(
            UNEXPECTED_MESSAGE, request_id=request_id, cors_origin=cors_origin
        )

    if route.client_error:
        logger.warning(route.log_message, extra=log_extra, exc_info=exc)
        return ResponseBuilder.bad_request(
            _client_message(exc), request_id=request_id, cors_origin=cors_origin
        )

    logger.exception(route.log_message, extra=log_extra)
    message = TIMEOUT_MESSAGE if route.status is HTTPStatus.GATEWAY_TIMEOUT else None

    if isinstance(exc, ImageServiceError):
        return ResponseBuilder.service_error(
            exc,
            status=route.status,
            message=message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    return ResponseBuilder.error(
        status=route.status,
        message=message or UNAVAILABLE_MESSAGE,
        request_id=request_id,
        cors_origin=cors_origin,
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Answers CORS preflight requests without calling the handler and turns any
    exception escaping the handler into a JSON error response:

    - OperationCancelledError / TimeoutError -> 504
    - dependency and duplicate-identity errors -> 500 with their error code
    - ValueError, KeyError, TypeError, AttributeError -> 400
    - ConnectionError / OSError -> 503
    - anything else -> 500 with a generic message

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "ok"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        try:
            return func(event, context)
        except Exception as exc:
            return _error_response(
                exc,
                handler_name=func.__name__,
                request_id=getattr(context, "aws_request_id", None),
                cors_origin=cors_origin,
            )

    return wrapper
