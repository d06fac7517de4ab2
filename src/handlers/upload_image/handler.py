"""
Lambda handler for `POST /images`.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.services.factory import get_image_service
from core.utils.cancellation import CancellationToken
from core.utils.constants import LAMBDA_DEADLINE_SAFETY_MARGIN_MS, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.events import json_body, request_log_fields
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest, ImageUploadResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Store an uploaded image and return its view.

    The body is JSON: `{"file": <base64>, "file_name": ..., "content_type": ...}`.
    An empty file is rejected with 400 and nothing is stored. A body that
    is not JSON raises `ValueError`, which `api_gateway_handler` turns into 400.
    """
    logger.info("Received image upload request", extra=request_log_fields(event, context))

    try:
        request = validate_request(ImageUploadRequest, json_body(event))
    except ValidationError as exc:
        logger.warning("Upload request rejected", extra={"errors": exc.errors()})
        return ResponseBuilder.validation_error(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    view = get_image_service().upload_image(
        request.decoded_file(),
        request.file_name,
        request.content_type,
        cancellation=CancellationToken.from_lambda_context(
            context, safety_margin_ms=LAMBDA_DEADLINE_SAFETY_MARGIN_MS
        ),
    )

    if view is None:
        return ResponseBuilder.bad_request("No file uploaded or file is empty")

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.created(
        ImageUploadResponse(
            **view.model_dump(),
            message="Image uploaded successfully",
        ).model_dump()
    )
