"""
Lambda handler for `DELETE /images/{image_id}`.
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
from core.utils.events import path_parameter, request_log_fields
from core.utils.response import ResponseBuilder
from core.utils.time import utc_now_iso
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Delete an image: its object, its record and its cached view.

    Responds 404 when no record exists for the identifier. Store failures
    surface through `api_gateway_handler` as 500 responses.
    """
    logger.info("Received image delete request", extra=request_log_fields(event, context))

    try:
        request = validate_request(
            DeleteImageRequest, {"image_id": path_parameter(event, "image_id")}
        )
    except ValidationError as exc:
        logger.warning("Delete request rejected", extra={"errors": exc.errors()})
        return ResponseBuilder.validation_error(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    image_id = str(request.image_id)
    deleted = get_image_service().delete_image(
        image_id,
        cancellation=CancellationToken.from_lambda_context(
            context, safety_margin_ms=LAMBDA_DEADLINE_SAFETY_MARGIN_MS
        ),
    )

    if not deleted:
        return ResponseBuilder.not_found(f"Image not found: {image_id}")

    metrics.add_metric(name="ImageDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok(
        DeleteImageResponse(
            image_id=image_id,
            message="Image deleted successfully",
            deleted_at=utc_now_iso(),
        ).model_dump()
    )
