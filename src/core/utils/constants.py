"""Names and default values shared across the image service."""

from typing import Final

# --- error codes returned to API clients --------------------------------------

ERROR_CODE_VALIDATION_FAILED: Final[str] = "VALIDATION_FAILED"
ERROR_CODE_OPERATION_CANCELLED: Final[str] = "OPERATION_CANCELLED"
ERROR_CODE_DEPENDENCY_FAILURE: Final[str] = "DEPENDENCY_FAILURE"

ERROR_CODE_S3: Final[str] = "S3_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED: Final[str] = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DELETION_FAILED: Final[str] = "IMAGE_DELETION_FAILED"
ERROR_CODE_IMAGE_DUPLICATE_IMAGE: Final[str] = "DUPLICATE_IMAGE_ERROR"

ERROR_CODE_DYNAMODB: Final[str] = "DYNAMODB_ERROR"
ERROR_CODE_METADATA_OPERATION_FAILED: Final[str] = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED: Final[str] = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED: Final[str] = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED: Final[str] = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT: Final[str] = "METADATA_INVALID_FORMAT"

# --- content types -----------------------------------------------------------

OCTET_STREAM_CONTENT_TYPE: Final[str] = "application/octet-stream"
SVG_CONTENT_TYPE: Final[str] = "image/svg+xml"
SVG_EXTENSION: Final[str] = ".svg"

# --- view cache ----------------------------------------------------------------

DEFAULT_CACHE_TTL_SECONDS: Final[float] = 600.0
DEFAULT_CACHE_MAX_ENTRIES: Final[int] = 10_000

# --- Lambda runtime ------------------------------------------------------------

METRICS_NAMESPACE: Final[str] = "ImageService"
# Kept back from the invocation deadline to build and return a response
LAMBDA_DEADLINE_SAFETY_MARGIN_MS: Final[int] = 500

# --- HTTP responses ------------------------------------------------------------

DEFAULT_CONTENT_TYPE: Final[str] = "application/json"
CORS_ORIGIN: Final[str] = "*"
CORS_METHODS: Final[str] = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS: Final[str] = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS: Final[str] = "Content-Type,Content-Length"

# --- environment ----------------------------------------------------------------

ENV_AWS_REGION: Final[str] = "AWS_REGION"
ENV_AWS_ENDPOINT_URL: Final[str] = "AWS_ENDPOINT_URL"
ENV_APP_RUNTIME: Final[str] = "APP_RUNTIME"
ENV_IMAGE_S3_BUCKET_NAME: Final[str] = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_METADATA_TABLE_NAME: Final[str] = "IMAGE_METADATA_TABLE_NAME"
ENV_IMAGE_PUBLIC_BASE_URL: Final[str] = "IMAGE_PUBLIC_BASE_URL"
ENV_IMAGE_CACHE_TTL_SECONDS: Final[str] = "IMAGE_CACHE_TTL_SECONDS"
ENV_IMAGE_CACHE_MAX_ENTRIES: Final[str] = "IMAGE_CACHE_MAX_ENTRIES"

DEFAULT_AWS_REGION: Final[str] = "us-east-1"
LOCALSTACK_RUNTIME: Final[str] = "localstack"
LOCALSTACK_URL: Final[str] = "http://localstack"
LOCALHOST_URL: Final[str] = "http://localhost"
