"""Domain errors raised by the image service and its stores.

Every error carries a human readable `message`, a stable `error_code` that
is safe to return to API clients, and optional structured `details` used for
logging. Each subclass supplies its own default code.
"""

from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_DEPENDENCY_FAILURE,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_IMAGE_DELETION_FAILED,
    ERROR_CODE_IMAGE_DUPLICATE_IMAGE,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_OPERATION_CANCELLED,
    ERROR_CODE_S3,
)


class ImageServiceError(Exception):
    """Base exception for all image service errors."""

    default_error_code: ClassVar[str | None] = None

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        code = error_code or self.default_error_code
        if code is None:
            raise TypeError(f"{type(self).__name__} requires an error_code")

        self.message = message
        self.error_code = code
        self.details = details or {}

        super().__init__(message)


class DependencyError(ImageServiceError):
    """The object store or the metadata store failed.

    Never recovered inside the service; callers see it as a failed operation.
    """

    default_error_code = ERROR_CODE_DEPENDENCY_FAILURE


class S3Error(DependencyError):
    default_error_code = ERROR_CODE_S3


class ImageUploadFailedError(S3Error):
    """Writing an image object to storage failed."""

    default_error_code = ERROR_CODE_IMAGE_UPLOAD_FAILED


class ImageDeletionFailedError(S3Error):
    """Removing an image object from storage failed."""

    default_error_code = ERROR_CODE_IMAGE_DELETION_FAILED


class DynamoDBError(DependencyError):
    default_error_code = ERROR_CODE_DYNAMODB


class MetadataOperationFailedError(DependencyError):
    """A metadata store call failed with an error the store did not classify."""

    default_error_code = ERROR_CODE_METADATA_OPERATION_FAILED


class DuplicateImageError(ImageServiceError):
    """A record with the same identity already exists."""

    default_error_code = ERROR_CODE_IMAGE_DUPLICATE_IMAGE


class OperationCancelledError(ImageServiceError):
    """The caller cancelled the operation or its deadline passed.

    Side effects committed before the cancellation point are kept.
    """

    default_error_code = ERROR_CODE_OPERATION_CANCELLED
