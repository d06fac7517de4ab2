"""Image bytes kept as objects in an S3 bucket."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, BinaryIO

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    ImageDeletionFailedError,
    ImageUploadFailedError,
    S3Error,
)
from core.repositories.storage_repository import ImageStorageRepository

logger = Logger(UTC=True)

# Codes S3-compatible stores use for a key that is not there
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404"})


@contextmanager
def _bucket_call(
    operation: str,
    error_type: type[S3Error],
    *,
    message: str,
    details: dict[str, Any],
) -> Iterator[None]:
    try:
        yield
    except ClientError as exc:
        logger.error(
            f"S3 {operation} failed",
            extra={**details, "aws_error_code": exc.response.get("Error", {}).get("Code")},
        )
        raise error_type(message=message, details=details) from exc
    except Exception as exc:
        logger.exception(f"Unexpected error during S3 {operation}", extra=details)
        raise error_type(message=message, details=details) from exc


class S3ImageStorage(ImageStorageRepository):
    """Object store on S3. Objects are public-read through `public_url`."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def put_object(
        self,
        *,
        key: str,
        stream: BinaryIO,
        content_type: str,
        image_id: str,
    ) -> None:
        """Write `stream` under `key`, tagging the object with its image_id."""
        with _bucket_call(
            "put_object",
            ImageUploadFailedError,
            message="Unable to upload image at this time",
            details={"image_id": image_id, "key": key},
        ):
            self._s3.put_object(
                key=key,
                body=stream,
                content_type=content_type,
                metadata={"image_id": image_id},
            )

        logger.info("Image object stored", extra={"key": key, "content_type": content_type})

    def remove_object(self, *, key: str) -> None:
        """Delete the object at `key`. An already missing object counts as deleted."""
        with _bucket_call(
            "delete_object",
            ImageDeletionFailedError,
            message="Unable to delete image at this time",
            details={"key": key},
        ):
            try:
                self._s3.delete_object(key=key)
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") not in _MISSING_OBJECT_CODES:
                    raise
                logger.info("Image object already absent", extra={"key": key})
                return

        logger.info("Image object removed", extra={"key": key})

    def public_url(self, *, key: str) -> str:
        return self._s3.object_url(key=key)
