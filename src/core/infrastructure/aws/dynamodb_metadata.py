"""Image records kept in a DynamoDB table keyed by `image_id`."""

from collections.abc import Iterator
from contextlib import contextmanager

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DuplicateImageError, DynamoDBError, ImageServiceError
from core.models.image import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
)

logger = Logger(UTC=True)

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _aws_error_code(exc: ClientError) -> str | None:
    return exc.response.get("Error", {}).get("Code")


@contextmanager
def _table_call(
    operation: str, *, image_id: str, error_code: str, message: str
) -> Iterator[None]:
    """Re-raise anything but a domain error as `DynamoDBError`."""
    try:
        yield
    except ImageServiceError:
        raise
    except ClientError as exc:
        logger.error(
            f"DynamoDB {operation} failed",
            extra={"image_id": image_id, "aws_error_code": _aws_error_code(exc)},
        )
        raise DynamoDBError(
            message=message, error_code=error_code, details={"image_id": image_id}
        ) from exc
    except Exception as exc:
        logger.exception(f"Unexpected error during DynamoDB {operation}")
        raise DynamoDBError(
            message=message, error_code=error_code, details={"image_id": image_id}
        ) from exc


class DynamoDBMetadata(ImageMetadataRepository):
    """Metadata store on DynamoDB.

    Writes are conditional on the identity being new, and reads are strongly
    consistent so that a record is visible as soon as its insert returns.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def insert_record(self, *, record: ImageRecord) -> None:
        """
        Raises:
            DuplicateImageError: If the table already holds this image_id
            DynamoDBError: If the write fails for any other reason
        """
        image_id = record.image_id

        with _table_call(
            "put_item",
            image_id=image_id,
            error_code=ERROR_CODE_METADATA_CREATE_FAILED,
            message="Unable to save image metadata at this time",
        ):
            try:
                self._db.put_item(
                    item=record.model_dump(exclude_none=True),
                    condition_expression="attribute_not_exists(image_id)",
                )
            except ClientError as exc:
                if _aws_error_code(exc) != _CONDITIONAL_CHECK_FAILED:
                    raise
                logger.warning("Image record already exists", extra={"image_id": image_id})
                raise DuplicateImageError(
                    message="An image with this identifier already exists",
                    details={"image_id": image_id},
                ) from exc

        logger.info("Image record stored", extra={"image_id": image_id})

    def find_record(self, *, image_id: str) -> ImageRecord | None:
        """
        Raises:
            DynamoDBError: If the read fails or the stored item is not a valid record
        """
        with _table_call(
            "get_item",
            image_id=image_id,
            error_code=ERROR_CODE_METADATA_FETCH_FAILED,
            message="Unable to retrieve image metadata",
        ):
            item = self._db.get_item(key={"image_id": image_id}, consistent_read=True).get("Item")

        if item is None:
            return None

        try:
            return ImageRecord.model_validate(item)
        except PydanticValidationError as exc:
            logger.error(
                "Stored item is not a valid image record",
                extra={"image_id": image_id, "errors": exc.errors()},
            )
            raise DynamoDBError(
                message="Invalid image metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"image_id": image_id},
            ) from exc

    def delete_record(self, *, image_id: str) -> None:
        """
        Raises:
            DynamoDBError: If the delete fails
        """
        with _table_call(
            "delete_item",
            image_id=image_id,
            error_code=ERROR_CODE_METADATA_DELETE_FAILED,
            message="Unable to delete image metadata",
        ):
            self._db.delete_item(key={"image_id": image_id})

        logger.info("Image record removed", extra={"image_id": image_id})
