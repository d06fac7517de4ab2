"""Business logic for image upload, retrieval and deletion.

This module keeps the object store, the metadata store and the read cache
consistent. The three stores fail independently and there is no cross-store
transaction, so writes are ordered to make the unsafe intermediate states
impossible:

- Upload writes the object before the record: an object without a record is
  tolerated, a record pointing at no object is not.
- Delete removes the object before the record: a stale record can be deleted
  again, an orphaned object could never be found again.

Reads go through the cache. Upload populates it (write-through) and Delete
invalidates it; entries otherwise expire after their TTL.
"""

import io
from collections.abc import Callable
from typing import BinaryIO, TypeVar

from aws_lambda_powertools import Logger

from core.cache.ttl_cache import TTLCache
from core.models.errors import (
    ImageDeletionFailedError,
    ImageServiceError,
    ImageUploadFailedError,
    MetadataOperationFailedError,
)
from core.models.image import ImageRecord, ImageView
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.cancellation import CancellationToken
from core.utils.naming import resolve_image_name
from core.utils.time import utc_now_iso

T = TypeVar("T")

UploadSource = BinaryIO | bytes | bytearray

logger = Logger(UTC=True)


def _open_upload_stream(source: UploadSource | None) -> BinaryIO | None:
    """Return a stream positioned at the first byte, or None for empty input."""
    if source is None:
        return None

    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source)) if source else None

    if source.seekable():
        size = source.seek(0, io.SEEK_END)
        source.seek(0)
        return source if size > 0 else None

    data = source.read()
    return io.BytesIO(data) if data else None


class ImageService:
    """Application service responsible for images across all three stores.

    This service orchestrates:
    - Naming and content-type resolution for new uploads
    - Object storage writes and deletes
    - Metadata persistence
    - Read-through caching of image views

    The cache is injected so its lifetime is owned by the caller; one cache
    is meant to be shared by every request served by the process.
    """

    def __init__(
        self,
        *,
        storage: ImageStorageRepository,
        metadata: ImageMetadataRepository,
        cache: TTLCache[ImageView],
        cache_ttl: float | None = None,
    ) -> None:
        self.storage = storage
        self.metadata = metadata
        self.cache = cache
        self.cache_ttl = cache_ttl if cache_ttl is not None else cache.default_ttl

    def upload_image(
        self,
        source: UploadSource | None,
        original_file_name: str | None,
        declared_content_type: str | None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> ImageView | None:
        """Store a new image and return its view.

        The upload flow is:
        1. Reject missing or empty input (returns None, nothing is written)
        2. Assign identity, storage key and content type
        3. Upload image to object storage
        4. Persist the image record
        5. Build the view and write it through to the cache

        A failed record insert leaves the uploaded object in place.

        Raises:
            ImageUploadFailedError: If the object store write fails
            DuplicateImageError: If the generated identity already exists
            DynamoDBError / MetadataOperationFailedError: If the record insert fails
            OperationCancelledError: If `cancellation` fires between steps
        """
        # Step 1: Validate input
        stream = _open_upload_stream(source)
        if stream is None:
            logger.warning(
                "Rejected upload with empty content",
                extra={"file_name": original_file_name},
            )
            return None

        # Step 2: Resolve identity, key and content type
        resolved = resolve_image_name(original_file_name, declared_content_type)
        image_id = resolved.image_id

        logger.debug(
            "Starting image upload",
            extra={
                "image_id": image_id,
                "storage_key": resolved.storage_key,
                "content_type": resolved.content_type,
            },
        )

        # Step 3: Upload image to storage (must precede the record)
        self._check_cancelled(cancellation, "upload_image", image_id)
        self._call_dependency(
            lambda: self.storage.put_object(
                key=resolved.storage_key,
                stream=stream,
                content_type=resolved.content_type,
                image_id=image_id,
            ),
            failure=ImageUploadFailedError(
                message="Unable to upload image",
                details={"image_id": image_id},
            ),
        )

        # Step 4: Persist the record
        self._check_cancelled(cancellation, "upload_image", image_id)
        record = ImageRecord(
            image_id=image_id,
            storage_key=resolved.storage_key,
            content_type=resolved.content_type,
            original_file_name=original_file_name or None,
            created_at=utc_now_iso(),
        )
        self._call_dependency(
            lambda: self.metadata.insert_record(record=record),
            failure=MetadataOperationFailedError(
                message="Unable to save image metadata",
                details={"image_id": image_id},
            ),
        )

        # Step 5: Write through to the cache
        view = self._build_view(record)
        self.cache.set(image_id, view, self.cache_ttl)

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": image_id, "storage_key": record.storage_key},
        )
        return view

    def get_image(
        self,
        image_id: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> ImageView | None:
        """Return the view of an image, or None if no record exists.

        Served from the cache when possible. A miss reads the metadata store;
        "not found" is never cached. The URL is derived from the storage key
        and the object's existence is not checked.

        Raises:
            DynamoDBError / MetadataOperationFailedError: If the lookup fails
            OperationCancelledError: If `cancellation` has fired on a cache miss
        """
        logger.debug("Fetching image view", extra={"image_id": image_id})

        cached = self.cache.get(image_id)
        if cached is not None:
            return cached

        # Concurrent callers share the lookup below but never each other's token.
        self._check_cancelled(cancellation, "get_image", image_id)

        def load_view() -> ImageView | None:
            record = self._find_record(image_id)
            if record is None:
                logger.warning("Image metadata not found", extra={"image_id": image_id})
                return None

            return self._build_view(record)

        return self.cache.get_or_create(image_id, load_view, self.cache_ttl)

    def delete_image(
        self,
        image_id: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        """Delete an image and its metadata.

        The deletion flow is:
        1. Fetch the record to confirm the image exists and obtain the storage key
        2. Delete the image from object storage
        3. Delete the record from the metadata store
        4. Invalidate the cached view

        Returns:
            True if the image existed and was deleted, False if it was not found

        Raises:
            ImageDeletionFailedError: If storage deletion fails
            DynamoDBError / MetadataOperationFailedError: If a metadata call fails
            OperationCancelledError: If `cancellation` fires between steps
        """
        logger.debug("Starting image deletion", extra={"image_id": image_id})

        # Step 1: Fetch record to validate existence and locate the storage object
        self._check_cancelled(cancellation, "delete_image", image_id)
        record = self._find_record(image_id)
        if record is None:
            logger.warning("Image metadata not found", extra={"image_id": image_id})
            return False

        # Step 2: Delete the image from object storage
        self._check_cancelled(cancellation, "delete_image", image_id)
        self._call_dependency(
            lambda: self.storage.remove_object(key=record.storage_key),
            failure=ImageDeletionFailedError(
                message="Unable to delete image from storage",
                details={"image_id": image_id},
            ),
        )

        # Step 3: Delete the record
        self._check_cancelled(cancellation, "delete_image", image_id)
        self._call_dependency(
            lambda: self.metadata.delete_record(image_id=image_id),
            failure=MetadataOperationFailedError(
                message="Unable to delete image metadata",
                details={"image_id": image_id},
            ),
        )

        # Step 4: Invalidate the cached view
        self.cache.remove(image_id)

        logger.info(
            "Image deleted successfully",
            extra={"image_id": image_id, "storage_key": record.storage_key},
        )
        return True

    def _find_record(self, image_id: str) -> ImageRecord | None:
        return self._call_dependency(
            lambda: self.metadata.find_record(image_id=image_id),
            failure=MetadataOperationFailedError(
                message="Unable to retrieve image metadata",
                details={"image_id": image_id},
            ),
        )

    def _build_view(self, record: ImageRecord) -> ImageView:
        return ImageView(
            image_id=record.image_id,
            image_url=self.storage.public_url(key=record.storage_key),
            content_type=record.content_type,
        )

    @staticmethod
    def _call_dependency(call: Callable[[], T], *, failure: ImageServiceError) -> T:
        """Run a store call, translating non-domain exceptions into `failure`.

        Domain errors raised by repository implementations already carry a
        stable error code and propagate unchanged.
        """
        try:
            return call()
        except ImageServiceError:
            raise
        except Exception as exc:
            logger.exception(
                failure.message,
                extra={"error_code": failure.error_code, **failure.details},
            )
            raise failure from exc

    @staticmethod
    def _check_cancelled(
        cancellation: CancellationToken | None,
        operation: str,
        image_id: str,
    ) -> None:
        if cancellation is not None:
            cancellation.raise_if_cancelled(operation=operation, image_id=image_id)
