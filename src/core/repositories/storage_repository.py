"""Interface of the object store that holds image bytes."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class ImageStorageRepository(ABC):
    @abstractmethod
    def put_object(
        self,
        *,
        key: str,
        stream: BinaryIO,
        content_type: str,
        image_id: str,
    ) -> None:
        """Write `stream` under `key`, served later with `content_type`.

        Raises:
            ImageUploadFailedError: If the write fails
        """

    @abstractmethod
    def remove_object(self, *, key: str) -> None:
        """Delete the object under `key`. Deleting a missing key succeeds.

        Raises:
            ImageDeletionFailedError: If the store fails
        """

    @abstractmethod
    def public_url(self, *, key: str) -> str:
        """Public address of `key`, built from configuration without any I/O."""
