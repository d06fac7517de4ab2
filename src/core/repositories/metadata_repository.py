"""Interface of the metadata store that indexes images by identifier."""

from abc import ABC, abstractmethod

from core.models.image import ImageRecord


class ImageMetadataRepository(ABC):
    """Create-only records keyed by `image_id`.

    A record written by `insert_record` is visible to `find_record` as soon
    as the insert returns.
    """

    @abstractmethod
    def insert_record(self, *, record: ImageRecord) -> None:
        """Store a record for a new image.

        Raises:
            DuplicateImageError: If `record.image_id` is already taken
            DependencyError: If the store fails
        """

    @abstractmethod
    def find_record(self, *, image_id: str) -> ImageRecord | None:
        """Return the record for `image_id`, or None when there is none."""

    @abstractmethod
    def delete_record(self, *, image_id: str) -> None:
        """Remove the record for `image_id`; a missing record is not an error."""
