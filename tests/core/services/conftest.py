"""In-memory store doubles for ImageService tests."""

from typing import Any, BinaryIO

import pytest

from core.cache.ttl_cache import TTLCache
from core.models.image import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.services.image_service import ImageService


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryStorage(ImageStorageRepository):
    """Object store double recording each call into a shared journal."""

    def __init__(self, journal: list[tuple[str, str]]) -> None:
        self.journal = journal
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_put: Exception | None = None
        self.fail_remove: Exception | None = None

    def put_object(self, *, key: str, stream: BinaryIO, content_type: str, image_id: str) -> None:
        self.journal.append(("put_object", key))
        if self.fail_put:
            raise self.fail_put
        self.objects[key] = (stream.read(), content_type)

    def remove_object(self, *, key: str) -> None:
        self.journal.append(("remove_object", key))
        if self.fail_remove:
            raise self.fail_remove
        self.objects.pop(key, None)

    def public_url(self, *, key: str) -> str:
        return f"https://images.example.com/{key}"


class InMemoryMetadata(ImageMetadataRepository):
    """Metadata store double recording each call into a shared journal."""

    def __init__(self, journal: list[tuple[str, str]]) -> None:
        self.journal = journal
        self.records: dict[str, ImageRecord] = {}
        self.fail_insert: Exception | None = None
        self.fail_find: Exception | None = None
        self.fail_delete: Exception | None = None

    def insert_record(self, *, record: ImageRecord) -> None:
        self.journal.append(("insert_record", record.image_id))
        if self.fail_insert:
            raise self.fail_insert
        self.records[record.image_id] = record

    def find_record(self, *, image_id: str) -> ImageRecord | None:
        self.journal.append(("find_record", image_id))
        if self.fail_find:
            raise self.fail_find
        return self.records.get(image_id)

    def delete_record(self, *, image_id: str) -> None:
        self.journal.append(("delete_record", image_id))
        if self.fail_delete:
            raise self.fail_delete
        self.records.pop(image_id, None)

    def seed(self, **fields: Any) -> ImageRecord:
        record = ImageRecord(**fields)
        self.records[record.image_id] = record
        return record


@pytest.fixture
def journal() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(journal) -> InMemoryStorage:
    return InMemoryStorage(journal)


@pytest.fixture
def metadata(journal) -> InMemoryMetadata:
    return InMemoryMetadata(journal)


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(default_ttl=600, timer=clock)


@pytest.fixture
def service(storage, metadata, cache) -> ImageService:
    return ImageService(storage=storage, metadata=metadata, cache=cache)
