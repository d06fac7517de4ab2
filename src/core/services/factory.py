"""
Process-level wiring of the image service.

A warm Lambda container keeps this module loaded, so one service and one
view cache serve every invocation handled by the process.
"""

from functools import lru_cache

from aws_lambda_powertools import Logger

from core.cache.ttl_cache import TTLCache
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadata
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.image import ImageView
from core.services.image_service import ImageService
from core.utils.constants import (
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL_SECONDS,
    ENV_IMAGE_CACHE_MAX_ENTRIES,
    ENV_IMAGE_CACHE_TTL_SECONDS,
)
from core.utils.settings import positive_number_env

logger = Logger(UTC=True)


def build_image_cache() -> TTLCache[ImageView]:
    ttl = positive_number_env(ENV_IMAGE_CACHE_TTL_SECONDS, DEFAULT_CACHE_TTL_SECONDS)
    max_entries = int(positive_number_env(ENV_IMAGE_CACHE_MAX_ENTRIES, DEFAULT_CACHE_MAX_ENTRIES))
    return TTLCache(default_ttl=ttl, maxsize=max_entries)


def build_image_service() -> ImageService:
    """Wire S3, DynamoDB and a new view cache into an `ImageService`."""
    cache = build_image_cache()
    logger.info("Building image service", extra={"cache_ttl_seconds": cache.default_ttl})

    return ImageService(storage=S3ImageStorage(), metadata=DynamoDBMetadata(), cache=cache)


@lru_cache(maxsize=1)
def get_image_service() -> ImageService:
    """The image service shared by all handlers in this process."""
    return build_image_service()
