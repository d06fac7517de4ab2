"""
Shared fixtures: test environment, moto-backed bucket and table, sample files.
"""

import base64
import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

TEST_ENVIRONMENT = {
    "AWS_REGION": "us-east-1",
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "IMAGE_S3_BUCKET_NAME": "test-image-bucket",
    "IMAGE_METADATA_TABLE_NAME": "test-image-metadata",
    "POWERTOOLS_TRACE_DISABLED": "1",
    "POWERTOOLS_SERVICE_NAME": "image-service-tests",
}

# Settings a developer shell may export that would change URLs or cache sizing.
OPTIONAL_ENVIRONMENT = (
    "AWS_ENDPOINT_URL",
    "APP_RUNTIME",
    "IMAGE_PUBLIC_BASE_URL",
    "IMAGE_CACHE_TTL_SECONDS",
    "IMAGE_CACHE_MAX_ENTRIES",
)

for _name, _value in TEST_ENVIRONMENT.items():
    os.environ.setdefault(_name, _value)

from core.services.factory import get_image_service  # noqa: E402

# 1x1 transparent PNG
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


def bucket_name() -> str:
    return os.environ["IMAGE_S3_BUCKET_NAME"]


@pytest.fixture(autouse=True)
def reset_image_service():
    """Every test starts with a newly wired service and an empty cache."""
    get_image_service.cache_clear()
    yield
    get_image_service.cache_clear()


@pytest.fixture(autouse=True)
def clear_optional_env(monkeypatch):
    for name in OPTIONAL_ENVIRONMENT:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_table(aws_mock):
    """Empty metadata table keyed by `image_id`; gone when the mock exits."""
    table = boto3.resource("dynamodb", region_name=os.environ["AWS_REGION"]).create_table(
        TableName=os.environ["IMAGE_METADATA_TABLE_NAME"],
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "image_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_put_item(dynamodb_table) -> Callable[[dict[str, Any]], dict[str, Any]]:
    def put(item: dict[str, Any]) -> dict[str, Any]:
        dynamodb_table.put_item(Item=item)
        return item

    return put


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], dict[str, Any] | None]:
    def get(image_id: str) -> dict[str, Any] | None:
        return dynamodb_table.get_item(Key={"image_id": image_id}).get("Item")

    return get


@pytest.fixture
def s3_client(aws_mock):
    return boto3.client("s3", region_name=os.environ["AWS_REGION"])


@pytest.fixture
def s3_bucket(s3_client):
    """Empty image bucket; returns the client bound to the mock."""
    s3_client.create_bucket(Bucket=bucket_name())
    return s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    def put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=bucket_name(), Key=key, Body=body, ContentType=content_type
        )

    return put


@pytest.fixture
def s3_head_object(s3_bucket) -> Callable[[str], dict[str, Any] | None]:
    """Object head, or None when the key does not exist."""

    def head(key: str) -> dict[str, Any] | None:
        try:
            return s3_bucket.head_object(Bucket=bucket_name(), Key=key)
        except ClientError as exc:
            if exc.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return None
            raise

    return head


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    def get(key: str) -> bytes:
        return s3_bucket.get_object(Bucket=bucket_name(), Key=key)["Body"].read()

    return get


@pytest.fixture
def aws_stores(dynamodb_table, s3_bucket):
    """Moto-backed table and bucket, both ready for use."""
    return SimpleNamespace(table=dynamodb_table, s3=s3_bucket)


@pytest.fixture
def sample_image_binary() -> bytes:
    return PNG_1X1


@pytest.fixture
def sample_svg_binary() -> bytes:
    return b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"/>'
