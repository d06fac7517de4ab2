import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest

KNOWN_IMAGE_ID = "3f2b8a1e-4c7d-4e2a-9b1f-6d5c4a3b2e10"


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
        get_remaining_time_in_millis=lambda: 30_000,
    )


@pytest.fixture
def stored_image(dynamodb_put_item, s3_put_object, sample_image_binary) -> dict[str, Any]:
    """An image present in both the bucket and the metadata table."""
    item = {
        "image_id": KNOWN_IMAGE_ID,
        "storage_key": f"{KNOWN_IMAGE_ID}.png",
        "content_type": "image/png",
        "original_file_name": "pixel.png",
        "created_at": "2024-01-15T10:00:00+00:00",
    }
    s3_put_object(item["storage_key"], sample_image_binary, "image/png")
    return dynamodb_put_item(item)


@pytest.fixture
def get_image_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": f"/images/{KNOWN_IMAGE_ID}",
        "pathParameters": {"image_id": KNOWN_IMAGE_ID},
    }


@pytest.fixture
def delete_image_event() -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": f"/images/{KNOWN_IMAGE_ID}",
        "pathParameters": {"image_id": KNOWN_IMAGE_ID},
    }


@pytest.fixture
def upload_image_event(sample_image_binary) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/images",
        "body": json.dumps(
            {
                "file": base64.b64encode(sample_image_binary).decode("utf-8"),
                "file_name": "test_upload.png",
                "content_type": "image/png",
            }
        ),
        "headers": {"Content-Type": "application/json"},
    }
