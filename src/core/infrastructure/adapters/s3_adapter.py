"""boto3 access to the image bucket, plus public URL construction."""

import os
from typing import BinaryIO, Protocol
from urllib.parse import quote

import boto3

from core.utils.constants import (
    ENV_APP_RUNTIME,
    ENV_IMAGE_PUBLIC_BASE_URL,
    ENV_IMAGE_S3_BUCKET_NAME,
    LOCALHOST_URL,
    LOCALSTACK_RUNTIME,
    LOCALSTACK_URL,
)
from core.utils.settings import aws_endpoint_url, aws_region, required_env


class S3AdapterProtocol(Protocol):
    def put_object(
        self,
        *,
        key: str,
        body: BinaryIO | bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def object_url(self, *, key: str) -> str: ...


class S3Adapter:
    """Bucket calls with snake_case arguments.

    boto3 errors propagate unchanged; `S3ImageStorage` translates them.
    """

    def __init__(self) -> None:
        self._bucket = required_env(ENV_IMAGE_S3_BUCKET_NAME)
        self._endpoint_url = aws_endpoint_url()
        self._region = aws_region()
        self._public_base_url = os.getenv(ENV_IMAGE_PUBLIC_BASE_URL)
        self._is_localstack = os.getenv(ENV_APP_RUNTIME) == LOCALSTACK_RUNTIME

        self._client = boto3.client(
            "s3", endpoint_url=self._endpoint_url, region_name=self._region
        )

    def put_object(
        self,
        *,
        key: str,
        body: BinaryIO | bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )

    def delete_object(self, *, key: str) -> None:
        # S3 answers 204 for keys that do not exist.
        self._client.delete_object(Bucket=self._bucket, Key=key)

    def object_url(self, *, key: str) -> str:
        """Unsigned URL of the object under `key`; S3 is not called.

        `IMAGE_PUBLIC_BASE_URL` wins when set. Otherwise an endpoint override
        gives a path-style URL and plain AWS gives the virtual-hosted form.
        """
        path = quote(key, safe="/")

        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{path}"

        if not self._endpoint_url:
            return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{path}"

        url = f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{path}"
        if self._is_localstack:
            # Callers outside the compose network reach LocalStack on localhost.
            url = url.replace(LOCALSTACK_URL, LOCALHOST_URL, 1)
        return url
