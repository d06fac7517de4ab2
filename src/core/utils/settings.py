"""Configuration read from the Lambda environment.

Values are read at call time so that tests can patch the environment
between builds.
"""

import os
from typing import Any

from core.utils.constants import DEFAULT_AWS_REGION, ENV_AWS_ENDPOINT_URL, ENV_AWS_REGION


def required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"{name} environment variable is not set")
    return value


def positive_number_env(name: str, default: float) -> float:
    """Read a positive number; unset or blank means `default`.

    Raises:
        RuntimeError: If the value is not a number or is not above zero
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc

    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}")

    return value


def aws_region() -> str:
    return os.getenv(ENV_AWS_REGION) or DEFAULT_AWS_REGION


def aws_endpoint_url() -> str | None:
    """Endpoint override for LocalStack or MinIO; None means the real AWS endpoint."""
    return os.getenv(ENV_AWS_ENDPOINT_URL) or None


def boto3_options() -> dict[str, Any]:
    """Keyword arguments shared by every boto3 client and resource we create."""
    return {"endpoint_url": aws_endpoint_url(), "region_name": aws_region()}
