"""Identity and storage-key generation for uploaded images."""

import os
import uuid
from typing import NamedTuple

from core.utils.mime import normalize_content_type


class ResolvedImageName(NamedTuple):
    """Identity, object key and content type assigned to a new upload."""

    image_id: str
    storage_key: str
    content_type: str


def file_extension(file_name: str | None) -> str:
    """Return the extension of `file_name` including the dot, or "" if it has none."""
    if not file_name:
        return ""

    extension = os.path.splitext(file_name)[1]
    return "" if extension == "." else extension


def generate_image_id() -> str:
    """Generate a unique image identifier."""
    return str(uuid.uuid4())


def resolve_image_name(
    original_file_name: str | None,
    declared_content_type: str | None,
) -> ResolvedImageName:
    """Assign a fresh identity to an upload and derive its key and content type.

    Example:
        resolve_image_name("cat.svg", "")
        → ResolvedImageName("<uuid>", "<uuid>.svg", "image/svg+xml")
    """
    extension = file_extension(original_file_name)
    image_id = generate_image_id()

    return ResolvedImageName(
        image_id=image_id,
        storage_key=f"{image_id}{extension}",
        content_type=normalize_content_type(declared_content_type, extension),
    )
