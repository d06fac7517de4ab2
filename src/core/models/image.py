"""Shared image models."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ImageRecord(BaseModel):
    """Image metadata row owned by the metadata store."""

    image_id: StrictStr = Field(..., min_length=1, description="Unique image identifier")
    storage_key: StrictStr = Field(
        ..., min_length=1, description="Object key where the image bytes are stored"
    )
    content_type: StrictStr = Field(..., min_length=1, description="Normalized MIME type")

    original_file_name: StrictStr | None = Field(None, description="File name given at upload")
    created_at: StrictStr | None = Field(None, description="ISO-8601 creation timestamp (UTC)")


class ImageView(BaseModel):
    """Read-facing projection of an image, the value kept in the cache."""

    model_config = ConfigDict(frozen=True)

    image_id: StrictStr = Field(..., description="Unique image identifier")
    image_url: StrictStr = Field(..., description="Public address of the stored image")
    content_type: StrictStr = Field(..., description="MIME type of the image")
