from uuid import UUID

from pydantic import BaseModel, Field


class GetImageRequest(BaseModel):
    """Validation model for get image request."""

    image_id: UUID = Field(
        ...,
        description="Image ID to retrieve",
    )


class ImageViewResponse(BaseModel):
    """Image view returned to the caller."""

    image_id: str
    image_url: str
    content_type: str
