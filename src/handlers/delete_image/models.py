"""Pydantic models for delete image request/response."""

from uuid import UUID

from pydantic import BaseModel, Field


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    image_id: UUID = Field(
        ...,
        description="Image ID to delete",
    )


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    image_id: str = Field(..., description="Deleted image ID")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
