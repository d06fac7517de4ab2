"""Request and response bodies of `POST /images`."""

import base64
import binascii
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator


StrippedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class ImageUploadRequest(BaseModel):
    file: StrippedStr = Field(..., description="Image bytes, Base64 encoded; may be empty")
    file_name: StrippedStr = Field(
        ..., min_length=1, max_length=255, description="Original file name, including extension"
    )
    content_type: str | None = Field(
        None, max_length=255, description="Declared MIME type of the file, passed on as sent"
    )

    @field_validator("file")
    @classmethod
    def must_be_base64(cls, value: str) -> str:
        # An empty string decodes to no bytes; the service turns that into a 400.
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Invalid base64 encoded file") from exc
        return value

    def decoded_file(self) -> bytes:
        return base64.b64decode(self.file, validate=True)


class ImageUploadResponse(BaseModel):
    """Body of a 201 answer: the new image's view plus a confirmation."""

    image_id: str = Field(..., description="Identifier assigned to the image")
    image_url: str = Field(..., description="Public address of the stored image")
    content_type: str = Field(..., description="Content type the image is served with")
    message: str
