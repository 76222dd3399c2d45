"""Media library request schemas."""

from pydantic import BaseModel, Field


class MediaDeleteRequest(BaseModel):
    public_id: str = Field(..., min_length=1)


class ImportByUrlRequest(BaseModel):
    imageUrl: str = ""
