"""Text helper request and response schemas."""

from pydantic import BaseModel, Field


class SlugRequest(BaseModel):
    """Text to turn into a slug."""

    text: str


class SlugResponse(BaseModel):
    """Generated slug."""

    slug: str


class RandomStringResponse(BaseModel):
    """Generated random string."""

    value: str
    length: int = Field(..., ge=0)
