"""Schemas for the JSON echo route."""

from pydantic import BaseModel, Field


class EchoPayload(BaseModel):
    """Body accepted and returned by the echo route."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str | None = None
    tags: list[str] = Field(default_factory=list)
