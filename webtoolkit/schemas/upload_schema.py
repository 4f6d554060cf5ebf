"""Upload result schemas."""

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """A file stored by the upload handler."""

    new_file_name: str = Field(..., description="Name the file was stored under")
    original_file_name: str = Field(..., description="Name sent by the client")
    file_size: int = Field(..., ge=0, description="Bytes written to disk")
    content_type: str = Field(
        default="application/octet-stream",
        description="MIME type sniffed from the leading bytes",
    )
