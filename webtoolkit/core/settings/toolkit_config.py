"""Toolkit helper configuration."""

from collections.abc import Iterable

from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_FILE_SIZE = 1024 * 1024 * 1024  # 1GB
DEFAULT_MAX_JSON_SIZE = 1024 * 1024  # 1MB


class ToolkitConfig(BaseModel, frozen=True):
    """Upload and JSON helper settings.

    Zero sizes fall back to the defaults when the config is built, so an
    instance never changes after construction and can be shared freely
    between requests.
    """

    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, ge=0)
    allowed_file_types: tuple[str, ...] = ()
    max_json_size: int = Field(default=DEFAULT_MAX_JSON_SIZE, ge=0)
    allow_unknown_fields: bool = False

    @field_validator("max_file_size")
    @classmethod
    def _default_file_size(cls, value: int) -> int:
        return value or DEFAULT_MAX_FILE_SIZE

    @field_validator("max_json_size")
    @classmethod
    def _default_json_size(cls, value: int) -> int:
        return value or DEFAULT_MAX_JSON_SIZE

    @field_validator("allowed_file_types", mode="before")
    @classmethod
    def _split_file_types(cls, value: str | Iterable[str] | None) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        return tuple(item.strip() for item in value if item and item.strip())

    def is_type_allowed(self, content_type: str) -> bool:
        """Check a sniffed MIME type against the allow-list (empty allows all)."""
        if not self.allowed_file_types:
            return True
        wanted = content_type.casefold()
        return any(allowed.casefold() == wanted for allowed in self.allowed_file_types)
