"""Filesystem locations used by the demo routes."""

from pathlib import Path

from pydantic import BaseModel


class StorageConfig(BaseModel, frozen=True):
    """Upload and static file directories."""

    upload_dir: Path
    static_dir: Path
