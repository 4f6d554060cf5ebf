"""Global dependencies for the application."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from webtoolkit.core.config import settings
from webtoolkit.toolkit import Toolkit


@lru_cache
def get_toolkit() -> Toolkit:
    """Get the Toolkit configured from settings."""
    return Toolkit(settings.toolkit)


def get_upload_dir() -> Path:
    """Directory uploads are stored in."""
    return settings.storage.upload_dir


def get_static_dir() -> Path:
    """Directory static downloads are served from."""
    return settings.storage.static_dir


ToolkitDep = Annotated[Toolkit, Depends(get_toolkit)]
UploadDirDep = Annotated[Path, Depends(get_upload_dir)]
StaticDirDep = Annotated[Path, Depends(get_static_dir)]
