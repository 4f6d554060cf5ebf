"""Filesystem helpers."""

import re
from pathlib import Path

from fastapi.responses import FileResponse

from webtoolkit.core.exceptions import StaticFileNotFoundError

DIR_MODE = 0o755

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def create_dir_if_not_exists(directory: str | Path) -> Path:
    """Create ``directory`` and its parents; an existing directory is left alone."""
    path = Path(directory)
    path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    return path


def download_static_file(
    directory: str | Path, file: str, display_name: str
) -> FileResponse:
    """Serve ``directory/file`` as an attachment named ``display_name``.

    Raises:
        StaticFileNotFoundError: if the file is missing, is not a regular
            file, or resolves outside ``directory``.
    """
    base = Path(directory).resolve()
    target = (base / file).resolve()
    if not target.is_relative_to(base) or not target.is_file():
        raise StaticFileNotFoundError(file)

    name = _CONTROL_CHARS.sub("", display_name)
    try:
        name.encode("latin-1")
    except UnicodeEncodeError:
        # starlette emits an RFC 5987 filename* value for these
        return FileResponse(target, filename=name, content_disposition_type="attachment")

    quoted = name.replace("\\", "\\\\").replace('"', '\\"')
    return FileResponse(
        target,
        headers={"Content-Disposition": f'attachment; filename="{quoted}"'},
    )
