"""File upload and download routes."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import FileResponse, JSONResponse

from webtoolkit.dependencies import StaticDirDep, ToolkitDep, UploadDirDep
from webtoolkit.schemas.response_schema import success_envelope

router = APIRouter(prefix="/api/v1/files", tags=["files"])


@router.post("", status_code=201)
async def upload_files(
    request: Request,
    toolkit: ToolkitDep,
    upload_dir: UploadDirDep,
    rename: bool = Query(default=True),
) -> JSONResponse:
    """Store every file in the multipart body."""
    uploaded = await toolkit.upload_files(request, upload_dir, rename=rename)
    return toolkit.write_json(
        201, success_envelope(uploaded, message=f"{len(uploaded)} file(s) uploaded")
    )


@router.post("/single", status_code=201)
async def upload_file(
    request: Request,
    toolkit: ToolkitDep,
    upload_dir: UploadDirDep,
    rename: bool = Query(default=True),
) -> JSONResponse:
    """Store the multipart body's files and report the first one."""
    uploaded = await toolkit.upload_file(request, upload_dir, rename=rename)
    return toolkit.write_json(201, success_envelope(uploaded, message="file uploaded"))


@router.get("/{name}")
async def download_file(
    name: str,
    toolkit: ToolkitDep,
    static_dir: StaticDirDep,
    display_name: str | None = Query(default=None, min_length=1),
) -> FileResponse:
    """Send a static file as an attachment."""
    return toolkit.download_static_file(static_dir, name, display_name or name)
