"""Single entry point bundling every helper with one configuration."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar

import httpx
from fastapi.responses import FileResponse, JSONResponse
from starlette.requests import Request

from webtoolkit.core import shutdown
from webtoolkit.core.settings import ToolkitConfig
from webtoolkit.schemas.upload_schema import UploadedFile
from webtoolkit.services import remote_service
from webtoolkit.services.json_service import HeaderValue, JSONService
from webtoolkit.services.upload_service import UploadService
from webtoolkit.utils import files, text

T = TypeVar("T")


class Toolkit:
    """HTTP helper methods sharing one immutable ``ToolkitConfig``."""

    def __init__(self, config: ToolkitConfig | None = None) -> None:
        self.config = config or ToolkitConfig()
        self._uploads = UploadService(self.config)
        self._json = JSONService(self.config)

    # --- Text ---

    @staticmethod
    def random_string(length: int) -> str:
        return text.random_string(length)

    @staticmethod
    def slugify(value: str) -> str:
        return text.slugify(value)

    # --- Files ---

    @staticmethod
    def create_dir_if_not_exists(directory: str | Path) -> Path:
        return files.create_dir_if_not_exists(directory)

    @staticmethod
    def download_static_file(
        directory: str | Path, file: str, display_name: str
    ) -> FileResponse:
        return files.download_static_file(directory, file, display_name)

    async def upload_files(
        self, request: Request, upload_dir: str | Path, *, rename: bool = True
    ) -> list[UploadedFile]:
        return await self._uploads.upload_files(request, upload_dir, rename=rename)

    async def upload_file(
        self, request: Request, upload_dir: str | Path, *, rename: bool = True
    ) -> UploadedFile:
        return await self._uploads.upload_file(request, upload_dir, rename=rename)

    # --- JSON ---

    async def read_json(self, request: Request, target: type[T]) -> T:
        return await self._json.read_json(request, target)

    @staticmethod
    def write_json(
        status: int, data: Any, headers: Mapping[str, HeaderValue] | None = None
    ) -> JSONResponse:
        return JSONService.write_json(status, data, headers)

    @staticmethod
    def error_json(error: BaseException | str, status: int = 400) -> JSONResponse:
        return JSONService.error_json(error, status)

    # --- Remote ---

    @staticmethod
    def push_json_to_remote(
        uri: str, data: Any, client: httpx.Client | None = None
    ) -> tuple[httpx.Response, int]:
        return remote_service.push_json_to_remote(uri, data, client)

    @staticmethod
    async def push_json_to_remote_async(
        uri: str, data: Any, client: httpx.AsyncClient | None = None
    ) -> tuple[httpx.Response, int]:
        return await remote_service.push_json_to_remote_async(uri, data, client)

    # --- Process ---

    @staticmethod
    def ctrl_c(*callbacks: Callable[[], object]) -> None:
        shutdown.ctrl_c(*callbacks)
