"""Multipart file upload handling."""

import shutil
from collections.abc import AsyncGenerator
from pathlib import Path, PurePath

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import Request

from webtoolkit.core.exceptions import (
    FileTooLargeError,
    FileTypeNotAllowedError,
    InvalidMultipartError,
    NoFileUploadedError,
    UploadError,
)
from webtoolkit.core.settings import ToolkitConfig
from webtoolkit.core.sniffing import SNIFF_LEN, detect_content_type
from webtoolkit.schemas.upload_schema import UploadedFile
from webtoolkit.utils.files import create_dir_if_not_exists
from webtoolkit.utils.text import random_string

logger = structlog.get_logger()

RANDOM_NAME_LENGTH = 32
COPY_BUFFER_SIZE = 64 * 1024


class _BodyLimitExceeded(MultiPartException):
    """Raised from inside the form parser so it releases its spooled parts."""

    def __init__(self) -> None:
        super().__init__("request body exceeds the maximum file size")


async def _limited(
    stream: AsyncGenerator[bytes, None], max_bytes: int
) -> AsyncGenerator[bytes, None]:
    received = 0
    async for chunk in stream:
        received += len(chunk)
        if received > max_bytes:
            raise _BodyLimitExceeded
        yield chunk


class UploadService:
    """Validate and persist the files of a multipart request."""

    def __init__(self, config: ToolkitConfig) -> None:
        self._config = config

    async def upload_files(
        self, request: Request, upload_dir: str | Path, *, rename: bool = True
    ) -> list[UploadedFile]:
        """Store every file part of the request under ``upload_dir``.

        With ``rename`` each file gets a random 32 character name that keeps
        the original extension; otherwise the client's file name is used and
        an existing file with that name is overwritten.

        Raises:
            FileTooLargeError: the request is larger than ``max_file_size``.
            FileTypeNotAllowedError: a part's sniffed type is not allowed.
            InvalidMultipartError: the body is not a multipart form.
            UploadError: a part could not be written.

        Files stored before a failure are kept; their records are on the
        raised error's ``uploaded_files``.
        """
        target = create_dir_if_not_exists(upload_dir)
        form = await self._parse_form(request)

        uploaded: list[UploadedFile] = []
        try:
            for field, value in form.multi_items():
                if not isinstance(value, UploadFile):
                    continue
                try:
                    record = await run_in_threadpool(self._store, value, target, rename)
                except UploadError as exc:
                    exc.uploaded_files = list(uploaded)
                    logger.warning(
                        "Upload rejected",
                        field=field,
                        filename=value.filename,
                        code=exc.code,
                        stored=len(uploaded),
                    )
                    raise
                except OSError as exc:
                    raise UploadError(
                        message=f"failed to store {value.filename!r}: {exc.strerror or exc}",
                        code="UPLOAD_WRITE_FAILED",
                        status_code=500,
                        uploaded_files=uploaded,
                    ) from exc
                uploaded.append(record)
                logger.info(
                    "Upload stored",
                    field=field,
                    filename=record.new_file_name,
                    size=record.file_size,
                    content_type=record.content_type,
                )
        finally:
            await form.close()

        return uploaded

    async def upload_file(
        self, request: Request, upload_dir: str | Path, *, rename: bool = True
    ) -> UploadedFile:
        """Store the request's files and return the first record."""
        files = await self.upload_files(request, upload_dir, rename=rename)
        if not files:
            raise NoFileUploadedError
        return files[0]

    async def _parse_form(self, request: Request) -> FormData:
        max_bytes = self._config.max_file_size

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_bytes:
            raise FileTooLargeError

        content_type = request.headers.get("content-type", "")
        if not content_type.lower().startswith("multipart/form-data"):
            raise InvalidMultipartError("expected multipart/form-data")

        parser = MultiPartParser(
            request.headers,
            _limited(request.stream(), max_bytes),
            max_files=float("inf"),
        )
        try:
            return await parser.parse()
        except _BodyLimitExceeded as exc:
            raise FileTooLargeError from exc
        except MultiPartException as exc:
            raise InvalidMultipartError(exc.message) from exc
        except ValueError as exc:
            # python-multipart parse errors
            raise InvalidMultipartError(str(exc)) from exc

    def _store(self, upload: UploadFile, target: Path, rename: bool) -> UploadedFile:
        source = upload.file
        content_type = detect_content_type(source.read(SNIFF_LEN))
        if not self._config.is_type_allowed(content_type):
            raise FileTypeNotAllowedError(content_type)
        source.seek(0)

        original_name = PurePath(upload.filename or "").name
        if rename:
            new_name = random_string(RANDOM_NAME_LENGTH) + PurePath(original_name).suffix
        else:
            new_name = original_name
        if not new_name:
            raise UploadError(message="the uploaded file has no name", code="MISSING_FILE_NAME")

        with open(target / new_name, "wb") as output:
            shutil.copyfileobj(source, output, COPY_BUFFER_SIZE)
            size = output.tell()

        return UploadedFile(
            new_file_name=new_name,
            original_file_name=original_name,
            file_size=size,
            content_type=content_type,
        )
