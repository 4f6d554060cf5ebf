"""Application exception classes and handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from webtoolkit.schemas.upload_schema import UploadedFile


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- JSON bodies ---


class InvalidJSONBodyError(AppException):
    """Request body could not be decoded into the target."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="INVALID_JSON_BODY", status_code=400)


class RequestBodyTooLargeError(AppException):
    """Request body exceeds the configured JSON ceiling."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            message=f"body must not be larger than {max_bytes} bytes",
            code="BODY_TOO_LARGE",
            status_code=413,
        )


class InvalidJSONTargetError(AppException):
    """The decode target is not a type JSON can be validated into."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            message=f"error unmarshalling JSON: {detail}",
            code="INVALID_JSON_TARGET",
            status_code=500,
        )


# --- Uploads ---


class UploadError(AppException):
    """Base upload error.

    ``uploaded_files`` holds the records of every file written before the
    failure; those files stay on disk.
    """

    def __init__(
        self,
        message: str,
        code: str = "UPLOAD_ERROR",
        status_code: int = 400,
        uploaded_files: list[UploadedFile] | None = None,
    ) -> None:
        self.uploaded_files: list[UploadedFile] = list(uploaded_files or [])
        super().__init__(message=message, code=code, status_code=status_code)


class FileTooLargeError(UploadError):
    """Multipart request exceeds the configured size ceiling."""

    def __init__(self) -> None:
        super().__init__(
            message="the uploaded file exceeds the maximum file size",
            code="FILE_TOO_LARGE",
            status_code=413,
        )


class FileTypeNotAllowedError(UploadError):
    """Sniffed content type is missing from the allow-list."""

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(
            message="the uploaded file type is not allowed",
            code="FILE_TYPE_NOT_ALLOWED",
            status_code=415,
        )


class InvalidMultipartError(UploadError):
    """Request body is not a readable multipart form."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            message=f"the request is not a valid multipart form: {detail}",
            code="INVALID_MULTIPART",
        )


class NoFileUploadedError(UploadError):
    """Form contains no file parts."""

    def __init__(self) -> None:
        super().__init__(message="no file was uploaded", code="NO_FILE_UPLOADED")


# --- Text ---


class SlugError(AppException):
    """Input cannot be turned into a slug."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="INVALID_SLUG_INPUT", status_code=400)


# --- Not Found (404) ---


class StaticFileNotFoundError(AppException):
    """Requested static file does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            message=f"file {name!r} not found",
            code="FILE_NOT_FOUND",
            status_code=404,
        )


# --- Exception Handlers ---


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    from webtoolkit.services.json_service import error_json

    return error_json(exc, exc.status_code)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors through the error envelope."""
    from webtoolkit.services.json_service import error_json

    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "request validation failed"
    return error_json(ValueError(message), 422)
