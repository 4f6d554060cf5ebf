"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Sequence
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from webtoolkit.core.settings import ToolkitConfig
from webtoolkit.toolkit import Toolkit

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + bytes(range(64))
TEXT_BYTES = b"hello, this is a plain text upload\n"
PDF_BYTES = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< >>\nendobj\n"

TEXT_PLAIN = "text/plain; charset=utf-8"

BOUNDARY = "webtoolkit-test-boundary"


# --- Raw ASGI requests ---


def make_request(
    body: bytes,
    content_type: str = "application/json",
    *,
    chunk_size: int | None = None,
    content_length: bool = True,
) -> Request:
    """Build a Starlette request whose body arrives in ``chunk_size`` pieces."""
    if chunk_size:
        chunks = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
    else:
        chunks = [body]
    chunks = chunks or [b""]
    messages: list[dict[str, Any]] = [
        {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
        for index, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    headers = [(b"content-type", content_type.encode())]
    if content_length:
        headers.append((b"content-length", str(len(body)).encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope, receive)


def multipart_body(
    files: Sequence[tuple[str, tuple[str, bytes, str]]],
    data: dict[str, str] | None = None,
) -> tuple[bytes, str]:
    """Encode plain fields, then files, as multipart/form-data."""
    parts: list[bytes] = []
    for name, value in (data or {}).items():
        parts.append(
            f"--{BOUNDARY}\r\n"
            f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
            f"{value}\r\n".encode()
        )
    for field, (filename, content, content_type) in files:
        head = (
            f"--{BOUNDARY}\r\n"
            f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
            f"Content-Type: {content_type}\r\n\r\n"
        )
        parts.append(head.encode() + content + b"\r\n")
    parts.append(f"--{BOUNDARY}--\r\n".encode())
    return b"".join(parts), f"multipart/form-data; boundary={BOUNDARY}"


def multipart_request(
    files: Sequence[tuple[str, tuple[str, bytes, str]]],
    data: dict[str, str] | None = None,
    **kwargs: Any,
) -> Request:
    body, content_type = multipart_body(files, data)
    return make_request(body, content_type, **kwargs)


# --- Toolkit ---


@pytest.fixture
def config() -> ToolkitConfig:
    """Config allowing PNG images and UTF-8 text."""
    return ToolkitConfig(allowed_file_types=("image/png", TEXT_PLAIN))


@pytest.fixture
def toolkit(config: ToolkitConfig) -> Toolkit:
    return Toolkit(config)


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "report.pdf").write_bytes(PDF_BYTES)
    return directory


# --- App override & client fixtures ---


def _get_app(toolkit: Toolkit, upload_dir: Path, static_dir: Path):  # type: ignore[no-untyped-def]
    """Import app lazily and apply overrides."""
    from webtoolkit.dependencies import get_static_dir, get_toolkit, get_upload_dir
    from webtoolkit.main import app

    app.dependency_overrides[get_toolkit] = lambda: toolkit
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    app.dependency_overrides[get_static_dir] = lambda: static_dir
    return app


@pytest.fixture
async def async_client(
    toolkit: Toolkit, upload_dir: Path, static_dir: Path
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with the test toolkit and directories."""
    application = _get_app(toolkit, upload_dir, static_dir)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    application.dependency_overrides.clear()
