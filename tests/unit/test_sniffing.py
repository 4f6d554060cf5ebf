"""Tests for content-type sniffing."""

import pytest

from tests.conftest import PDF_BYTES, PNG_BYTES
from webtoolkit.core.sniffing import OCTET_STREAM, TEXT_HTML, TEXT_PLAIN, detect_content_type


class TestDetectContentType:
    """Signature table checks."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (PNG_BYTES, "image/png"),
            (b"\xff\xd8\xff\xe0\x00\x10JFIF", "image/jpeg"),
            (b"GIF89a\x01\x00\x01\x00", "image/gif"),
            (b"RIFF\x24\x00\x00\x00WEBPVP8 ", "image/webp"),
            (PDF_BYTES, "application/pdf"),
            (b"PK\x03\x04\x14\x00\x00\x00", "application/zip"),
            (b"\x1f\x8b\x08\x00\x00\x00", "application/x-gzip"),
            (b"ID3\x04\x00\x00\x00", "audio/mpeg"),
            (b"\x1a\x45\xdf\xa3\x01\x00", "video/webm"),
            (b"wOF2\x00\x01\x00\x00", "font/woff2"),
        ],
    )
    def test_binary_signatures(self, data: bytes, expected: str) -> None:
        assert detect_content_type(data) == expected

    def test_mp4(self) -> None:
        data = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"
        assert detect_content_type(data) == "video/mp4"

    def test_html_after_whitespace(self) -> None:
        assert detect_content_type(b"\n\t  <!DOCTYPE html><html>") == TEXT_HTML

    def test_html_tag_needs_terminator(self) -> None:
        assert detect_content_type(b"<bodyguard") == TEXT_PLAIN

    def test_xml(self) -> None:
        assert detect_content_type(b'<?xml version="1.0"?>') == "text/xml; charset=utf-8"

    def test_plain_text(self) -> None:
        assert detect_content_type(b"just some words\n") == TEXT_PLAIN

    def test_utf8_bom(self) -> None:
        assert detect_content_type(b"\xef\xbb\xbfhello") == TEXT_PLAIN

    def test_utf16_bom(self) -> None:
        assert detect_content_type(b"\xff\xfeh\x00i\x00") == "text/plain; charset=utf-16le"

    def test_empty_is_text(self) -> None:
        assert detect_content_type(b"") == TEXT_PLAIN

    def test_unknown_binary(self) -> None:
        assert detect_content_type(b"\x01\x02\x03\x04binary") == OCTET_STREAM

    def test_only_first_512_bytes_considered(self) -> None:
        data = b"a" * 512 + b"\x00\x01\x02"
        assert detect_content_type(data) == TEXT_PLAIN
