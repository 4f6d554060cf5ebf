"""Content-type sniffing from a file's leading bytes.

Implements the WHATWG MIME sniffing signatures so the returned strings
(``image/png``, ``text/plain; charset=utf-8``, ...) are stable values an
allow-list can be written against.
"""

from collections.abc import Callable

SNIFF_LEN = 512

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"
_BINARY_BYTES = frozenset([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])

Matcher = Callable[[bytes, int], bool]

_HTML_TAGS = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)


def _html(tag: bytes) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> bool:
        data = data[first_non_ws:]
        if len(data) < len(tag) + 1:
            return False
        for expected, actual in zip(tag, data):
            if 0x41 <= expected <= 0x5A:
                actual &= 0xDF
            if expected != actual:
                return False
        return data[len(tag)] in _TAG_TERMINATORS

    return match


def _exact(pattern: bytes) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> bool:
        return data.startswith(pattern)

    return match


def _masked(pattern: bytes, mask: bytes, skip_ws: bool = False) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> bool:
        if skip_ws:
            data = data[first_non_ws:]
        if len(data) < len(pattern):
            return False
        return all(byte & m == p for byte, m, p in zip(data, mask, pattern))

    return match


def _mp4(data: bytes, first_non_ws: int) -> bool:
    if len(data) < 12:
        return False
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return False
    if data[4:8] != b"ftyp":
        return False
    for start in range(8, box_size, 4):
        if start == 12:
            # minor version
            continue
        if data[start : start + 3] == b"mp4":
            return True
    return False


def _text(data: bytes, first_non_ws: int) -> bool:
    return not any(byte in _BINARY_BYTES for byte in data[first_non_ws:])


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES: tuple[tuple[Matcher, str], ...] = (
    *((_html(tag), TEXT_HTML) for tag in _HTML_TAGS),
    (_masked(b"<?xml", b"\xff" * 5, skip_ws=True), "text/xml; charset=utf-8"),
    (_exact(b"%PDF-"), "application/pdf"),
    (_exact(b"%!PS-Adobe-"), "application/postscript"),
    # byte order marks
    (_masked(b"\xfe\xff\x00\x00", b"\xff\xff\x00\x00"), "text/plain; charset=utf-16be"),
    (_masked(b"\xff\xfe\x00\x00", b"\xff\xff\x00\x00"), "text/plain; charset=utf-16le"),
    (_masked(b"\xef\xbb\xbf\x00", b"\xff\xff\xff\x00"), TEXT_PLAIN),
    # images
    (_exact(b"\x00\x00\x01\x00"), "image/x-icon"),
    (_exact(b"\x00\x00\x02\x00"), "image/x-icon"),
    (_exact(b"BM"), "image/bmp"),
    (_exact(b"GIF87a"), "image/gif"),
    (_exact(b"GIF89a"), "image/gif"),
    (
        _masked(b"RIFF\x00\x00\x00\x00WEBPVP", _RIFF_MASK + b"\xff\xff"),
        "image/webp",
    ),
    (_exact(b"\x89PNG\r\n\x1a\n"), "image/png"),
    (_exact(b"\xff\xd8\xff"), "image/jpeg"),
    # audio and video
    (_masked(b"FORM\x00\x00\x00\x00AIFF", _RIFF_MASK), "audio/aiff"),
    (_masked(b"ID3", b"\xff\xff\xff"), "audio/mpeg"),
    (_exact(b"OggS\x00"), "application/ogg"),
    (_exact(b"MThd\x00\x00\x00\x06"), "audio/midi"),
    (_masked(b"RIFF\x00\x00\x00\x00AVI ", _RIFF_MASK), "video/avi"),
    (_masked(b"RIFF\x00\x00\x00\x00WAVE", _RIFF_MASK), "audio/wave"),
    (_mp4, "video/mp4"),
    (_exact(b"\x1a\x45\xdf\xa3"), "video/webm"),
    # fonts
    (
        _masked(b"\x00" * 34 + b"LP", b"\x00" * 34 + b"\xff\xff"),
        "application/vnd.ms-fontobject",
    ),
    (_exact(b"\x00\x01\x00\x00"), "font/ttf"),
    (_exact(b"OTTO"), "font/otf"),
    (_exact(b"ttcf"), "font/collection"),
    (_exact(b"wOFF"), "font/woff"),
    (_exact(b"wOF2"), "font/woff2"),
    # archives
    (_exact(b"\x1f\x8b\x08"), "application/x-gzip"),
    (_exact(b"PK\x03\x04"), "application/zip"),
    (_exact(b"Rar!\x1a\x07\x00"), "application/x-rar-compressed"),
    (_exact(b"Rar!\x1a\x07\x01\x00"), "application/x-rar-compressed"),
    (_exact(b"\x00asm"), "application/wasm"),
    (_text, TEXT_PLAIN),
)


def detect_content_type(data: bytes) -> str:
    """Return the MIME type sniffed from at most the first 512 bytes of ``data``.

    Falls back to ``application/octet-stream``; never raises.
    """
    data = bytes(data[:SNIFF_LEN])
    first_non_ws = len(data) - len(data.lstrip(_WHITESPACE))

    for matcher, content_type in SIGNATURES:
        if matcher(data, first_non_ws):
            return content_type
    return OCTET_STREAM
