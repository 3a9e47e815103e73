"""
Best-effort MIME detection for uploads. Three layers, tried in order:

    1. the type the client declared for the multipart part
    2. a sniff of the leading bytes of the payload
    3. the extension of the original filename

Each layer returns None when it has nothing to say, so callers (and tests) can
use them independently.
"""
from pathlib import PurePath
from typing import Callable, List, Optional

GENERIC_MIME_TYPES = {"application/octet-stream", "binary/octet-stream"}

EXTENSION_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".txt": "text/plain",
}

# Enough for every signature below and for a meaningful text check
SNIFF_SIZE = 512

_sniffers: List[Callable[[bytes], Optional[str]]] = []


def _sniffer(f: Callable[[bytes], Optional[str]]) -> Callable[[bytes], Optional[str]]:
    _sniffers.append(f)
    return f


@_sniffer
def _png(h: bytes) -> Optional[str]:
    if h[:4] == b"\x89PNG":
        return "image/png"
    return None


@_sniffer
def _jpeg(h: bytes) -> Optional[str]:
    if h[:3] == b"\xff\xd8\xff" or h[6:10] in (b"JFIF", b"Exif"):
        return "image/jpeg"
    return None


@_sniffer
def _gif(h: bytes) -> Optional[str]:
    if h[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return None


@_sniffer
def _webp(h: bytes) -> Optional[str]:
    if h[:4] == b"RIFF" and h[8:12] == b"WEBP":
        return "image/webp"
    return None


_DIB_HEADER_SIZES = {12, 40, 52, 56, 64, 108, 124}


@_sniffer
def _bmp(h: bytes) -> Optional[str]:
    # BITMAPFILEHEADER is followed by a DIB header that starts with its own size
    if h[:2] == b"BM" and int.from_bytes(h[14:18], "little") in _DIB_HEADER_SIZES:
        return "image/bmp"
    return None


@_sniffer
def _tiff(h: bytes) -> Optional[str]:
    if h[:4] in (b"II*\x00", b"MM\x00*"):
        return "image/tiff"
    return None


# Must stay last: only consulted when no binary signature matched.
@_sniffer
def _text(h: bytes) -> Optional[str]:
    if not h:
        return None
    # A multi-byte character may have been cut at the sniff boundary
    try:
        decoded = h.decode("utf-8")
    except UnicodeDecodeError as e:
        if e.reason != "unexpected end of data":
            return None
        decoded = h[: e.start].decode("utf-8")
    if not decoded or any(ord(c) < 32 and c not in "\t\n\r\f" for c in decoded):
        return None
    return "text/plain"


def declared_mime(value: Optional[str]) -> Optional[str]:
    """Normalized declared type, or None when blank or uninformative."""
    if not value:
        return None
    mime = value.split(";", 1)[0].strip().lower()
    if not mime or mime in GENERIC_MIME_TYPES:
        return None
    return mime


def sniff_mime(payload: bytes) -> Optional[str]:
    """Guess the type from the first bytes of the payload."""
    head = bytes(payload[:SNIFF_SIZE])
    for sniff in _sniffers:
        mime = sniff(head)
        if mime:
            return mime
    return None


def extension_mime(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    return EXTENSION_MIME_TYPES.get(PurePath(filename).suffix.lower())


def detect_mime(
    payload: bytes,
    filename: Optional[str] = None,
    declared: Optional[str] = None,
) -> Optional[str]:
    """Effective MIME type of an upload, or None if no layer recognizes it."""
    return declared_mime(declared) or sniff_mime(payload) or extension_mime(filename)
