"""Content-type detection for stored registration documents."""

from __future__ import annotations

from typing import Final

DEFAULT_IMAGE_TYPE: Final[str] = "image/jpeg"

# (magic prefix, media type); checked in order
_SIGNATURES: Final[tuple[tuple[bytes, str], ...]] = (
    (b"\x89PNG", "image/png"),
    (b"\xff\xd8", "image/jpeg"),
    (b"GIF", "image/gif"),
    (b"BM", "image/bmp"),
)


def sniff_image_type(data: bytes) -> str:
    """Guess the media type of *data* from its leading bytes.

    Anything shorter than five bytes or unrecognised is reported as JPEG.
    """
    if len(data) > 4:
        for prefix, media_type in _SIGNATURES:
            if data.startswith(prefix):
                return media_type
    return DEFAULT_IMAGE_TYPE
