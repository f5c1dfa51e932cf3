"""Stage 1: BOM (Byte Order Mark) detection."""

from __future__ import annotations

from uniconv.enums import DetectedEncoding

# Ordered longest-first so the 3-byte UTF-8 mark is checked before the
# 2-byte UTF-16 marks.
_BOMS: tuple[tuple[bytes, DetectedEncoding], ...] = (
    (b"\xef\xbb\xbf", DetectedEncoding.UTF8_BOM),
    (b"\xff\xfe", DetectedEncoding.UTF16_LE_BOM),
    (b"\xfe\xff", DetectedEncoding.UTF16_BE_BOM),
)


def detect_bom(data: bytes, begin: int = 0, end: int | None = None) -> DetectedEncoding:
    """Check for a BOM at ``data[begin:end]``.

    :param data: The raw byte data to examine.
    :param begin: Start of the window.
    :param end: End of the window; defaults to ``len(data)``.
    :returns: The BOM-bearing :class:`DetectedEncoding`, or
        ``DetectedEncoding.UNSPECIFIED`` when no mark matches.
    """
    if end is None:
        end = len(data)
    assert 0 <= begin <= end <= len(data), "invalid byte range"

    for bom_bytes, encoding in _BOMS:
        # startswith never reads past *end*, so a short window just misses
        if data.startswith(bom_bytes, begin, end):
            return encoding
    return DetectedEncoding.UNSPECIFIED


def strip_bom(data: bytes, encoding: DetectedEncoding) -> bytes:
    """Return *data* without the BOM implied by *encoding*, if present."""
    if encoding.bom and data.startswith(encoding.bom):
        return data[len(encoding.bom) :]
    return data
