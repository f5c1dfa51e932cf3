"""Enumerations for uniconv."""

from __future__ import annotations

import enum


class Endianness(enum.Enum):
    """Byte order of a 16- or 32-bit encoding form."""

    LITTLE = "little"
    BIG = "big"


class DetectedEncoding(enum.Enum):
    """The closed set of encodings the resolver can produce.

    Each member carries what a decoder needs: the BOM it implies (empty when
    none), the Python codec for the payload after the BOM, and the byte order
    of 16/32-bit forms.  ``UNSPECIFIED`` has no codec of its own; it is
    decoded with the ambient legacy multibyte codec.
    """

    UNSPECIFIED = ("ansi", b"", None, None)
    UTF8 = ("utf-8", b"", "utf-8", None)
    UTF8_BOM = ("utf-8-sig", b"\xef\xbb\xbf", "utf-8", None)
    UTF16_LE_BOM = ("utf-16-le-bom", b"\xff\xfe", "utf-16-le", Endianness.LITTLE)
    UTF16_BE_BOM = ("utf-16-be-bom", b"\xfe\xff", "utf-16-be", Endianness.BIG)
    UTF16_LE = ("utf-16-le", b"", "utf-16-le", Endianness.LITTLE)
    UTF16_BE = ("utf-16-be", b"", "utf-16-be", Endianness.BIG)
    UTF32_LE = ("utf-32-le", b"", "utf-32-le", Endianness.LITTLE)
    UTF32_BE = ("utf-32-be", b"", "utf-32-be", Endianness.BIG)

    def __init__(
        self, label: str, bom: bytes, codec: str | None, endianness: Endianness | None
    ) -> None:
        self.label = label
        self.bom = bom
        self.codec = codec
        self.endianness = endianness

    @property
    def is_supported(self) -> bool:
        """False for the UTF-32 forms, which are never decoded."""
        return self not in (DetectedEncoding.UTF32_LE, DetectedEncoding.UTF32_BE)

    @property
    def is_utf16(self) -> bool:
        return self.codec is not None and self.codec.startswith("utf-16")

    def __str__(self) -> str:
        return self.label


class Utf8Class(enum.Enum):
    """Three-way verdict of the UTF-8 validity classifier."""

    #: Only ASCII controls and printables; valid in UTF-8 and most code pages.
    ASCII = "ascii"
    #: High-bit bytes that all form well-formed multi-byte sequences.
    UTF8 = "utf-8"
    #: High-bit bytes that do not form valid UTF-8.
    LEGACY = "legacy"


class LineReaderState(enum.Enum):
    """Lifecycle of a :class:`~uniconv.linereader.LineReader`."""

    READING = "reading"
    END_OF_LINE = "end-of-line"
    END_OF_STREAM = "end-of-stream"
    FAILED = "failed"
