"""Text encoding detection and transcoding for buffers of unknown origin."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from uniconv._utils import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SNIFF_BYTES,
    _as_bytes,
    _validate_max_bytes,
)
from uniconv.enums import DetectedEncoding, LineReaderState, Utf8Class
from uniconv.errors import (
    EmptyInputError,
    MalformedInputError,
    UniconvError,
    UnsupportedEncodingError,
)
from uniconv.linereader import LineReader
from uniconv.pipeline.candidates import (
    CandidateDetector,
    CharsetNormalizerDetector,
)
from uniconv.pipeline.orchestrator import resolve_encoding
from uniconv.pipeline.utf8 import is_valid_utf8
from uniconv.transcoder import code_units
from uniconv.transcoder import decode as _decode
from uniconv.transcoder import transcode as _transcode

__version__ = "1.0.0"
__all__ = [
    "CandidateDetector",
    "CharsetNormalizerDetector",
    "DetectedEncoding",
    "EmptyInputError",
    "LineReader",
    "LineReaderState",
    "MalformedInputError",
    "UniconvError",
    "UnsupportedEncodingError",
    "Utf8Class",
    "code_units",
    "convert_from_bytes",
    "decode",
    "detect_encoding",
    "is_valid_utf8",
    "open_line_reader",
    "read_bytes",
    "read_lines",
    "transcode",
]


def detect_encoding(
    byte_str: bytes | bytearray,
    detector: CandidateDetector | None = None,
    max_bytes: int = DEFAULT_SNIFF_BYTES,
) -> DetectedEncoding:
    """Detect the encoding of the given byte string.

    Only the first *max_bytes* bytes are examined.

    :raises EmptyInputError: If *byte_str* is empty.
    :raises UnsupportedEncodingError: If *detector* reports UTF-32.
    """
    return resolve_encoding(_as_bytes(byte_str), detector, max_bytes=max_bytes)


def decode(
    byte_str: bytes | bytearray,
    encoding: DetectedEncoding | None = None,
    legacy_codec: str | None = None,
    detector: CandidateDetector | None = None,
) -> str:
    """Decode a whole buffer, detecting its encoding when none is given."""
    data = _as_bytes(byte_str)
    if encoding is None:
        encoding = resolve_encoding(data, detector)
    return _decode(data, encoding, legacy_codec)


def transcode(
    byte_str: bytes | bytearray,
    encoding: DetectedEncoding | None = None,
    legacy_codec: str | None = None,
    detector: CandidateDetector | None = None,
) -> tuple[int, ...]:
    """Transcode a whole buffer into UTF-16 code units.

    When *encoding* is ``None`` it is detected first.

    :raises EmptyInputError: If *byte_str* is empty.
    :raises UnsupportedEncodingError: For UTF-32 data.
    :raises MalformedInputError: If the bytes do not decode.
    """
    data = _as_bytes(byte_str)
    if encoding is None:
        encoding = resolve_encoding(data, detector)
    return _transcode(data, encoding, legacy_codec)


def convert_from_bytes(
    byte_str: bytes | bytearray,
    legacy_codec: str | None = None,
    detector: CandidateDetector | None = None,
) -> tuple[DetectedEncoding, str]:
    """Detect and decode in one step.

    :returns: The detected encoding and the decoded text.
    """
    data = _as_bytes(byte_str)
    encoding = resolve_encoding(data, detector)
    return encoding, _decode(data, encoding, legacy_codec)


def read_bytes(path: str | os.PathLike[str], max_bytes: int | None = None) -> bytes:
    """Read a file, or its first *max_bytes* bytes.

    :raises FileNotFoundError: If *path* does not exist.
    :raises EmptyInputError: If the file is empty.
    """
    if max_bytes is not None:
        _validate_max_bytes(max_bytes)
    with Path(path).open("rb") as f:
        data = f.read() if max_bytes is None else f.read(max_bytes)
    if not data:
        raise EmptyInputError(os.fspath(path))
    return data


def open_line_reader(
    source: str | os.PathLike[str] | BinaryIO,
    encoding: DetectedEncoding | None = None,
    *,
    legacy_codec: str | None = None,
    fallback_codec: str | None = None,
    detector: CandidateDetector | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> LineReader:
    """Open a :class:`LineReader` over a path or seekable binary stream.

    When *encoding* is ``None`` it is resolved from the first
    ``DEFAULT_SNIFF_BYTES`` bytes of the source, which is then rewound.
    """
    if encoding is None:
        if isinstance(source, (str, os.PathLike)):
            head = read_bytes(source, DEFAULT_SNIFF_BYTES + 1)
        else:
            start = source.tell()
            head = source.read(DEFAULT_SNIFF_BYTES + 1)
            source.seek(start)
        encoding = resolve_encoding(head, detector)
    return LineReader(
        source,
        encoding,
        legacy_codec=legacy_codec,
        fallback_codec=fallback_codec,
        chunk_size=chunk_size,
    )


def read_lines(
    source: str | os.PathLike[str] | BinaryIO,
    encoding: DetectedEncoding | None = None,
    *,
    legacy_codec: str | None = None,
    detector: CandidateDetector | None = None,
) -> list[str]:
    """Read every line of *source*.

    :raises MalformedInputError: If the source cannot be decoded even after
        the first-line fallback.
    """
    with open_line_reader(
        source, encoding, legacy_codec=legacy_codec, detector=detector
    ) as reader:
        return list(reader)
