"""Internal shared utilities for uniconv."""

from __future__ import annotations

import codecs
import locale

#: Default number of leading bytes examined when sniffing an encoding.
DEFAULT_SNIFF_BYTES: int = 1024

#: Default number of bytes pulled from a stream per read by the line reader.
DEFAULT_CHUNK_SIZE: int = 8192


def default_legacy_codec() -> str:
    """Return the codec used for ``UNSPECIFIED`` (legacy "ANSI") data.

    This is the locale's preferred narrow encoding, normalized to the
    canonical Python codec name.  On a UTF-8 locale this is ``utf-8``.
    """
    return codecs.lookup(locale.getpreferredencoding(False)).name


def _resolve_legacy_codec(legacy_codec: str | None) -> str:
    """Normalize *legacy_codec*, falling back to the locale default."""
    if legacy_codec is None:
        return default_legacy_codec()
    return codecs.lookup(legacy_codec).name


def _validate_max_bytes(max_bytes: int) -> None:
    """Raise ValueError if *max_bytes* is not a positive integer."""
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 1:
        msg = "max_bytes must be a positive integer"
        raise ValueError(msg)


def _validate_chunk_size(chunk_size: int) -> None:
    """Raise ValueError if *chunk_size* is not a positive integer."""
    if (
        isinstance(chunk_size, bool)
        or not isinstance(chunk_size, int)
        or chunk_size < 1
    ):
        msg = "chunk_size must be a positive integer"
        raise ValueError(msg)


def _as_bytes(data: bytes | bytearray | memoryview) -> bytes:
    return data if isinstance(data, bytes) else bytes(data)
