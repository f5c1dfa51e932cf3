"""Transcoding of whole buffers into text and UTF-16 code units."""

from __future__ import annotations

from uniconv._utils import _resolve_legacy_codec
from uniconv.enums import DetectedEncoding
from uniconv.errors import (
    EmptyInputError,
    MalformedInputError,
    UnsupportedEncodingError,
)
from uniconv.pipeline.bom import strip_bom


def codec_for(encoding: DetectedEncoding, legacy_codec: str | None = None) -> str:
    """Return the Python codec that decodes the payload of *encoding*.

    The payload is what follows the BOM, so BOM variants map to their
    byte-order-specific codec.

    :raises UnsupportedEncodingError: For the UTF-32 forms.
    """
    if not encoding.is_supported:
        raise UnsupportedEncodingError(encoding)
    if encoding.codec is None:
        return _resolve_legacy_codec(legacy_codec)
    return encoding.codec


def decode(
    data: bytes, encoding: DetectedEncoding, legacy_codec: str | None = None
) -> str:
    """Decode all of *data* under *encoding*, dropping the BOM it implies.

    :param data: The complete raw buffer.
    :param encoding: The encoding returned by the resolver.
    :param legacy_codec: Codec for ``UNSPECIFIED`` data; defaults to the
        locale's preferred encoding.  That is ``utf-8`` on most Unix
        systems, which cannot decode ``UNSPECIFIED`` data, so pass the
        expected code page (``"cp1252"``, ...) there.
    :raises EmptyInputError: If *data* is empty.
    :raises UnsupportedEncodingError: For the UTF-32 forms.
    :raises MalformedInputError: If the bytes do not decode.
    """
    if not data:
        raise EmptyInputError
    codec = codec_for(encoding, legacy_codec)
    payload = strip_bom(data, encoding)
    try:
        return payload.decode(codec, errors="strict")
    except UnicodeDecodeError as exc:
        offset = exc.start + len(data) - len(payload)
        raise MalformedInputError(codec, exc.reason, offset) from exc


def code_units(text: str) -> tuple[int, ...]:
    """Split *text* into UTF-16 code units.

    Code points above U+FFFF become a surrogate pair.
    """
    units: list[int] = []
    for char in text:
        cp = ord(char)
        if cp > 0xFFFF:
            cp -= 0x10000
            units.append(0xD800 | (cp >> 10))
            units.append(0xDC00 | (cp & 0x3FF))
        else:
            units.append(cp)
    return tuple(units)


def transcode(
    data: bytes, encoding: DetectedEncoding, legacy_codec: str | None = None
) -> tuple[int, ...]:
    """Transcode *data* into a flat sequence of UTF-16 code units.

    Same contract as :func:`decode`.
    """
    return code_units(decode(data, encoding, legacy_codec))
