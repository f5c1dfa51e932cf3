# tests/test_transcoder.py
from __future__ import annotations

import pytest

from uniconv._utils import default_legacy_codec
from uniconv.enums import DetectedEncoding
from uniconv.errors import (
    EmptyInputError,
    MalformedInputError,
    UnsupportedEncodingError,
)
from uniconv.pipeline.orchestrator import resolve_encoding
from uniconv.transcoder import code_units, codec_for, decode, transcode


def test_utf8_round_trip():
    text = "Hello, wörld! 你好 🌍"
    data = text.encode()
    encoding = resolve_encoding(data)
    assert encoding is DetectedEncoding.UTF8
    assert decode(data, encoding) == text
    assert transcode(data, encoding) == code_units(text)


def test_utf8_bom_is_consumed():
    assert decode(b"\xef\xbb\xbfAB", DetectedEncoding.UTF8_BOM) == "AB"
    assert transcode(b"\xef\xbb\xbfAB", DetectedEncoding.UTF8_BOM) == (0x41, 0x42)


def test_bom_only_buffer():
    assert decode(b"\xef\xbb\xbf", DetectedEncoding.UTF8_BOM) == ""


def test_utf16_le_bom():
    assert decode(b"\xff\xfeA\x00B\x00", DetectedEncoding.UTF16_LE_BOM) == "AB"


def test_utf16_be_bom():
    assert decode(b"\xfe\xff\x00A\x00B", DetectedEncoding.UTF16_BE_BOM) == "AB"


def test_utf16_without_bom():
    text = "Zürich"
    assert decode(text.encode("utf-16-le"), DetectedEncoding.UTF16_LE) == text
    assert decode(text.encode("utf-16-be"), DetectedEncoding.UTF16_BE) == text


@pytest.mark.parametrize(
    "encoding", [DetectedEncoding.UTF32_LE, DetectedEncoding.UTF32_BE]
)
def test_utf32_is_unsupported(encoding):
    with pytest.raises(UnsupportedEncodingError) as exc_info:
        transcode(b"A\x00\x00\x00", encoding)
    assert exc_info.value.encoding is encoding


def test_empty_input():
    with pytest.raises(EmptyInputError):
        transcode(b"", DetectedEncoding.UTF8)


def test_legacy_codec():
    assert decode(b"caf\xe9", DetectedEncoding.UNSPECIFIED, "cp1252") == "café"


def test_legacy_codec_unmappable_byte():
    with pytest.raises(MalformedInputError) as exc_info:
        decode(b"ab\x81", DetectedEncoding.UNSPECIFIED, "cp1252")
    assert exc_info.value.codec == "cp1252"
    assert exc_info.value.offset == 2
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_malformed_offset_counts_the_bom():
    with pytest.raises(MalformedInputError) as exc_info:
        decode(b"\xef\xbb\xbfab\xff", DetectedEncoding.UTF8_BOM)
    assert exc_info.value.offset == 5


def test_odd_length_utf16():
    with pytest.raises(MalformedInputError):
        decode(b"\xff\xfeA", DetectedEncoding.UTF16_LE_BOM)


def test_malformed_is_a_value_error():
    with pytest.raises(ValueError):
        decode(b"\x80", DetectedEncoding.UTF8)


def test_codec_for():
    assert codec_for(DetectedEncoding.UTF8_BOM) == "utf-8"
    assert codec_for(DetectedEncoding.UTF16_BE_BOM) == "utf-16-be"
    assert codec_for(DetectedEncoding.UNSPECIFIED, "latin-1") == "iso8859-1"
    assert codec_for(DetectedEncoding.UNSPECIFIED) == default_legacy_codec()


def test_code_units_bmp():
    assert code_units("Aé€") == (0x41, 0xE9, 0x20AC)


def test_code_units_surrogate_pair():
    assert code_units("🌍") == (0xD83C, 0xDF0D)


def test_code_units_match_utf16_encoding():
    text = "mixed 𝄞 text ✓"
    encoded = text.encode("utf-16-le")
    expected = tuple(
        int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2)
    )
    assert code_units(text) == expected
