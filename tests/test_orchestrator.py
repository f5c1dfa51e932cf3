# tests/test_orchestrator.py
from __future__ import annotations

import pytest

from uniconv.enums import DetectedEncoding
from uniconv.errors import EmptyInputError, UnsupportedEncodingError
from uniconv.pipeline.orchestrator import resolve_encoding


def test_empty_input():
    with pytest.raises(EmptyInputError):
        resolve_encoding(b"")


def test_bom_wins_over_invalid_payload():
    assert resolve_encoding(b"\xef\xbb\xbf\x80\x80") is DetectedEncoding.UTF8_BOM


def test_utf16_boms():
    assert resolve_encoding(b"\xff\xfeA\x00") is DetectedEncoding.UTF16_LE_BOM
    assert resolve_encoding(b"\xfe\xff\x00A") is DetectedEncoding.UTF16_BE_BOM


def test_bom_skips_detector(make_detector):
    detector = make_detector([("utf-32-le", 1.0)])
    assert resolve_encoding(b"\xfe\xff\x00A", detector) is DetectedEncoding.UTF16_BE_BOM
    assert detector.calls == 0
    assert detector.initialized == 0


def test_ascii_resolves_to_utf8():
    assert resolve_encoding(b"Hello, world!\n") is DetectedEncoding.UTF8


def test_valid_utf8_resolves_to_utf8():
    assert resolve_encoding("Grüße aus Köln".encode()) is DetectedEncoding.UTF8


def test_lone_continuation_falls_to_legacy():
    assert resolve_encoding(b"abc\x80def") is DetectedEncoding.UNSPECIFIED


def test_truncated_sequence_at_end_of_buffer_is_legacy():
    assert resolve_encoding(b"abc\xc3") is DetectedEncoding.UNSPECIFIED


def test_sequence_cut_by_sniff_window_is_utf8():
    data = "é".encode() * 600
    assert resolve_encoding(data, max_bytes=1025) is DetectedEncoding.UTF8


def test_invalid_max_bytes():
    with pytest.raises(ValueError, match="max_bytes"):
        resolve_encoding(b"abc", max_bytes=0)


def test_detector_first_recognized_candidate_wins(make_detector):
    detector = make_detector([("cp1252", 0.9), ("utf_16_le", 0.8), ("utf-8", 0.7)])
    assert resolve_encoding(b"a\x00b\x00", detector) is DetectedEncoding.UTF16_LE
    assert detector.released == 1


def test_detector_ascii_maps_to_utf8(make_detector):
    detector = make_detector([("ascii", 1.0)])
    assert resolve_encoding(b"\x80", detector) is DetectedEncoding.UTF8


def test_detector_big_endian(make_detector):
    detector = make_detector([("utf-16-be", 1.0)])
    assert resolve_encoding(b"\x00a\x00b", detector) is DetectedEncoding.UTF16_BE


@pytest.mark.parametrize("codepage", ["utf-32-le", "utf_32_be", "utf-32"])
def test_detector_utf32_is_fatal(make_detector, codepage):
    detector = make_detector([(codepage, 1.0), ("utf-8", 0.9)])
    with pytest.raises(UnsupportedEncodingError):
        resolve_encoding(b"a\x00\x00\x00", detector)
    assert detector.released == 1
    assert not detector.active


def test_unrecognized_candidates_fall_back_to_classifier(make_detector):
    detector = make_detector([("cp1252", 0.9), ("shift_jis", 0.5)])
    assert resolve_encoding(b"caf\xe9", detector) is DetectedEncoding.UNSPECIFIED
    assert resolve_encoding("café".encode(), detector) is DetectedEncoding.UTF8


def test_detector_without_candidates(make_detector):
    detector = make_detector([])
    assert resolve_encoding(b"plain", detector) is DetectedEncoding.UTF8


def test_detector_failure_propagates_after_release(make_detector):
    detector = make_detector(error=RuntimeError("detector crashed"))
    with pytest.raises(RuntimeError, match="detector crashed"):
        resolve_encoding(b"plain", detector)
    assert detector.released == 1


def test_detector_sees_only_the_sniff_window(make_detector):
    seen = []

    detector = make_detector([("utf-8", 1.0)])
    original = detector._detect

    def recording(data: bytes):
        seen.append(data)
        return original(data)

    detector._detect = recording
    resolve_encoding(b"x" * 5000, detector, max_bytes=100)
    assert seen == [b"x" * 100]
