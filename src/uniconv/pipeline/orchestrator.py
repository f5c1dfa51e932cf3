"""Pipeline orchestrator: resolves one encoding from all detection stages."""

from __future__ import annotations

import logging

from uniconv._utils import DEFAULT_SNIFF_BYTES, _validate_max_bytes
from uniconv.enums import DetectedEncoding, Utf8Class
from uniconv.errors import EmptyInputError, UnsupportedEncodingError
from uniconv.pipeline.bom import detect_bom
from uniconv.pipeline.candidates import CandidateDetector
from uniconv.pipeline.utf8 import classify_utf8

logger = logging.getLogger(__name__)

# Codepages an external detector may name that we act on.  ASCII is decoded
# as UTF-8, its superset.  Python's generic "utf-32" means the byte order is
# unknown; it is unsupported either way.
_SUPPORTED_CODEPAGES: dict[str, DetectedEncoding] = {
    "ascii": DetectedEncoding.UTF8,
    "utf-8": DetectedEncoding.UTF8,
    "utf-16-le": DetectedEncoding.UTF16_LE,
    "utf-16-be": DetectedEncoding.UTF16_BE,
    "utf-32-le": DetectedEncoding.UTF32_LE,
    "utf-32-be": DetectedEncoding.UTF32_BE,
    "utf-32": DetectedEncoding.UTF32_LE,
}


def _resolve_from_candidates(
    window: bytes, detector: CandidateDetector
) -> DetectedEncoding | None:
    with detector.session():
        candidates = detector.detect(window)
    for candidate in candidates:
        encoding = _SUPPORTED_CODEPAGES.get(candidate.codepage)
        if encoding is None:
            continue
        logger.debug(
            "Detector candidate %s (confidence %.2f) selected",
            candidate.codepage,
            candidate.confidence,
        )
        if not encoding.is_supported:
            raise UnsupportedEncodingError(encoding)
        return encoding
    logger.debug("No recognized candidate among %d from detector", len(candidates))
    return None


def resolve_encoding(
    data: bytes,
    detector: CandidateDetector | None = None,
    max_bytes: int = DEFAULT_SNIFF_BYTES,
) -> DetectedEncoding:
    """Resolve the encoding of *data* from its leading *max_bytes* bytes.

    Stages run in strict precedence: BOM, then the external *detector* when
    one is given, then the UTF-8 validity classifier.

    :param data: The raw byte data to examine.
    :param detector: Optional external multi-candidate detector.
    :param max_bytes: Size of the sniff window.
    :returns: The resolved :class:`DetectedEncoding`.
    :raises EmptyInputError: If *data* is empty.
    :raises UnsupportedEncodingError: If the detector reports UTF-32.
    """
    _validate_max_bytes(max_bytes)
    if not data:
        raise EmptyInputError
    window = data[:max_bytes]

    bom_result = detect_bom(window)
    if bom_result is not DetectedEncoding.UNSPECIFIED:
        logger.debug("BOM found: %s", bom_result)
        return bom_result

    if detector is not None:
        candidate_result = _resolve_from_candidates(window, detector)
        if candidate_result is not None:
            return candidate_result

    verdict = classify_utf8(window, truncated=len(data) > len(window))
    logger.debug("UTF-8 classifier verdict: %s", verdict.value)
    if verdict is Utf8Class.LEGACY:
        return DetectedEncoding.UNSPECIFIED
    return DetectedEncoding.UTF8
