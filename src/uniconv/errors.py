"""Exceptions raised by uniconv."""

from __future__ import annotations

from uniconv.enums import DetectedEncoding


class UniconvError(Exception):
    """Base class for uniconv errors."""


class EmptyInputError(UniconvError, ValueError):
    """Raised when detection or transcoding is asked to work on no bytes."""

    def __init__(self, what: str = "input") -> None:
        super().__init__(f"{what} is empty")


class UnsupportedEncodingError(UniconvError, ValueError):
    """Raised for encodings that are recognized but never decoded (UTF-32)."""

    def __init__(self, encoding: DetectedEncoding) -> None:
        self.encoding = encoding
        super().__init__(f"unsupported encoding: {encoding}")


class MalformedInputError(UniconvError, ValueError):
    """Raised when bytes do not decode under the chosen codec.

    :attr:`offset` is the position of the first offending byte relative to the
    start of the decoded payload, or ``None`` when it is not known.
    """

    def __init__(self, codec: str, reason: str, offset: int | None = None) -> None:
        self.codec = codec
        self.reason = reason
        self.offset = offset
        where = f" at byte {offset}" if offset is not None else ""
        super().__init__(f"cannot decode as {codec}{where}: {reason}")
