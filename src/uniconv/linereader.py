"""LineReader: encoding-aware line splitting over a byte stream."""

from __future__ import annotations

import codecs
import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from uniconv._utils import (
    DEFAULT_CHUNK_SIZE,
    _resolve_legacy_codec,
    _validate_chunk_size,
)
from uniconv.enums import DetectedEncoding, Endianness, LineReaderState
from uniconv.errors import MalformedInputError, UnsupportedEncodingError

# Codecs used on the first attempt.  The BOM-bearing forms use codecs that
# consume the mark themselves.
_PRIMARY_CODECS: dict[DetectedEncoding, str] = {
    DetectedEncoding.UTF8: "utf-8",
    DetectedEncoding.UTF8_BOM: "utf-8-sig",
    DetectedEncoding.UTF16_LE_BOM: "utf-16",
    DetectedEncoding.UTF16_BE_BOM: "utf-16",
    DetectedEncoding.UTF16_LE: "utf-16-le",
    DetectedEncoding.UTF16_BE: "utf-16-be",
}

# A UTF-16 stream declared with a BOM is re-opened as raw UTF-16 of the
# same byte order.
_RAW_UTF16_CODECS: dict[Endianness, str] = {
    Endianness.LITTLE: "utf-16-le",
    Endianness.BIG: "utf-16-be",
}

# U+FEFF in either byte order; never line content.
_STRAY_BOMS = frozenset("\ufeff\ufffe")
_SPECIAL = re.compile("[\r\n\ufeff\ufffe]")

_MAX_ATTEMPTS = 2


class LineReader:
    """Buffered line cursor over a byte stream of a known encoding.

    Lines are returned without their terminator.  ``\\n``, ``\\r`` and
    ``\\r\\n`` all end a line; BOM characters anywhere in the stream are
    dropped.  If the very first line cannot be decoded, the stream is opened
    again from the start under a fallback codec and the read is retried
    once.  Any other decode failure is terminal.
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | BinaryIO,
        encoding: DetectedEncoding,
        *,
        legacy_codec: str | None = None,
        fallback_codec: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Open *source* for line reading.

        :param source: A path, or a seekable binary stream positioned at the
            start of the text.  Streams passed in are not closed by the
            reader.
        :param encoding: The resolved encoding of the stream.
        :param legacy_codec: Codec for ``UNSPECIFIED`` data and for fallback
            re-opens; defaults to the locale's preferred encoding.  On a
            UTF-8 locale that default is ``utf-8``, so ``UNSPECIFIED`` data
            fails to decode and UTF-8 streams get no fallback; pass the
            code page explicitly in that case.
        :param fallback_codec: Override the codec used for the re-open.
        :param chunk_size: Bytes read from the stream at a time.
        :raises UnsupportedEncodingError: For the UTF-32 forms.
        """
        if not encoding.is_supported:
            raise UnsupportedEncodingError(encoding)
        _validate_chunk_size(chunk_size)
        self.logger = logging.getLogger(__name__)
        self.encoding = encoding
        self.chunk_size = chunk_size

        legacy = _resolve_legacy_codec(legacy_codec)
        self._primary_codec = _PRIMARY_CODECS.get(encoding, legacy)
        if fallback_codec is not None:
            self._fallback_codec: str | None = codecs.lookup(fallback_codec).name
        elif encoding.is_utf16 and encoding.bom:
            self._fallback_codec = _RAW_UTF16_CODECS[encoding.endianness]
        elif encoding is DetectedEncoding.UNSPECIFIED:
            self._fallback_codec = None
        else:
            self._fallback_codec = legacy
        if self._fallback_codec == codecs.lookup(self._primary_codec).name:
            self._fallback_codec = None

        if isinstance(source, (str, os.PathLike)):
            self._path: Path | None = Path(source)
            self._stream: BinaryIO = self._path.open("rb")
            self._start = 0
        else:
            self._path = None
            self._stream = source
            self._start = source.tell()

        self._attempts = 0
        self._reopened = False
        self._lines_read = 0
        self._state = LineReaderState.READING
        self._closed = False
        self._reset(self._primary_codec)

    def _reset(self, codec: str) -> None:
        self._codec = codec
        self._decoder = codecs.getincrementaldecoder(codec)(errors="strict")
        self._text = ""
        self._index = 0
        self._position = 0
        self._byte_offset = 0
        self._pending = b""
        self._eof = False
        self._error: MalformedInputError | None = None

    def _reopen(self, codec: str) -> None:
        """Go back to the start of the source and decode it as *codec*."""
        if self._path is not None:
            self._stream.close()
            self._stream = self._path.open("rb")
        else:
            self._stream.seek(self._start)
        self._reset(codec)
        self._reopened = True
        # The fallback codec may not know the mark; skip it here and let the
        # stray-BOM filter handle any that remain.
        bom = self.encoding.bom
        if bom:
            head = self._stream.read(len(bom))
            if head == bom:
                self._byte_offset = len(bom)
            else:
                self._pending = head

    def _fill(self) -> None:
        """Decode the next chunk into the text buffer."""
        chunk = self._stream.read(self.chunk_size)
        if self._pending:
            chunk = self._pending + chunk
            self._pending = b""
        final = not chunk
        state = self._decoder.getstate()
        try:
            text = self._decoder.decode(chunk, final)
        except UnicodeError:
            # Redo the chunk a byte at a time to keep everything before the
            # bad byte; the error is raised once the reader gets there.
            self._decoder.setstate(state)
            text = self._decode_bytewise(chunk, final)
        self._byte_offset += len(chunk)
        self._eof = final
        self._text = text
        self._index = 0

    def _decode_bytewise(self, chunk: bytes, final: bool) -> str:
        pieces = []
        for i in range(len(chunk)):
            try:
                pieces.append(self._decoder.decode(chunk[i : i + 1]))
            except UnicodeError as exc:
                self._set_error(exc, self._byte_offset + i)
                return "".join(pieces)
        if final:
            try:
                pieces.append(self._decoder.decode(b"", True))
            except UnicodeError as exc:
                self._set_error(exc, self._byte_offset)
        return "".join(pieces)

    def _set_error(self, exc: UnicodeError, offset: int) -> None:
        # The BOM-sniffing "utf-16" decoder raises a bare UnicodeError
        # without a reason when the mark is missing.
        reason = exc.reason if isinstance(exc, UnicodeDecodeError) else str(exc)
        error = MalformedInputError(self._codec, reason, offset)
        error.__cause__ = exc
        self._error = error

    def _available(self) -> bool:
        """Make sure unconsumed text is buffered; False at end or on error."""
        while self._index >= len(self._text):
            if self._error is not None or self._eof:
                return False
            self._fill()
        return True

    def _consume(self, count: int) -> None:
        self._index += count
        self._position += count

    def _read_line(self) -> str | None:
        self._state = LineReaderState.READING
        parts: list[str] = []
        while True:
            if not self._available():
                if self._error is not None:
                    raise self._error
                line = "".join(parts)
                if line:
                    break
                self._state = LineReaderState.END_OF_STREAM
                return None

            match = _SPECIAL.search(self._text, self._index)
            if match is None:
                parts.append(self._text[self._index :])
                self._consume(len(self._text) - self._index)
                continue

            parts.append(self._text[self._index : match.start()])
            self._consume(match.end() - self._index)
            char = match.group()
            if char in _STRAY_BOMS:
                continue
            if char == "\r" and self._available() and self._text[self._index] == "\n":
                self._consume(1)
            line = "".join(parts)
            break

        self._state = LineReaderState.END_OF_LINE
        self._lines_read += 1
        return line

    def read_line(self) -> str | None:
        """Return the next line, or ``None`` once the stream is exhausted.

        :raises MalformedInputError: When the stream cannot be decoded.  This
            is raised once; the reader is then in the ``FAILED`` state and
            returns ``None`` from then on.
        """
        if self._closed:
            msg = "read_line() called on a closed LineReader"
            raise ValueError(msg)
        if self._state in (LineReaderState.END_OF_STREAM, LineReaderState.FAILED):
            return None

        while True:
            try:
                return self._read_line()
            except MalformedInputError as exc:
                self._attempts += 1
                can_retry = (
                    self._lines_read == 0
                    and self._attempts < _MAX_ATTEMPTS
                    and self._fallback_codec is not None
                )
                if not can_retry:
                    self._state = LineReaderState.FAILED
                    self.logger.debug("Line %d failed: %s", self._lines_read + 1, exc)
                    raise
                self.logger.debug(
                    "First line failed under %s (%s); reopening as %s",
                    self._codec,
                    exc.reason,
                    self._fallback_codec,
                )
                self._reopen(self._fallback_codec)

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line

    def close(self) -> None:
        """Release the stream if the reader opened it."""
        if not self._closed:
            self._closed = True
            if self._path is not None:
                self._stream.close()

    def __enter__(self) -> LineReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def state(self) -> LineReaderState:
        """Where the reader is in its lifecycle."""
        return self._state

    @property
    def codec(self) -> str:
        """The codec currently decoding the stream."""
        return self._codec

    @property
    def fallback_used(self) -> bool:
        """Whether the stream was re-opened under the fallback codec."""
        return self._reopened

    @property
    def position(self) -> int:
        """Number of characters consumed from the decoded stream."""
        return self._position

    @property
    def lines_read(self) -> int:
        return self._lines_read
