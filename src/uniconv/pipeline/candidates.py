"""Stage 3: external multi-candidate detectors.

A detector is a process-wide resource: it must be acquired before
:meth:`~CandidateDetector.detect` is called and released afterwards, and only
one detection may hold it at a time.  :meth:`CandidateDetector.session`
wraps that pairing so release runs on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator

from uniconv.pipeline import CandidateScore

logger = logging.getLogger(__name__)

# Maximum number of candidates taken from a detector per call.
MAX_CANDIDATES = 10


class CandidateDetector:
    """Base class for scored, ordered encoding guessers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = False

    @property
    def active(self) -> bool:
        """Whether the detector is currently acquired."""
        return self._active

    def acquire(self) -> None:
        """Initialize the detector for exclusive use by the caller."""
        self._lock.acquire()
        try:
            self._initialize()
        except BaseException:
            self._lock.release()
            raise
        self._active = True

    def release(self) -> None:
        """Tear the detector down and give up exclusive use."""
        if not self._active:
            msg = "release() called on a detector that is not acquired"
            raise RuntimeError(msg)
        try:
            self._shutdown()
        finally:
            self._active = False
            self._lock.release()

    @contextlib.contextmanager
    def session(self) -> Iterator[CandidateDetector]:
        """Acquire the detector for the duration of a ``with`` block."""
        self.acquire()
        try:
            yield self
        finally:
            self.release()

    def detect(self, data: bytes) -> list[CandidateScore]:
        """Return candidates for *data*, best first."""
        if not self._active:
            msg = "detect() called outside of an acquired session"
            raise RuntimeError(msg)
        return self._detect(data)[:MAX_CANDIDATES]

    def _initialize(self) -> None:
        pass

    def _shutdown(self) -> None:
        pass

    def _detect(self, data: bytes) -> list[CandidateScore]:
        raise NotImplementedError


class CharsetNormalizerDetector(CandidateDetector):
    """Candidate detector backed by :mod:`charset_normalizer`.

    All instances share one lock: the library is treated as a single
    process-level resource.
    """

    _process_lock = threading.Lock()

    def __init__(self) -> None:
        super().__init__()
        self._lock = self._process_lock
        self._from_bytes = None

    def _initialize(self) -> None:
        from charset_normalizer import from_bytes

        self._from_bytes = from_bytes
        logger.debug("charset_normalizer detector initialized")

    def _shutdown(self) -> None:
        self._from_bytes = None
        logger.debug("charset_normalizer detector released")

    def _detect(self, data: bytes) -> list[CandidateScore]:
        matches = self._from_bytes(data)
        # CharsetMatches iterates best first; chaos is 0.0 for a clean decode
        return [
            CandidateScore.from_codec(match.encoding, 1.0 - match.chaos)
            for match in matches
        ]
