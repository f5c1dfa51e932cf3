# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from uniconv.pipeline import CandidateScore
from uniconv.pipeline.candidates import CandidateDetector


class FakeDetector(CandidateDetector):
    """Detector returning canned candidates and counting its lifecycle calls."""

    def __init__(
        self,
        candidates: Sequence[tuple[str, float]] = (),
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.candidates = [CandidateScore.from_codec(n, c) for n, c in candidates]
        self.error = error
        self.initialized = 0
        self.released = 0
        self.calls = 0

    def _initialize(self) -> None:
        self.initialized += 1

    def _shutdown(self) -> None:
        self.released += 1

    def _detect(self, data: bytes) -> list[CandidateScore]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.candidates)


@pytest.fixture
def make_detector() -> Callable[..., FakeDetector]:
    """Factory for :class:`FakeDetector` instances."""
    return FakeDetector
