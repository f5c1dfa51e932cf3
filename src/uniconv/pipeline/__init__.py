"""Detection pipeline stages and shared types."""

from __future__ import annotations

import codecs
import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class CandidateScore:
    """One guess from an external multi-candidate detector.

    *codepage* is a normalized Python codec name (``"utf-8"``,
    ``"utf-16-le"``, ...); *confidence* is the detector's own score.  Lists
    of candidates are ordered best first and that order is what counts.
    """

    codepage: str
    confidence: float

    @classmethod
    def from_codec(cls, name: str, confidence: float) -> CandidateScore:
        """Build a score, normalizing *name* through :func:`codecs.lookup`.

        Names Python does not know are kept lowercased so they simply never
        match a supported codepage.
        """
        try:
            codepage = codecs.lookup(name).name
        except LookupError:
            codepage = name.lower()
        return cls(codepage=codepage, confidence=confidence)
