"""Stage 2: UTF-8 structural validation with a table-driven DFA.

The automaton is Bjoern Hoehrmann's UTF-8 decoder DFA
(http://bjoern.hoehrmann.de/utf-8/decoder/dfa/), used here only to classify
byte runs; no code points are built.
"""

from __future__ import annotations

from uniconv.enums import Utf8Class

#: DFA state: the bytes seen so far form complete, valid sequences.
UTF8_ACCEPT: int = 0
#: DFA state: an invalid sequence was seen.  Absorbing.
UTF8_REJECT: int = 1

# fmt: off
#: The first 256 entries map each byte to a class in [0..11]; the remaining
#: 9 rows of 16 give the next state for (state, class).
UTF8_DFA: tuple[int, ...] = (
    # 00..7f
    *(0,) * 128,
    # 80..bf
    *(1,) * 16, *(9,) * 16, *(7,) * 32,
    # c0..df: c0 and c1 only ever produce overlong forms
    8, 8, *(2,) * 30,
    # e0..ef
    10, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 4, 3, 3,
    # f0..ff
    11, 6, 6, 6, 5, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8,
    # s0
    0, 1, 2, 3, 5, 8, 7, 1, 1, 1, 4, 6, 1, 1, 1, 1,
    # s1, s2
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 1, 1, 1, 1, 1,
    # s3, s4
    1, 2, 1, 1, 1, 1, 1, 2, 1, 2, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1,
    # s5, s6
    1, 2, 1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
    # s7, s8
    1, 3, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
    1, 3, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
)
# fmt: on

# Tab, LF, CR and printable ASCII pass without touching the automaton.
_PLAIN_ASCII: frozenset[int] = frozenset([0x09, 0x0A, 0x0D, *range(0x20, 0x7F)])


def advance(state: int, byte: int) -> int:
    """Return the DFA state after consuming *byte* in *state*."""
    return UTF8_DFA[256 + state * 16 + UTF8_DFA[byte]]


def classify_utf8(
    data: bytes, begin: int = 0, end: int | None = None, *, truncated: bool = False
) -> Utf8Class:
    """Classify ``data[begin:end]`` in a single pass.

    :param data: The raw byte data to examine.
    :param begin: Start of the range.
    :param end: End of the range; defaults to ``len(data)``.
    :param truncated: The range is a prefix cut from a longer buffer, so a
        multi-byte sequence left open at the end is not held against it.
    :returns: :attr:`Utf8Class.ASCII` when no high-bit byte occurs,
        :attr:`Utf8Class.UTF8` when every high-bit byte belongs to a valid
        sequence, :attr:`Utf8Class.LEGACY` otherwise.
    """
    if end is None:
        end = len(data)
    assert 0 <= begin <= end <= len(data), "invalid byte range"

    state = UTF8_ACCEPT
    high_bit = False
    for byte in data[begin:end]:
        if state == UTF8_ACCEPT and byte in _PLAIN_ASCII:
            continue
        if byte & 0x80:
            high_bit = True
        state = advance(state, byte)
        if state == UTF8_REJECT:
            return Utf8Class.LEGACY

    if state != UTF8_ACCEPT and not truncated:
        return Utf8Class.LEGACY
    return Utf8Class.UTF8 if high_bit else Utf8Class.ASCII


def is_valid_utf8(data: bytes, begin: int = 0, end: int | None = None) -> bool:
    """Return True if ``data[begin:end]`` is complete, well-formed UTF-8."""
    return classify_utf8(data, begin, end) is not Utf8Class.LEGACY
