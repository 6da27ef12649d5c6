"""Word-level bit helpers for the dense itemset encodings.

Masks are little-endian ``uint64`` word arrays: bit ``i`` lives in word
``i >> 6`` at position ``i & 63``.  The single-word helpers operate on plain
Python ints, which is what :class:`~itemminer.itemset.SmallDenseItemset` uses.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

_REVERSED_BYTES = [int(f"{b:08b}"[::-1], 2) for b in range(256)]


def num_words(dim: int) -> int:
    return (dim + WORD_BITS - 1) >> 6


def zero(dim: int) -> np.ndarray:
    """Empty mask wide enough for *dim* bits (at least one word)."""
    return np.zeros(max(num_words(dim), 1), dtype=np.uint64)


def from_indices(indices: Iterable[int], dim: int) -> np.ndarray:
    words = zero(dim)
    for i in indices:
        set_bit(words, i)
    return words


def set_bit(words: np.ndarray, i: int) -> None:
    words[i >> 6] |= np.uint64(1 << (i & 63))


def clear_bit(words: np.ndarray, i: int) -> None:
    words[i >> 6] &= np.uint64(~(1 << (i & 63)) & WORD_MASK)


def cardinality(words: np.ndarray) -> int:
    """Population count over all words."""
    return int(np.unpackbits(_as_bytes(words)).sum())


def next_set_bit(words: np.ndarray, start: int) -> int:
    """Index of the first set bit at or after *start*, or ``-1``."""
    w = start >> 6
    if w >= len(words):
        return -1
    cur = int(words[w]) & (WORD_MASK << (start & 63)) & WORD_MASK
    while True:
        if cur:
            return (w << 6) + lowest_bit(cur)
        w += 1
        if w == len(words):
            return -1
        cur = int(words[w])


def to_indices(words: np.ndarray) -> tuple[int, ...]:
    bits = np.unpackbits(_as_bytes(words), bitorder="little")
    return tuple(int(i) for i in np.flatnonzero(bits))


def to_int(words: np.ndarray) -> int:
    """Collapse a word array into one Python int (same bit positions)."""
    return int.from_bytes(_as_bytes(words).tobytes(), "little")


# ---------------------------------------------------------------------------
# Single-word helpers
# ---------------------------------------------------------------------------


def popcount(x: int) -> int:
    return bin(x).count("1")


def lowest_bit(x: int) -> int:
    """Position of the lowest set bit of a non-zero int."""
    return (x & -x).bit_length() - 1


def int_to_indices(x: int) -> tuple[int, ...]:
    out = []
    while x:
        low = x & -x
        out.append(low.bit_length() - 1)
        x ^= low
    return tuple(out)


def reverse_word(x: int) -> int:
    """Reverse the bit order of an unsigned 64-bit word."""
    out = 0
    for shift in range(0, WORD_BITS, 8):
        out = (out << 8) | _REVERSED_BYTES[(x >> shift) & 0xFF]
    return out


def compare_reversed(a: int, b: int) -> int:
    """Order two words so the lower first differing bit sorts first."""
    ra, rb = reverse_word(a), reverse_word(b)
    return (ra < rb) - (ra > rb)


def compare_words(a: np.ndarray, b: np.ndarray) -> int:
    for x, y in zip(a.tolist(), b.tolist()):
        if x != y:
            return compare_reversed(x, y)
    return 0


def _as_bytes(words: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(words, dtype="<u8").view(np.uint8)
