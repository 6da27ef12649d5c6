"""Itemset encodings used by the APRIORI miner.

All four variants describe the same thing, a set of attribute indices with a
support counter, and share one total order: first by cardinality, then
lexicographically by the ascending index sequence.  The dense variants reach
that order by comparing bit-reversed words, so they never materialise their
indices while sorting or searching.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Callable, Literal, Union

import numpy as np

from . import _bits

if TYPE_CHECKING:
    from .relation import BitVector

Encoding = Literal["sparse", "dense", "small_dense"]
EncodingPolicy = Union[Encoding, Callable[[int, int], str]]

ENCODINGS: tuple[str, ...] = ("sparse", "dense", "small_dense")


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@functools.total_ordering
class Itemset(ABC):
    """Abstract APRIORI itemset.

    ``support`` is the only mutable state; it is written by the counting
    step of the level the itemset belongs to.
    """

    __slots__ = ("support",)

    def __init__(self) -> None:
        self.support = 0

    def get_support(self) -> int:
        return self.support

    @abstractmethod
    def contained_in(self, bv: BitVector) -> bool:
        """Test whether every item is set in the transaction *bv*."""

    @abstractmethod
    def length(self) -> int:
        """Number of items."""

    @abstractmethod
    def indices(self) -> tuple[int, ...]:
        """Items in ascending order."""

    @abstractmethod
    def get_items(self) -> np.ndarray:
        """Items as a ``uint64`` bit mask."""

    def __len__(self) -> int:
        return self.length()

    def compare(self, other: Itemset) -> int:
        cmp = _cmp(self.length(), other.length())
        if cmp != 0:
            return cmp
        if type(self) is type(other):
            return self._compare_same(other)
        return _cmp(self.indices(), other.indices())

    def _compare_same(self, other: Any) -> int:
        return _cmp(self.indices(), other.indices())

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Itemset):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Itemset) -> bool:
        if not isinstance(other, Itemset):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self.indices())

    def append_to(self, parts: list[str], labels: Sequence[Any] | None = None) -> list[str]:
        for i in self.indices():
            lbl = labels[i] if labels is not None else None
            parts.append(str(i) if lbl is None else str(lbl))
        return parts

    def to_string(self, labels: Sequence[Any] | None = None, delimiter: str = ", ") -> str:
        """Render as ``"a, b, c: support"`` using *labels* where available."""
        return delimiter.join(self.append_to([], labels)) + f": {self.support}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.indices())}, support={self.support})"


class OneItemset(Itemset):
    """Itemset of length 1, the seeds of every run."""

    __slots__ = ("item",)

    def __init__(self, item: int) -> None:
        super().__init__()
        self.item = item

    def length(self) -> int:
        return 1

    def contained_in(self, bv: BitVector) -> bool:
        return bv.get(self.item)

    def indices(self) -> tuple[int, ...]:
        return (self.item,)

    def get_items(self) -> np.ndarray:
        return _bits.from_indices((self.item,), self.item + 1)

    def _compare_same(self, other: OneItemset) -> int:
        return _cmp(self.item, other.item)

    def __hash__(self) -> int:
        return hash((self.item,))


class SparseItemset(Itemset):
    """Itemset stored as an ascending tuple of indices.

    Cheap when the itemset is short compared to the dimensionality.
    """

    __slots__ = ("_indices",)

    def __init__(self, indices: Sequence[int]) -> None:
        super().__init__()
        self._indices = tuple(indices)

    def length(self) -> int:
        return len(self._indices)

    def contained_in(self, bv: BitVector) -> bool:
        for item in self._indices:
            if not bv.get(item):
                return False
        return True

    def indices(self) -> tuple[int, ...]:
        return self._indices

    def get_items(self) -> np.ndarray:
        return _bits.from_indices(self._indices, self._indices[-1] + 1)

    def _compare_same(self, other: SparseItemset) -> int:
        return _cmp(self._indices, other._indices)


class DenseItemset(Itemset):
    """Itemset stored as a bit mask over the full dimensionality.

    Parameters
    ----------
    items : numpy.ndarray
        ``uint64`` words, bit ``i`` set for every member ``i``.
    length : int
        Cardinality of the itemset (kept explicitly, not recounted).
    """

    __slots__ = ("items", "_length", "_indices")

    def __init__(self, items: np.ndarray, length: int) -> None:
        super().__init__()
        self.items = items
        self._length = length
        self._indices: tuple[int, ...] | None = None

    def length(self) -> int:
        return self._length

    def contained_in(self, bv: BitVector) -> bool:
        return bv.contains(self.items)

    def indices(self) -> tuple[int, ...]:
        if self._indices is None:
            self._indices = _bits.to_indices(self.items)
        return self._indices

    def get_items(self) -> np.ndarray:
        return self.items

    def _compare_same(self, other: DenseItemset) -> int:
        return _bits.compare_words(self.items, other.items)


class SmallDenseItemset(Itemset):
    """Single-word variant of :class:`DenseItemset` for at most 64 attributes."""

    __slots__ = ("items", "_length")

    def __init__(self, items: int, length: int) -> None:
        super().__init__()
        self.items = items
        self._length = length

    def length(self) -> int:
        return self._length

    def contained_in(self, bv: BitVector) -> bool:
        return bv.contains_mask(self.items)

    def indices(self) -> tuple[int, ...]:
        return _bits.int_to_indices(self.items)

    def get_items(self) -> np.ndarray:
        return np.array([self.items], dtype=np.uint64)

    def _compare_same(self, other: SmallDenseItemset) -> int:
        return _bits.compare_reversed(self.items, other.items)


def compare_itemsets(a: Itemset, b: Itemset) -> int:
    return a.compare(b)


#: Sort / search key threading :meth:`Itemset.compare` through ``sorted`` and ``bisect``.
ITEMSET_KEY = functools.cmp_to_key(compare_itemsets)


def make_itemset(encoding: str, indices: Sequence[int], dim: int) -> Itemset:
    """Build an itemset of *indices* in the given encoding."""
    if encoding == "sparse":
        return SparseItemset(indices)
    if encoding == "dense":
        return DenseItemset(_bits.from_indices(indices, dim), len(indices))
    if encoding == "small_dense":
        mask = 0
        for i in indices:
            mask |= 1 << i
        return SmallDenseItemset(mask, len(indices))
    raise ValueError(f"`encoding` must be one of {ENCODINGS}. Got: {encoding!r}")
