"""Transaction source: packed boolean vectors with a fixed dimensionality."""

from __future__ import annotations

import time
import typing
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

from . import _bits
from ._compat import to_dataframe

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl


class BitVector:
    """One transaction, packed into little-endian ``uint64`` words."""

    __slots__ = ("words", "dimensionality", "_mask")

    def __init__(self, words: np.ndarray, dimensionality: int) -> None:
        self.words = words
        self.dimensionality = dimensionality
        self._mask: int | None = None

    @classmethod
    def from_bools(cls, row: Sequence[bool] | np.ndarray) -> BitVector:
        row = np.asarray(row, dtype=bool)
        return cls(_bits.from_indices(np.flatnonzero(row).tolist(), len(row)), len(row))

    @classmethod
    def from_indices(cls, indices: Sequence[int], dimensionality: int) -> BitVector:
        for i in indices:
            if not 0 <= i < dimensionality:
                raise ValueError(f"Index {i} out of range for dimensionality {dimensionality}.")
        return cls(_bits.from_indices(indices, dimensionality), dimensionality)

    def __len__(self) -> int:
        return self.dimensionality

    def get(self, i: int) -> bool:
        return bool((self.as_int() >> i) & 1)

    def as_int(self) -> int:
        if self._mask is None:
            self._mask = _bits.to_int(self.words)
        return self._mask

    def contains(self, words: np.ndarray) -> bool:
        """True when every bit set in *words* is also set in this vector."""
        n = len(words)
        if n > len(self.words):
            if words[len(self.words) :].any():
                return False
            words = words[: len(self.words)]
        return bool(np.array_equal(self.words[: len(words)] & words, words))

    def contains_mask(self, mask: int) -> bool:
        return self.as_int() & mask == mask

    def indices(self) -> tuple[int, ...]:
        return _bits.to_indices(self.words)

    def cardinality(self) -> int:
        return _bits.cardinality(self.words)

    def __repr__(self) -> str:
        return f"BitVector({list(self.indices())}, dimensionality={self.dimensionality})"


class TransactionRelation:
    """Ordered, read-only collection of :class:`BitVector` transactions.

    Parameters
    ----------
    vectors : Sequence[BitVector]
        The transactions.  All must share *dimensionality*.
    dimensionality : int
        Number of attributes.
    labels : list[str] | None
        Optional human-readable label per attribute.
    """

    def __init__(
        self,
        vectors: Sequence[BitVector],
        dimensionality: int,
        labels: Sequence[Any] | None = None,
    ) -> None:
        for bv in vectors:
            if bv.dimensionality != dimensionality:
                raise ValueError(
                    f"All transactions must have dimensionality {dimensionality}, got {bv.dimensionality}."
                )
        if labels is not None and len(labels) != dimensionality:
            raise ValueError(f"Expected {dimensionality} labels, got {len(labels)}.")
        self._vectors = tuple(vectors)
        self.dimensionality = dimensionality
        self.labels = list(labels) if labels is not None else None

    def __len__(self) -> int:
        return len(self._vectors)

    def __iter__(self) -> Iterator[BitVector]:
        return iter(self._vectors)

    def __getitem__(self, i: int) -> BitVector:
        return self._vectors[i]

    def get_label(self, i: int) -> str | None:
        if self.labels is None:
            return None
        lbl = self.labels[i]
        return None if lbl is None else str(lbl)

    @classmethod
    def from_array(cls, arr: np.ndarray, labels: Sequence[Any] | None = None) -> TransactionRelation:
        """Build from a 2-D boolean / 0-1 array (rows are transactions)."""
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D array of transactions, got {arr.ndim} dimension(s).")
        n_rows, n_cols = arr.shape
        n_words = max(_bits.num_words(n_cols), 1)
        # Pad to whole words, then view each row's bytes as uint64 words.
        padded = np.zeros((n_rows, n_words * 64), dtype=bool)
        padded[:, :n_cols] = arr.astype(bool)
        packed = np.packbits(padded, axis=1, bitorder="little")
        words = packed.view("<u8").astype(np.uint64)
        return cls([BitVector(words[r].copy(), n_cols) for r in range(n_rows)], n_cols, labels)

    @classmethod
    def from_csr(cls, csr: Any, labels: Sequence[Any] | None = None) -> TransactionRelation:
        """Build from a SciPy CSR matrix without densifying it."""
        csr = csr.tocsr()
        csr.eliminate_zeros()
        n_rows, n_cols = csr.shape
        indptr = np.asarray(csr.indptr)
        indices = np.asarray(csr.indices)
        vectors = [
            BitVector(_bits.from_indices(indices[indptr[r] : indptr[r + 1]].tolist(), n_cols), n_cols)
            for r in range(n_rows)
        ]
        return cls(vectors, n_cols, labels)

    @classmethod
    def from_indices(
        cls,
        transactions: Sequence[Sequence[int]],
        dimensionality: int,
        labels: Sequence[Any] | None = None,
    ) -> TransactionRelation:
        """Build from index sets, e.g. ``[[0, 1, 2], [0, 1]]``."""
        return cls([BitVector.from_indices(t, dimensionality) for t in transactions], dimensionality, labels)


def as_relation(
    data: Any,
    item_names: Sequence[Any] | None = None,
    null_values: bool = False,
    verbose: int = 0,
) -> TransactionRelation:
    """Coerce any supported one-hot input into a :class:`TransactionRelation`.

    Accepts pandas (dense or sparse), Polars, PyArrow, NumPy arrays, SciPy
    CSR matrices or an existing relation.  Column names become labels unless
    *item_names* is given.
    """
    if isinstance(data, TransactionRelation):
        if item_names is not None:
            return TransactionRelation(list(data), data.dimensionality, item_names)
        return data

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Analyzing input data type...")
        t0 = time.perf_counter()

    data = to_dataframe(data)
    t = type(data).__name__
    mod = getattr(type(data), "__module__", "") or ""

    if t == "DataFrame" and mod.startswith("polars"):
        pl_df = typing.cast("pl.DataFrame", data)
        labels = item_names if item_names is not None else list(pl_df.columns)
        relation = TransactionRelation.from_array(pl_df.to_numpy(), labels)
    elif t in ("csr_matrix", "csr_array", "coo_matrix", "coo_array", "csc_matrix", "csc_array"):
        relation = TransactionRelation.from_csr(data, item_names)
    elif t == "ndarray":
        relation = TransactionRelation.from_array(data, item_names)
    elif t == "DataFrame" and mod.startswith("pandas"):
        relation = _from_pandas(typing.cast("pd.DataFrame", data), item_names, null_values)
    else:
        raise TypeError(
            f"Expected a Pandas/Polars DataFrame, PyArrow Table, NumPy array or SciPy sparse matrix, got {type(data)}"
        )

    if verbose:
        print(
            f"[{time.strftime('%X')}] Packed {len(relation):,} transactions x {relation.dimensionality:,} "
            f"attributes in {time.perf_counter() - t0:.2f}s."
        )
    return relation


def _from_pandas(
    df: pd.DataFrame,
    item_names: Sequence[Any] | None,
    null_values: bool,
) -> TransactionRelation:
    from ._validation import valid_input_check

    valid_input_check(df, null_values)
    labels = item_names if item_names is not None else list(df.columns)

    if df.shape[1] > 0 and hasattr(df, "sparse"):
        return TransactionRelation.from_csr(df.sparse.to_coo(), labels)

    if null_values:
        # Missing entries count as absent items.
        return TransactionRelation.from_array(df.to_numpy(dtype=float, na_value=0.0) != 0, labels)
    return TransactionRelation.from_array(np.asarray(df.values, dtype=bool), labels)
