"""Tests for the packed transaction source."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from scipy import sparse

from itemminer import BitVector, TransactionRelation, as_relation


class TestBitVector:
    def test_from_indices(self) -> None:
        bv = BitVector.from_indices([0, 3, 70], 100)
        assert bv.indices() == (0, 3, 70)
        assert bv.cardinality() == 3
        assert len(bv) == 100
        assert bv.get(70)
        assert not bv.get(69)

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            BitVector.from_indices([5], 5)

    def test_from_bools(self) -> None:
        bv = BitVector.from_bools([True, False, True])
        assert bv.indices() == (0, 2)
        assert bv.dimensionality == 3

    def test_contains(self) -> None:
        bv = BitVector.from_indices([1, 64, 65], 130)
        assert bv.contains(BitVector.from_indices([1, 65], 130).words)
        assert not bv.contains(BitVector.from_indices([1, 2], 130).words)
        assert bv.contains_mask(0b10)
        assert not bv.contains_mask(0b11)

    def test_repr(self) -> None:
        assert repr(BitVector.from_indices([2], 4)) == "BitVector([2], dimensionality=4)"


class TestTransactionRelation:
    def test_dimensionality_mismatch(self) -> None:
        with pytest.raises(ValueError, match="dimensionality"):
            TransactionRelation([BitVector.from_indices([0], 3), BitVector.from_indices([0], 4)], 3)

    def test_label_count(self) -> None:
        with pytest.raises(ValueError, match="Expected 3 labels"):
            TransactionRelation([], 3, labels=["a"])

    def test_labels(self, small_relation: TransactionRelation) -> None:
        assert small_relation.get_label(2) == "c"
        assert TransactionRelation([], 2).get_label(0) is None

    def test_from_array(self) -> None:
        arr = np.array([[1, 0, 1], [0, 0, 0], [1, 1, 1]])
        rel = TransactionRelation.from_array(arr)
        assert len(rel) == 3
        assert rel.dimensionality == 3
        assert [bv.indices() for bv in rel] == [(0, 2), (), (0, 1, 2)]

    def test_from_array_wide(self) -> None:
        arr = np.zeros((2, 150), dtype=bool)
        arr[0, [0, 63, 64, 149]] = True
        rel = TransactionRelation.from_array(arr)
        assert rel[0].indices() == (0, 63, 64, 149)
        assert rel[1].indices() == ()
        assert len(rel[0].words) == 3

    def test_from_array_rejects_1d(self) -> None:
        with pytest.raises(ValueError, match="2-D"):
            TransactionRelation.from_array(np.ones(3, dtype=bool))

    def test_from_csr(self) -> None:
        csr = sparse.csr_matrix(np.array([[0, 1, 1], [1, 0, 0]]))
        rel = TransactionRelation.from_csr(csr, ["x", "y", "z"])
        assert [bv.indices() for bv in rel] == [(1, 2), (0,)]
        assert rel.labels == ["x", "y", "z"]


class TestAsRelation:
    def test_passthrough(self, small_relation: TransactionRelation) -> None:
        assert as_relation(small_relation) is small_relation

    def test_relabel(self, small_relation: TransactionRelation) -> None:
        rel = as_relation(small_relation, item_names=list("vwxyz"))
        assert rel.labels == list("vwxyz")
        assert len(rel) == len(small_relation)

    def test_pandas_labels(self) -> None:
        df = pd.DataFrame({"bread": [True, False], "milk": [True, True]})
        rel = as_relation(df)
        assert rel.labels == ["bread", "milk"]
        assert [bv.indices() for bv in rel] == [(0, 1), (1,)]

    def test_polars(self) -> None:
        pl = pytest.importorskip("polars")
        rel = as_relation(pl.DataFrame({"a": [1, 0], "b": [1, 1]}))
        assert rel.labels == ["a", "b"]
        assert [bv.indices() for bv in rel] == [(0, 1), (1,)]

    def test_pyarrow(self) -> None:
        pa = pytest.importorskip("pyarrow")
        rel = as_relation(pa.table({"a": [True, False], "b": [False, False]}))
        assert [bv.indices() for bv in rel] == [(0,), ()]

    def test_null_values(self) -> None:
        df = pd.DataFrame({"a": [1.0, np.nan], "b": [np.nan, 1.0]})
        with pytest.warns(DeprecationWarning):
            rel = as_relation(df, null_values=True)
        assert [bv.indices() for bv in rel] == [(0,), (1,)]

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Expected a Pandas/Polars DataFrame"):
            as_relation([[0, 1]])

    def test_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        as_relation(np.ones((2, 2), dtype=bool), verbose=1)
        out = capsys.readouterr().out
        assert "Packed 2 transactions x 2 attributes" in out
