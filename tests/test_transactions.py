"""Tests for itemminer.from_transactions."""

from __future__ import annotations

import pandas as pd
import pytest

import itemminer
from itemminer import Apriori, from_transactions

# ---------------------------------------------------------------------------
# List-of-lists input
# ---------------------------------------------------------------------------


class TestFromList:
    def test_basic(self) -> None:
        transactions = [[3, 4, 5], [3, 5], [8]]
        result = from_transactions(transactions)

        assert isinstance(result, pd.DataFrame)
        assert result.shape == (3, 4)  # 3 transactions, 4 unique items
        assert result.dtypes.apply(pd.api.types.is_bool_dtype).all()

        # Transaction 0 should have items 3, 4, 5
        assert result.iloc[0].sum() == 3
        # Transaction 2 should have only item 8
        assert result.iloc[2].sum() == 1

    def test_string_items(self) -> None:
        transactions = [["bread", "milk"], ["bread", "eggs"], ["milk"]]
        result = from_transactions(transactions)

        assert list(result.columns) == ["bread", "eggs", "milk"]
        assert result.shape == (3, 3)
        assert result.iloc[0]["bread"] == True  # noqa: E712
        assert result.iloc[0]["eggs"] == False  # noqa: E712

    def test_duplicate_items(self) -> None:
        result = from_transactions([["a", "a", "b"], ["b"]])
        assert result.shape == (2, 2)
        assert result.iloc[0].sum() == 2

    def test_min_item_count(self) -> None:
        result = from_transactions([["a", "b"], ["a", "c"], ["a"]], min_item_count=2)
        assert list(result.columns) == ["a"]
        assert result.shape == (3, 1)

    def test_single_transaction(self) -> None:
        result = from_transactions([[1, 2, 3]])
        assert result.shape == (1, 3)
        assert result.iloc[0].all()

    def test_single_item_per_transaction(self) -> None:
        result = from_transactions([[1], [2], [3]])
        assert result.shape == (3, 3)
        assert result.sparse.to_dense().values.sum() == 3  # exactly one True per row


# ---------------------------------------------------------------------------
# Pandas DataFrame input
# ---------------------------------------------------------------------------


class TestFromPandas:
    def test_basic(self) -> None:
        df = pd.DataFrame({"order_id": [1, 1, 1, 2, 2, 3], "item": [3, 4, 5, 3, 5, 8]})
        result = from_transactions(df)

        assert isinstance(result, pd.DataFrame)
        assert result.shape == (3, 4)  # 3 orders, 4 unique items
        assert result.dtypes.apply(pd.api.types.is_bool_dtype).all()

    def test_custom_columns(self) -> None:
        df = pd.DataFrame({"product": ["a", "b", "a", "c"], "basket": [1, 1, 2, 2]})
        result = from_transactions(df, transaction_col="basket", item_col="product")
        assert result.shape == (2, 3)

    def test_repeated_rows(self) -> None:
        df = pd.DataFrame({"txn": [1, 1, 1, 2], "item": ["a", "a", "b", "a"]})
        result = from_transactions(df).sparse.to_dense()
        assert result["a"].tolist() == [True, True]
        assert result["b"].tolist() == [True, False]

    def test_string_items(self) -> None:
        df = pd.DataFrame(
            {
                "txn": [1, 1, 2, 2, 3],
                "item": ["bread", "milk", "bread", "eggs", "milk"],
            }
        )
        result = from_transactions(df)
        assert set(result.columns) == {"bread", "milk", "eggs"}
        assert result.shape == (3, 3)

    def test_too_few_columns(self) -> None:
        df = pd.DataFrame({"only_one": [1, 2, 3]})
        with pytest.raises(ValueError, match="at least 2 columns"):
            from_transactions(df)

    def test_missing_column(self) -> None:
        df = pd.DataFrame({"a": [1, 2], "b": [3, 4]})
        with pytest.raises(ValueError, match="not found"):
            from_transactions(df, transaction_col="missing")


# ---------------------------------------------------------------------------
# Polars DataFrame / PyArrow Table input
# ---------------------------------------------------------------------------


class TestFromPolars:
    def test_basic(self) -> None:
        pl = pytest.importorskip("polars")
        df = pl.DataFrame({"order_id": [1, 1, 1, 2, 2, 3], "item": [3, 4, 5, 3, 5, 8]})
        result = from_transactions(df)

        assert isinstance(result, pl.DataFrame)
        assert result.shape == (3, 4)
        assert all(dtype == pl.Boolean for dtype in result.dtypes)


class TestFromArrow:
    def test_basic(self) -> None:
        pa = pytest.importorskip("pyarrow")
        table = pa.table({"txn": [1, 1, 2, 2], "item": ["a", "b", "a", "c"]})
        result = from_transactions(table)

        assert isinstance(result, pa.Table)
        assert result.num_rows == 2
        assert result.column_names == ["a", "b", "c"]


# ---------------------------------------------------------------------------
# End-to-end: from_transactions → apriori
# ---------------------------------------------------------------------------


class TestEndToEnd:
    transactions = [
        ["bread", "milk", "butter"],
        ["bread", "milk"],
        ["bread", "eggs"],
        ["milk", "eggs"],
        ["bread", "milk", "eggs"],
    ]

    def test_apriori(self) -> None:
        ohe = from_transactions(self.transactions)
        freq = itemminer.apriori(ohe, min_frequency=0.4, use_colnames=True)
        found = {frozenset(s): c for s, c in zip(freq["itemsets"], freq["count"])}
        assert found == {
            frozenset({"bread"}): 4,
            frozenset({"milk"}): 4,
            frozenset({"eggs"}): 3,
            frozenset({"bread", "milk"}): 3,
            frozenset({"bread", "eggs"}): 2,
            frozenset({"milk", "eggs"}): 2,
        }

    def test_pandas_e2e(self) -> None:
        df = pd.DataFrame(
            {
                "order_id": [1, 1, 1, 2, 2, 3],
                "item": [3, 4, 5, 3, 5, 8],
            }
        )
        ohe = from_transactions(df)
        freq = itemminer.apriori(ohe, min_frequency=0.6, use_colnames=True)
        found = {tuple(s): c for s, c in zip(freq["itemsets"], freq["count"])}
        assert found == {("3",): 2, ("5",): 2, ("3", "5"): 2}

    def test_type_error(self) -> None:
        with pytest.raises(TypeError, match="Expected"):
            from_transactions(42)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Explicit from_pandas / from_polars / from_arrow wrappers
# ---------------------------------------------------------------------------


class TestExplicitHelpers:
    def test_from_pandas(self) -> None:
        df = pd.DataFrame({"txn": [1, 1, 2, 2], "item": ["a", "b", "a", "c"]})
        miner = Apriori.from_pandas(df, min_support=2)
        assert miner.relation.dimensionality == 3
        res = miner.mine()
        assert isinstance(res, pd.DataFrame)
        assert [list(s) for s in res["itemsets"]] == [["a"]]

    def test_from_polars(self) -> None:
        pl = pytest.importorskip("polars")
        df = pl.DataFrame({"txn": [1, 1, 2, 2], "item": ["a", "b", "a", "c"]})
        res = Apriori.from_polars(df, min_support=1).mine()
        assert isinstance(res, pl.DataFrame)
        assert res.height == 5

    def test_from_arrow(self) -> None:
        pa = pytest.importorskip("pyarrow")
        table = pa.table({"txn": [1, 1, 2], "item": ["x", "y", "x"]})
        res = Apriori.from_arrow(table, min_support=1).mine()
        assert isinstance(res, pa.Table)
        assert res.num_rows == 3
