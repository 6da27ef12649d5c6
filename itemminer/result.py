from __future__ import annotations

import typing
from collections.abc import Iterator, Sequence
from itertools import groupby
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd

    from .itemset import Itemset


class AprioriResult:
    """Frequent itemsets found by one APRIORI run.

    Itemsets are kept in discovery order: level by level, and sorted within
    each level.

    Parameters
    ----------
    itemsets : Sequence[Itemset]
        The frequent itemsets with their final support counts.
    n_transactions : int
        Number of transactions that were scanned.
    dimensionality : int
        Number of attributes of the transaction source.
    labels : Sequence | None
        Optional label per attribute, used when rendering.
    """

    def __init__(
        self,
        itemsets: Sequence[Itemset],
        n_transactions: int,
        dimensionality: int,
        labels: Sequence[Any] | None = None,
        name: str = "APRIORI",
    ) -> None:
        self.itemsets = list(itemsets)
        self.n_transactions = n_transactions
        self.dimensionality = dimensionality
        self.labels = list(labels) if labels is not None else None
        self.name = name

    def __len__(self) -> int:
        return len(self.itemsets)

    def __iter__(self) -> Iterator[Itemset]:
        return iter(self.itemsets)

    def __getitem__(self, i: int) -> Itemset:
        return self.itemsets[i]

    def levels(self) -> dict[int, list[Itemset]]:
        """Group the itemsets by cardinality."""
        return {k: list(g) for k, g in groupby(self.itemsets, key=len)}

    def as_dict(self) -> dict[tuple[int, ...], int]:
        """Map every itemset's indices to its support count."""
        return {s.indices(): s.support for s in self.itemsets}

    def to_pandas(self, use_colnames: bool = False) -> pd.DataFrame:
        """Tabulate as ``support`` (fraction), ``count`` and ``itemsets`` columns.

        ``itemsets`` is a PyArrow list column holding attribute indices, or
        the labels when *use_colnames* is set and labels are known.
        """
        import numpy as np
        import pandas as pd
        import pyarrow as pa

        if not self.itemsets:
            empty = pd.DataFrame(columns=["support", "count", "itemsets"])  # type: ignore[arg-type]
            empty.attrs["num_itemsets"] = self.n_transactions
            return empty

        counts = np.array([s.support for s in self.itemsets], dtype=np.int64)
        lengths = np.array([len(s) for s in self.itemsets], dtype=np.int32)
        offsets = np.concatenate([[0], np.cumsum(lengths)]).astype(np.int32)
        items = np.fromiter(
            (i for s in self.itemsets for i in s.indices()), dtype=np.int32, count=int(offsets[-1])
        )

        items_pa = pa.array(items, type=pa.int32())
        if use_colnames and self.labels is not None:
            col_array = pa.array([str(lbl) for lbl in self.labels], type=pa.string())
            items_pa = col_array.take(items_pa)
        item_type = items_pa.type
        list_arr = pa.ListArray.from_arrays(pa.array(offsets, type=pa.int32()), items_pa)

        result = pd.DataFrame(
            {
                "support": counts / self.n_transactions,
                "count": counts,
                "itemsets": pd.Series(list_arr, dtype=pd.ArrowDtype(pa.list_(item_type))),
            }
        )
        result.attrs["num_itemsets"] = self.n_transactions
        return typing.cast("pd.DataFrame", result)

    def to_string(self, delimiter: str = ", ") -> str:
        return "\n".join(s.to_string(self.labels, delimiter) for s in self.itemsets)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, itemsets={len(self.itemsets)}, "
            f"n_transactions={self.n_transactions}, dimensionality={self.dimensionality})"
        )
