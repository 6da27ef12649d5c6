from __future__ import annotations

import time
import typing
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind, to_dataframe

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    import pyarrow as pa


def from_transactions(
    data: pd.DataFrame | pl.DataFrame | pa.Table | Sequence[Sequence[str | int]] | Any,
    transaction_col: str | None = None,
    item_col: str | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> Any:
    """Convert long-format transactional data to a one-hot boolean matrix.

    The return type mirrors the input type:

    - **Polars** ``DataFrame`` → **Polars** ``DataFrame``
    - **Pandas** ``DataFrame`` → **Pandas** ``DataFrame`` (sparse boolean)
    - **PyArrow** ``Table``    → **PyArrow** ``Table``
    - ``list[list[...]]``      → **Pandas** ``DataFrame`` (sparse boolean)

    Parameters
    ----------
    data
        One of:

        - **Pandas / Polars DataFrame** or **PyArrow Table** with (at least)
          two columns: one for the transaction identifier and one for the item.
        - **List of lists** where each inner list contains the items of a
          single transaction, e.g. ``[["bread", "milk"], ["bread", "eggs"]]``.

    transaction_col
        Name of the column that identifies transactions.  If ``None`` the
        first column is used.  Ignored for list-of-lists input.

    item_col
        Name of the column that contains item values.  If ``None`` the
        second column is used.  Ignored for list-of-lists input.

    min_item_count
        Minimum number of times an item must appear to be included in the
        resulting one-hot-encoded matrix. Default is 1.

    Returns
    -------
    DataFrame
        A boolean DataFrame (same family as the input) ready for
        :func:`itemminer.apriori`.  Column names correspond to the unique
        items, in sorted order.

    Examples
    --------
    >>> import itemminer
    >>> import pandas as pd
    >>> df = pd.DataFrame({
    ...     "order_id": [1, 1, 1, 2, 2, 3],
    ...     "item": [3, 4, 5, 3, 5, 8],
    ... })
    >>> ohe = itemminer.from_transactions(df)
    >>> freq = itemminer.apriori(ohe, min_frequency=0.5)
    """
    kind = frame_kind(data)
    data = to_dataframe(data)

    if isinstance(data, (list, tuple)):
        return _from_list(data, min_item_count=min_item_count, verbose=verbose)

    import pandas as _pd
    import polars as _pl

    if isinstance(data, _pl.DataFrame):
        result_pd = _from_dataframe(
            data.to_pandas(), transaction_col, item_col, min_item_count=min_item_count, verbose=verbose
        )
        dense = result_pd.sparse.to_dense() if result_pd.shape[1] > 0 else result_pd
        if kind == "pyarrow":
            import pyarrow as _pa

            return _pa.Table.from_pandas(dense.astype(bool), preserve_index=False)
        return _pl.from_pandas(dense.astype(bool))

    if isinstance(data, _pd.DataFrame):
        return _from_dataframe(data, transaction_col, item_col, min_item_count=min_item_count, verbose=verbose)

    raise TypeError(f"Expected a Pandas/Polars DataFrame, PyArrow Table or list of lists, got {type(data)}")


def _from_list(
    transactions: Sequence[Sequence[str | int]],
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    from scipy import sparse as sp

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Extracting unique items from list of lists...")
        t0 = time.perf_counter()

    counts: Counter[Any] = Counter()
    for txn in transactions:
        counts.update(set(txn))
    all_items = sorted(
        (item for item, count in counts.items() if count >= min_item_count),
        key=lambda x: (isinstance(x, str), x),
    )
    item_to_idx = {item: i for i, item in enumerate(all_items)}

    row_idx: list[int] = []
    col_idx: list[int] = []
    for i, txn in enumerate(transactions):
        for item in set(txn):
            if item in item_to_idx:
                row_idx.append(i)
                col_idx.append(item_to_idx[item])

    csr = sp.csr_matrix(
        (np.ones(len(row_idx), dtype=bool), (np.array(row_idx, dtype=np.int64), np.array(col_idx, dtype=np.int64))),
        shape=(len(transactions), len(all_items)),
    )
    one_hot = pd.DataFrame.sparse.from_spmatrix(csr, columns=[str(item) for item in all_items]).astype(
        pd.SparseDtype("bool", fill_value=False)
    )

    if verbose:
        print(
            f"[{time.strftime('%X')}] Encoded {len(transactions):,} transactions over {len(all_items):,} items "
            f"in {time.perf_counter() - t0:.2f}s."
        )
    return one_hot


def _from_dataframe(
    df: pd.DataFrame,
    transaction_col: str | None,
    item_col: str | None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    from scipy import sparse as sp

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Encoding long-format DataFrame (shape={df.shape})...")
        t0 = time.perf_counter()

    cols = list(df.columns)
    if len(cols) < 2:
        raise ValueError(f"DataFrame must have at least 2 columns (transaction id + item), got {len(cols)}: {cols}")

    txn_col = transaction_col or str(cols[0])
    itm_col = item_col or str(cols[1])
    if txn_col not in df.columns:
        raise ValueError(f"Transaction column '{txn_col}' not found. Available columns: {cols}")
    if itm_col not in df.columns:
        raise ValueError(f"Item column '{itm_col}' not found. Available columns: {cols}")

    if min_item_count > 1:
        item_counts = df.drop_duplicates([txn_col, itm_col])[itm_col].value_counts()
        keep = typing.cast("pd.Index", item_counts[item_counts >= min_item_count].index)
        df = df.loc[df[itm_col].isin(keep)]

    txn_codes, _txn_uniques = pd.factorize(df[txn_col], sort=False)
    item_codes, item_uniques = pd.factorize(df[itm_col], sort=True)

    n_txn = int(txn_codes.max()) + 1 if len(txn_codes) > 0 else 0
    csr = sp.csr_matrix(
        (np.ones(len(txn_codes), dtype=np.int8), (txn_codes.astype(np.int64), item_codes.astype(np.int64))),
        shape=(n_txn, len(item_uniques)),
    )
    # Repeated (transaction, item) rows sum up; clamp back to 0/1.
    csr.data = np.minimum(csr.data, 1)

    one_hot = pd.DataFrame.sparse.from_spmatrix(csr, columns=[str(c) for c in item_uniques]).astype(
        pd.SparseDtype("bool", fill_value=False)
    )

    if verbose:
        print(f"[{time.strftime('%X')}] Encoding completed in {time.perf_counter() - t0:.2f}s.")
    return one_hot
