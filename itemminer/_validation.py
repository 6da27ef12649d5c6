"""Input and parameter validation for the miners."""

from __future__ import annotations

import numbers
import warnings
from typing import Any

import numpy as np
import pandas as pd

from .itemset import ENCODINGS

SMALL_DENSE_MAX_DIM = 64


def valid_input_check(df: pd.DataFrame, null_values: bool = False) -> None:
    """Validate a one-hot / boolean DataFrame before mining.

    Parameters
    ----------
    df:
        Input DataFrame.  Allowed values: 0/1 or True/False (and NaN if
        ``null_values=True``).
    null_values:
        Whether NaN values are allowed in *df*.
    """
    if df is None or df.size == 0:
        return

    is_sparse = hasattr(df, "sparse")
    if is_sparse:
        if not isinstance(df.columns[0], str) and df.columns[0] != 0:
            raise ValueError(
                "Due to current limitations in Pandas, "
                "if the sparse format has integer column names, "
                "please make sure they either start "
                "with `0` or cast them as string column names: "
                "`df.columns = [str(i) for i in df.columns]`."
            )

    if null_values:
        all_bools = df.apply(lambda col: col.apply(lambda x: pd.isna(x) or isinstance(x, (bool, np.bool_)))).all().all()
    else:
        all_bools = df.dtypes.apply(pd.api.types.is_bool_dtype).all()

    if all_bools:
        return

    warnings.warn(
        "DataFrames with non-bool types result in worse computational "
        "performance and their support might be discontinued in the future. "
        "Please use a DataFrame with bool type",
        DeprecationWarning,
        stacklevel=3,
    )

    has_nans = bool(pd.isna(df).any().any())
    if null_values and not has_nans:
        warnings.warn(
            "null_values=True is inefficient when there are no NaN values "
            "in the DataFrame. Set null_values=False for faster output.",
            stacklevel=3,
        )
    if not null_values and has_nans:
        raise ValueError("NaN values are not permitted in the DataFrame when null_values=False.")

    values = df.sparse.to_coo().tocoo().data if is_sparse else df.values
    values = np.asarray(values, dtype=float)

    if null_values:
        idxs = np.where((values != 1) & (values != 0) & (~np.isnan(values)))
    else:
        idxs = np.where((values != 1) & (values != 0))

    if len(idxs[0]) > 0:
        val = values[tuple(loc[0] for loc in idxs)]
        allowed = "True, False, 0, 1, NaN" if null_values else "True, False, 0, 1"
        raise ValueError(f"The allowed values for a DataFrame are {allowed}. Found value {val:g}")


def check_thresholds(min_frequency: Any, min_support: Any) -> None:
    """Reject anything but exactly one well-formed support threshold."""
    if min_frequency is None and min_support is None:
        raise ValueError("One of `min_frequency` or `min_support` must be set.")
    if min_frequency is not None and min_support is not None:
        raise ValueError(
            "Only one of `min_frequency` or `min_support` may be set. "
            f"Got min_frequency={min_frequency} and min_support={min_support}."
        )
    if min_frequency is not None:
        if isinstance(min_frequency, bool) or not isinstance(min_frequency, numbers.Real):
            raise ValueError(f"`min_frequency` must be a number. Got {min_frequency!r}.")
        if not 0.0 <= min_frequency <= 1.0:
            raise ValueError(f"`min_frequency` must be within the interval `[0, 1]`. Got {min_frequency}.")
    if min_support is not None:
        if isinstance(min_support, bool) or not isinstance(min_support, numbers.Integral):
            raise ValueError(f"`min_support` must be an integer transaction count. Got {min_support!r}.")
        if min_support < 0:
            raise ValueError(f"`min_support` must be greater than or equal to 0. Got {min_support}.")


def check_encoding(encoding: Any, dimensionality: int | None = None) -> None:
    if callable(encoding):
        return
    if encoding not in ENCODINGS:
        raise ValueError(f"`encoding` must be one of {ENCODINGS} or a callable. Got: {encoding!r}")
    if encoding == "small_dense" and dimensionality is not None and dimensionality > SMALL_DENSE_MAX_DIM:
        raise ValueError(
            f"`encoding='small_dense'` supports at most {SMALL_DENSE_MAX_DIM} attributes. "
            f"Got dimensionality {dimensionality}; use 'dense' instead."
        )


def check_max_len(max_len: Any) -> None:
    if max_len is None:
        return
    if isinstance(max_len, bool) or not isinstance(max_len, numbers.Integral) or max_len < 1:
        raise ValueError(f"`max_len` must be a positive integer or None. Got {max_len!r}.")
