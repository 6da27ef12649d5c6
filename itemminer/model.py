from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    import pyarrow as pa
    from typing_extensions import Self


class BaseModel(ABC):
    """Abstract base class for itemminer algorithms.

    Provides the data ingestion shorthands (``from_pandas``, ``from_polars``,
    ``from_arrow``) on top of :meth:`from_transactions`.
    """

    @classmethod
    @abstractmethod
    def from_transactions(
        cls,
        data: Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Initialize the model from a long-format DataFrame or sequences."""

    def __dir__(self) -> list[str]:
        return [k for k in super().__dir__() if not k.startswith("_")]

    @classmethod
    def from_pandas(
        cls,
        df: pd.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_polars(
        cls,
        df: pl.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_arrow(
        cls,
        table: pa.Table,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(table, transaction_col, item_col)``.

        Parameters
        ----------
        table : pyarrow.Table
            An Arrow table with transaction and item columns.
        transaction_col : str, optional
            Name of the transaction ID column.
        item_col : str, optional
            Name of the item column.
        **kwargs
            Extra arguments forwarded to ``from_transactions``.
        """
        return cls.from_transactions(
            table, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs
        )


class Miner(BaseModel):
    """Base class for frequent itemset miners working on one-hot data."""

    def __init__(self, data: pd.DataFrame | Any, item_names: list[str] | None = None):
        """Initialize the miner with pre-formatted data.

        Parameters
        ----------
        data : pd.DataFrame | Any
            A one-hot encoded dataset (e.g. Pandas DataFrame, SciPy sparse matrix).
        item_names : list[str], optional
            Column names if data is a raw numpy/scipy array.
            If not provided, and data is a DataFrame, columns are inferred.
        """
        self.data = data
        # Outputs are converted back to the frame family of the input
        self._orig_df_type: str = frame_kind(self.data)

        if item_names is None:
            if self._orig_df_type == "pyarrow":
                item_names = list(data.column_names)
            elif hasattr(data, "columns"):
                item_names = list(data.columns)
        self.item_names = item_names

    def _convert_to_orig_type(self, df: pd.DataFrame) -> Any:
        """Convert a pandas result back to the input DataFrame type."""
        import pandas as pd

        if df is None or not isinstance(df, pd.DataFrame):
            return df

        if self._orig_df_type == "pyarrow":
            import pyarrow as pa

            return pa.Table.from_pandas(df, preserve_index=False)
        if self._orig_df_type == "polars":
            import polars as pl

            return pl.from_pandas(df)
        return df

    @classmethod
    def from_transactions(
        cls,
        data: pd.DataFrame | pl.DataFrame | Sequence[Sequence[str | int]] | Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Load long-format transactional data into the algorithm.

        Parameters
        ----------
        data
            One of:

            - **Pandas / Polars DataFrame** or **PyArrow Table** with (at least)
              two columns: one for the transaction identifier and one for the item.
            - **List of lists** where each inner list contains the items of a
              single transaction, e.g. ``[["bread", "milk"], ["bread", "eggs"]]``.
        transaction_col
            Name of the column that identifies transactions. If ``None`` the
            first column is used. Ignored for list-of-lists input.
        item_col
            Name of the column that contains item values. If ``None`` the
            second column is used. Ignored for list-of-lists input.
        verbose : int, default=0
            Whether to print progress details.
        **kwargs
            Algorithm-specific parameters saved into the Miner (e.g., ``min_support``).

        Returns
        -------
        Miner
            Configured miner instance, ready to call ``.mine()``.
        """
        from ._compat import to_dataframe
        from .transactions import _from_dataframe, _from_list

        orig_type = frame_kind(data)
        data = to_dataframe(data)

        if isinstance(data, (list, tuple)):
            one_hot = _from_list(data, verbose=verbose)
            miner = cls(one_hot, verbose=verbose, **kwargs)
            miner._orig_df_type = "pandas"
            return miner

        import pandas as _pd
        import polars as _pl

        if not isinstance(data, (_pd.DataFrame, _pl.DataFrame)):
            raise TypeError(f"Expected a Pandas/Polars DataFrame, PyArrow Table or list of lists, got {type(data)}")

        if isinstance(data, _pl.DataFrame):
            data = data.to_pandas()

        one_hot = _from_dataframe(data, transaction_col, item_col, verbose=verbose)
        miner = cls(one_hot, verbose=verbose, **kwargs)
        miner._orig_df_type = orig_type
        return miner

    @abstractmethod
    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Execute the mining algorithm and return frequent patterns."""

    def fit(self, **kwargs: Any) -> Self:
        """Sklearn-compatible alias for ``mine()``. Runs the mining algorithm.

        Returns
        -------
        self
        """
        self._result = self.mine(**kwargs)
        return self  # type: ignore[return-value]

    def predict(self, **kwargs: Any) -> pd.DataFrame:
        """Return the last mined result, or run ``fit()`` first."""
        if getattr(self, "_result", None) is None:
            self.fit(**kwargs)
        return self._result  # type: ignore[return-value]
