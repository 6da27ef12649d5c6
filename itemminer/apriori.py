"""APRIORI: level-wise frequent itemset mining.

Reference: R. Agrawal, R. Srikant: Fast Algorithms for Mining Association
Rules in Large Databases. In Proc. 20th Int. Conf. on Very Large Data Bases
(VLDB '94), Santiago de Chile, Chile 1994.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._core import apriori_generate, count_support, frequent_itemsets, required_support
from ._validation import check_encoding, check_max_len, check_thresholds
from .itemset import EncodingPolicy, Itemset, OneItemset
from .model import Miner
from .relation import TransactionRelation, as_relation
from .result import AprioriResult

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl

logger = logging.getLogger(__name__)

#: Settings ``run()`` accepts as per-call overrides (``mine()`` adds ``use_colnames``).
_RUN_OPTIONS = frozenset({"min_frequency", "min_support", "encoding", "max_len", "verbose"})


def _describe(itemsets: Sequence[Itemset], labels: Sequence[Any] | None) -> str:
    return " ".join(f"[{s.to_string(labels)}]" for s in itemsets)


class Apriori(Miner):
    """APRIORI frequent itemset miner.

    Alternates a full scan of the transactions (support counting) with the
    apriori-gen join, pruning every candidate that has an infrequent subset.
    """

    def __init__(
        self,
        data: pd.DataFrame | pl.DataFrame | np.ndarray | TransactionRelation | Any,
        item_names: list[str] | None = None,
        min_frequency: float | None = None,
        min_support: int | None = None,
        encoding: EncodingPolicy = "sparse",
        max_len: int | None = None,
        null_values: bool = False,
        use_colnames: bool = True,
        verbose: int = 0,
    ):
        """Initialize the APRIORI miner.

        Parameters
        ----------
        data : pandas.DataFrame, polars.DataFrame, numpy.ndarray, scipy.sparse matrix or TransactionRelation
            One-hot transactions, one row per transaction.
        item_names : list[str] | None, default=None
            Attribute labels, if the input carries no column names.
        min_frequency : float | None, default=None
            Minimum support as a fraction of transactions, in ``[0, 1]``.
            The required count is ``ceil(min_frequency * n_transactions)``.
        min_support : int | None, default=None
            Minimum support as an absolute number of transactions (``>= 0``).
            Exactly one of ``min_frequency`` and ``min_support`` must be set.
        encoding : {"sparse", "dense", "small_dense"} or callable, default="sparse"
            Representation of itemsets from level 2 on.  ``"sparse"`` keeps
            index tuples, ``"dense"`` keeps bit masks over all attributes and
            ``"small_dense"`` a single 64-bit mask (at most 64 attributes).
            A callable ``policy(dimensionality, n_frequent_items) -> str`` is
            asked once, when the level-2 candidates are built.
        max_len : int | None, default=None
            Maximum length of the itemsets generated. If None, no limit is applied.
        null_values : bool, default=False
            If True, NaN values in pandas DataFrames are read as absent items.
        use_colnames : bool, default=True
            If True, ``mine()`` returns itemsets of labels rather than indices.
        verbose : int, default=0
            If > 0, print progress per level.  If > 1, also show a progress
            bar over the transaction scan.
        """
        super().__init__(data=data, item_names=item_names)
        if isinstance(data, TransactionRelation) and item_names is None:
            self.item_names = data.labels
        self.min_frequency = min_frequency
        self.min_support = min_support
        self.encoding = encoding
        self.max_len = max_len
        self.null_values = null_values
        self.use_colnames = use_colnames
        self.verbose = verbose

        check_thresholds(min_frequency, min_support)
        check_encoding(encoding)
        check_max_len(max_len)

        self._relation: TransactionRelation | None = None

    @property
    def relation(self) -> TransactionRelation:
        """The packed transactions, built on first use."""
        if self._relation is None:
            self._relation = as_relation(self.data, self.item_names, self.null_values, self.verbose)
        return self._relation

    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Execute APRIORI on the stored data.

        Keyword arguments override the constructor settings for this call.

        Returns
        -------
        pandas.DataFrame
            DataFrame with three columns:
            - `support`: fraction of transactions containing the itemset.
            - `count`: number of transactions containing the itemset.
            - `itemsets`: list of items (indices or column names).
        """
        use_colnames = kwargs.pop("use_colnames", self.use_colnames)
        result = self.run(**kwargs)
        return self._convert_to_orig_type(result.to_pandas(use_colnames=use_colnames))

    def run(
        self,
        relation: TransactionRelation | None = None,
        **kwargs: Any,
    ) -> AprioriResult:
        """Run APRIORI and return the frequent itemsets as :class:`AprioriResult`.

        Parameters
        ----------
        relation : TransactionRelation | None
            Transactions to mine.  Defaults to the data given at construction.
        """
        unknown = sorted(set(kwargs) - _RUN_OPTIONS)
        if unknown:
            raise TypeError(
                f"Unexpected mining option(s) {unknown}. Expected any of {sorted(_RUN_OPTIONS | {'use_colnames'})}."
            )
        min_frequency = kwargs.get("min_frequency", self.min_frequency)
        min_support = kwargs.get("min_support", self.min_support)
        if "min_frequency" in kwargs and "min_support" not in kwargs:
            min_support = None
        elif "min_support" in kwargs and "min_frequency" not in kwargs:
            min_frequency = None
        encoding = kwargs.get("encoding", self.encoding)
        max_len = kwargs.get("max_len", self.max_len)
        verbose = kwargs.get("verbose", self.verbose)

        check_thresholds(min_frequency, min_support)
        check_max_len(max_len)

        if relation is None:
            relation = self.relation
        dim = relation.dimensionality
        check_encoding(encoding, dim)

        solution: list[Itemset] = []
        size = len(relation)
        if size == 0:
            return AprioriResult(solution, size, dim, relation.labels)

        needed = required_support(size, min_frequency, min_support)
        if verbose:
            print(
                f"[{time.strftime('%X')}] APRIORI on {size:,} transactions x {dim:,} attributes, "
                f"required support {needed:,}."
            )

        # Initial candidates of length 1.
        candidates: list[Itemset] = [OneItemset(i) for i in range(dim)]
        labels = relation.labels
        length = 1
        while candidates:
            t0 = time.perf_counter()
            transactions: Any = relation
            if verbose > 1:
                from tqdm.auto import tqdm

                transactions = tqdm(relation, total=size, desc=f"Level {length}")
            count_support(candidates, transactions)
            supported = frequent_itemsets(candidates, needed)
            solution.extend(supported)

            if verbose:
                print(
                    f"[{time.strftime('%X')}] Level {length}: {len(supported):,} of {len(candidates):,} "
                    f"candidates frequent ({time.perf_counter() - t0:.2f}s)."
                )
            debug = logger.isEnabledFor(logging.DEBUG)
            msg: list[str] = []
            if debug:
                if length > 2:
                    msg.append(f"candidates ({len(candidates)}): {_describe(candidates, labels)}")
                msg.append(f"frequent itemsets ({len(supported)}): {_describe(supported, labels)}")

            if max_len is not None and length >= max_len:
                if debug:
                    logger.debug("level %d\n%s", length, "\n".join(msg))
                break

            if length == 1 and callable(encoding):
                encoding = encoding(dim, len(supported))
                check_encoding(encoding, dim)

            # Join to get the new candidates
            candidates = apriori_generate(supported, length + 1, dim, encoding)
            if debug:
                if length > 2:
                    msg.append(f"candidates after pruning ({len(candidates)}): {_describe(candidates, labels)}")
                logger.debug("level %d\n%s", length, "\n".join(msg))
            length += 1

        return AprioriResult(solution, size, dim, relation.labels)

    def __repr__(self) -> str:
        threshold = (
            f"min_frequency={self.min_frequency}"
            if self.min_frequency is not None
            else f"min_support={self.min_support}"
        )
        return f"{type(self).__name__}({threshold}, encoding={self.encoding!r}, max_len={self.max_len})"


def apriori(
    df: pd.DataFrame | pl.DataFrame | np.ndarray | Any,
    min_frequency: float | None = None,
    min_support: int | None = None,
    encoding: EncodingPolicy = "sparse",
    null_values: bool = False,
    use_colnames: bool = False,
    max_len: int | None = None,
    verbose: int = 0,
    column_names: list[str] | None = None,
) -> pd.DataFrame:
    """Find frequent itemsets using the APRIORI algorithm.

    This module-level function relies on the Object-Oriented APIs; see
    :class:`Apriori` for the parameters.

    Examples
    --------
    >>> import pandas as pd
    >>> from itemminer import apriori
    >>> df = pd.DataFrame({"bread": [1, 1, 0], "milk": [1, 0, 1]}).astype(bool)
    >>> apriori(df, min_support=1, use_colnames=True)
    """
    return Apriori(
        data=df,
        item_names=column_names,
        min_frequency=min_frequency,
        min_support=min_support,
        encoding=encoding,
        null_values=null_values,
        use_colnames=use_colnames,
        max_len=max_len,
        verbose=verbose,
    ).mine()
