"""Support counting and candidate generation for the level-wise miner."""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import numpy as np

from . import _bits
from .errors import AbortError
from .itemset import (
    ITEMSET_KEY,
    DenseItemset,
    Itemset,
    OneItemset,
    SmallDenseItemset,
    SparseItemset,
    make_itemset,
)

if TYPE_CHECKING:
    from .relation import BitVector


def required_support(n_transactions: int, min_frequency: float | None, min_support: int | None) -> int:
    """Absolute transaction count an itemset needs to be frequent.

    In frequency mode this is ``ceil(min_frequency * n_transactions)``.  The
    product is rounded to 9 decimals first, so float noise such as
    ``0.7 * 10 == 7.000000000000001`` does not push the count up by one.
    """
    if min_frequency is not None:
        return math.ceil(round(min_frequency * n_transactions, 9))
    return int(min_support)  # type: ignore[arg-type]


def count_support(candidates: Sequence[Itemset], transactions: Iterable[BitVector]) -> None:
    """Scan every transaction once and set ``support`` on every candidate.

    Counts accumulate in one array per level and are written back after the
    scan, so the candidates are only touched twice.
    """
    counts = np.zeros(len(candidates), dtype=np.int64)
    for bv in transactions:
        for k, candidate in enumerate(candidates):
            if candidate.contained_in(bv):
                counts[k] += 1
    for candidate, count in zip(candidates, counts.tolist()):
        candidate.support = count


def frequent_itemsets(candidates: Sequence[Itemset], needed: int) -> list[Itemset]:
    """Keep the candidates with at least *needed* support, preserving order."""
    return [c for c in candidates if c.support >= needed]


def _contains(supported: Sequence[Itemset], probe: Itemset) -> bool:
    key = ITEMSET_KEY(probe)
    pos = bisect_left(supported, key, key=ITEMSET_KEY)
    return pos < len(supported) and supported[pos].compare(probe) == 0


def apriori_generate(
    supported: Sequence[Itemset],
    length: int,
    dim: int,
    encoding: str = "sparse",
) -> list[Itemset]:
    """Join the frequent itemsets of one level into candidates of *length*.

    *supported* must be sorted by the itemset order.  Only candidates whose
    every ``length - 1`` subset is in *supported* are returned, again sorted.
    *encoding* picks the representation of the level-2 candidates; later
    levels keep whatever representation their input has.
    """
    if len(supported) == 0:
        return []

    # At length 2, every pair of frequent items qualifies.
    if length == 2:
        for s in supported:
            if not isinstance(s, OneItemset):
                raise AbortError(f"Expected 1-itemsets to build pairs from, got {type(s).__name__}")
        items = [s.item for s in supported]  # type: ignore[attr-defined]
        return [make_itemset(encoding, (a, b), dim) for i, a in enumerate(items) for b in items[i + 1 :]]

    ref = type(supported[0])
    for s in supported:
        if type(s) is not ref:
            raise AbortError(f"Mixed itemset types within one level: {ref.__name__} and {type(s).__name__}")

    if ref is SparseItemset:
        return _generate_sparse(supported, length)  # type: ignore[arg-type]
    if ref is DenseItemset:
        return _generate_dense(supported, length, dim)  # type: ignore[arg-type]
    if ref is SmallDenseItemset:
        return _generate_small_dense(supported, length)  # type: ignore[arg-type]
    raise AbortError(f"Unexpected itemset type {ref.__name__}")


def _generate_sparse(supported: Sequence[SparseItemset], length: int) -> list[Itemset]:
    # A prefix mismatch only skips this pair: unlike the dense join there is
    # no break, the scan keeps trying later partners.
    candidates: list[Itemset] = []
    plen = length - 2
    n = len(supported)
    for i in range(n):
        ii = supported[i].indices()
        prefix = ii[:plen]
        for j in range(i + 1, n):
            ij = supported[j].indices()
            if ij[:plen] != prefix:
                continue
            items = ii + (ij[-1],)
            # The two trailing members give back ii and ij, frequent already.
            if all(_contains(supported, SparseItemset(items[:k] + items[k + 1 :])) for k in range(plen)):
                candidates.append(SparseItemset(items))
    return candidates


def _generate_dense(supported: Sequence[DenseItemset], length: int, dim: int) -> list[Itemset]:
    candidates: list[Itemset] = []
    n = len(supported)
    for i in range(n):
        ii = supported[i].items
        for j in range(i + 1, n):
            ij = supported[j].items
            # Prefix test via "|ii ^ ij| = 2"; sorted, so no later j can match.
            diff = ii ^ ij
            if _bits.cardinality(diff) != 2:
                break
            # The lower differing bit must be the last item of ii.
            first = _bits.next_set_bit(diff, 0)
            if _bits.next_set_bit(ii, first + 1) > -1:
                break
            scratch = diff | ij
            ok = True
            b = _bits.next_set_bit(scratch, 0)
            for _ in range(length - 2):
                _bits.clear_bit(scratch, b)
                found = _contains(supported, DenseItemset(scratch, length - 1))
                _bits.set_bit(scratch, b)
                if not found:
                    ok = False
                    break
                b = _bits.next_set_bit(scratch, b + 1)
            if ok:
                candidates.append(DenseItemset(scratch, length))
    return candidates


def _generate_small_dense(supported: Sequence[SmallDenseItemset], length: int) -> list[Itemset]:
    candidates: list[Itemset] = []
    n = len(supported)
    for i in range(n):
        ii = supported[i].items
        for j in range(i + 1, n):
            ij = supported[j].items
            diff = ii ^ ij
            if _bits.popcount(diff) != 2:
                break
            first = _bits.lowest_bit(diff)
            if ii >> (first + 1):
                break
            union = ii | ij
            ok = True
            rest = union
            for _ in range(length - 2):
                low = rest & -rest
                rest ^= low
                if not _contains(supported, SmallDenseItemset(union ^ low, length - 1)):
                    ok = False
                    break
            if ok:
                candidates.append(SmallDenseItemset(union, length))
    return candidates
