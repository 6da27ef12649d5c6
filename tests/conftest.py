"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import numpy as np
import pytest

# Ensure tests/ dir is on path so test_minerbase imports work
sys.path.insert(0, os.path.dirname(__file__))

from itemminer import TransactionRelation  # noqa: E402

#: Five transactions over five attributes, as index sets.
SMALL_TRANSACTIONS = [[0, 1, 2], [0, 1], [1, 2, 3], [0, 2, 3], [4]]


@pytest.fixture
def small_relation() -> TransactionRelation:
    return TransactionRelation.from_indices(SMALL_TRANSACTIONS, 5, labels=["a", "b", "c", "d", "e"])


@pytest.fixture(scope="session")
def random_bool_matrix() -> np.ndarray:
    """300 x 10 random boolean matrix, dense enough for level-4 itemsets."""
    rng = np.random.default_rng(42)
    return rng.random((300, 10)) < 0.45
