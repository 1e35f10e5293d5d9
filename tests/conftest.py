from __future__ import annotations

import random
from typing import Iterable

import numpy as np
import pytest
from hypothesis import settings

from cabal.similarity import SimilarityTable, SimilarityTableBuilder

# ---- Deterministic Testing Configuration ---------------------

DETERMINISTIC_SEED = 42


@pytest.fixture(autouse=True)
def set_deterministic_seed():
    """Set deterministic seed for all tests"""
    random.seed(DETERMINISTIC_SEED)
    np.random.seed(DETERMINISTIC_SEED)
    yield
    random.seed()
    np.random.seed()


# Hypothesis settings for all property-based tests
settings.register_profile(
    "deterministic",
    deadline=None,
    max_examples=100,
    derandomize=True,
    database=None,
)
settings.load_profile("deterministic")


# ---- Table fixtures ---------------------------------------------


def _build_table(edges: Iterable[tuple[str, str, int]]) -> SimilarityTable:
    """Build a table from triples, failing the test if it is incomplete."""
    builder = SimilarityTableBuilder()
    for l, r, score in edges:
        builder.add(l, r, score)
    result = builder.build()
    assert result.ok, f"missing pairs: {result.missing_pairs}"
    return result.unwrap()


@pytest.fixture
def make_table():
    """Factory building a complete table from (left, right, score) triples."""
    return _build_table


@pytest.fixture
def abc_table() -> SimilarityTable:
    return _build_table([("a", "b", 10), ("a", "c", 20), ("b", "c", 14)])
