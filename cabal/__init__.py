"""Cabal: track how similar items group together as the threshold is relaxed."""

__version__ = "0.3.0"

from cabal.grouping import CliqueSet, evolve, threshold_boundaries
from cabal.similarity import SimilarityTable, SimilarityTableBuilder

__all__ = [
    "CliqueSet",
    "SimilarityTable",
    "SimilarityTableBuilder",
    "evolve",
    "threshold_boundaries",
]
