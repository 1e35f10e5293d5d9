"""Grouping algorithms for cabal.

This package tracks how names cluster as the similarity threshold is
relaxed:
- Clique / CliqueSet: incremental connected groups
- evolve(): threshold sweep with diffs between consecutive thresholds
- render_*: plain-text listing of the diffs
"""

from .clique import Clique, CliqueExport
from .clique_set import (
    CliqueSet,
    CliqueSetElement,
    CliqueSetExport,
    NewClique,
    OldClique,
)
from .evolution import ThresholdSnapshot, evolve, threshold_boundaries
from .render import render_clique, render_clique_set, render_element, render_snapshot

__all__ = [
    "Clique",
    "CliqueExport",
    "CliqueSet",
    "CliqueSetElement",
    "CliqueSetExport",
    "NewClique",
    "OldClique",
    "ThresholdSnapshot",
    "evolve",
    "render_clique",
    "render_clique_set",
    "render_element",
    "render_snapshot",
    "threshold_boundaries",
]
