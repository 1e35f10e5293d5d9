"""Threshold sweep over a similarity table.

Edges are fed into a running CliqueSet in ascending score order. At every
threshold boundary the running set is exported against the snapshot taken
at the previous boundary, then snapshotted itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from cabal.grouping.clique_set import CliqueSet, CliqueSetExport
from cabal.similarity.table import SimilarityTable
from cabal.similarity.types import Edge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdSnapshot:
    """Clique structure at one threshold boundary.

    Attributes:
        boundary: Highest edge score included
        export: Diff against the previous boundary's snapshot
        cliques: Independent copy of the clique set at this boundary
        edges_added: Number of edges folded in since the previous boundary
    """

    boundary: int
    export: CliqueSetExport
    cliques: CliqueSet
    edges_added: int


def threshold_boundaries(max_score: int, step: int) -> list[int]:
    """Return ``0, step, 2*step, ...`` up to and including ``max_score``.

    ``max_score`` is appended when it is not a multiple of ``step``.

    Raises:
        ValueError: If max_score is negative or step is not positive

    """
    if max_score < 0:
        raise ValueError(f"max_score must be >= 0, got {max_score}")
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step}")

    boundaries = list(range(0, max_score + 1, step))
    if boundaries[-1] != max_score:
        boundaries.append(max_score)
    return boundaries


def _validate_boundaries(boundaries: list[int]) -> None:
    if boundaries and boundaries[0] < 0:
        raise ValueError(f"Threshold boundaries must be >= 0, got {boundaries[0]}")
    for lower, upper in zip(boundaries, boundaries[1:]):
        if upper <= lower:
            raise ValueError(
                f"Threshold boundaries must be strictly ascending, got {lower} then {upper}"
            )


def evolve(table: SimilarityTable, boundaries: Iterable[int]) -> Iterator[ThresholdSnapshot]:
    """Sweep the thresholds and describe the cliques at each one.

    Every boundary yields exactly one snapshot, in ascending order, even
    when no edge falls between it and the previous one. Edges scoring above
    the last boundary are never added.

    Args:
        table: Complete similarity table
        boundaries: Strictly ascending, non-negative score thresholds

    Returns:
        Iterator of ThresholdSnapshot, one per boundary

    Raises:
        ValueError: If boundaries are negative or not strictly ascending

    """
    boundaries = list(boundaries)
    _validate_boundaries(boundaries)
    if not boundaries:
        return iter(())

    edges = table.sorted_edges(max_score=boundaries[-1])
    logger.info(
        f"Sweeping {len(boundaries)} thresholds up to {boundaries[-1]} "
        f"over {len(edges)} of {table.edge_count} edges"
    )
    return _walk(edges, boundaries)


def _walk(edges: list[Edge], boundaries: list[int]) -> Iterator[ThresholdSnapshot]:
    current = CliqueSet()
    previous = CliqueSet()
    position = 0

    for boundary in boundaries:
        start = position
        while position < len(edges) and edges[position].score <= boundary:
            l, r, score = edges[position]
            current.add(l, r, score)
            position += 1

        export = current.export(previous)
        logger.debug(
            f"Threshold {boundary}: {position - start} edges added, "
            f"{len(current)} cliques ({len(export.new)} new)"
        )
        yield ThresholdSnapshot(
            boundary=boundary,
            export=export,
            cliques=current.copy(),
            edges_added=position - start,
        )
        previous = current.copy()
