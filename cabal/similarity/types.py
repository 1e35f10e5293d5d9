"""Type definitions and score helpers for similarity tables.

Scores are unsigned integers on a parts-per-million-like scale where
1,000,000 is 100% similarity. Higher means more similar.
"""

import numbers
from typing import NamedTuple

# One percent on the score scale.
SCORE_PER_PERCENT = 10_000

# Scores are stored packed as unsigned 32-bit integers.
MAX_STORABLE_SCORE = 2**32 - 1


class Edge(NamedTuple):
    """A single undirected, scored pair of names.

    ``left`` is always the lexicographically smaller name when the edge
    comes out of a SimilarityTable.
    """

    left: str
    right: str
    score: int


def canonical_pair(l: str, r: str) -> tuple[str, str]:
    """Order a pair of names so the smaller one comes first."""
    return (l, r) if l < r else (r, l)


def validate_score(score: int) -> int:
    """Check that a score is a storable unsigned integer.

    Args:
        score: Candidate score

    Returns:
        The score as a plain int

    Raises:
        ValueError: If the score is not a non-negative integer that fits
            in 32 bits

    """
    # numpy integer scalars register as Integral
    if isinstance(score, bool) or not isinstance(score, numbers.Integral):
        raise ValueError(f"Score must be an unsigned integer, got {score!r}")
    score = int(score)
    if not 0 <= score <= MAX_STORABLE_SCORE:
        raise ValueError(f"Score {score} must be in [0,{MAX_STORABLE_SCORE}]")
    return score


def percent_to_score(percent: int) -> int:
    """Convert a whole percentage to the score scale."""
    return percent * SCORE_PER_PERCENT


def format_percent(score: int) -> str:
    """Render a score as a percentage with one fractional digit.

    The fractional digit is truncated, not rounded: 15999 renders as ``1.5``.
    """
    return f"{score // SCORE_PER_PERCENT}.{(score % SCORE_PER_PERCENT) // 1000}"
