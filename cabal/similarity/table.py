"""Compact symmetric similarity table and its builder.

A SimilarityTable stores one score per unordered pair of distinct names.
Names are interned to dense indices in ascending order and only the upper
triangle of the score matrix is kept, packed row by row into a single
unsigned 32-bit array:

    index(i, j) = i * (2n - i - 1) / 2 + (j - i - 1)    for i < j

Tables are only produced by SimilarityTableBuilder.build(), which refuses
to freeze data that does not form a complete graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np
import pandas as pd

from cabal.similarity.types import Edge, canonical_pair, validate_score

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["left", "right", "score"]


class IncompleteGraphError(ValueError):
    """Raised when similarity data does not cover every pair of names."""

    def __init__(self, missing_pairs: Iterable[tuple[str, str]]) -> None:
        self.missing_pairs = list(missing_pairs)
        preview = ", ".join(f"({l}, {r})" for l, r in self.missing_pairs[:5])
        if len(self.missing_pairs) > 5:
            preview += ", ..."
        super().__init__(
            f"Similarity data does not form a complete graph: "
            f"{len(self.missing_pairs)} pair(s) missing a score: {preview}"
        )


class TableInvariantError(RuntimeError):
    """Raised when a table's name index and packed scores disagree."""


def _packed_size(n: int) -> int:
    return n * (n - 1) // 2


def _packed_offset(i: int, j: int, n: int) -> int:
    return i * (2 * n - i - 1) // 2 + (j - i - 1)


class SimilarityTable:
    """Immutable, complete, symmetric score matrix over a closed name set.

    Equality is defined over the set of edge triples, so two tables built
    from the same edges in any insertion order compare equal.
    """

    __slots__ = ("_names", "_index", "_scores")

    def __init__(self, names: Sequence[str], scores: np.ndarray) -> None:
        """Wrap already-validated table data.

        Use SimilarityTableBuilder instead of calling this directly.

        Args:
            names: All names in strictly ascending order
            scores: Packed upper-triangular scores, ``n*(n-1)/2`` entries

        Raises:
            TableInvariantError: If names and scores are inconsistent

        """
        self._names: tuple[str, ...] = tuple(names)
        self._index: dict[str, int] = {name: i for i, name in enumerate(self._names)}
        self._scores = np.asarray(scores, dtype=np.uint32)
        self._scores.flags.writeable = False
        self._check_invariants()

    def _check_invariants(self) -> None:
        n = len(self._names)
        if len(self._index) != n:
            raise TableInvariantError("Name index is not a bijection: duplicate names")
        if any(a >= b for a, b in zip(self._names, self._names[1:])):
            raise TableInvariantError("Names must be interned in strictly ascending order")
        if self._scores.ndim != 1 or self._scores.size != _packed_size(n):
            raise TableInvariantError(
                f"Packed score matrix has {self._scores.size} entries, "
                f"expected {_packed_size(n)} for {n} names"
            )

    @property
    def names(self) -> tuple[str, ...]:
        """All names, ascending."""
        return self._names

    @property
    def edge_count(self) -> int:
        return int(self._scores.size)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, l: str, r: str) -> Optional[int]:
        """Look up the score for an unordered pair.

        Args:
            l: One name
            r: The other name

        Returns:
            The score, or None if either name is unknown or both are the same

        """
        indices = self._indices_for(l, r)
        if indices is None:
            return None
        l_idx, r_idx = indices
        return int(self._scores[_packed_offset(l_idx, r_idx, len(self._names))])

    def __getitem__(self, pair: tuple[str, str]) -> int:
        l, r = pair
        score = self.get(l, r)
        if score is None:
            raise KeyError(f"No score for pair ({l!r}, {r!r})")
        return score

    def edges(self) -> Iterator[Edge]:
        """Iterate over every pair once, in index order.

        The outer index ascends, then the inner index. Each call starts a
        fresh iteration.
        """
        n = len(self._names)
        offset = 0
        for i in range(n):
            left = self._name_at(i)
            for j in range(i + 1, n):
                yield Edge(left, self._name_at(j), int(self._scores[offset]))
                offset += 1

    def sorted_edges(self, max_score: Optional[int] = None) -> list[Edge]:
        """Return edges ascending by score, optionally capped at ``max_score``.

        Edges with equal scores keep their index order.
        """
        edges = [e for e in self.edges() if max_score is None or e.score <= max_score]
        edges.sort(key=lambda e: e.score)
        return edges

    def to_frame(self) -> pd.DataFrame:
        """Export the edge set as a DataFrame with left/right/score columns."""
        df = pd.DataFrame.from_records(list(self.edges()), columns=FRAME_COLUMNS)
        return df.astype({"left": "string", "right": "string", "score": "int64"})

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[str, str, int]]) -> SimilarityTable:
        """Build a table from (left, right, score) triples.

        Raises:
            IncompleteGraphError: If the triples do not form a complete graph

        """
        builder = SimilarityTableBuilder()
        for l, r, score in edges:
            builder.add(l, r, score)
        return builder.build().unwrap()

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> SimilarityTable:
        """Build a table from a DataFrame produced by ``to_frame``.

        Raises:
            ValueError: If required columns are missing
            IncompleteGraphError: If the rows do not form a complete graph

        """
        missing_columns = [c for c in FRAME_COLUMNS if c not in df.columns]
        if missing_columns:
            raise ValueError(f"Edge frame is missing columns: {missing_columns}")
        return cls.from_edges(
            (str(l), str(r), score)
            for l, r, score in df[FRAME_COLUMNS].itertuples(index=False, name=None)
        )

    def _indices_for(self, l: str, r: str) -> Optional[tuple[int, int]]:
        if l == r:
            return None
        l, r = canonical_pair(l, r)
        l_idx = self._index.get(l)
        r_idx = self._index.get(r)
        if l_idx is None or r_idx is None:
            return None
        return l_idx, r_idx

    def _name_at(self, idx: int) -> str:
        try:
            return self._names[idx]
        except IndexError:
            raise TableInvariantError(
                f"Score matrix index {idx} has no corresponding name"
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimilarityTable):
            return NotImplemented
        if self.edge_count != other.edge_count:
            return False
        return set(self.edges()) == set(other.edges())

    def __hash__(self) -> int:
        return hash(frozenset(self.edges()))

    def __repr__(self) -> str:
        return f"SimilarityTable(names={len(self._names)}, edges={self.edge_count})"


@dataclass(frozen=True)
class BuildResult:
    """Outcome of SimilarityTableBuilder.build().

    Exactly one of ``table`` and ``builder`` is set. On failure ``builder``
    is the unchanged accumulator and ``missing_pairs`` lists what it lacks.
    """

    table: Optional[SimilarityTable] = None
    builder: Optional[SimilarityTableBuilder] = None
    missing_pairs: tuple[tuple[str, str], ...] = ()

    @property
    def ok(self) -> bool:
        return self.table is not None

    def unwrap(self) -> SimilarityTable:
        """Return the table or raise IncompleteGraphError."""
        if self.table is None:
            raise IncompleteGraphError(self.missing_pairs)
        return self.table


class SimilarityTableBuilder:
    """Mutable accumulator of scored name pairs.

    Adding a pair that is already present overwrites its score.
    """

    def __init__(self) -> None:
        self._scores: dict[str, dict[str, int]] = {}
        self._names: set[str] = set()

    def add(self, l: str, r: str, score: int) -> None:
        """Record the score for an unordered pair, registering both names.

        Args:
            l: One name
            r: The other name
            score: Unsigned similarity score

        Raises:
            ValueError: If the score cannot be stored as an unsigned 32-bit int

        """
        score = validate_score(score)
        l, r = canonical_pair(l, r)
        self._names.add(l)
        self._names.add(r)
        self._scores.setdefault(l, {})[r] = score

    @property
    def names(self) -> list[str]:
        return sorted(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def _iter_missing(self) -> Iterator[tuple[str, str]]:
        names = sorted(self._names)
        for i, l in enumerate(names):
            row = self._scores.get(l, {})
            for r in names[i + 1 :]:
                if r not in row:
                    yield l, r

    def missing_pairs(self) -> list[tuple[str, str]]:
        """List every canonical pair of known names that lacks a score."""
        return list(self._iter_missing())

    def is_complete(self) -> bool:
        return next(self._iter_missing(), None) is None

    def build(self) -> BuildResult:
        """Freeze the accumulated scores into a SimilarityTable.

        Returns:
            BuildResult with the table, or with this builder untouched and
            the missing pairs when the data is not a complete graph

        """
        missing = self.missing_pairs()
        if missing:
            logger.debug(
                f"Cannot build similarity table: {len(missing)} of "
                f"{_packed_size(len(self._names))} pairs missing"
            )
            return BuildResult(builder=self, missing_pairs=tuple(missing))

        names = sorted(self._names)
        n = len(names)
        scores = np.empty(_packed_size(n), dtype=np.uint32)
        offset = 0
        for i, l in enumerate(names):
            row = self._scores.get(l, {})
            for r in names[i + 1 :]:
                scores[offset] = row[r]
                offset += 1

        logger.debug(f"Built similarity table with {n} names and {scores.size} edges")
        return BuildResult(table=SimilarityTable(names, scores))

    def copy(self) -> SimilarityTableBuilder:
        new = SimilarityTableBuilder()
        new._scores = {l: dict(row) for l, row in self._scores.items()}
        new._names = set(self._names)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimilarityTableBuilder):
            return NotImplemented
        return self._scores == other._scores and self._names == other._names

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SimilarityTableBuilder(names={len(self._names)})"
