"""A single connected group of names and its exported view.

A clique here is a connected component under the edges added so far, not a
complete subgraph. Each clique keeps every edge that joined it, with the
score that caused the connection, in a networkx graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import networkx as nx


@dataclass(frozen=True, order=True)
class CliqueExport:
    """Comparable snapshot of a clique.

    Attributes:
        max_score: Largest edge score inside the clique
        core: Representative member (see Clique.core)
        members: Non-core members, ascending

    Field order makes instances sort by weight first, then by content.
    """

    max_score: int
    core: str
    members: tuple[str, ...]

    @property
    def names(self) -> tuple[str, ...]:
        """Core first, then the other members."""
        return (self.core,) + self.members

    def __len__(self) -> int:
        return 1 + len(self.members)


class Clique:
    """Connected group of names with the edges that connected them."""

    def __init__(self, clique_id: int, l: str, r: str, score: int) -> None:
        self._id = clique_id
        self._graph = nx.Graph()
        self.add(l, r, score)

    @property
    def id(self) -> int:
        return self._id

    @property
    def members(self) -> frozenset[str]:
        return frozenset(self._graph.nodes)

    def __contains__(self, name: object) -> bool:
        return self._graph.has_node(name)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def edges(self) -> Iterator[tuple[str, str, int]]:
        for l, r, score in self._graph.edges(data="score"):
            yield l, r, score

    def add(self, l: str, r: str, score: int) -> None:
        """Insert an edge, adding either endpoint as a member if new.

        Re-adding an existing edge replaces its score.
        """
        self._graph.add_edge(l, r, score=score)

    def merge(self, other: Clique) -> None:
        """Absorb every member and edge of ``other``.

        ``other`` should be discarded afterwards.
        """
        self._graph.add_nodes_from(other._graph.nodes)
        self._graph.add_edges_from(other._graph.edges(data=True))

    def _max_incident_score(self, name: str) -> int:
        return max((score for _, _, score in self._graph.edges(name, data="score")), default=0)

    def core(self) -> str:
        """Return the member whose highest incident score is the lowest.

        Ties go to the lexicographically smallest name. A member without
        edges counts as having a highest score of 0.
        """
        return min(self._graph.nodes, key=lambda name: (self._max_incident_score(name), name))

    def max_score(self) -> int:
        return max((score for _, _, score in self.edges()), default=0)

    def export(self) -> CliqueExport:
        core = self.core()
        members = tuple(sorted(name for name in self._graph.nodes if name != core))
        return CliqueExport(max_score=self.max_score(), core=core, members=members)

    def copy(self) -> Clique:
        """Return an independent copy sharing no mutable state."""
        new = Clique.__new__(Clique)
        new._id = self._id
        new._graph = self._graph.copy()
        return new

    def __repr__(self) -> str:
        return f"Clique(id={self._id}, members={sorted(self._graph.nodes)})"
