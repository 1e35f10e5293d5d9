"""Partition of names into cliques, grown one edge at a time.

Edges are inserted in ascending score order. Inserting an edge either
starts a new clique, extends one, or merges two cliques into one; cliques
never split. Exporting a CliqueSet against the snapshot taken at the
previous threshold describes how the groups evolved in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from cabal.grouping.clique import Clique, CliqueExport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewClique:
    """A clique sharing no member with any clique of the previous snapshot."""

    clique: CliqueExport


@dataclass(frozen=True)
class OldClique:
    """A clique that existed, at least in part, in the previous snapshot.

    Attributes:
        clique: Current state of the clique
        merged: Previous cliques it overlaps, ascending by max score
        added: Members that belonged to no previous clique, ascending
    """

    clique: CliqueExport
    merged: tuple[CliqueExport, ...]
    added: tuple[str, ...]


CliqueSetElement = Union[OldClique, NewClique]


def _element_sort_key(element: CliqueSetElement) -> tuple[int, CliqueExport]:
    return (0 if isinstance(element, OldClique) else 1, element.clique)


@dataclass(frozen=True)
class CliqueSetExport:
    """Ordered diff of a CliqueSet against its predecessor.

    Old elements come first, then new ones; each group ascends by the
    clique's max score, ties broken by clique content.
    """

    elements: tuple[CliqueSetElement, ...] = ()

    def __iter__(self) -> Iterator[CliqueSetElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def old(self) -> list[OldClique]:
        return [e for e in self.elements if isinstance(e, OldClique)]

    @property
    def new(self) -> list[NewClique]:
        return [e for e in self.elements if isinstance(e, NewClique)]


class CliqueSet:
    """Disjoint cliques keyed by ids that only ever increase.

    When two cliques merge, the clique holding the left endpoint of the
    connecting edge keeps its id and the other id is retired for good.
    """

    def __init__(self, base_id: int = 0) -> None:
        self._cliques: dict[int, Clique] = {}
        self._owner: dict[str, int] = {}
        self._next_id = base_id

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def cliques(self) -> list[Clique]:
        """All cliques, ascending by id."""
        return [self._cliques[cid] for cid in sorted(self._cliques)]

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._owner)

    def __len__(self) -> int:
        return len(self._cliques)

    def __contains__(self, name: object) -> bool:
        return name in self._owner

    def find(self, name: str) -> Optional[Clique]:
        """Return the clique containing ``name``, if any."""
        clique_id = self._owner.get(name)
        return None if clique_id is None else self._cliques[clique_id]

    def add(self, l: str, r: str, score: int) -> None:
        """Insert an edge, creating, extending or merging cliques.

        Args:
            l: Left endpoint
            r: Right endpoint
            score: Edge score

        """
        lc = self._owner.get(l)
        rc = self._owner.get(r)

        if lc is not None and rc is not None:
            if lc != rc:
                absorbed = self._cliques.pop(rc)
                self._cliques[lc].merge(absorbed)
                for name in absorbed.members:
                    self._owner[name] = lc
                logger.debug(f"Merged clique {rc} into clique {lc} via ({l}, {r}, {score})")
            self._cliques[lc].add(l, r, score)
        elif lc is not None:
            self._cliques[lc].add(l, r, score)
            self._owner[r] = lc
        elif rc is not None:
            self._cliques[rc].add(l, r, score)
            self._owner[l] = rc
        else:
            clique_id = self._next_id
            self._next_id += 1
            self._cliques[clique_id] = Clique(clique_id, l, r, score)
            self._owner[l] = clique_id
            self._owner[r] = clique_id

    def copy(self) -> CliqueSet:
        """Deep copy; mutating the copy never affects this set."""
        new = CliqueSet(self._next_id)
        new._cliques = {cid: clique.copy() for cid, clique in self._cliques.items()}
        new._owner = dict(self._owner)
        return new

    def export(self, previous: Optional[CliqueSet] = None) -> CliqueSetExport:
        """Describe this set relative to an earlier snapshot.

        Args:
            previous: Snapshot from the preceding threshold; None means empty

        Returns:
            CliqueSetExport with one element per current clique

        """
        if previous is None:
            previous = CliqueSet()

        elements: list[CliqueSetElement] = []
        for clique in self._cliques.values():
            members = clique.members
            merged_ids = {previous._owner[name] for name in members if name in previous._owner}
            if not merged_ids:
                elements.append(NewClique(clique.export()))
                continue

            merged = tuple(sorted(previous._cliques[cid].export() for cid in merged_ids))
            added = tuple(sorted(name for name in members if name not in previous._owner))
            elements.append(OldClique(clique.export(), merged, added))

        elements.sort(key=_element_sort_key)
        return CliqueSetExport(tuple(elements))

    def __repr__(self) -> str:
        return f"CliqueSet(cliques={len(self._cliques)}, names={len(self._owner)})"
