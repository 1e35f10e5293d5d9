"""Unit tests for CliqueSet growth and diff export."""

import itertools

import pytest

from cabal.grouping.clique import CliqueExport
from cabal.grouping.clique_set import CliqueSet, CliqueSetExport, NewClique, OldClique


def _set_from(edges, base_id=0):
    cliques = CliqueSet(base_id)
    for edge in edges:
        cliques.add(*edge)
    return cliques


def _content(cliques):
    """Members and edges of every clique, independent of ids."""
    return sorted(
        (
            tuple(sorted(c.members)),
            tuple(sorted((tuple(sorted((l, r))), s) for l, r, s in c.edges())),
        )
        for c in cliques.cliques
    )


class TestCliqueSetAdd:
    """Test the five edge insertion cases."""

    def test_new_pair_creates_clique(self):
        cliques = CliqueSet()
        cliques.add("a", "b", 10)

        assert len(cliques) == 1
        assert cliques.find("a") is cliques.find("b")
        assert cliques.find("a").id == 0
        assert cliques.next_id == 1

    def test_base_id(self):
        cliques = _set_from([("a", "b", 1)], base_id=5)

        assert cliques.find("a").id == 5

    def test_left_known_extends(self):
        cliques = _set_from([("a", "b", 10), ("b", "c", 5)])

        assert len(cliques) == 1
        assert cliques.find("c").members == frozenset({"a", "b", "c"})

    def test_right_known_extends(self):
        cliques = _set_from([("a", "b", 10), ("c", "a", 5)])

        assert len(cliques) == 1
        assert "c" in cliques

    def test_same_clique_records_edge(self):
        cliques = _set_from([("a", "b", 10), ("b", "c", 5), ("a", "c", 30)])

        assert len(cliques) == 1
        assert cliques.find("a").max_score() == 30

    def test_merge_keeps_left_id_and_retires_right(self):
        cliques = _set_from([("a", "b", 10), ("c", "d", 20), ("b", "c", 15)])

        assert len(cliques) == 1
        merged = cliques.find("d")
        assert merged.id == 0
        assert merged.members == frozenset({"a", "b", "c", "d"})
        assert merged.max_score() == 20

        # Retired id 1 is never handed out again
        cliques.add("e", "f", 1)
        assert cliques.find("e").id == 2

    def test_merge_from_right_side(self):
        cliques = _set_from([("a", "b", 10), ("c", "d", 20), ("c", "b", 15)])

        assert cliques.find("a").id == 1

    def test_unknown_name(self):
        cliques = _set_from([("a", "b", 10)])

        assert cliques.find("z") is None
        assert "z" not in cliques
        assert cliques.names == frozenset({"a", "b"})

    @pytest.mark.parametrize(
        "order",
        list(itertools.permutations([("a", "b", 1), ("b", "c", 2), ("d", "e", 3), ("c", "d", 4)])),
    )
    def test_merge_outcome_independent_of_order(self, order):
        cliques = _set_from(order)

        assert len(cliques) == 1
        assert _content(cliques) == [
            (
                ("a", "b", "c", "d", "e"),
                (
                    (("a", "b"), 1),
                    (("b", "c"), 2),
                    (("c", "d"), 4),
                    (("d", "e"), 3),
                ),
            )
        ]

    def test_copy_is_deep(self):
        original = _set_from([("a", "b", 10)])
        copied = original.copy()
        copied.add("b", "c", 5)
        copied.add("x", "y", 1)

        assert "c" not in original
        assert len(original) == 1
        assert original.next_id == 1
        assert copied.next_id == 2


class TestCliqueSetExport:
    """Test diffing a clique set against its predecessor."""

    def test_export_against_empty_is_all_new(self):
        current = _set_from([("a", "b", 10), ("c", "d", 5)])

        export = current.export(CliqueSet())

        assert export == current.export()
        assert export.elements == (
            NewClique(CliqueExport(5, "c", ("d",))),
            NewClique(CliqueExport(10, "a", ("b",))),
        )

    def test_merge_reports_absorbed_cliques(self):
        """Two old cliques joined by (b, c) plus a brand-new (e, f)."""
        previous = _set_from([("a", "b", 10), ("c", "d", 20)])
        current = previous.copy()
        current.add("b", "c", 15)
        current.add("e", "f", 12)

        export = current.export(previous)

        assert len(export) == 2
        old, new = export.elements
        assert isinstance(old, OldClique)
        assert old.merged == (
            CliqueExport(10, "a", ("b",)),
            CliqueExport(20, "c", ("d",)),
        )
        assert old.added == ()
        assert set(old.clique.names) == {"a", "b", "c", "d"}
        assert old.clique.max_score == 20
        assert new == NewClique(CliqueExport(12, "e", ("f",)))
        assert export.old == [old]
        assert export.new == [new]

    def test_added_members_listed_sorted(self):
        previous = _set_from([("m", "n", 10)])
        current = previous.copy()
        current.add("n", "z", 11)
        current.add("z", "b", 12)

        (element,) = current.export(previous)

        assert isinstance(element, OldClique)
        assert element.added == ("b", "z")
        assert element.merged == (CliqueExport(10, "m", ("n",)),)

    def test_unchanged_clique_is_old(self):
        previous = _set_from([("a", "b", 10)])
        current = previous.copy()

        (element,) = current.export(previous)

        assert element == OldClique(CliqueExport(10, "a", ("b",)), (CliqueExport(10, "a", ("b",)),), ())

    def test_old_sorted_before_new_then_by_max_score(self):
        previous = _set_from([("a", "b", 30), ("c", "d", 5)])
        current = previous.copy()
        current.add("x", "y", 1)
        current.add("p", "q", 40)
        current.add("a", "e", 31)

        kinds_and_scores = [
            (type(element).__name__, element.clique.max_score) for element in current.export(previous)
        ]

        assert kinds_and_scores == [
            ("OldClique", 5),
            ("OldClique", 31),
            ("NewClique", 1),
            ("NewClique", 40),
        ]

    def test_ties_broken_by_content(self):
        current = _set_from([("c", "d", 7), ("a", "b", 7)])

        cores = [element.clique.core for element in current.export()]

        assert cores == ["a", "c"]

    def test_export_does_not_mutate_previous(self):
        previous = _set_from([("a", "b", 10)])
        current = previous.copy()
        current.add("b", "c", 20)
        current.export(previous)

        assert "c" not in previous
        assert isinstance(current.export(previous), CliqueSetExport)
