"""Unit tests for a single clique."""

import pytest

from cabal.grouping.clique import Clique, CliqueExport


class TestClique:
    """Test Clique growth, merging and core selection."""

    def test_new_clique_holds_its_edge(self):
        clique = Clique(7, "a", "b", 10)

        assert clique.id == 7
        assert clique.members == frozenset({"a", "b"})
        assert list(clique.edges()) == [("a", "b", 10)]
        assert len(clique) == 2

    def test_add_extends_members(self):
        clique = Clique(0, "a", "b", 10)
        clique.add("b", "c", 5)

        assert "c" in clique
        assert "d" not in clique
        assert clique.max_score() == 10

    def test_merge_absorbs_members_and_edges(self):
        left = Clique(0, "a", "b", 10)
        right = Clique(1, "c", "d", 20)
        left.merge(right)

        assert left.id == 0
        assert left.members == frozenset({"a", "b", "c", "d"})
        assert {frozenset((l, r)): s for l, r, s in left.edges()} == {
            frozenset(("a", "b")): 10,
            frozenset(("c", "d")): 20,
        }

    def test_core_is_min_of_max_incident_scores(self):
        """Test the min-max core rule.

        Max incident scores: a=30, b=30, c=20, d=20 -> tie between c and d.
        """
        clique = Clique(0, "a", "b", 30)
        clique.add("b", "c", 20)
        clique.add("c", "d", 5)
        clique.add("d", "a", 20)

        assert clique.core() == "c"

    def test_core_prefers_lower_max(self):
        """Max incident scores: a=50, b=50, c=10 -> c."""
        clique = Clique(0, "a", "b", 50)
        clique.add("a", "c", 10)

        assert clique.core() == "c"

    def test_core_tie_breaks_on_smallest_name(self):
        clique = Clique(0, "z", "m", 10)

        assert clique.core() == "m"

    def test_core_is_deterministic_across_insertion_orders(self):
        edges = [("a", "b", 4), ("b", "c", 2), ("c", "d", 4), ("d", "e", 2)]
        forward = Clique(0, *edges[0])
        for edge in edges[1:]:
            forward.add(*edge)
        backward = Clique(0, *edges[-1])
        for edge in reversed(edges[:-1]):
            backward.add(*edge)

        # c has max incident score 4, e has 2 -> e wins on score
        assert forward.core() == backward.core() == "e"

    def test_export(self):
        clique = Clique(0, "c", "a", 15)
        clique.add("a", "b", 40)

        export = clique.export()

        assert export == CliqueExport(max_score=40, core="c", members=("a", "b"))
        assert export.names == ("c", "a", "b")
        assert len(export) == 3

    def test_copy_is_independent(self):
        clique = Clique(3, "a", "b", 10)
        copied = clique.copy()
        copied.add("b", "c", 20)

        assert copied.id == 3
        assert "c" not in clique
        assert clique.max_score() == 10


class TestCliqueExport:
    """Test CliqueExport ordering."""

    def test_orders_by_max_score_first(self):
        low = CliqueExport(max_score=10, core="z", members=("y",))
        high = CliqueExport(max_score=20, core="a", members=("b",))

        assert sorted([high, low]) == [low, high]

    def test_ties_broken_by_content(self):
        first = CliqueExport(max_score=10, core="a", members=("b",))
        second = CliqueExport(max_score=10, core="c", members=("d",))

        assert sorted([second, first]) == [first, second]

    def test_is_hashable_and_immutable(self):
        export = CliqueExport(max_score=10, core="a", members=("b",))

        assert export in {export}
        with pytest.raises(AttributeError):
            export.core = "b"
