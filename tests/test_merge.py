"""Tests for polyline merging."""

from collections import Counter

from sch2drawio.merge import merge_lines


def _point_multiset(lines):
    return Counter(p for line in lines for p in line)


def _endpoint_count(lines):
    return Counter(p for line in lines for p in (line[0], line[-1]))


class TestMergeBasics:
    """Simple merge cases."""

    def test_empty_input(self):
        assert merge_lines([]) == []

    def test_single_line_unchanged(self):
        assert merge_lines([[(0, 0), (1, 1)]]) == [[(0, 0), (1, 1)]]

    def test_disjoint_lines_unchanged(self):
        lines = [[(0, 0), (1, 0)], [(5, 5), (6, 5)]]
        assert merge_lines(lines) == lines

    def test_empty_fragments_dropped(self):
        assert merge_lines([[], [(0, 0), (1, 0)], []]) == [[(0, 0), (1, 0)]]

    def test_two_fragments_end_to_start(self):
        result = merge_lines([[(0, 0), (1, 1)], [(1, 1), (2, 2)]])
        assert result == [[(0, 0), (1, 1), (2, 2)]]

    def test_two_fragments_start_to_start(self):
        """The current line is reversed so the shared point sits in the middle."""
        result = merge_lines([[(1, 0), (0, 0)], [(1, 0), (2, 0)]])
        assert result == [[(0, 0), (1, 0), (2, 0)]]

    def test_two_fragments_start_to_end(self):
        result = merge_lines([[(1, 0), (2, 0)], [(0, 0), (1, 0)]])
        assert result == [[(0, 0), (1, 0), (2, 0)]]

    def test_two_fragments_end_to_end(self):
        result = merge_lines([[(0, 0), (1, 0)], [(2, 0), (1, 0)]])
        assert result == [[(0, 0), (1, 0), (2, 0)]]

    def test_shared_point_appears_once(self):
        result = merge_lines([[(0, 0), (1, 0)], [(1, 0), (2, 0)]])
        assert result[0].count((1, 0)) == 1

    def test_interior_points_preserved(self):
        result = merge_lines([[(0, 0), (0.5, 1), (1, 0)], [(1, 0), (1.5, -1), (2, 0)]])
        assert result == [[(0, 0), (0.5, 1), (1, 0), (1.5, -1), (2, 0)]]


class TestMergeChains:
    """Chains and junctions."""

    def test_chain_out_of_order(self):
        lines = [
            [(2, 0), (3, 0)],
            [(0, 0), (1, 0)],
            [(1, 0), (2, 0)],
        ]
        result = merge_lines(lines)
        assert len(result) == 1
        chain = result[0]
        assert {chain[0], chain[-1]} == {(0, 0), (3, 0)}
        assert len(chain) == 4

    def test_y_junction_not_merged(self):
        """Three fragments meeting at one point stay separate."""
        lines = [
            [(0, 0), (1, 0)],
            [(1, 0), (2, 1)],
            [(1, 0), (2, -1)],
        ]
        result = merge_lines(lines)
        assert len(result) == 3

    def test_t_junction_with_tails(self):
        """Fragments beyond the junction still merge among themselves."""
        lines = [
            [(0, 0), (1, 0)],
            [(1, 0), (2, 0)],
            [(1, 0), (1, 1)],
            [(1, 1), (1, 2)],
        ]
        result = merge_lines(lines)
        # (1, 0) is a junction of three; the vertical tail fuses through (1, 1)
        assert len(result) == 3
        assert [(1, 0), (1, 1), (1, 2)] in result or [(1, 2), (1, 1), (1, 0)] in result

    def test_closed_loop(self):
        lines = [
            [(0, 0), (1, 0)],
            [(1, 0), (1, 1)],
            [(1, 1), (0, 0)],
        ]
        result = merge_lines(lines)
        assert len(result) == 1
        loop = result[0]
        assert len(loop) == 4
        assert loop[0] == loop[-1]


class TestMergeProperties:
    """Properties that hold for any input."""

    LINES = [
        [(0, 0), (1, 0)],
        [(1, 0), (2, 0)],
        [(2, 0), (2, 1)],
        [(2, 0), (3, 0)],
        [(5, 5), (6, 6)],
        [(6, 6), (7, 7), (8, 7)],
    ]

    def test_never_more_lines_than_input(self):
        assert len(merge_lines(self.LINES)) <= len(self.LINES)

    def test_idempotent(self):
        once = merge_lines(self.LINES)
        assert merge_lines(once) == once

    def test_points_preserved(self):
        """Only shared endpoints disappear, once per fusion."""
        result = merge_lines(self.LINES)
        fusions = len(self.LINES) - len(result)
        before = _point_multiset(self.LINES)
        after = _point_multiset(result)
        assert sum(before.values()) - sum(after.values()) == fusions
        assert set(after) == set(before)

    def test_junction_endpoints_kept(self):
        """A point where three fragments end is an endpoint of three outputs."""
        result = merge_lines(self.LINES)
        assert _endpoint_count(result)[(2, 0)] == 3
