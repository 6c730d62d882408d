# File: tests/panels/test_panel_block.py
"""Unit tests for panel block value types."""

import pytest
from wall_panel_layout.geometry.grid_solver import GridCell
from wall_panel_layout.panels.panel_block import (
    Candidate,
    LockedJoints,
    PanelBlock,
    Span,
)


class TestSpan:
    """Tests for Span dataclass."""

    def test_creation(self):
        span = Span(1, 3)
        assert span.w == 1
        assert span.h == 3
        assert not span.is_unit

    def test_unit(self):
        assert Span(1, 1).is_unit

    def test_invalid_size_raises(self):
        """Test that zero or negative spans raise ValueError."""
        with pytest.raises(ValueError):
            Span(0, 2)
        with pytest.raises(ValueError):
            Span(1, -1)


class TestLockedJoints:
    """Tests for LockedJoints dataclass."""

    def test_default_empty(self):
        assert LockedJoints().is_empty

    def test_sets_are_frozen(self):
        joints = LockedJoints(v=[1, 2], h={0})
        assert joints.v == frozenset({1, 2})
        assert joints.h == frozenset({0})

    def test_for_edges(self):
        """A 1 x 3 block at (2, 0) is bounded by seams v2, v3, h0, h3."""
        joints = LockedJoints.for_edges(GridCell(2, 0), Span(1, 3))
        assert joints.v == {2, 3}
        assert joints.h == {0, 3}

    def test_to_dict_sorted(self):
        assert LockedJoints(v={3, 1}, h={2}).to_dict() == {"v": [1, 3], "h": [2]}


class TestIntersection:
    """Tests for rectangle overlap helpers."""

    def test_overlapping(self):
        a = Candidate(GridCell(0, 0), Span(2, 2))
        b = Candidate(GridCell(1, 1), Span(2, 2))
        assert a.intersects(b)
        assert b.intersects(a)

    def test_touching_edges_do_not_overlap(self):
        a = Candidate(GridCell(0, 0), Span(2, 2))
        assert not a.intersects(Candidate(GridCell(2, 0), Span(1, 2)))
        assert not a.intersects(Candidate(GridCell(0, 2), Span(2, 1)))

    def test_contains_rect(self):
        outer = Candidate(GridCell(0, 0), Span(2, 4))
        assert outer.contains_rect(Candidate(GridCell(1, 1), Span(1, 2)))
        assert not outer.contains_rect(Candidate(GridCell(1, 3), Span(1, 2)))

    def test_cells_row_major(self):
        cells = list(Candidate(GridCell(1, 2), Span(2, 2)).cells())
        assert cells == [(1, 2), (2, 2), (1, 3), (2, 3)]


class TestPanelBlock:
    """Tests for PanelBlock dataclass."""

    def test_edges(self):
        block = PanelBlock("a", GridCell(2, 1), Span(2, 3))
        assert block.right == 4
        assert block.bottom == 4

    def test_to_dict(self):
        block = PanelBlock(
            "a",
            GridCell(2, 0),
            Span(1, 3),
            LockedJoints.for_edges(GridCell(2, 0), Span(1, 3)),
        )
        assert block.to_dict() == {
            "id": "a",
            "origin": {"col": 2, "row": 0},
            "span": {"w": 1, "h": 3},
            "lockedJoints": {"v": [2, 3], "h": [0, 3]},
        }

    def test_from_dict_without_locks(self):
        block = PanelBlock.from_dict({
            "id": "b",
            "origin": {"col": 0, "row": 4},
            "span": {"w": 1, "h": 2},
        })
        assert block == PanelBlock("b", GridCell(0, 4), Span(1, 2))
        assert block.locked_joints.is_empty

    def test_from_dict_bad_span_raises(self):
        with pytest.raises(ValueError):
            PanelBlock.from_dict({
                "id": "b",
                "origin": {"col": 0, "row": 0},
                "span": {"w": 0, "h": 2},
            })
