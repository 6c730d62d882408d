# File: tests/drag/test_drag_session.py
"""Unit tests for the drag placement session."""

import pytest
from wall_panel_layout.drag.input_events import InputEvent, InputEventBus
from wall_panel_layout.drag.session import DragPlacementSession, DragState
from wall_panel_layout.geometry.face_layout import local_point_to_cell
from wall_panel_layout.geometry.grid_solver import GridCell
from wall_panel_layout.panels.panel_block import Span


@pytest.fixture
def bus():
    return InputEventBus()


@pytest.fixture
def commits():
    return []


@pytest.fixture
def session(bus, empty_store, commits):
    """Session on the default grid that records commits instead of placing."""
    geometry = empty_store.geometry

    def commit(candidate):
        commits.append(candidate)
        return empty_store.place(candidate)

    return DragPlacementSession(
        bus=bus,
        projection=lambda x, y: local_point_to_cell(x, y, geometry),
        validate=empty_store.fits,
        commit=commit,
    )


class TestLifecycle:
    """Tests for start, cancel and listener scoping."""

    def test_idle_by_default(self, session, bus):
        assert session.state == DragState.IDLE
        assert session.snapshot() is None
        assert bus.listener_count() == 0

    def test_start_subscribes(self, session, bus):
        session.start(Span(1, 3))
        assert session.active
        assert session.snapshot().span == Span(1, 3)
        assert session.snapshot().candidate is None
        assert bus.listener_count() == 4

    def test_cancel_releases_listeners(self, session, bus):
        session.start(Span(1, 3))
        assert session.cancel()
        assert bus.listener_count() == 0
        assert session.snapshot() is None

    def test_cancel_idempotent(self, session):
        assert not session.cancel()
        session.start(Span(1, 2))
        assert session.cancel()
        assert not session.cancel()

    def test_restart_aborts_previous(self, session, bus):
        session.start(Span(1, 3))
        session.start(Span(2, 1))
        assert session.span == Span(2, 1)
        assert bus.listener_count() == 4


class TestPointer:
    """Tests for pointer moves and release."""

    def test_move_sets_candidate(self, session, bus):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        assert session.candidate == GridCell(2, 0)

    def test_move_off_grid_clears_candidate(self, session, bus):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        bus.dispatch(InputEvent.pointer_move(-10.0, 5.0))
        assert session.candidate is None

    def test_move_where_span_does_not_fit(self, session, bus):
        """A 1 x 3 starting on the bottom row would leave the wall."""
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 100.0))
        assert session.candidate is None

    def test_release_commits(self, session, bus, commits, empty_store):
        """Dragging 1 x 3 to (2, 0) on an empty wall leaves exactly that block."""
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        bus.dispatch(InputEvent.pointer_up())

        assert len(commits) == 1
        assert len(empty_store) == 1
        block = empty_store.blocks[0]
        assert block.origin == GridCell(2, 0)
        assert block.span == Span(1, 3)
        assert not session.active
        assert bus.listener_count() == 0

    def test_release_without_candidate(self, session, bus, commits):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_up())
        assert commits == []
        assert not session.active

    def test_release_revalidates_candidate(self, bus, empty_store):
        """A cell that became invalid after the last move is not committed."""
        geometry = empty_store.geometry
        allowed = {"ok": True}
        commits = []
        session = DragPlacementSession(
            bus=bus,
            projection=lambda x, y: local_point_to_cell(x, y, geometry),
            validate=lambda candidate: allowed["ok"],
            commit=commits.append,
        )
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        assert session.candidate == GridCell(2, 0)

        allowed["ok"] = False
        bus.dispatch(InputEvent.pointer_up())

        assert commits == []
        assert not session.active

    def test_unit_span_never_commits(self, session, bus, commits):
        session.start(Span(1, 1))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        assert session.candidate == GridCell(2, 0)
        bus.dispatch(InputEvent.pointer_up())
        assert commits == []

    def test_events_after_finish_ignored(self, session, bus, commits):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        bus.dispatch(InputEvent.pointer_up())
        bus.dispatch(InputEvent.pointer_move(5.0, 5.0))
        bus.dispatch(InputEvent.pointer_up())
        assert len(commits) == 1


class TestCancelEvents:
    """Tests for key and focus cancellation."""

    def test_escape_cancels(self, session, bus, commits):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.pointer_move(45.0, 5.0))
        bus.dispatch(InputEvent.key_down("Escape"))
        assert not session.active
        bus.dispatch(InputEvent.pointer_up())
        assert commits == []

    def test_other_key_ignored(self, session, bus):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.key_down("a"))
        assert session.active

    def test_focus_lost_cancels(self, session, bus):
        session.start(Span(1, 3))
        bus.dispatch(InputEvent.focus_lost())
        assert not session.active
        assert bus.listener_count() == 0

    def test_custom_cancel_keys(self, bus, empty_store):
        session = DragPlacementSession(
            bus=bus,
            projection=lambda x, y: None,
            validate=empty_store.fits,
            commit=empty_store.place,
            cancel_keys=("q",),
        )
        session.start(Span(1, 2))
        bus.dispatch(InputEvent.key_down("Escape"))
        assert session.active
        bus.dispatch(InputEvent.key_down("q"))
        assert not session.active
