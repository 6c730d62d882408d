# File: tests/drag/test_input_events.py
"""Unit tests for the input event bus."""

from wall_panel_layout.drag.input_events import EventType, InputEvent, InputEventBus


class TestInputEvent:
    def test_constructors(self):
        move = InputEvent.pointer_move(1.0, 2.0)
        assert move.type == EventType.POINTER_MOVE
        assert (move.x, move.y) == (1.0, 2.0)
        assert InputEvent.key_down("Escape").key == "Escape"
        assert InputEvent.focus_lost().type == EventType.FOCUS_LOST
        assert InputEvent.pointer_up().type == EventType.POINTER_UP


class TestInputEventBus:
    """Tests for subscription and dispatch."""

    def test_dispatch_to_matching_type(self):
        bus = InputEventBus()
        moves, keys = [], []
        bus.subscribe(EventType.POINTER_MOVE, moves.append)
        bus.subscribe(EventType.KEY_DOWN, keys.append)

        called = bus.dispatch(InputEvent.pointer_move(3.0, 4.0))

        assert called == 1
        assert len(moves) == 1
        assert keys == []

    def test_no_subscribers(self):
        assert InputEventBus().dispatch(InputEvent.focus_lost()) == 0

    def test_cancel_is_idempotent(self):
        bus = InputEventBus()
        sub = bus.subscribe(EventType.POINTER_UP, lambda e: None)
        sub.cancel()
        sub.cancel()
        assert bus.listener_count() == 0

    def test_context_manager_cancels(self):
        bus = InputEventBus()
        with bus.subscribe(EventType.POINTER_UP, lambda e: None):
            assert bus.listener_count(EventType.POINTER_UP) == 1
        assert bus.listener_count(EventType.POINTER_UP) == 0

    def test_handler_cancelling_later_subscription(self):
        """A subscription cancelled mid-delivery is not called."""
        bus = InputEventBus()
        calls = []
        later = None

        def first(event):
            calls.append("first")
            later.cancel()

        bus.subscribe(EventType.KEY_DOWN, first)
        later = bus.subscribe(EventType.KEY_DOWN, lambda e: calls.append("later"))

        assert bus.dispatch(InputEvent.key_down("a")) == 1
        assert calls == ["first"]

    def test_listener_count_by_type(self):
        bus = InputEventBus()
        bus.subscribe(EventType.POINTER_MOVE, lambda e: None)
        bus.subscribe(EventType.POINTER_MOVE, lambda e: None)
        bus.subscribe(EventType.FOCUS_LOST, lambda e: None)
        assert bus.listener_count(EventType.POINTER_MOVE) == 2
        assert bus.listener_count() == 3
