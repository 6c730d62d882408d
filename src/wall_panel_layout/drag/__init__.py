"""
Drag-and-drop placement of new panels.

Key Components:
    - InputEventBus: delivers pointer/key/focus events to subscribers
    - DragPlacementSession: IDLE/DRAGGING state machine producing placements
"""

from .input_events import (
    EventType,
    InputEvent,
    InputEventBus,
    Subscription,
)

from .session import (
    DragState,
    DragSnapshot,
    DragPlacementSession,
)

__all__ = [
    "EventType",
    "InputEvent",
    "InputEventBus",
    "Subscription",
    "DragState",
    "DragSnapshot",
    "DragPlacementSession",
]
