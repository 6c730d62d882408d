# File: src/wall_panel_layout/drag/input_events.py
"""
Pointer and keyboard events, and the bus that delivers them.

The bus is the engine's stand-in for window-level event listeners: a
host (GUI, HTTP endpoint, test) dispatches events and whoever subscribed
gets them. Subscriptions are context managers so owners can scope them
with `with` or `contextlib.ExitStack`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """Input event kinds the layout engine listens for."""
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    KEY_DOWN = "key_down"
    FOCUS_LOST = "focus_lost"


@dataclass(frozen=True)
class InputEvent:
    """
    One input event.

    Attributes:
        type: Event kind
        x: Pointer x for pointer events (host coordinates)
        y: Pointer y for pointer events (host coordinates)
        key: Key name for key events (e.g. "Escape")
    """
    type: EventType
    x: Optional[float] = None
    y: Optional[float] = None
    key: Optional[str] = None

    @classmethod
    def pointer_move(cls, x: float, y: float) -> "InputEvent":
        return cls(EventType.POINTER_MOVE, x=x, y=y)

    @classmethod
    def pointer_up(cls, x: Optional[float] = None, y: Optional[float] = None) -> "InputEvent":
        return cls(EventType.POINTER_UP, x=x, y=y)

    @classmethod
    def key_down(cls, key: str) -> "InputEvent":
        return cls(EventType.KEY_DOWN, key=key)

    @classmethod
    def focus_lost(cls) -> "InputEvent":
        return cls(EventType.FOCUS_LOST)


EventHandler = Callable[[InputEvent], None]


class Subscription:
    """Handle for one bus subscription; cancelling is idempotent."""

    def __init__(self, bus: "InputEventBus", event_type: EventType, handler: EventHandler):
        self._bus = bus
        self.event_type = event_type
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._bus._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()


class InputEventBus:
    """Synchronous publish/subscribe for input events."""

    def __init__(self):
        self._subscriptions: Dict[EventType, List[Subscription]] = {
            t: [] for t in EventType
        }

    def subscribe(self, event_type: EventType, handler: EventHandler) -> Subscription:
        sub = Subscription(self, event_type, handler)
        self._subscriptions[event_type].append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscriptions[sub.event_type]
        if sub in subs:
            subs.remove(sub)

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Number of live subscriptions, for one event type or all."""
        if event_type is not None:
            return len(self._subscriptions[event_type])
        return sum(len(subs) for subs in self._subscriptions.values())

    def dispatch(self, event: InputEvent) -> int:
        """
        Deliver an event to its subscribers, in subscription order.

        Handlers may cancel subscriptions while the event is being delivered;
        a cancelled subscription is skipped for the rest of the delivery.

        Returns:
            Number of handlers called
        """
        called = 0
        for sub in list(self._subscriptions[event.type]):
            if not sub.active:
                continue
            sub.handler(event)
            called += 1
        logger.trace(f"Dispatched {event.type.value} to {called} handler(s)")
        return called
