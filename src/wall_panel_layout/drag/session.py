# File: src/wall_panel_layout/drag/session.py
"""
Drag placement session.

State machine for dragging a new panel from the palette onto the wall:

    IDLE --start(span)--> DRAGGING(span, candidate=None)
    DRAGGING --pointer move--> DRAGGING(span, candidate=cell or None)
    DRAGGING --pointer up--> IDLE   (commits the candidate, if any)
    DRAGGING --cancel key / focus lost / cancel()--> IDLE   (no change)

Pointer, key and focus subscriptions exist only while DRAGGING. They are
held in an ExitStack opened on entry and closed on every exit path.

A 1 x 1 span never commits; releasing it behaves like a cancel.

Usage:
    session = DragPlacementSession(bus, projection, store.fits, commit)
    session.start(Span(1, 3))
    bus.dispatch(InputEvent.pointer_move(40.0, 10.0))
    bus.dispatch(InputEvent.pointer_up())
"""

from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from ..geometry.grid_solver import GridCell
from ..panels.panel_block import Candidate, PanelBlock, Span
from ..utils.logging_config import get_logger
from .input_events import EventType, InputEvent, InputEventBus

logger = get_logger(__name__)

Projection = Callable[[float, float], Optional[GridCell]]
CandidateValidator = Callable[[Candidate], bool]
CandidateCommitter = Callable[[Candidate], Optional[PanelBlock]]


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSnapshot:
    """Read-only view of an active drag: the span and current candidate cell."""
    span: Span
    candidate: Optional[GridCell]

    def to_dict(self) -> dict:
        return {
            "span": self.span.to_dict(),
            "candidateCell": self.candidate.to_dict() if self.candidate else None,
        }


class DragPlacementSession:
    """
    Turns pointer input into a panel placement.

    Attributes:
        state: IDLE or DRAGGING
        span: Span being dragged (None when idle)
        candidate: Valid cell under the pointer, or None
    """

    def __init__(
        self,
        bus: InputEventBus,
        projection: Projection,
        validate: CandidateValidator,
        commit: CandidateCommitter,
        cancel_keys: Iterable[str] = ("Escape",),
    ):
        """
        Args:
            bus: Event bus to listen on while dragging
            projection: Maps pointer coordinates to a grid cell (or None)
            validate: Decides whether the span may drop at a cell
            commit: Applies a validated candidate
            cancel_keys: Keys that abort the drag
        """
        self._bus = bus
        self._projection = projection
        self._validate = validate
        self._commit = commit
        self.cancel_keys = frozenset(cancel_keys)

        self.state = DragState.IDLE
        self.span: Optional[Span] = None
        self.candidate: Optional[GridCell] = None
        self._listeners: Optional[ExitStack] = None

    @property
    def active(self) -> bool:
        return self.state == DragState.DRAGGING

    def snapshot(self) -> Optional[DragSnapshot]:
        """Current drag, or None when idle."""
        if not self.active:
            return None
        return DragSnapshot(span=self.span, candidate=self.candidate)

    def start(self, span: Span) -> None:
        """Enter DRAGGING with the given span; a running drag is aborted first."""
        if self.active:
            logger.debug("Drag started while dragging; aborting previous drag")
            self.cancel()

        listeners = ExitStack()
        listeners.enter_context(self._bus.subscribe(EventType.POINTER_MOVE, self._on_move))
        listeners.enter_context(self._bus.subscribe(EventType.POINTER_UP, self._on_up))
        listeners.enter_context(self._bus.subscribe(EventType.KEY_DOWN, self._on_key))
        listeners.enter_context(self._bus.subscribe(EventType.FOCUS_LOST, self._on_focus_lost))

        self._listeners = listeners
        self.state = DragState.DRAGGING
        self.span = span
        self.candidate = None
        logger.debug(f"Drag started with span {span.w} x {span.h}")

    def cancel(self) -> bool:
        """
        Abort the drag without changing anything. Safe to call at any time.

        Returns:
            True if a drag was active
        """
        if not self.active:
            return False
        self._finish()
        logger.debug("Drag cancelled")
        return True

    def _finish(self) -> None:
        """Return to IDLE and release every subscription."""
        listeners, self._listeners = self._listeners, None
        self.state = DragState.IDLE
        self.span = None
        self.candidate = None
        if listeners is not None:
            listeners.close()

    # -- event handlers ----------------------------------------------------

    def _on_move(self, event: InputEvent) -> None:
        cell = self._projection(event.x, event.y)
        if cell is not None and not self._validate(Candidate(cell, self.span)):
            cell = None
        self.candidate = cell
        logger.trace(f"Drag candidate now {cell}")

    def _on_up(self, event: InputEvent) -> None:
        span, cell = self.span, self.candidate
        self._finish()

        if cell is None:
            logger.debug("Drag released with no valid cell; nothing placed")
            return
        if span.is_unit:
            logger.debug("Drag released with a 1 x 1 span; nothing placed")
            return

        # The store may have changed since the last move.
        candidate = Candidate(cell, span)
        if not self._validate(candidate):
            logger.debug(f"Drag released on a cell that is no longer valid: {cell}")
            return
        self._commit(candidate)

    def _on_key(self, event: InputEvent) -> None:
        if event.key in self.cancel_keys:
            self.cancel()

    def _on_focus_lost(self, event: InputEvent) -> None:
        self.cancel()
