# File: src/wall_panel_layout/editor/wall_editor.py
"""
Wall layout editor: the single owner of all layout state.

Every change to the wall, the blocks, the selection or an active drag goes
through one of the editor's command methods. Invalid gestures are absorbed:
a command either changes state consistently or does nothing and reports
that through its return value.

Usage:
    editor = WallLayoutEditor(id_factory=sequential_ids())
    editor.set_wall(width=144, height=108)
    editor.start_drag(Span(1, 3))
    editor.pointer_move(45.0, 5.0)
    editor.pointer_up()
"""

from dataclasses import replace as dc_replace
from typing import Any, Callable, Dict, List, Optional

from ..config.layout import (
    DEFAULT_WALL_HEIGHT,
    DEFAULT_WALL_WIDTH,
    LayoutConfig,
    PICK_RADIUS_IN,
    PlacementPolicy,
    clamp_wall_dimension,
)
from ..drag.input_events import InputEvent, InputEventBus
from ..drag.session import DragPlacementSession, DragSnapshot, Projection
from ..geometry.face_layout import FaceRect, Seam, face_rects, local_point_to_cell, pick_seam
from ..geometry.grid_solver import GridCell, GridGeometry, solve_grid
from ..panels.block_store import PanelBlockStore
from ..panels.combine import combine_selected
from ..panels.panel_block import Candidate, LockedJoints, PanelBlock, Span
from ..panels.seam_locks import SeamLockRegistry
from ..panels.selection import SelectionSet
from ..utils.logging_config import get_logger
from .layout_state import LayoutState

logger = get_logger(__name__)


class WallLayoutEditor:
    """
    Owns the wall dimensions, block store, selection, seam registry and drag
    session of one wall.

    Attributes:
        config: Layout configuration
        width: Wall width (inches, clamped)
        height: Wall height (inches, clamped)
        store: Committed panel blocks
        selection: Selected block ids
        seams: Locked/hovered/selected seams
        bus: Input events feeding the drag session
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        width: float = DEFAULT_WALL_WIDTH,
        height: float = DEFAULT_WALL_HEIGHT,
        projection: Optional[Projection] = None,
        bus: Optional[InputEventBus] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the editor and fill the wall with the default tiling.

        Args:
            config: Layout configuration (validated; defaults if not provided)
            width: Initial wall width (inches)
            height: Initial wall height (inches)
            projection: Maps pointer coordinates to a grid cell; defaults to
                wall-local inches from the top-left corner
            bus: Input event bus (a private one is created if omitted)
            id_factory: Callable returning unique block ids

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or LayoutConfig()
        self.config.validate()

        self.width = clamp_wall_dimension(width, self.config)
        self.height = clamp_wall_dimension(height, self.config)

        self.store = PanelBlockStore(
            config=self.config,
            geometry=solve_grid(self.width, self.height, self.config),
            id_factory=id_factory,
        )
        self.selection = SelectionSet()
        self.seams = SeamLockRegistry(self.store)
        self.bus = bus or InputEventBus()
        self._projection = projection

        self.drag_session = DragPlacementSession(
            bus=self.bus,
            projection=self._project,
            validate=self.can_drop,
            commit=self._commit_drop,
            cancel_keys=self.config.cancel_keys,
        )

        self.store.subscribe(self._on_blocks_changed)
        self.store.regenerate(self.width, self.height)

    # -- read-only views ---------------------------------------------------

    @property
    def geometry(self) -> GridGeometry:
        return self.store.geometry

    @property
    def blocks(self):
        return self.store.blocks

    @property
    def drag(self) -> Optional[DragSnapshot]:
        """The active drag, or None."""
        return self.drag_session.snapshot()

    def face_rects(self) -> List[FaceRect]:
        """Face rectangles of all blocks for the renderer."""
        return face_rects(self.store.blocks, self.geometry)

    # -- wall and joints ---------------------------------------------------

    def set_wall(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> GridGeometry:
        """
        Resize the wall and regenerate the layout from scratch.

        Values are clamped to the configured wall range. Any drag is
        cancelled and the selection and seam state are cleared.

        Returns:
            The re-solved geometry
        """
        self.drag_session.cancel()
        if width is not None:
            self.width = clamp_wall_dimension(width, self.config)
        if height is not None:
            self.height = clamp_wall_dimension(height, self.config)

        geometry = self.store.regenerate(self.width, self.height)
        self.selection.clear()
        self.seams.hover(None)
        self.seams.clear_selected()
        return geometry

    def set_joint_bounds(
        self,
        joint_min: Optional[float] = None,
        joint_max: Optional[float] = None,
    ) -> bool:
        """
        Change the vertical reveal bounds and re-solve the grid.

        Negative values are clamped to zero. Blocks survive when the grid
        keeps its column and row counts.

        Returns:
            True if the layout had to be regenerated
        """
        changes: Dict[str, float] = {}
        if joint_min is not None:
            changes["joint_min"] = max(0.0, float(joint_min))
        if joint_max is not None:
            changes["joint_max"] = max(0.0, float(joint_max))
        if not changes:
            return False

        self._set_config(dc_replace(self.config, **changes))
        regenerated = self.store.apply_geometry(
            solve_grid(self.width, self.height, self.config)
        )
        if regenerated:
            self.drag_session.cancel()
            self.seams.hover(None)
            self.seams.clear_selected()
        return regenerated

    def _set_config(self, config: LayoutConfig) -> None:
        self.config = config
        self.store.config = config

    # -- placement ---------------------------------------------------------

    def can_drop(self, candidate: Candidate) -> bool:
        """
        Whether a panel may be dropped at the candidate position.

        The span must be allowed and inside the wall. Under REJECT_OVERLAP
        it may not overlap any panel; with protect_locked_blocks it may not
        overlap panels that have locked seams.
        """
        if not self.store.fits(candidate):
            return False
        overlapping = self.store.overlaps(candidate)
        if self.config.placement_policy == PlacementPolicy.REJECT_OVERLAP and overlapping:
            return False
        if self.config.protect_locked_blocks and any(
            not b.locked_joints.is_empty for b in overlapping
        ):
            return False
        return True

    def _commit_drop(self, candidate: Candidate) -> Optional[PanelBlock]:
        return self.store.place(
            candidate,
            locked_joints=LockedJoints.for_edges(candidate.origin, candidate.span),
        )

    def place(self, origin: GridCell, span: Span) -> Optional[PanelBlock]:
        """
        Place a panel directly, as if it had been dropped there.

        Returns:
            The new block, or None when the position is not a valid drop
        """
        candidate = Candidate(origin, span)
        if not self.can_drop(candidate):
            logger.debug(f"Place ignored, not a valid drop: {candidate}")
            return None
        return self._commit_drop(candidate)

    def _project(self, x: float, y: float) -> Optional[GridCell]:
        if self._projection is not None:
            return self._projection(x, y)
        return local_point_to_cell(x, y, self.geometry)

    # -- drag --------------------------------------------------------------

    def start_drag(self, span: Span) -> None:
        self.drag_session.start(span)

    def cancel_drag(self) -> bool:
        return self.drag_session.cancel()

    def pointer_move(self, x: float, y: float) -> None:
        self.bus.dispatch(InputEvent.pointer_move(x, y))

    def pointer_up(self) -> None:
        self.bus.dispatch(InputEvent.pointer_up())

    def key_down(self, key: str) -> None:
        self.bus.dispatch(InputEvent.key_down(key))

    def focus_lost(self) -> None:
        self.bus.dispatch(InputEvent.focus_lost())

    # -- selection and combine ---------------------------------------------

    def toggle_select(self, block_id: str, multi: bool = False) -> bool:
        """
        Toggle a block in the selection.

        Returns:
            False (no change) when the id is not in the store
        """
        if block_id not in self.store:
            logger.debug(f"Select ignored, unknown block {block_id}")
            return False
        self.selection.toggle(block_id, multi)
        return True

    def clear_selection(self) -> None:
        self.selection.clear()

    def combine_selected(self) -> Optional[PanelBlock]:
        return combine_selected(self.store, self.selection)

    def _on_blocks_changed(self, blocks) -> None:
        self.selection.prune(b.id for b in blocks)

    # -- seams -------------------------------------------------------------

    def hover_seam(self, x: float, y: float, radius: float = PICK_RADIUS_IN) -> Optional[Seam]:
        """Set the hovered seam from a wall-local point; returns it (or None)."""
        seam = pick_seam(x, y, self.geometry, radius)
        self.seams.hover(seam)
        return seam

    def toggle_seam(self, kind: str, idx: int) -> List[str]:
        """
        Join or split panels across a seam.

        Returns:
            Ids of the created blocks (empty when nothing changed)
        """
        return self.seams.toggle_seam(Seam(kind, idx))

    def select_seam(self, kind: str, idx: int) -> bool:
        """
        Toggle an interior seam in the seam selection.

        Returns:
            False (no change) for boundary or out-of-grid seams
        """
        seam = Seam(kind, idx)
        if not self.seams.is_interior(seam):
            logger.debug(f"Seam select ignored on {seam}")
            return False
        self.seams.select(seam)
        return True

    def clear_seam_selection(self) -> bool:
        """Deselect all seams; returns True if any were selected."""
        had_selection = bool(self.seams.selected)
        self.seams.clear_selected()
        return had_selection

    # -- persistence -------------------------------------------------------

    def snapshot_state(self) -> LayoutState:
        return LayoutState(
            wall_width=self.width,
            wall_height=self.height,
            joint_min=self.config.joint_min,
            joint_max=self.config.joint_max,
            blocks=list(self.store.blocks),
        )

    def load_state(self, state: LayoutState) -> None:
        """
        Replace the whole layout with a saved one.

        The grid is re-solved from the saved wall size and joints. If the
        saved blocks do not fit it, nothing changes.

        Raises:
            LayoutStateError: If the saved blocks break the layout invariants
        """
        width = clamp_wall_dimension(state.wall_width, self.config)
        height = clamp_wall_dimension(state.wall_height, self.config)
        config = dc_replace(
            self.config,
            joint_min=max(0.0, state.joint_min),
            joint_max=max(0.0, state.joint_max),
        )
        geometry = solve_grid(width, height, config)

        previous = self.config
        self._set_config(config)
        try:
            self.store.load(state.blocks, geometry=geometry)
        except ValueError:
            self._set_config(previous)
            raise

        self.drag_session.cancel()
        self.width, self.height = width, height
        self.selection.clear()
        self.seams.hover(None)
        self.seams.clear_selected()
        logger.info(f"Loaded layout with {len(self.store)} blocks")

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot_state().to_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs) -> "WallLayoutEditor":
        """
        Build an editor from a persisted layout dictionary.

        Raises:
            LayoutStateError: If the layout is malformed or invalid
        """
        state = LayoutState.from_dict(data)
        editor = cls(width=state.wall_width, height=state.wall_height, **kwargs)
        editor.load_state(state)
        return editor
