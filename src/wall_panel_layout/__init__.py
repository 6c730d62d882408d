"""
Wall panel layout engine.

Composes a rectangular wall out of rectangular panels snapped to an 18"
module, with solved reveal gaps between columns, drag-and-drop placement,
seam join/split and combining of stacked panels.
"""

from .config import LayoutConfig, PlacementPolicy, RowGapPolicy
from .geometry import GridCell, GridGeometry, Seam, solve_axis, solve_grid
from .panels import (
    Candidate,
    LayoutStateError,
    LockedJoints,
    PanelBlock,
    PanelBlockStore,
    Span,
)
from .editor import LayoutState, WallLayoutEditor

__version__ = "0.1.0"

__all__ = [
    "LayoutConfig",
    "PlacementPolicy",
    "RowGapPolicy",
    "GridCell",
    "GridGeometry",
    "Seam",
    "solve_axis",
    "solve_grid",
    "Candidate",
    "LayoutStateError",
    "LockedJoints",
    "PanelBlock",
    "PanelBlockStore",
    "Span",
    "LayoutState",
    "WallLayoutEditor",
]
