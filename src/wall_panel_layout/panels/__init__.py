# File: src/wall_panel_layout/panels/__init__.py
"""
Panel block model and operations.

This module provides:
- Panel block value types (spans, locked joints, candidates)
- The block store that enforces non-overlap and bounds
- Selection, combine and seam join/split

Example:
    >>> from wall_panel_layout.panels import (
    ...     PanelBlockStore, Candidate, GridCell, Span
    ... )
    >>> store = PanelBlockStore()
    >>> store.regenerate(144.0, 108.0)
    >>> store.place(Candidate(GridCell(2, 0), Span(1, 3)))
"""

from ..geometry.grid_solver import GridCell

from .panel_block import (
    Span,
    LockedJoints,
    Candidate,
    PanelBlock,
)

from .block_store import (
    LayoutStateError,
    PanelBlockStore,
    check_layout,
    sequential_ids,
    uuid_ids,
)

from .selection import SelectionSet

from .combine import check_combine, combine_selected

from .seam_locks import SeamLockRegistry

__all__ = [
    # Model
    "GridCell",
    "Span",
    "LockedJoints",
    "Candidate",
    "PanelBlock",
    # Store
    "LayoutStateError",
    "PanelBlockStore",
    "check_layout",
    "sequential_ids",
    "uuid_ids",
    # Operations
    "SelectionSet",
    "check_combine",
    "combine_selected",
    "SeamLockRegistry",
]
