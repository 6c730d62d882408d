"""
Grid geometry for reveal-jointed panel walls.

This module provides:
- The reveal (joint) solver for columns and rows
- Wall-local face rectangles and seam lines for renderers and overlays
- Point to grid cell mapping used by drag placement

Example:
    >>> from wall_panel_layout.geometry import solve_grid
    >>> geometry = solve_grid(144.0, 108.0)
    >>> geometry.cols, geometry.col_gap
    (7, 2.25)
"""

from .grid_solver import (
    GridCell,
    AxisSolution,
    GridGeometry,
    solve_axis,
    solve_grid,
)

from .face_layout import (
    Seam,
    FaceRect,
    face_size,
    face_rect,
    face_rects,
    seam_position,
    seam_segment,
    all_seams,
    local_point_to_cell,
    pick_seam,
)

__all__ = [
    # Solver
    "GridCell",
    "AxisSolution",
    "GridGeometry",
    "solve_axis",
    "solve_grid",
    # Wall-local layout
    "Seam",
    "FaceRect",
    "face_size",
    "face_rect",
    "face_rects",
    "seam_position",
    "seam_segment",
    "all_seams",
    "local_point_to_cell",
    "pick_seam",
]
