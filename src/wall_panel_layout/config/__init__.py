# File: src/wall_panel_layout/config/__init__.py

"""
Configuration package for the wall panel layout engine.
Provides the grid module constants, wall limits and the LayoutConfig options.
"""

from .layout import (
    CELL_IN,
    H_JOINT_IN,
    PICK_RADIUS_IN,
    PANEL_SPANS,
    WALL_MIN_IN,
    WALL_MAX_IN,
    DEFAULT_WALL_WIDTH,
    DEFAULT_WALL_HEIGHT,
    DEFAULT_JOINT_MIN,
    DEFAULT_JOINT_MAX,
    MAX_SPAN_W,
    MAX_SPAN_H,
    RowGapPolicy,
    PlacementPolicy,
    LayoutConfig,
    clamp_wall_dimension,
)

__all__ = [
    "CELL_IN",
    "H_JOINT_IN",
    "PICK_RADIUS_IN",
    "PANEL_SPANS",
    "WALL_MIN_IN",
    "WALL_MAX_IN",
    "DEFAULT_WALL_WIDTH",
    "DEFAULT_WALL_HEIGHT",
    "DEFAULT_JOINT_MIN",
    "DEFAULT_JOINT_MAX",
    "MAX_SPAN_W",
    "MAX_SPAN_H",
    "RowGapPolicy",
    "PlacementPolicy",
    "LayoutConfig",
    "clamp_wall_dimension",
]
