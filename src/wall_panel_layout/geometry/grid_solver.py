# File: src/wall_panel_layout/geometry/grid_solver.py
"""
Grid geometry solver for reveal-jointed panel walls.

Finds how many whole modules fit across a wall and the reveal (joint) width
between them so that modules and reveals fill the wall exactly:

    count * cell + (count + 1) * gap == length

with the gap kept inside the configured joint bounds. When no module count
gives an in-range gap the solver falls back to the count whose gap is closest
to the upper bound from below, so a geometry is always defined.

Example:
    >>> solution = solve_axis(144.0, 18.0, 0.25, 3.0)
    >>> solution.count, solution.gap
    (7, 2.25)
"""

from dataclasses import dataclass
from typing import Optional
import math

from ..config.layout import LayoutConfig, RowGapPolicy
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

# Tolerance for comparing gaps against their bounds
GAP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class GridCell:
    """A grid coordinate: column from the left, row from the top."""
    col: int
    row: int

    def to_dict(self) -> dict:
        return {"col": self.col, "row": self.row}

    @classmethod
    def from_dict(cls, data: dict) -> "GridCell":
        return cls(col=int(data["col"]), row=int(data["row"]))


@dataclass(frozen=True)
class AxisSolution:
    """Module count and reveal width along one wall axis.

    Attributes:
        count: Number of modules along the axis
        gap: Reveal width between (and outside) the modules
        exact: True when modules and reveals fill the axis exactly with the
            gap inside the requested bounds
    """
    count: int
    gap: float
    exact: bool


@dataclass(frozen=True)
class GridGeometry:
    """Solved grid for a wall.

    Attributes:
        cols: Column count
        col_gap: Vertical reveal width between columns
        rows: Row count
        row_gap: Horizontal reveal width between rows
        cell: Module size
        cols_exact: Whether the column solution is exact
        rows_exact: Whether the row solution is exact
    """
    cols: int
    col_gap: float
    rows: int
    row_gap: float
    cell: float
    cols_exact: bool = True
    rows_exact: bool = True

    @property
    def col_pitch(self) -> float:
        """Distance between the left edges of neighbouring columns."""
        return self.cell + self.col_gap

    @property
    def row_pitch(self) -> float:
        """Distance between the top edges of neighbouring rows."""
        return self.cell + self.row_gap

    @property
    def width(self) -> float:
        """Extent of modules plus reveals across the columns."""
        return self.cols * self.cell + (self.cols + 1) * self.col_gap

    @property
    def height(self) -> float:
        """Extent of modules plus reveals down the rows."""
        return self.rows * self.cell + (self.rows + 1) * self.row_gap

    def in_bounds(self, col: int, row: int, w: int = 1, h: int = 1) -> bool:
        """Check that a w x h rectangle at (col, row) lies inside the grid."""
        return (
            col >= 0 and row >= 0
            and w >= 1 and h >= 1
            and col + w <= self.cols
            and row + h <= self.rows
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "cols": self.cols,
            "col_gap": self.col_gap,
            "rows": self.rows,
            "row_gap": self.row_gap,
            "cell": self.cell,
            "cols_exact": self.cols_exact,
            "rows_exact": self.rows_exact,
        }


def solve_axis(
    length: float,
    cell: float,
    gap_min: float,
    gap_max: float,
) -> AxisSolution:
    """Solve module count and reveal width along one axis.

    Candidate counts run from 1 to floor(length / cell). Each gives
    gap = (length - n * cell) / (n + 1). An in-range gap is an exact
    solution; among exact solutions the largest gap wins (closest to
    gap_max), ties going to fewer modules.

    Without an exact solution the count whose gap is closest to gap_max from
    below is used, with the gap clamped up to gap_min. If every candidate gap
    is above gap_max the densest grid is used with the gap clamped to gap_max.

    Args:
        length: Axis length (inches)
        cell: Module size (inches)
        gap_min: Smallest acceptable reveal
        gap_max: Largest acceptable reveal

    Returns:
        AxisSolution, never with a negative gap
    """
    if gap_min > gap_max:
        gap_min, gap_max = gap_max, gap_min
    gap_min = max(0.0, gap_min)
    gap_max = max(0.0, gap_max)

    max_count = int(math.floor(length / cell)) if cell > 0 else 0
    if max_count < 1:
        logger.debug(
            f"Axis length {length} cannot fit a {cell} module, using one module"
        )
        return AxisSolution(count=1, gap=0.0, exact=False)

    below: Optional[AxisSolution] = None
    for n in range(1, max_count + 1):
        gap = (length - n * cell) / (n + 1)
        if gap > gap_max + GAP_TOLERANCE:
            continue
        if gap >= gap_min - GAP_TOLERANCE:
            return AxisSolution(count=n, gap=gap, exact=True)
        # The gap shrinks as n grows, so the first gap under gap_max is the
        # closest one from below and nothing later can be in range.
        below = AxisSolution(count=n, gap=gap_min, exact=False)
        break

    if below is not None:
        logger.debug(
            f"No exact reveal for length {length}; "
            f"using {below.count} modules at gap {below.gap}"
        )
        return below

    logger.debug(
        f"All reveals for length {length} exceed {gap_max}; "
        f"using {max_count} modules"
    )
    return AxisSolution(count=max_count, gap=gap_max, exact=False)


def solve_grid(
    width: float,
    height: float,
    config: Optional[LayoutConfig] = None,
) -> GridGeometry:
    """Solve the full wall grid.

    Columns are always solved against the joint bounds. Rows follow
    config.row_gap_policy: FIXED uses config.row_gap with one row per whole
    module of height, SOLVED runs the axis solver on the height.

    Args:
        width: Wall width (inches)
        height: Wall height (inches)
        config: Layout configuration (defaults if not provided)

    Returns:
        GridGeometry for the wall
    """
    if config is None:
        config = LayoutConfig()

    cols = solve_axis(width, config.cell, config.joint_min, config.joint_max)

    if config.row_gap_policy == RowGapPolicy.SOLVED:
        rows = solve_axis(height, config.cell, config.joint_min, config.joint_max)
    else:
        row_count = max(1, int(math.floor(height / config.cell)))
        rows = AxisSolution(count=row_count, gap=config.row_gap, exact=True)

    geometry = GridGeometry(
        cols=cols.count,
        col_gap=cols.gap,
        rows=rows.count,
        row_gap=rows.gap,
        cell=config.cell,
        cols_exact=cols.exact,
        rows_exact=rows.exact,
    )
    logger.debug(
        f"Solved {width} x {height} wall: {geometry.cols} cols @ {geometry.col_gap:.4f}, "
        f"{geometry.rows} rows @ {geometry.row_gap:.4f}"
    )
    return geometry
