# File: src/wall_panel_layout/geometry/face_layout.py
"""
Wall-local geometry for panel faces and seams.

Converts grid coordinates to wall-local inches for the render and overlay
collaborators, and maps wall-local points back to grid cells for drag
placement. The wall-local frame has its origin at the wall's top-left
corner, x to the right and y downwards.

A panel spanning w x h cells shows a face of

    w * cell - (w - 1) * col_gap   by   h * cell - (h - 1) * row_gap

A seam is the centre line of a reveal. Vertical seam i sits left of column i
(seam cols is the right edge); horizontal seam j sits above row j.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING
import math

from .grid_solver import GridCell, GridGeometry

if TYPE_CHECKING:
    from ..panels.panel_block import PanelBlock

SEAM_KINDS = ("v", "h")


@dataclass(frozen=True)
class Seam:
    """A seam line: kind "v" (column boundary) or "h" (row boundary)."""
    kind: str
    idx: int

    def __post_init__(self):
        if self.kind not in SEAM_KINDS:
            raise ValueError(f"Seam kind must be 'v' or 'h', got {self.kind!r}")

    def to_dict(self) -> dict:
        return {"kind": self.kind, "idx": self.idx}


@dataclass(frozen=True)
class FaceRect:
    """Visible face of a panel in wall-local inches.

    Attributes:
        block_id: Id of the panel block
        x: Left edge, measured from the wall's left side
        y: Top edge, measured from the wall's top
        width: Face width
        height: Face height
    """
    block_id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict:
        return {
            "block_id": self.block_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


def face_size(w: int, h: int, geometry: GridGeometry) -> Tuple[float, float]:
    """Face width and height for a w x h span."""
    face_w = w * geometry.cell - (w - 1) * geometry.col_gap
    face_h = h * geometry.cell - (h - 1) * geometry.row_gap
    return face_w, face_h


def face_rect(block: "PanelBlock", geometry: GridGeometry) -> FaceRect:
    """Face rectangle for one block."""
    face_w, face_h = face_size(block.span.w, block.span.h, geometry)
    return FaceRect(
        block_id=block.id,
        x=geometry.col_gap + block.origin.col * geometry.col_pitch,
        y=geometry.row_gap + block.origin.row * geometry.row_pitch,
        width=face_w,
        height=face_h,
    )


def face_rects(blocks: Iterable["PanelBlock"], geometry: GridGeometry) -> List[FaceRect]:
    """Face rectangles for blocks, in the order given."""
    return [face_rect(b, geometry) for b in blocks]


def seam_position(seam: Seam, geometry: GridGeometry) -> float:
    """Wall-local x (vertical seam) or y (horizontal seam) of a seam line."""
    if seam.kind == "v":
        return seam.idx * geometry.col_pitch + geometry.col_gap / 2
    return seam.idx * geometry.row_pitch + geometry.row_gap / 2


def seam_segment(
    seam: Seam,
    geometry: GridGeometry,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """End points of a seam line across the full grid extent."""
    pos = seam_position(seam, geometry)
    if seam.kind == "v":
        return (pos, 0.0), (pos, geometry.height)
    return (0.0, pos), (geometry.width, pos)


def all_seams(geometry: GridGeometry) -> List[Seam]:
    """Every vertical and horizontal seam of the grid, boundaries included."""
    seams = [Seam("v", i) for i in range(geometry.cols + 1)]
    seams.extend(Seam("h", j) for j in range(geometry.rows + 1))
    return seams


def local_point_to_cell(x: float, y: float, geometry: GridGeometry) -> Optional[GridCell]:
    """Grid cell under a wall-local point, or None when off the grid.

    Reveals belong to the column/row to their right/below.
    """
    if x < 0 or y < 0:
        return None
    col = int(math.floor(x / geometry.col_pitch))
    row = int(math.floor(y / geometry.row_pitch))
    if col >= geometry.cols or row >= geometry.rows:
        return None
    return GridCell(col=col, row=row)


def _distance_to_segment(
    px: float, py: float,
    ax: float, ay: float,
    bx: float, by: float,
) -> float:
    """Euclidean distance from point P to segment AB."""
    vx, vy = bx - ax, by - ay
    wx, wy = px - ax, py - ay
    c1 = vx * wx + vy * wy
    if c1 <= 0:
        return math.hypot(px - ax, py - ay)
    c2 = vx * vx + vy * vy
    if c2 <= c1:
        return math.hypot(px - bx, py - by)
    t = c1 / c2
    return math.hypot(px - (ax + t * vx), py - (ay + t * vy))


def pick_seam(
    x: float,
    y: float,
    geometry: GridGeometry,
    radius: float,
) -> Optional[Seam]:
    """Nearest seam within radius of a wall-local point.

    Args:
        x: Wall-local x (inches)
        y: Wall-local y (inches)
        geometry: Solved grid
        radius: Maximum pick distance (inches)

    Returns:
        The closest Seam, or None if none is within radius
    """
    best = None
    best_dist = radius
    for seam in all_seams(geometry):
        (ax, ay), (bx, by) = seam_segment(seam, geometry)
        dist = _distance_to_segment(x, y, ax, ay, bx, by)
        if dist <= best_dist:
            best, best_dist = seam, dist
    return best
