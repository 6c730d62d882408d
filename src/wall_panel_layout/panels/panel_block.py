# File: src/wall_panel_layout/panels/panel_block.py
"""
Panel block data model.

A panel block occupies a w x h rectangle of grid cells with its origin at the
top-left (leader) cell. Blocks are immutable; the store swaps whole blocks in
and out instead of editing them in place.

Example:
    >>> block = PanelBlock(id="p0", origin=GridCell(2, 0), span=Span(1, 2))
    >>> block.right, block.bottom
    (3, 2)
"""

from dataclasses import dataclass, field
from typing import Dict, Any, FrozenSet, Iterator, Tuple

from ..geometry.grid_solver import GridCell


@dataclass(frozen=True)
class Span:
    """Size of a panel block in grid cells."""
    w: int
    h: int

    def __post_init__(self):
        """Validate span size."""
        if self.w < 1 or self.h < 1:
            raise ValueError(f"Span must be at least 1 x 1, got {self.w} x {self.h}")

    @property
    def is_unit(self) -> bool:
        """True for a single-module 1 x 1 span."""
        return self.w == 1 and self.h == 1

    def to_dict(self) -> Dict[str, int]:
        return {"w": self.w, "h": self.h}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Span":
        return cls(w=int(data["w"]), h=int(data["h"]))


@dataclass(frozen=True)
class LockedJoints:
    """Seam indices pinned by a block's edges.

    Attributes:
        v: Vertical seam (column boundary) indices
        h: Horizontal seam (row boundary) indices
    """
    v: FrozenSet[int] = frozenset()
    h: FrozenSet[int] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "v", frozenset(self.v))
        object.__setattr__(self, "h", frozenset(self.h))

    @property
    def is_empty(self) -> bool:
        return not self.v and not self.h

    @classmethod
    def for_edges(cls, origin: GridCell, span: Span) -> "LockedJoints":
        """Seams bounding a rectangle: left/right columns, top/bottom rows."""
        return cls(
            v=frozenset({origin.col, origin.col + span.w}),
            h=frozenset({origin.row, origin.row + span.h}),
        )

    def to_dict(self) -> Dict[str, list]:
        return {"v": sorted(self.v), "h": sorted(self.h)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LockedJoints":
        return cls(
            v=frozenset(int(i) for i in data.get("v", [])),
            h=frozenset(int(i) for i in data.get("h", [])),
        )


class _GridRect:
    """Rectangle helpers shared by anything with an origin and a span."""

    origin: GridCell
    span: Span

    @property
    def right(self) -> int:
        """Exclusive right column."""
        return self.origin.col + self.span.w

    @property
    def bottom(self) -> int:
        """Exclusive bottom row."""
        return self.origin.row + self.span.h

    def intersects(self, other: "_GridRect") -> bool:
        """Axis-aligned overlap test; touching edges do not overlap."""
        return not (
            self.right <= other.origin.col
            or other.right <= self.origin.col
            or self.bottom <= other.origin.row
            or other.bottom <= self.origin.row
        )

    def contains_rect(self, other: "_GridRect") -> bool:
        """True when other lies entirely inside this rectangle."""
        return (
            other.origin.col >= self.origin.col
            and other.origin.row >= self.origin.row
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield every (col, row) covered, row-major."""
        for row in range(self.origin.row, self.bottom):
            for col in range(self.origin.col, self.right):
                yield col, row


@dataclass(frozen=True)
class Candidate(_GridRect):
    """A proposed block position that has no id yet."""
    origin: GridCell
    span: Span


@dataclass(frozen=True)
class PanelBlock(_GridRect):
    """
    A placed panel block.

    Attributes:
        id: Unique, opaque identifier
        origin: Top-left (leader) cell
        span: Size in cells
        locked_joints: Seams pinned by this block's edges
    """
    id: str
    origin: GridCell
    span: Span
    locked_joints: LockedJoints = field(default_factory=LockedJoints)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "origin": self.origin.to_dict(),
            "span": self.span.to_dict(),
            "lockedJoints": self.locked_joints.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PanelBlock":
        """Create a block from its dictionary form."""
        return cls(
            id=str(data["id"]),
            origin=GridCell.from_dict(data["origin"]),
            span=Span.from_dict(data["span"]),
            locked_joints=LockedJoints.from_dict(data.get("lockedJoints", {})),
        )
