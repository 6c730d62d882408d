# File: src/wall_panel_layout/config/layout.py
"""
Layout configuration for the wall panel editor.

This module defines the grid module, joint (reveal) bounds, wall size limits,
span limits and the placement/row-gap policies used by the layout engine.

All lengths are in inches.

Example:
    >>> config = LayoutConfig(joint_min=0.25, joint_max=3.0)
    >>> config.validate()  # Raises ValueError if invalid
    []
    >>> config.palette("landscape")
    [(2, 1), (3, 1), (4, 1)]
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from enum import Enum


# Grid geometry
CELL_IN = 18.0          # one panel module
H_JOINT_IN = 0.25       # fixed horizontal reveal between rows
PICK_RADIUS_IN = 1.5    # seam pick distance in wall-local inches

# Panel sizes offered by the palette (1 x N portrait, N x 1 landscape)
PANEL_SPANS = [2, 3, 4, 5]

# Wall limits and defaults
WALL_MIN_IN = 36.0
WALL_MAX_IN = 288.0
DEFAULT_WALL_WIDTH = 144.0
DEFAULT_WALL_HEIGHT = 108.0

# Vertical reveal bounds
DEFAULT_JOINT_MIN = 0.25
DEFAULT_JOINT_MAX = 3.0

# Span limits in grid cells
MAX_SPAN_W = 4
MAX_SPAN_H = 5


class RowGapPolicy(Enum):
    """How the horizontal reveal between rows is determined.

    Attributes:
        FIXED: Constant row gap, row count from the module alone
        SOLVED: Row count and gap solved like the columns
    """
    FIXED = "fixed"
    SOLVED = "solved"


class PlacementPolicy(Enum):
    """What happens when a dropped panel intersects existing panels.

    Attributes:
        REPLACE: Intersecting panels are removed (last writer wins)
        REJECT_OVERLAP: Positions overlapping any panel are not valid drops
    """
    REPLACE = "replace"
    REJECT_OVERLAP = "reject_overlap"


def clamp_wall_dimension(value: float, config: Optional["LayoutConfig"] = None) -> float:
    """Clamp a wall width or height into the supported range."""
    lo = config.wall_min if config else WALL_MIN_IN
    hi = config.wall_max if config else WALL_MAX_IN
    return max(lo, min(hi, float(value)))


@dataclass
class LayoutConfig:
    """Configuration for the wall panel layout engine.

    Attributes:
        cell: Grid module size (inches)
        joint_min: Minimum vertical reveal between columns (inches)
        joint_max: Maximum vertical reveal between columns (inches)
        row_gap: Horizontal reveal used with RowGapPolicy.FIXED (inches)
        row_gap_policy: Fixed or solved row reveal
        placement_policy: Destructive replace or reject on overlap
        protect_locked_blocks: Drops may not overlap panels with locked seams
        max_span_w: Widest panel, in cells
        max_span_h: Tallest panel, in cells
        wall_min: Smallest wall width/height (inches)
        wall_max: Largest wall width/height (inches)
        cancel_keys: Keys that abort an active drag
        palette_spans: Lengths offered by the panel palette
    """
    cell: float = CELL_IN
    joint_min: float = DEFAULT_JOINT_MIN
    joint_max: float = DEFAULT_JOINT_MAX
    row_gap: float = H_JOINT_IN

    row_gap_policy: RowGapPolicy = field(
        default_factory=lambda: RowGapPolicy.FIXED
    )
    placement_policy: PlacementPolicy = field(
        default_factory=lambda: PlacementPolicy.REPLACE
    )
    protect_locked_blocks: bool = False

    max_span_w: int = MAX_SPAN_W
    max_span_h: int = MAX_SPAN_H

    wall_min: float = WALL_MIN_IN
    wall_max: float = WALL_MAX_IN

    cancel_keys: Tuple[str, ...] = ("Escape",)
    palette_spans: List[int] = field(default_factory=lambda: list(PANEL_SPANS))

    def __post_init__(self):
        """Convert policy strings to enums if needed."""
        if isinstance(self.row_gap_policy, str):
            self.row_gap_policy = RowGapPolicy(self.row_gap_policy)
        if isinstance(self.placement_policy, str):
            self.placement_policy = PlacementPolicy(self.placement_policy)
        self.cancel_keys = tuple(self.cancel_keys)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)

        Raises:
            ValueError: If any validation fails
        """
        errors = []

        if self.cell <= 0:
            errors.append("cell must be positive")
        if self.joint_min < 0:
            errors.append("joint_min cannot be negative")
        if self.joint_max < 0:
            errors.append("joint_max cannot be negative")
        if self.joint_min > self.joint_max:
            errors.append(
                f"joint_min ({self.joint_min}) cannot exceed "
                f"joint_max ({self.joint_max})"
            )
        if self.row_gap < 0:
            errors.append("row_gap cannot be negative")

        if self.max_span_w < 1:
            errors.append("max_span_w must be at least 1")
        if self.max_span_h < 1:
            errors.append("max_span_h must be at least 1")

        if self.wall_min <= 0:
            errors.append("wall_min must be positive")
        if self.wall_min > self.wall_max:
            errors.append(
                f"wall_min ({self.wall_min}) cannot exceed "
                f"wall_max ({self.wall_max})"
            )

        if any(n < 1 for n in self.palette_spans):
            errors.append("palette_spans must all be at least 1")

        if errors:
            raise ValueError("LayoutConfig validation failed:\n" + "\n".join(errors))

        return errors

    def span_in_range(self, w: int, h: int) -> bool:
        """Check a panel span against the configured limits."""
        return 1 <= w <= self.max_span_w and 1 <= h <= self.max_span_h

    def palette(self, orientation: str = "portrait") -> List[Tuple[int, int]]:
        """Spans offered for dragging in the given orientation.

        Args:
            orientation: "portrait" (1 x N) or "landscape" (N x 1)

        Returns:
            List of (w, h) tuples that satisfy the span limits
        """
        if orientation not in ("portrait", "landscape"):
            raise ValueError(f"Unsupported orientation: {orientation}")

        spans = []
        for n in self.palette_spans:
            w, h = (1, n) if orientation == "portrait" else (n, 1)
            if self.span_in_range(w, h):
                spans.append((w, h))
        return spans

    def to_dict(self) -> dict:
        """Convert config to dictionary for JSON serialization."""
        return {
            "cell": self.cell,
            "joint_min": self.joint_min,
            "joint_max": self.joint_max,
            "row_gap": self.row_gap,
            "row_gap_policy": self.row_gap_policy.value,
            "placement_policy": self.placement_policy.value,
            "protect_locked_blocks": self.protect_locked_blocks,
            "max_span_w": self.max_span_w,
            "max_span_h": self.max_span_h,
            "wall_min": self.wall_min,
            "wall_max": self.wall_max,
            "cancel_keys": list(self.cancel_keys),
            "palette_spans": list(self.palette_spans),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LayoutConfig":
        """Create config from dictionary.

        Args:
            data: Dictionary with config parameters

        Returns:
            LayoutConfig instance
        """
        return cls(
            cell=data.get("cell", CELL_IN),
            joint_min=data.get("joint_min", DEFAULT_JOINT_MIN),
            joint_max=data.get("joint_max", DEFAULT_JOINT_MAX),
            row_gap=data.get("row_gap", H_JOINT_IN),
            row_gap_policy=RowGapPolicy(data.get("row_gap_policy", "fixed")),
            placement_policy=PlacementPolicy(
                data.get("placement_policy", "replace")
            ),
            protect_locked_blocks=data.get("protect_locked_blocks", False),
            max_span_w=data.get("max_span_w", MAX_SPAN_W),
            max_span_h=data.get("max_span_h", MAX_SPAN_H),
            wall_min=data.get("wall_min", WALL_MIN_IN),
            wall_max=data.get("wall_max", WALL_MAX_IN),
            cancel_keys=tuple(data.get("cancel_keys", ("Escape",))),
            palette_spans=list(data.get("palette_spans", PANEL_SPANS)),
        )

    @classmethod
    def for_solved_rows(cls) -> "LayoutConfig":
        """Create config where row gaps are solved like column gaps."""
        return cls(row_gap_policy=RowGapPolicy.SOLVED)

    @classmethod
    def for_strict_placement(cls) -> "LayoutConfig":
        """Create config where drops never displace existing panels."""
        return cls(placement_policy=PlacementPolicy.REJECT_OVERLAP)
