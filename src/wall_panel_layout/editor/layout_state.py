# File: src/wall_panel_layout/editor/layout_state.py
"""
Serializable layout state.

The wall size, joint bounds and block list are enough to rebuild a layout;
the grid geometry is always re-solved on load, never stored.

Persisted shape:

    {
        "wallWidth": 144.0,
        "wallHeight": 108.0,
        "jointMin": 0.25,
        "jointMax": 3.0,
        "blocks": [
            {"id": "p0", "origin": {"col": 0, "row": 0},
             "span": {"w": 1, "h": 2}, "lockedJoints": {"v": [], "h": []}}
        ]
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import json

from ..panels.block_store import LayoutStateError
from ..panels.panel_block import PanelBlock

REQUIRED_KEYS = ("wallWidth", "wallHeight", "jointMin", "jointMax", "blocks")


@dataclass
class LayoutState:
    """
    Everything needed to reconstruct a wall layout.

    Attributes:
        wall_width: Wall width (inches)
        wall_height: Wall height (inches)
        joint_min: Minimum vertical reveal (inches)
        joint_max: Maximum vertical reveal (inches)
        blocks: Placed panel blocks
    """
    wall_width: float
    wall_height: float
    joint_min: float
    joint_max: float
    blocks: List[PanelBlock] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "wallWidth": self.wall_width,
            "wallHeight": self.wall_height,
            "jointMin": self.joint_min,
            "jointMax": self.joint_max,
            "blocks": [b.to_dict() for b in self.blocks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutState":
        """
        Create state from its persisted dictionary shape.

        Raises:
            LayoutStateError: If keys are missing or values malformed
        """
        missing = [k for k in REQUIRED_KEYS if k not in data]
        if missing:
            raise LayoutStateError(f"Layout state is missing {', '.join(missing)}")

        try:
            return cls(
                wall_width=float(data["wallWidth"]),
                wall_height=float(data["wallHeight"]),
                joint_min=float(data["jointMin"]),
                joint_max=float(data["jointMax"]),
                blocks=[PanelBlock.from_dict(b) for b in data["blocks"]],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LayoutStateError(f"Malformed layout state: {e}") from e


def serialize_layout(state: LayoutState) -> str:
    """Serialize layout state to a JSON string."""
    return json.dumps(state.to_dict(), indent=2)


def deserialize_layout(json_str: str) -> LayoutState:
    """
    Deserialize layout state from a JSON string.

    Raises:
        LayoutStateError: If the JSON is invalid or the state malformed
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise LayoutStateError(f"Layout state is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LayoutStateError("Layout state must be a JSON object")
    return LayoutState.from_dict(data)
