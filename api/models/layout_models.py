from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Dict, Any, Optional, Literal

from wall_panel_layout.config.layout import PICK_RADIUS_IN


class CellModel(BaseModel):
    """Grid cell position."""
    col: int = Field(description="Column index", ge=0)
    row: int = Field(description="Row index", ge=0)


class SpanModel(BaseModel):
    """Panel size in grid cells."""
    w: int = Field(description="Width in columns", ge=1)
    h: int = Field(description="Height in rows", ge=1)


class LockedJointsModel(BaseModel):
    """Seam indices pinned by a block's edges."""
    v: List[int] = Field(default_factory=list, description="Vertical seam indices")
    h: List[int] = Field(default_factory=list, description="Horizontal seam indices")


class BlockModel(BaseModel):
    """A placed panel block."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Block id", min_length=1)
    origin: CellModel
    span: SpanModel
    locked_joints: LockedJointsModel = Field(
        default_factory=LockedJointsModel,
        alias="lockedJoints",
    )


class LayoutCreate(BaseModel):
    """Request body for creating a layout."""
    width: Optional[float] = Field(default=None, description="Wall width (inches)", gt=0)
    height: Optional[float] = Field(default=None, description="Wall height (inches)", gt=0)
    joint_min: Optional[float] = Field(default=None, description="Minimum vertical reveal", ge=0)
    joint_max: Optional[float] = Field(default=None, description="Maximum vertical reveal", ge=0)
    placement_policy: Literal["replace", "reject_overlap"] = Field(
        default="replace",
        description="What a drop does to panels it overlaps",
    )
    row_gap_policy: Literal["fixed", "solved"] = Field(
        default="fixed",
        description="Fixed 1/4 in. horizontal reveal, or solve rows like columns",
    )
    protect_locked_blocks: bool = Field(
        default=False,
        description="Reject drops that would remove panels with locked seams",
    )

    @model_validator(mode='after')
    def validate_joints(self) -> 'LayoutCreate':
        if (
            self.joint_min is not None
            and self.joint_max is not None
            and self.joint_min > self.joint_max
        ):
            raise ValueError("joint_min must not exceed joint_max")
        return self


class WallUpdate(BaseModel):
    """New wall dimensions; values are clamped to the allowed range."""
    width: Optional[float] = Field(default=None, description="Wall width (inches)", gt=0)
    height: Optional[float] = Field(default=None, description="Wall height (inches)", gt=0)

    @model_validator(mode='after')
    def validate_any(self) -> 'WallUpdate':
        if self.width is None and self.height is None:
            raise ValueError("Provide width, height or both")
        return self


class JointUpdate(BaseModel):
    """New vertical reveal bounds."""
    joint_min: Optional[float] = Field(default=None, ge=0)
    joint_max: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode='after')
    def validate_bounds(self) -> 'JointUpdate':
        if self.joint_min is None and self.joint_max is None:
            raise ValueError("Provide joint_min, joint_max or both")
        if (
            self.joint_min is not None
            and self.joint_max is not None
            and self.joint_min > self.joint_max
        ):
            raise ValueError("joint_min must not exceed joint_max")
        return self


class PlaceRequest(BaseModel):
    """Place a panel directly at a cell."""
    origin: CellModel
    span: SpanModel


class DragStart(BaseModel):
    """Begin dragging a panel of the given span."""
    span: SpanModel


class PointerMove(BaseModel):
    """Pointer position in wall-local inches (origin top-left, y down)."""
    x: float
    y: float


class SelectionToggle(BaseModel):
    """Toggle a block in the selection."""
    block_id: str = Field(min_length=1)
    multi: bool = Field(default=False, description="Add to the selection instead of replacing it")


class SeamToggle(BaseModel):
    """Join or split panels across a seam."""
    kind: Literal["v", "h"] = Field(description="'v' for a column seam, 'h' for a row seam")
    idx: int = Field(ge=0)


class SeamHover(BaseModel):
    """Pointer position for seam picking, in wall-local inches."""
    x: float
    y: float
    radius: float = Field(default=PICK_RADIUS_IN, gt=0, description="Pick radius (inches)")


class LayoutStateModel(BaseModel):
    """Persisted layout state."""
    model_config = ConfigDict(populate_by_name=True)

    wall_width: float = Field(alias="wallWidth", gt=0)
    wall_height: float = Field(alias="wallHeight", gt=0)
    joint_min: float = Field(alias="jointMin", ge=0)
    joint_max: float = Field(alias="jointMax", ge=0)
    blocks: List[BlockModel] = Field(default_factory=list)

    @field_validator('blocks')
    @classmethod
    def validate_unique_ids(cls, v: List[BlockModel]) -> List[BlockModel]:
        ids = [b.id for b in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Block ids must be unique")
        return v

    def to_state_dict(self) -> Dict[str, Any]:
        """Dictionary in the engine's persisted shape."""
        return self.model_dump(by_alias=True)


class LayoutView(BaseModel):
    """Full view of a layout."""
    layout_id: str
    wall_width: float
    wall_height: float
    joint_min: float
    joint_max: float
    geometry: Dict[str, Any]
    blocks: List[Dict[str, Any]]
    selection: List[str]
    drag: Optional[Dict[str, Any]] = None


class CommandResult(BaseModel):
    """Outcome of an editing command."""
    changed: bool = Field(description="False when the command was a no-op")
    created_ids: List[str] = Field(default_factory=list)
    layout: LayoutView
