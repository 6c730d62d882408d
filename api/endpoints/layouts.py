# File: api/endpoints/layouts.py
from fastapi import APIRouter, Depends
from typing import Any, Dict, List
import logging

from wall_panel_layout.config.layout import LayoutConfig
from wall_panel_layout.editor.layout_state import LayoutState
from wall_panel_layout.editor.wall_editor import WallLayoutEditor
from wall_panel_layout.geometry.grid_solver import GridCell
from wall_panel_layout.panels.panel_block import Span

from api.models.layout_models import (
    CommandResult,
    DragStart,
    JointUpdate,
    LayoutCreate,
    LayoutStateModel,
    LayoutView,
    PlaceRequest,
    PointerMove,
    SeamHover,
    SeamToggle,
    SelectionToggle,
    WallUpdate,
)
from api.utils.errors import handle_exception
from api.utils.sessions import LayoutRegistry, get_registry

logger = logging.getLogger("wall_layout.api")

router = APIRouter()


def _view(layout_id: str, editor: WallLayoutEditor) -> LayoutView:
    drag = editor.drag
    return LayoutView(
        layout_id=layout_id,
        wall_width=editor.width,
        wall_height=editor.height,
        joint_min=editor.config.joint_min,
        joint_max=editor.config.joint_max,
        geometry=editor.geometry.to_dict(),
        blocks=[b.to_dict() for b in editor.blocks],
        selection=editor.selection.ids,
        drag=drag.to_dict() if drag else None,
    )


def _result(layout_id: str, editor: WallLayoutEditor, changed: bool, created_ids=None) -> CommandResult:
    return CommandResult(
        changed=changed,
        created_ids=list(created_ids or []),
        layout=_view(layout_id, editor),
    )


# -- layouts ---------------------------------------------------------------

@router.post("", response_model=LayoutView, status_code=201)
async def create_layout(
    body: LayoutCreate,
    registry: LayoutRegistry = Depends(get_registry),
):
    """
    Create a layout filled with the default tiling.

    Unspecified wall dimensions fall back to DEFAULT_WALL_WIDTH and
    DEFAULT_WALL_HEIGHT.
    """
    try:
        options: Dict[str, Any] = {
            "placement_policy": body.placement_policy,
            "row_gap_policy": body.row_gap_policy,
            "protect_locked_blocks": body.protect_locked_blocks,
        }
        if body.joint_min is not None:
            options["joint_min"] = body.joint_min
        if body.joint_max is not None:
            options["joint_max"] = body.joint_max

        layout_id, editor = registry.create(
            width=body.width,
            height=body.height,
            config=LayoutConfig(**options),
        )
        return _view(layout_id, editor)
    except Exception as e:
        raise handle_exception(e, "layout")


@router.get("", response_model=List[str])
async def list_layouts(registry: LayoutRegistry = Depends(get_registry)):
    """Ids of all layouts."""
    return registry.list_ids()


@router.get("/{layout_id}", response_model=LayoutView)
async def get_layout(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    try:
        return _view(layout_id, registry.get(layout_id))
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.delete("/{layout_id}", response_model=Dict[str, str])
async def delete_layout(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    try:
        registry.delete(layout_id)
        return {"status": "deleted", "layout_id": layout_id}
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


# -- wall and joints -------------------------------------------------------

@router.put("/{layout_id}/wall", response_model=CommandResult)
async def update_wall(
    layout_id: str,
    body: WallUpdate,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Resize the wall. The layout is regenerated from scratch."""
    try:
        editor = registry.get(layout_id)
        editor.set_wall(width=body.width, height=body.height)
        return _result(layout_id, editor, changed=True, created_ids=editor.store.ids())
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.put("/{layout_id}/joints", response_model=CommandResult)
async def update_joints(
    layout_id: str,
    body: JointUpdate,
    registry: LayoutRegistry = Depends(get_registry),
):
    """
    Change the vertical reveal bounds.

    Blocks are kept unless the column or row count changes.
    """
    try:
        editor = registry.get(layout_id)
        regenerated = editor.set_joint_bounds(body.joint_min, body.joint_max)
        created = editor.store.ids() if regenerated else []
        return _result(layout_id, editor, changed=True, created_ids=created)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


# -- placement -------------------------------------------------------------

@router.post("/{layout_id}/place", response_model=CommandResult)
async def place_panel(
    layout_id: str,
    body: PlaceRequest,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Drop a panel at a cell without a drag gesture."""
    try:
        editor = registry.get(layout_id)
        block = editor.place(
            GridCell(body.origin.col, body.origin.row),
            Span(body.span.w, body.span.h),
        )
        created = [block.id] if block else []
        return _result(layout_id, editor, changed=block is not None, created_ids=created)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/drag/start", response_model=CommandResult)
async def drag_start(
    layout_id: str,
    body: DragStart,
    registry: LayoutRegistry = Depends(get_registry),
):
    try:
        editor = registry.get(layout_id)
        editor.start_drag(Span(body.span.w, body.span.h))
        return _result(layout_id, editor, changed=True)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/drag/move", response_model=CommandResult)
async def drag_move(
    layout_id: str,
    body: PointerMove,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Move the pointer; the drag's candidate cell follows it."""
    try:
        editor = registry.get(layout_id)
        before = editor.drag
        editor.pointer_move(body.x, body.y)
        return _result(layout_id, editor, changed=editor.drag != before)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/drag/release", response_model=CommandResult)
async def drag_release(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    """Release the pointer, committing the candidate if there is one."""
    try:
        editor = registry.get(layout_id)
        before = editor.blocks
        was_dragging = editor.drag is not None
        editor.pointer_up()
        placed = [b.id for b in editor.blocks if b not in before]
        return _result(
            layout_id,
            editor,
            changed=was_dragging,
            created_ids=placed,
        )
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/drag/cancel", response_model=CommandResult)
async def drag_cancel(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    try:
        editor = registry.get(layout_id)
        return _result(layout_id, editor, changed=editor.cancel_drag())
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


# -- selection and combine -------------------------------------------------

@router.post("/{layout_id}/selection/toggle", response_model=CommandResult)
async def toggle_selection(
    layout_id: str,
    body: SelectionToggle,
    registry: LayoutRegistry = Depends(get_registry),
):
    try:
        editor = registry.get(layout_id)
        changed = editor.toggle_select(body.block_id, body.multi)
        return _result(layout_id, editor, changed=changed)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.delete("/{layout_id}/selection", response_model=CommandResult)
async def clear_selection(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    try:
        editor = registry.get(layout_id)
        changed = len(editor.selection) > 0
        editor.clear_selection()
        return _result(layout_id, editor, changed=changed)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/combine", response_model=CommandResult)
async def combine(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    """Fold the selected stack of unit-width panels into one panel."""
    try:
        editor = registry.get(layout_id)
        merged = editor.combine_selected()
        created = [merged.id] if merged else []
        return _result(layout_id, editor, changed=merged is not None, created_ids=created)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


# -- seams -----------------------------------------------------------------

@router.post("/{layout_id}/seams/toggle", response_model=CommandResult)
async def toggle_seam(
    layout_id: str,
    body: SeamToggle,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Split panels straddling a seam, or join panels meeting across it."""
    try:
        editor = registry.get(layout_id)
        created = editor.toggle_seam(body.kind, body.idx)
        return _result(layout_id, editor, changed=bool(created), created_ids=created)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


def _seam_overlay(editor: WallLayoutEditor) -> Dict[str, Any]:
    hovered = editor.seams.hovered
    return {
        "locked": [s.to_dict() for s in editor.seams.locked_seams()],
        "hovered": hovered.to_dict() if hovered else None,
        "selected": [s.to_dict() for s in editor.seams.selected],
        "lines": editor.seams.seam_lines(),
    }


@router.get("/{layout_id}/seams", response_model=Dict[str, Any])
async def get_seams(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    """Locked, hovered and selected seams, and the overlay lines to draw."""
    try:
        editor = registry.get(layout_id)
        return _seam_overlay(editor)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/seams/hover", response_model=Dict[str, Any])
async def hover_seam(
    layout_id: str,
    body: SeamHover,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Pick the seam nearest a wall-local point; clears the hover when none is in range."""
    try:
        editor = registry.get(layout_id)
        editor.hover_seam(body.x, body.y, body.radius)
        return _seam_overlay(editor)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.post("/{layout_id}/seams/select", response_model=Dict[str, Any])
async def select_seam(
    layout_id: str,
    body: SeamToggle,
    registry: LayoutRegistry = Depends(get_registry),
):
    """Toggle an interior seam in the seam selection."""
    try:
        editor = registry.get(layout_id)
        changed = editor.select_seam(body.kind, body.idx)
        return dict(_seam_overlay(editor), changed=changed)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.delete("/{layout_id}/seams/selection", response_model=Dict[str, Any])
async def clear_seam_selection(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    try:
        editor = registry.get(layout_id)
        changed = editor.clear_seam_selection()
        return dict(_seam_overlay(editor), changed=changed)
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


@router.get("/{layout_id}/faces", response_model=List[Dict[str, Any]])
async def get_faces(layout_id: str, registry: LayoutRegistry = Depends(get_registry)):
    """Face rectangles for rendering, in wall-local inches."""
    try:
        editor = registry.get(layout_id)
        return [f.to_dict() for f in editor.face_rects()]
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)


# -- persisted state -------------------------------------------------------

@router.put("/{layout_id}/state", response_model=CommandResult)
async def load_state(
    layout_id: str,
    body: LayoutStateModel,
    registry: LayoutRegistry = Depends(get_registry),
):
    """
    Replace the layout with a persisted state.

    Blocks that overlap or leave the grid are rejected with 400 and the
    layout is left unchanged.
    """
    try:
        editor = registry.get(layout_id)
        editor.load_state(LayoutState.from_dict(body.to_state_dict()))
        return _result(layout_id, editor, changed=True, created_ids=editor.store.ids())
    except Exception as e:
        raise handle_exception(e, "layout", layout_id)
