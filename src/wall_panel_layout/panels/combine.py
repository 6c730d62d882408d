# File: src/wall_panel_layout/panels/combine.py
"""
Combine selected panels into one taller panel.

Only a vertical stack can be combined: every selected block must sit in the
same column, be one cell wide, and the blocks must follow each other with no
rows skipped. The result starts at the top block's row and is as tall as the
selected blocks together.

Example:
    >>> selection = SelectionSet(["a", "b"])  # (2,0) 1x2 and (2,2) 1x2
    >>> merged = combine_selected(store, selection)
    >>> merged.origin, merged.span
    (GridCell(col=2, row=0), Span(w=1, h=4))
"""

from typing import List, Optional

from ..geometry.grid_solver import GridCell
from ..utils.logging_config import get_logger
from .block_store import PanelBlockStore
from .panel_block import PanelBlock, Span
from .selection import SelectionSet

logger = get_logger(__name__)

MIN_COMBINE_COUNT = 2


def check_combine(blocks: List[PanelBlock], max_span_h: int) -> Optional[str]:
    """
    Check the combine preconditions, in order.

    Args:
        blocks: The selected blocks
        max_span_h: Tallest allowed panel, in cells

    Returns:
        Reason the blocks cannot be combined, or None if they can
    """
    if len(blocks) < MIN_COMBINE_COUNT:
        return f"need at least {MIN_COMBINE_COUNT} blocks, got {len(blocks)}"

    col = blocks[0].origin.col
    if not all(b.origin.col == col and b.span.w == 1 for b in blocks):
        return "blocks must share a column and be one cell wide"

    ordered = sorted(blocks, key=lambda b: b.origin.row)
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.origin.row != prev.origin.row + prev.span.h:
            return (
                f"row {cur.origin.row} does not follow block ending at row "
                f"{prev.origin.row + prev.span.h}"
            )

    total_h = sum(b.span.h for b in blocks)
    if total_h > max_span_h:
        return f"combined height {total_h} exceeds {max_span_h}"

    return None


def combine_selected(
    store: PanelBlockStore,
    selection: SelectionSet,
) -> Optional[PanelBlock]:
    """
    Fold the selected blocks into one block.

    On success the selected blocks are replaced by the merged block and the
    selection becomes the merged block's id. On any failed precondition
    nothing changes.

    Args:
        store: Block store to update
        selection: Current selection

    Returns:
        The merged block, or None if the selection cannot be combined
    """
    ids = selection.ids
    blocks = [store.get(block_id) for block_id in ids]
    if any(b is None for b in blocks):
        logger.debug("Combine ignored, selection references unknown blocks")
        return None

    reason = check_combine(blocks, store.config.max_span_h)
    if reason is not None:
        logger.debug(f"Combine ignored: {reason}")
        return None

    top = min(blocks, key=lambda b: b.origin.row)
    merged = PanelBlock(
        id=store.new_id(),
        origin=GridCell(top.origin.col, top.origin.row),
        span=Span(1, sum(b.span.h for b in blocks)),
    )
    if not store.replace(ids, merged):
        return None

    selection.set([merged.id])
    logger.info(
        f"Combined {len(blocks)} blocks into {merged.id} at "
        f"({merged.origin.col}, {merged.origin.row}) 1 x {merged.span.h}"
    )
    return merged
