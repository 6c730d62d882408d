# File: src/wall_panel_layout/panels/seam_locks.py
"""
Seam lock registry and seam join/split.

Blocks placed by dragging record the seams along their edges as locked. The
registry collects those locks for the overlay, tracks which seam the pointer
hovers and which seams are selected, and handles seam toggle requests:

- If panels straddle the seam, they are split along it.
- Otherwise panels meeting edge to edge across the seam, with the same
  extent along it, are joined into one panel.

Joining never happens across a locked seam.
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from ..geometry.face_layout import Seam, seam_segment
from ..geometry.grid_solver import GridCell
from ..utils.logging_config import get_logger
from .block_store import PanelBlockStore
from .panel_block import LockedJoints, PanelBlock, Span

logger = get_logger(__name__)


def _straddles(block: PanelBlock, seam: Seam) -> bool:
    """True when the seam runs through the block's interior."""
    if seam.kind == "v":
        return block.origin.col < seam.idx < block.right
    return block.origin.row < seam.idx < block.bottom


def _part(parent: PanelBlock, origin: GridCell, span: Span, new_id) -> PanelBlock:
    """Piece of a split block, keeping the parent's locks on its own edges."""
    edges = LockedJoints.for_edges(origin, span)
    joints = LockedJoints(
        v=parent.locked_joints.v & edges.v,
        h=parent.locked_joints.h & edges.h,
    )
    return PanelBlock(new_id(), origin, span, joints)


def _split(block: PanelBlock, seam: Seam, new_id) -> Tuple[PanelBlock, PanelBlock]:
    """Cut a straddling block into the parts before and after the seam."""
    o, s = block.origin, block.span
    if seam.kind == "v":
        first_w = seam.idx - o.col
        return (
            _part(block, GridCell(o.col, o.row), Span(first_w, s.h), new_id),
            _part(block, GridCell(seam.idx, o.row), Span(s.w - first_w, s.h), new_id),
        )
    first_h = seam.idx - o.row
    return (
        _part(block, GridCell(o.col, o.row), Span(s.w, first_h), new_id),
        _part(block, GridCell(o.col, seam.idx), Span(s.w, s.h - first_h), new_id),
    )


def _join_partner(
    block: PanelBlock,
    seam: Seam,
    blocks: List[PanelBlock],
) -> Optional[PanelBlock]:
    """Block across the seam that shares block's full edge, if any."""
    for other in blocks:
        if seam.kind == "v":
            if (
                block.right == seam.idx
                and other.origin.col == seam.idx
                and other.origin.row == block.origin.row
                and other.span.h == block.span.h
            ):
                return other
        elif (
            block.bottom == seam.idx
            and other.origin.row == seam.idx
            and other.origin.col == block.origin.col
            and other.span.w == block.span.w
        ):
            return other
    return None


class SeamLockRegistry:
    """
    Locked, hovered and selected seams of one wall.

    Locks are derived from the store on every read, so they always match the
    current blocks.
    """

    def __init__(self, store: PanelBlockStore):
        self._store = store
        self.hovered: Optional[Seam] = None
        self._selected: List[Seam] = []

    # -- locks -------------------------------------------------------------

    def locked_vertical(self) -> Set[int]:
        locked: Set[int] = set()
        for block in self._store.blocks:
            locked.update(block.locked_joints.v)
        return locked

    def locked_horizontal(self) -> Set[int]:
        locked: Set[int] = set()
        for block in self._store.blocks:
            locked.update(block.locked_joints.h)
        return locked

    def is_locked(self, seam: Seam) -> bool:
        if seam.kind == "v":
            return seam.idx in self.locked_vertical()
        return seam.idx in self.locked_horizontal()

    def locked_seams(self) -> List[Seam]:
        """All locked seams, vertical first, by index."""
        seams = [Seam("v", i) for i in sorted(self.locked_vertical())]
        seams.extend(Seam("h", j) for j in sorted(self.locked_horizontal()))
        return seams

    # -- hover / selection -------------------------------------------------

    def hover(self, seam: Optional[Seam]) -> None:
        self.hovered = seam

    @property
    def selected(self) -> List[Seam]:
        return list(self._selected)

    def select(self, seam: Seam) -> bool:
        """
        Toggle a seam in the selected set.

        Returns:
            True if the seam is selected afterwards
        """
        if seam in self._selected:
            self._selected.remove(seam)
            return False
        self._selected.append(seam)
        return True

    def clear_selected(self) -> None:
        self._selected = []

    def seam_lines(self) -> List[Dict[str, Any]]:
        """
        Overlay lines: every locked seam, plus the hovered seam if not locked.

        Returns:
            List of dicts with kind, idx, start, end, hover and selected
        """
        geometry = self._store.geometry
        lines = []
        seams = self.locked_seams()
        if self.hovered is not None and not self.is_locked(self.hovered):
            seams.append(self.hovered)

        for seam in seams:
            start, end = seam_segment(seam, geometry)
            lines.append({
                "kind": seam.kind,
                "idx": seam.idx,
                "start": start,
                "end": end,
                "hover": seam == self.hovered,
                "selected": seam in self._selected,
            })
        return lines

    # -- join / split ------------------------------------------------------

    def is_interior(self, seam: Seam) -> bool:
        limit = self._store.geometry.cols if seam.kind == "v" else self._store.geometry.rows
        return 0 < seam.idx < limit

    def toggle_seam(self, seam: Seam) -> List[str]:
        """
        Split panels straddling the seam, or join panels meeting across it.

        Args:
            seam: Interior seam to toggle

        Returns:
            Ids of the blocks created (empty when nothing changed)
        """
        if not self.is_interior(seam):
            logger.debug(f"Seam toggle ignored on boundary seam {seam}")
            return []

        blocks = list(self._store.blocks)
        new_id = self._store.new_id

        straddling = [b for b in blocks if _straddles(b, seam)]
        if straddling:
            created = []
            for block in straddling:
                created.extend(_split(block, seam, new_id))
            return self._apply([b.id for b in straddling], created, "split", seam)

        if self.is_locked(seam):
            logger.debug(f"Seam toggle ignored, {seam} is locked")
            return []

        doomed: List[str] = []
        created = []
        for block in blocks:
            partner = _join_partner(block, seam, blocks)
            if partner is None:
                continue
            if seam.kind == "v":
                span = Span(block.span.w + partner.span.w, block.span.h)
            else:
                span = Span(block.span.w, block.span.h + partner.span.h)
            if not self._store.config.span_in_range(span.w, span.h):
                continue
            doomed.extend([block.id, partner.id])
            created.append(PanelBlock(new_id(), block.origin, span))

        if not created:
            logger.debug(f"Seam toggle on {seam}: nothing to split or join")
            return []
        return self._apply(doomed, created, "join", seam)

    def _apply(
        self,
        doomed: List[str],
        created: List[PanelBlock],
        action: str,
        seam: Seam,
    ) -> List[str]:
        if not self._store.replace(doomed, created):
            return []
        logger.info(f"Seam {seam.kind}{seam.idx}: {action} {len(doomed)} -> {len(created)} blocks")
        return [b.id for b in created]
