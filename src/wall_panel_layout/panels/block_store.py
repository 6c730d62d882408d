# File: src/wall_panel_layout/panels/block_store.py
"""
Authoritative store of placed panel blocks.

The store owns the committed block list for one wall and keeps two
invariants after every mutation:

1. No two blocks cover the same grid cell
2. Every block lies inside [0, cols) x [0, rows)

Mutations build a complete new block tuple and swap it in with a single
assignment, then notify listeners with the new snapshot. Readers never see a
partially applied change.

Usage:
    store = PanelBlockStore(config=LayoutConfig())
    store.regenerate(144.0, 108.0)
    block = store.place(Candidate(GridCell(2, 0), Span(1, 3)))
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
import itertools
import uuid

from ..config.layout import LayoutConfig, DEFAULT_WALL_WIDTH, DEFAULT_WALL_HEIGHT
from ..geometry.grid_solver import GridCell, GridGeometry, solve_grid
from ..utils.logging_config import get_logger
from .panel_block import Candidate, LockedJoints, PanelBlock, Span

logger = get_logger(__name__)

BlockListener = Callable[[Tuple[PanelBlock, ...]], None]

# Default tiling: unit-width, double-height panels
AUTO_FILL_SPAN_H = 2


class LayoutStateError(ValueError):
    """Raised when a block list loaded from outside breaks the layout invariants."""


def uuid_ids() -> Callable[[], str]:
    """Id factory producing random UUID strings."""
    return lambda: str(uuid.uuid4())


def sequential_ids(prefix: str = "p", start: int = 0) -> Callable[[], str]:
    """Id factory producing prefix0, prefix1, ..."""
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"


def check_layout(
    blocks: Iterable[PanelBlock],
    geometry: GridGeometry,
    config: LayoutConfig,
) -> List[str]:
    """Check a block list against the layout invariants.

    Args:
        blocks: Blocks to check
        geometry: Solved grid the blocks must fit
        config: Span limits

    Returns:
        List of violation messages (empty if the layout is valid)
    """
    problems = []
    seen_ids = set()
    occupied: Dict[Tuple[int, int], str] = {}

    for block in blocks:
        if block.id in seen_ids:
            problems.append(f"duplicate block id {block.id!r}")
        seen_ids.add(block.id)

        if not config.span_in_range(block.span.w, block.span.h):
            problems.append(
                f"block {block.id!r} span {block.span.w} x {block.span.h} "
                f"outside 1..{config.max_span_w} x 1..{config.max_span_h}"
            )
        if not geometry.in_bounds(
            block.origin.col, block.origin.row, block.span.w, block.span.h
        ):
            problems.append(
                f"block {block.id!r} at ({block.origin.col}, {block.origin.row}) "
                f"leaves the {geometry.cols} x {geometry.rows} grid"
            )
            continue

        for cell in block.cells():
            other = occupied.get(cell)
            if other is not None:
                problems.append(f"blocks {other!r} and {block.id!r} overlap at {cell}")
                break
            occupied[cell] = block.id

    return problems


class PanelBlockStore:
    """
    Holds the committed panel blocks of one wall.

    Attributes:
        config: Layout configuration (span limits, module size)
        geometry: Solved grid the blocks live on

    Example:
        >>> store = PanelBlockStore(id_factory=sequential_ids())
        >>> store.regenerate(144.0, 108.0)
        >>> len(store)
        21
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        geometry: Optional[GridGeometry] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize an empty store.

        Args:
            config: Layout configuration (defaults if not provided)
            geometry: Initial grid; solved for the default wall if omitted
            id_factory: Callable returning a fresh unique id per call
        """
        self.config = config or LayoutConfig()
        self.geometry = geometry or solve_grid(
            DEFAULT_WALL_WIDTH, DEFAULT_WALL_HEIGHT, self.config
        )
        self._next_id = id_factory or uuid_ids()
        self._blocks: Tuple[PanelBlock, ...] = ()
        self._listeners: List[BlockListener] = []

    # -- reading -----------------------------------------------------------

    @property
    def blocks(self) -> Tuple[PanelBlock, ...]:
        """Current snapshot of blocks in insertion order."""
        return self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[PanelBlock]:
        return iter(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return any(b.id == block_id for b in self._blocks)

    def get(self, block_id: str) -> Optional[PanelBlock]:
        """Block with the given id, or None."""
        for block in self._blocks:
            if block.id == block_id:
                return block
        return None

    def ids(self) -> List[str]:
        return [b.id for b in self._blocks]

    def new_id(self) -> str:
        """Draw a fresh id from the store's id factory."""
        return self._next_id()

    def fits(self, candidate: Candidate) -> bool:
        """True when the candidate's span is allowed and it lies inside the grid."""
        return (
            self.config.span_in_range(candidate.span.w, candidate.span.h)
            and self.geometry.in_bounds(
                candidate.origin.col,
                candidate.origin.row,
                candidate.span.w,
                candidate.span.h,
            )
        )

    def overlaps(self, candidate: Candidate) -> List[PanelBlock]:
        """Blocks whose rectangles intersect the candidate."""
        return [b for b in self._blocks if b.intersects(candidate)]

    def check_invariants(self) -> List[str]:
        """Violations of the layout invariants in the current block list."""
        return check_layout(self._blocks, self.geometry, self.config)

    # -- listeners ---------------------------------------------------------

    def subscribe(self, listener: BlockListener) -> Callable[[], None]:
        """
        Register a listener called with the new snapshot after each mutation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, blocks: Iterable[PanelBlock], reason: str) -> None:
        """Swap in a new block tuple and notify listeners."""
        self._blocks = tuple(blocks)
        logger.trace(f"Store commit ({reason}): {len(self._blocks)} blocks")
        for listener in list(self._listeners):
            listener(self._blocks)

    # -- mutations ---------------------------------------------------------

    def regenerate(self, width: float, height: float) -> GridGeometry:
        """
        Discard all blocks, re-solve the grid and auto-fill it.

        The fill packs unit-width, double-height blocks row-major. When the
        row count is odd the last row gets single-height blocks.

        Args:
            width: Wall width (inches)
            height: Wall height (inches)

        Returns:
            The newly solved geometry
        """
        self.geometry = solve_grid(width, height, self.config)
        self._commit(self._auto_fill(), "regenerate")
        logger.info(
            f"Regenerated {width} x {height} wall: "
            f"{self.geometry.cols} x {self.geometry.rows} grid, {len(self)} blocks"
        )
        return self.geometry

    def apply_geometry(self, geometry: GridGeometry) -> bool:
        """
        Switch to a re-solved grid.

        Blocks are kept when the column and row counts are unchanged (only
        the reveals moved); otherwise the grid is refilled from scratch.

        Returns:
            True if the blocks were regenerated
        """
        same_grid = (
            geometry.cols == self.geometry.cols and geometry.rows == self.geometry.rows
        )
        self.geometry = geometry
        if same_grid:
            self._commit(self._blocks, "reveal change")
            return False
        self._commit(self._auto_fill(), "grid change")
        logger.info(
            f"Grid changed to {geometry.cols} x {geometry.rows}; layout refilled"
        )
        return True

    def _auto_fill(self) -> List[PanelBlock]:
        blocks = []
        for row in range(0, self.geometry.rows, AUTO_FILL_SPAN_H):
            h = min(AUTO_FILL_SPAN_H, self.geometry.rows - row, self.config.max_span_h)
            for col in range(self.geometry.cols):
                blocks.append(PanelBlock(
                    id=self.new_id(),
                    origin=GridCell(col, row),
                    span=Span(1, h),
                ))
        return blocks

    def place(
        self,
        candidate: Candidate,
        locked_joints: Optional[LockedJoints] = None,
    ) -> Optional[PanelBlock]:
        """
        Insert a block, removing every block it intersects.

        Args:
            candidate: Position and span of the new block
            locked_joints: Seams to record on the new block

        Returns:
            The new block, or None if the candidate does not fit the grid
        """
        if not self.fits(candidate):
            logger.debug(f"Place ignored, candidate does not fit: {candidate}")
            return None

        block = PanelBlock(
            id=self.new_id(),
            origin=candidate.origin,
            span=candidate.span,
            locked_joints=locked_joints or LockedJoints(),
        )
        displaced = {b.id for b in self.overlaps(candidate)}
        survivors = [b for b in self._blocks if b.id not in displaced]
        self._commit(survivors + [block], "place")

        logger.info(
            f"Placed {block.span.w} x {block.span.h} block {block.id} at "
            f"({block.origin.col}, {block.origin.row}), displaced {len(displaced)}"
        )
        return block

    def add(self, block: PanelBlock) -> bool:
        """
        Insert a block only if it fits and overlaps nothing.

        Returns:
            True if the block was added
        """
        candidate = Candidate(block.origin, block.span)
        if block.id in self or not self.fits(candidate) or self.overlaps(candidate):
            logger.debug(f"Add rejected for block {block.id}")
            return False
        self._commit(self._blocks + (block,), "add")
        return True

    def remove(self, ids: Iterable[str]) -> List[PanelBlock]:
        """
        Remove blocks by id; unknown ids are ignored.

        Returns:
            The removed blocks
        """
        doomed = set(ids)
        removed = [b for b in self._blocks if b.id in doomed]
        if removed:
            self._commit((b for b in self._blocks if b.id not in doomed), "remove")
        return removed

    def replace(self, ids: Iterable[str], new_blocks) -> bool:
        """
        Remove blocks and insert their replacement(s) in one step.

        Args:
            ids: Ids of the blocks to remove
            new_blocks: A PanelBlock or a list of PanelBlocks to insert

        Returns:
            True if applied; False (no change) when a replacement would leave
            the grid or overlap a block that is not being replaced
        """
        if isinstance(new_blocks, PanelBlock):
            new_blocks = [new_blocks]
        doomed = set(ids)
        kept = [b for b in self._blocks if b.id not in doomed]
        result = kept + list(new_blocks)

        problems = check_layout(result, self.geometry, self.config)
        if problems:
            logger.debug(f"Replace rejected: {problems}")
            return False

        self._commit(result, "replace")
        return True

    def load(
        self,
        blocks: Iterable[PanelBlock],
        geometry: Optional[GridGeometry] = None,
    ) -> None:
        """
        Replace the whole block list (and optionally the grid) at once.

        Nothing changes when validation fails.

        Args:
            blocks: Externally supplied blocks
            geometry: Grid the blocks belong to (current grid if omitted)

        Raises:
            LayoutStateError: If the blocks break the layout invariants
        """
        blocks = list(blocks)
        geometry = geometry or self.geometry
        problems = check_layout(blocks, geometry, self.config)
        if problems:
            raise LayoutStateError(
                "Invalid panel layout:\n" + "\n".join(problems)
            )
        self.geometry = geometry
        self._commit(blocks, "load")
