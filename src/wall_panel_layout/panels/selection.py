# File: src/wall_panel_layout/panels/selection.py
"""Set of selected block ids feeding combine and highlight rendering."""

from typing import Iterable, Iterator, List

from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class SelectionSet:
    """
    Ordered set of selected block ids.

    Ids are kept in selection order so callers can show them in the order
    the operator picked them.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: List[str] = []
        for block_id in ids:
            if block_id not in self._ids:
                self._ids.append(block_id)

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def toggle(self, block_id: str, multi: bool = False) -> None:
        """
        Toggle an id.

        With multi, the id is added or removed and the rest is kept. Without
        multi, the selection becomes just this id, or empty if it already was.
        """
        if multi:
            if block_id in self._ids:
                self._ids.remove(block_id)
            else:
                self._ids.append(block_id)
        elif self._ids == [block_id]:
            self._ids = []
        else:
            self._ids = [block_id]
        logger.debug(f"Selection now {self._ids}")

    def set(self, ids: Iterable[str]) -> None:
        """Replace the selection."""
        self._ids = []
        for block_id in ids:
            if block_id not in self._ids:
                self._ids.append(block_id)

    def clear(self) -> None:
        self._ids = []

    def prune(self, valid_ids: Iterable[str]) -> List[str]:
        """
        Drop ids that are no longer valid.

        Returns:
            The ids that were dropped
        """
        valid = set(valid_ids)
        dropped = [i for i in self._ids if i not in valid]
        if dropped:
            self._ids = [i for i in self._ids if i in valid]
            logger.debug(f"Pruned {dropped} from selection")
        return dropped
