# File: api/utils/sessions.py
"""
In-memory registry of layout editors, one per layout id.

Layouts live for the lifetime of the process. FastAPI runs the async
endpoints on one event loop, so commands against one editor never
interleave.
"""

from typing import Dict, List, Optional, Tuple
import logging
import uuid

from wall_panel_layout.config.layout import LayoutConfig
from wall_panel_layout.editor.wall_editor import WallLayoutEditor

from api.utils.config import Config
from api.utils.errors import ResourceNotFoundError

logger = logging.getLogger("wall_layout.api")


class LayoutRegistry:
    """Maps layout ids to their editors."""

    def __init__(self):
        self._editors: Dict[str, WallLayoutEditor] = {}

    def create(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        config: Optional[LayoutConfig] = None,
    ) -> Tuple[str, WallLayoutEditor]:
        """
        Create a new editor filled with the default tiling.

        Returns:
            Tuple of (layout_id, editor)
        """
        layout_id = str(uuid.uuid4())
        editor = WallLayoutEditor(
            config=config,
            width=Config.DEFAULT_WALL_WIDTH if width is None else width,
            height=Config.DEFAULT_WALL_HEIGHT if height is None else height,
        )
        self._editors[layout_id] = editor
        logger.info(f"Created layout {layout_id} ({editor.width} x {editor.height})")
        return layout_id, editor

    def get(self, layout_id: str) -> WallLayoutEditor:
        """
        Raises:
            ResourceNotFoundError: If no layout has this id
        """
        editor = self._editors.get(layout_id)
        if editor is None:
            raise ResourceNotFoundError("layout", layout_id)
        return editor

    def delete(self, layout_id: str) -> None:
        editor = self.get(layout_id)
        editor.cancel_drag()
        del self._editors[layout_id]
        logger.info(f"Deleted layout {layout_id}")

    def list_ids(self) -> List[str]:
        return list(self._editors)

    def clear(self) -> None:
        self._editors.clear()


registry = LayoutRegistry()


def get_registry() -> LayoutRegistry:
    """FastAPI dependency returning the process-wide registry."""
    return registry
