"""
Wall layout editor and layout persistence.

Example:
    >>> from wall_panel_layout.editor import WallLayoutEditor
    >>> editor = WallLayoutEditor()
    >>> state = editor.to_dict()
    >>> restored = WallLayoutEditor.from_dict(state)
"""

from .layout_state import (
    LayoutState,
    serialize_layout,
    deserialize_layout,
)

from .wall_editor import WallLayoutEditor

__all__ = [
    "LayoutState",
    "serialize_layout",
    "deserialize_layout",
    "WallLayoutEditor",
]
