# tests/conftest.py
import sys
import os

# Add src directory and project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from wall_panel_layout.config.layout import LayoutConfig
from wall_panel_layout.geometry.grid_solver import solve_grid
from wall_panel_layout.panels.block_store import PanelBlockStore, sequential_ids


@pytest.fixture
def config():
    """Default layout configuration."""
    return LayoutConfig()


@pytest.fixture
def geometry(config):
    """Grid for the default 144 x 108 wall: 7 columns, 6 rows."""
    return solve_grid(144.0, 108.0, config)


@pytest.fixture
def empty_store(config, geometry):
    """Store on the default grid with no blocks."""
    return PanelBlockStore(config=config, geometry=geometry, id_factory=sequential_ids())


@pytest.fixture
def filled_store(empty_store):
    """Store holding the default tiling of the 144 x 108 wall."""
    empty_store.regenerate(144.0, 108.0)
    return empty_store
