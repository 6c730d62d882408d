# tests/api/conftest.py
import pytest
import sys
import os
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).parents[2]
sys.path.insert(0, str(project_root))

# Set test environment variables
os.environ["DEBUG"] = "true"
os.environ["API_KEY"] = "dev_key"
os.environ.pop("DEFAULT_WALL_WIDTH", None)
os.environ.pop("DEFAULT_WALL_HEIGHT", None)


@pytest.fixture(autouse=True)
def reset_registry():
    """Start every API test with no layouts."""
    from api.utils.sessions import registry
    registry.clear()
    yield
    registry.clear()
