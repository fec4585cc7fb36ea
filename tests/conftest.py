import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Put `src/` on sys.path so tests can import `wildfire_ca` without installing it."""

    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def sample_grid_size():
    """Provide a standard (width, height) for tests."""
    return (10, 10)
