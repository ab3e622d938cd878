"""Shared pytest fixtures for lithogen pipeline tests."""

from pathlib import Path

import numpy as np
import pytest

from lithogen.core.mesh import BrightnessGrid
from lithogen.steps.s02_mesh_build.config import MeshBuildConfig


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s01_grid", "interim/s02_mesh", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def uniform_grid() -> BrightnessGrid:
    """2x2 grid of mid-gray samples."""
    return BrightnessGrid.from_array(np.full((2, 2), 128, dtype=np.uint8))


@pytest.fixture
def gradient_grid() -> BrightnessGrid:
    """6 wide, 4 tall grid with a left-to-right gradient."""
    row = np.linspace(0, 255, 6)
    return BrightnessGrid.from_array(np.tile(row, (4, 1)))


@pytest.fixture
def scenario_config() -> MeshBuildConfig:
    return MeshBuildConfig(min_thickness=1.0, max_thickness=3.0, frame_width=2.0, hangar_count=0)


@pytest.fixture
def sample_grid_npy(data_root: Path) -> Path:
    """Save a small random grid as .npy for the mesh build step."""
    rng = np.random.RandomState(7)
    grid = rng.randint(0, 256, (5, 7)).astype(np.uint8)
    path = data_root / "interim" / "s01_grid" / "sample.npy"
    np.save(str(path), grid)
    return path


@pytest.fixture
def sample_image(data_root: Path) -> Path:
    """Write a 400x100 horizontal gradient PNG."""
    cv2 = pytest.importorskip("cv2")
    gradient = np.tile(np.linspace(0, 255, 400, dtype=np.uint8), (100, 1))
    path = data_root / "raw" / "gradient.png"
    cv2.imwrite(str(path), gradient)
    return path
