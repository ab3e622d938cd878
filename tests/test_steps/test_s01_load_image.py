"""Tests for S01: Load image step."""

from pathlib import Path

import numpy as np
import pytest

from lithogen.core.errors import InvalidGridError
from lithogen.steps.s01_load_image.config import LoadImageConfig
from lithogen.steps.s01_load_image.contracts import LoadImageInput, LoadImageOutput
from lithogen.steps.s01_load_image.step import LoadImageStep, image_to_grid, load_image_grid


class TestLoadImageContracts:
    def test_config_defaults(self):
        cfg = LoadImageConfig()
        assert cfg.max_dimension == 200
        assert cfg.border_px == 1

    def test_output_schema(self):
        schema = LoadImageOutput.model_json_schema()
        assert "grid_path" in schema["properties"]
        assert "width" in schema["properties"]


class TestImageToGrid:
    def test_border_and_no_upscale(self):
        pytest.importorskip("cv2")
        image = np.full((10, 20), 200, dtype=np.uint8)
        grid = image_to_grid(image, max_dimension=100, border_px=1)
        assert (grid.width, grid.height) == (22, 12)
        assert np.all(grid.samples[0, :] == 0)
        assert np.all(grid.samples[:, -1] == 0)
        assert np.all(grid.samples[1:-1, 1:-1] == 200)

    def test_downscale_keeps_aspect(self):
        pytest.importorskip("cv2")
        image = np.zeros((100, 400), dtype=np.uint8)
        grid = image_to_grid(image, max_dimension=200, border_px=0)
        assert (grid.width, grid.height) == (200, 50)

    def test_color_converted_to_gray(self):
        pytest.importorskip("cv2")
        image = np.zeros((4, 4, 3), dtype=np.uint8)
        image[..., :] = 255
        grid = image_to_grid(image, max_dimension=10, border_px=0)
        assert np.all(grid.samples == 255)

    def test_single_pixel_without_border_rejected(self):
        pytest.importorskip("cv2")
        with pytest.raises(InvalidGridError):
            image_to_grid(np.zeros((1, 1), dtype=np.uint8), max_dimension=10, border_px=0)

    def test_undecodable_file(self, tmp_path: Path):
        pytest.importorskip("cv2")
        bad = tmp_path / "broken.png"
        bad.write_bytes(b"not an image")
        with pytest.raises(InvalidGridError) as exc_info:
            load_image_grid(bad, max_dimension=10)
        assert exc_info.value.stage == "load_image"


class TestLoadImageStep:
    def test_validate_missing_image(self, data_root: Path):
        step = LoadImageStep(config=LoadImageConfig(), data_root=data_root)
        assert step.validate_inputs(LoadImageInput(image_path=Path("/nonexistent/a.png"))) is False

    def test_validate_unsupported_suffix(self, data_root: Path):
        other = data_root / "raw" / "notes.txt"
        other.write_text("hello")
        step = LoadImageStep(config=LoadImageConfig(), data_root=data_root)
        assert step.validate_inputs(LoadImageInput(image_path=other)) is False

    def test_run(self, sample_image: Path, data_root: Path):
        step = LoadImageStep(config=LoadImageConfig(max_dimension=200), data_root=data_root)
        output = step.execute(LoadImageInput(image_path=sample_image))

        assert output.grid_path.exists()
        assert (output.width, output.height) == (202, 52)
        saved = np.load(str(output.grid_path))
        assert saved.shape == (52, 202)
        assert saved.dtype == np.uint8
