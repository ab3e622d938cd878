"""Step 01: Load image — decode, downscale, grayscale, pad with a black border."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import numpy as np

from lithogen.core.errors import InvalidGridError
from lithogen.core.mesh import BrightnessGrid
from lithogen.core.step_base import BaseStep
from lithogen.utils.io import save_grid
from .config import LoadImageConfig
from .contracts import LoadImageInput, LoadImageOutput

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"}


def image_to_grid(image: np.ndarray, max_dimension: int, border_px: int = 1) -> BrightnessGrid:
    """Turn a decoded image (gray or BGR/BGRA) into a bordered brightness grid."""
    import cv2

    if image.ndim == 3 and image.shape[2] == 4:
        gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    elif image.ndim == 3:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    else:
        gray = image
    if gray.dtype != np.uint8:
        gray = cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    h, w = gray.shape[:2]
    scale = min(1.0, max_dimension / w, max_dimension / h)
    if scale < 1.0:
        new_w = max(1, int(round(w * scale)))
        new_h = max(1, int(round(h * scale)))
        gray = cv2.resize(gray, (new_w, new_h), interpolation=cv2.INTER_AREA)
        logger.info(f"Resized {w}x{h} -> {new_w}x{new_h}")

    if border_px:
        gray = cv2.copyMakeBorder(
            gray, border_px, border_px, border_px, border_px,
            cv2.BORDER_CONSTANT, value=0,
        )
    return BrightnessGrid.from_array(gray)


def load_image_grid(image_path: Path, max_dimension: int, border_px: int = 1) -> BrightnessGrid:
    import cv2

    image = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise InvalidGridError(f"Could not decode image: {image_path}", stage="load_image")
    return image_to_grid(image, max_dimension, border_px)


class LoadImageStep(BaseStep[LoadImageInput, LoadImageOutput, LoadImageConfig]):
    name: ClassVar[str] = "load_image"
    input_type: ClassVar = LoadImageInput
    output_type: ClassVar = LoadImageOutput
    config_type: ClassVar = LoadImageConfig

    def validate_inputs(self, inputs: LoadImageInput) -> bool:
        if not inputs.image_path.exists():
            logger.error(f"Image not found: {inputs.image_path}")
            return False
        if inputs.image_path.suffix.lower() not in IMAGE_SUFFIXES:
            logger.error(f"Unsupported image type: {inputs.image_path.suffix}")
            return False
        return True

    def run(self, inputs: LoadImageInput) -> LoadImageOutput:
        output_dir = self.data_root / "interim" / "s01_grid"
        output_dir.mkdir(parents=True, exist_ok=True)

        grid = load_image_grid(inputs.image_path, self.config.max_dimension, self.config.border_px)
        grid_path = save_grid(output_dir / f"{inputs.image_path.stem}.npy", grid)

        logger.info(f"Brightness grid {grid.width}x{grid.height} saved to {grid_path}")
        return LoadImageOutput(grid_path=grid_path, width=grid.width, height=grid.height)
