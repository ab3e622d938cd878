"""I/O contracts for Step 01: Image to brightness grid."""

from pathlib import Path

from pydantic import BaseModel, Field


class LoadImageInput(BaseModel):
    image_path: Path = Field(..., description="Path to the source image (any format OpenCV decodes)")


class LoadImageOutput(BaseModel):
    grid_path: Path = Field(..., description="Path to brightness grid .npy (uint8, H x W)")
    width: int = Field(..., description="Grid width including border")
    height: int = Field(..., description="Grid height including border")
