"""Configuration for Step 01: Image to brightness grid."""

from pydantic import BaseModel, ConfigDict, Field


class LoadImageConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_dimension: int = Field(200, gt=0, description="Longest side after downscaling (never upscales)")
    border_px: int = Field(1, ge=0, description="Black border added around the image, in pixels")
