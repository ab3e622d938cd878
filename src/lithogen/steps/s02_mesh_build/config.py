"""Configuration for Step 02: Mesh build."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MeshBuildConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    min_thickness: float = Field(0.8, ge=0, description="Relief thickness for white samples")
    max_thickness: float = Field(3.0, ge=0, description="Relief thickness for black samples; also frame depth")
    frame_width: float = Field(3.0, gt=0, description="Frame border width beyond the surface footprint")
    scale_factor: float | None = Field(
        None, gt=0, description="Uniform scale applied after all geometry (None = keep grid units)"
    )

    hangar_count: Literal[0, 1, 2] = Field(0, description="Attachment loops along the top edge")
    hangar_width: float = Field(8.0, gt=0, description="Outer diameter of a hangar loop")
    hangar_thickness: float = Field(2.0, gt=0, description="Radial wall thickness of a hangar loop")
    hangar_segments: int = Field(16, ge=3, description="Segments per hangar ring")

    @model_validator(mode="after")
    def _check_hangar_radii(self) -> "MeshBuildConfig":
        if self.hangar_thickness >= self.hangar_width / 2:
            raise ValueError(
                f"hangar_thickness ({self.hangar_thickness}) must be smaller than "
                f"the outer radius ({self.hangar_width / 2})"
            )
        return self
