"""I/O contracts for Step 02: Mesh build (grid → lithophane mesh)."""

from pathlib import Path

from pydantic import BaseModel, Field


class MeshBuildInput(BaseModel):
    grid_path: Path = Field(..., description="Path to brightness grid .npy from s01")


class MeshBuildOutput(BaseModel):
    mesh_path: Path = Field(..., description="Path to mesh .npz (vertices, faces)")
    grid_width: int = Field(..., description="Grid width W in samples")
    grid_height: int = Field(..., description="Grid height H in samples")
    num_vertices: int = Field(0, description="Total vertex count")
    num_faces: int = Field(0, description="Total triangle count")
