"""I/O contracts for Step 03: STL export (mesh → ASCII/binary STL)."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class StlExportInput(BaseModel):
    mesh_path: Path = Field(..., description="Path to mesh .npz from s02")


class StlExportOutput(BaseModel):
    ascii_path: Optional[Path] = Field(None, description="Path to exported ASCII .stl file")
    binary_path: Optional[Path] = Field(None, description="Path to exported binary .stl file")
    num_triangles: int = Field(0, description="Triangles written to each file")
    binary_size: int = Field(0, description="Binary STL size in bytes (84 + 50 per triangle)")
