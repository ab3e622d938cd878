"""Step 02: Mesh build — brightness grid → framed lithophane mesh.

Reads the grid from s01 and writes ``mesh.npz`` (vertices + triangle
indices) for the STL export step.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from lithogen.core.step_base import BaseStep
from lithogen.utils.io import load_grid
from ._pipeline import build_lithophane_mesh
from .config import MeshBuildConfig
from .contracts import MeshBuildInput, MeshBuildOutput

logger = logging.getLogger(__name__)


class MeshBuildStep(BaseStep[MeshBuildInput, MeshBuildOutput, MeshBuildConfig]):
    name: ClassVar[str] = "mesh_build"
    input_type: ClassVar = MeshBuildInput
    output_type: ClassVar = MeshBuildOutput
    config_type: ClassVar = MeshBuildConfig

    def validate_inputs(self, inputs: MeshBuildInput) -> bool:
        if not inputs.grid_path.exists():
            logger.error(f"Grid file not found: {inputs.grid_path}")
            return False
        if inputs.grid_path.suffix.lower() != ".npy":
            logger.error(f"Expected .npy grid, got: {inputs.grid_path.suffix}")
            return False
        return True

    def run(self, inputs: MeshBuildInput) -> MeshBuildOutput:
        output_dir = self.data_root / "interim" / "s02_mesh"
        output_dir.mkdir(parents=True, exist_ok=True)

        grid = load_grid(inputs.grid_path)
        mesh = build_lithophane_mesh(grid, self.config)

        mesh_path = mesh.save(output_dir / "mesh.npz")
        return MeshBuildOutput(
            mesh_path=mesh_path,
            grid_width=grid.width,
            grid_height=grid.height,
            num_vertices=mesh.vertex_count,
            num_faces=mesh.triangle_count,
        )
