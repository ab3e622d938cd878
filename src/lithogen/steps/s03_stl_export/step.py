"""Step 03: STL export — mesh → ASCII + binary STL.

Each file is written to a temporary name and renamed into place. If any
file of a conversion fails, the files already written for it are removed,
so a failed conversion leaves no STL output behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Optional

from lithogen.core.mesh import Mesh
from lithogen.core.step_base import BaseStep
from lithogen.utils.io import atomic_write
from ._stl_writer import binary_size, write_ascii_stl, write_binary_stl
from .config import StlExportConfig
from .contracts import StlExportInput, StlExportOutput

logger = logging.getLogger(__name__)


def export_stl_files(
    mesh: Mesh,
    ascii_path: Optional[Path],
    binary_path: Optional[Path],
    name: str = "lithophane",
    normalize: bool = False,
) -> list[Path]:
    """Write the requested STL files for ``mesh``; all of them or none."""
    jobs = []
    if ascii_path is not None:
        jobs.append((Path(ascii_path), write_ascii_stl))
    if binary_path is not None:
        jobs.append((Path(binary_path), write_binary_stl))

    written: list[Path] = []
    try:
        for path, writer in jobs:
            atomic_write(path, lambda f, w=writer: w(mesh, f, name=name, normalize=normalize))
            written.append(path)
            logger.info(f"STL file created: {path} ({path.stat().st_size} bytes)")
    except BaseException:
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return written


class StlExportStep(BaseStep[StlExportInput, StlExportOutput, StlExportConfig]):
    name: ClassVar[str] = "stl_export"
    input_type: ClassVar = StlExportInput
    output_type: ClassVar = StlExportOutput
    config_type: ClassVar = StlExportConfig

    def validate_inputs(self, inputs: StlExportInput) -> bool:
        if not inputs.mesh_path.exists():
            logger.error(f"Mesh file not found: {inputs.mesh_path}")
            return False
        if not (self.config.export_ascii or self.config.export_binary):
            logger.error("Both export_ascii and export_binary are disabled")
            return False
        return True

    def run(self, inputs: StlExportInput) -> StlExportOutput:
        output_dir = self.data_root / "processed"
        output_dir.mkdir(parents=True, exist_ok=True)

        mesh = Mesh.load(inputs.mesh_path)
        stem = self.config.output_stem

        ascii_path = output_dir / f"{stem}.stl" if self.config.export_ascii else None
        binary_path = output_dir / f"{stem}-binary.stl" if self.config.export_binary else None

        export_stl_files(
            mesh,
            ascii_path,
            binary_path,
            name=self.config.solid_name,
            normalize=self.config.normalize_normals,
        )

        logger.info(
            f"STL export complete: {mesh.triangle_count} triangles, "
            f"ASCII={'yes' if ascii_path else 'no'}, "
            f"binary={'yes' if binary_path else 'no'}"
        )
        return StlExportOutput(
            ascii_path=ascii_path,
            binary_path=binary_path,
            num_triangles=mesh.triangle_count,
            binary_size=binary_size(mesh.triangle_count) if binary_path else 0,
        )
