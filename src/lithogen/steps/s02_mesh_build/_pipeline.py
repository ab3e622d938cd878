"""Ordered geometry stages: surface → frame → stitch → hangars → scale."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from lithogen.core.mesh import BrightnessGrid, Mesh
from lithogen.core.pipeline_runner import coerce_config
from ._frame import build_frame, stitch_edges
from ._hangar import build_hangars
from ._surface import build_surface
from .config import MeshBuildConfig

logger = logging.getLogger(__name__)


def scale_mesh(mesh: Mesh, scale_factor: float | None) -> bool:
    """Apply a uniform scale in place. Returns False when there is nothing to do."""
    if scale_factor is None or scale_factor == 1:
        return False
    mesh.scale(scale_factor)
    return True


def build_lithophane_mesh(
    grid: BrightnessGrid, config: MeshBuildConfig | Mapping[str, Any] | None = None
) -> Mesh:
    """Build the complete lithophane mesh for one grid.

    ``config`` may be a ``MeshBuildConfig`` or a raw mapping. Either way it is
    validated before any geometry is appended, so an invalid value (including
    one slipped in through ``model_copy``) raises ConfigurationError.

    The returned mesh is owned by the caller; nothing is cached or shared.
    """
    if isinstance(config, MeshBuildConfig):
        config = config.model_dump(warnings=False)
    config = coerce_config(MeshBuildConfig, dict(config or {}))

    width, height = grid.width, grid.height
    mesh = Mesh()

    surface = build_surface(mesh, grid, config.min_thickness, config.max_thickness)
    corners = build_frame(mesh, width, height, config.frame_width, config.max_thickness)
    stitch_edges(mesh, surface, corners)
    build_hangars(
        mesh,
        width,
        config.hangar_count,
        config.hangar_width,
        config.hangar_thickness,
        config.max_thickness,
        config.hangar_segments,
    )
    if scale_mesh(mesh, config.scale_factor):
        logger.debug(f"Scaled mesh by {config.scale_factor}")

    logger.info(
        f"Lithophane mesh {width}x{height}: "
        f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles "
        f"(hangars={config.hangar_count})"
    )
    return mesh
