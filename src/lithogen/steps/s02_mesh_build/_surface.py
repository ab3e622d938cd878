"""Heightmap surface: one vertex per sample, two triangles per grid cell."""

from __future__ import annotations

import logging

import numpy as np

from lithogen.core.errors import InvalidGridError
from lithogen.core.mesh import BrightnessGrid, Mesh

logger = logging.getLogger(__name__)


def build_surface(
    mesh: Mesh,
    grid: BrightnessGrid,
    min_thickness: float,
    max_thickness: float,
) -> np.ndarray:
    """Append the relief surface for ``grid`` and return its (H, W) handle array.

    Sample (x, y) lands at ((W - 1 - x), y, z) with
    z = max_thickness - (max_thickness - min_thickness) * sample / 255,
    so dark samples are thick. x is mirrored so the relief reads correctly
    from the viewing face; the cell winding (a, d, b), (d, a, c) is mirrored
    to match and must only change together with the x mirror.
    """
    width, height = grid.width, grid.height
    if width < 2 or height < 2:
        raise InvalidGridError(
            f"Grid must be at least 2x2 to form a triangle, got {width}x{height}",
            stage="surface",
        )

    ys, xs = np.mgrid[0:height, 0:width]
    z = max_thickness - (max_thickness - min_thickness) * (grid.samples / 255.0)
    points = np.column_stack([
        (width - 1 - xs).ravel(),
        ys.ravel(),
        z.ravel(),
    ])
    handles = mesh.add_vertices(points).reshape(height, width)

    a = handles[:-1, :-1]
    b = handles[:-1, 1:]
    c = handles[1:, :-1]
    d = handles[1:, 1:]
    first = np.stack([a, d, b], axis=-1).reshape(-1, 3)
    second = np.stack([d, a, c], axis=-1).reshape(-1, 3)
    # Interleave so each cell contributes its two triangles back to back
    mesh.add_triangles(np.stack([first, second], axis=1).reshape(-1, 3))

    logger.debug(
        f"Surface {width}x{height}: {width * height} vertices, "
        f"{2 * (width - 1) * (height - 1)} triangles"
    )
    return handles
