"""Hangar loops: short tubes above the top edge for hanging the print.

Each hangar is four rings of ``segments + 1`` points (the last point repeats
the first angle): front outer, front inner, back outer, back inner. Every
segment contributes 8 triangles covering the front annulus, back annulus,
outer wall and inner wall.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from lithogen.core.mesh import Mesh

logger = logging.getLogger(__name__)


def hangar_centers(width: int, outer_radius: float, count: int) -> list[tuple[float, float]]:
    """Loop centres for ``count`` hangars.

    The +x edge of each loop sits on the 1/5 and 4/5 points of the top edge;
    the loop is lifted by its outer radius so it rests above that edge.
    """
    xs = [width / 5 - outer_radius, 4 * width / 5 - outer_radius]
    return [(x, -outer_radius) for x in xs[:count]]


def _ring(cx: float, cy: float, radius: float, z: float, segments: int) -> np.ndarray:
    angles = np.array([2 * math.pi * i / segments for i in range(segments + 1)])
    return np.column_stack([
        cx + radius * np.cos(angles),
        cy + radius * np.sin(angles),
        np.full(segments + 1, z),
    ])


def build_hangar(
    mesh: Mesh,
    center: tuple[float, float],
    outer_radius: float,
    inner_radius: float,
    depth: float,
    segments: int = 16,
) -> None:
    """Append one hangar tube spanning z=0 (back) to z=depth (front)."""
    cx, cy = center
    fo = mesh.add_vertices(_ring(cx, cy, outer_radius, depth, segments))
    fi = mesh.add_vertices(_ring(cx, cy, inner_radius, depth, segments))
    bo = mesh.add_vertices(_ring(cx, cy, outer_radius, 0.0, segments))
    bi = mesh.add_vertices(_ring(cx, cy, inner_radius, 0.0, segments))

    i, j = slice(0, segments), slice(1, segments + 1)
    per_segment = [
        # front annulus
        (fo[i], fo[j], fi[i]),
        (fi[i], fo[j], fi[j]),
        # back annulus
        (bo[i], bi[i], bo[j]),
        (bi[i], bi[j], bo[j]),
        # outer wall
        (fo[i], bo[i], fo[j]),
        (bo[i], bo[j], fo[j]),
        # inner wall
        (fi[i], fi[j], bi[i]),
        (bi[i], fi[j], bi[j]),
    ]
    # (segments, 8, 3) -> segment-major triangle order
    tris = np.stack([np.stack(t, axis=-1) for t in per_segment], axis=1)
    mesh.add_triangles(tris.reshape(-1, 3))


def build_hangars(
    mesh: Mesh,
    width: int,
    count: int,
    hangar_width: float,
    hangar_thickness: float,
    depth: float,
    segments: int = 16,
) -> int:
    """Append ``count`` (0, 1 or 2) hangars. Returns the number of triangles added."""
    if count == 0:
        return 0
    outer_radius = hangar_width / 2
    inner_radius = outer_radius - hangar_thickness
    before = mesh.triangle_count
    for center in hangar_centers(width, outer_radius, count):
        build_hangar(mesh, center, outer_radius, inner_radius, depth, segments)
    added = mesh.triangle_count - before
    logger.debug(f"Hangars: {count} x {segments} segments, {added} triangles")
    return added
