"""Box frame around the surface footprint and the stitching that seals it."""

from __future__ import annotations

import logging

import numpy as np

from lithogen.core.mesh import CornerSet, Mesh, VertexHandle

logger = logging.getLogger(__name__)

# Relative to the first frame vertex: four side walls, then the cap at z=0.
# The z=depth face stays open; the surface is stitched into that opening.
_FRAME_TRIANGLES = np.array([
    [0, 1, 5], [0, 5, 4],
    [1, 2, 6], [1, 6, 5],
    [2, 3, 7], [2, 7, 6],
    [3, 0, 4], [3, 4, 7],
    [0, 2, 1], [0, 3, 2],
], dtype=np.int64)


def build_frame(
    mesh: Mesh,
    width: int,
    height: int,
    frame_width: float,
    depth: float,
) -> CornerSet:
    """Append an 8-vertex, 10-triangle box expanded by ``frame_width``.

    Returns the four front-face (z = depth) corners used for stitching.
    """
    f = frame_width
    ring = [(-f, -f), (width + f, -f), (width + f, height + f), (-f, height + f)]
    points = [(x, y, 0.0) for x, y in ring] + [(x, y, depth) for x, y in ring]
    handles = mesh.add_vertices(points)
    mesh.add_triangles(handles[_FRAME_TRIANGLES])

    # Names follow image space: the surface is mirrored in x.
    corners = CornerSet(
        top_left=VertexHandle(int(handles[5])),
        top_right=VertexHandle(int(handles[4])),
        bottom_left=VertexHandle(int(handles[6])),
        bottom_right=VertexHandle(int(handles[7])),
    )
    logger.debug(f"Frame: width={frame_width}, depth={depth}, corners={corners}")
    return corners


def stitch_edges(mesh: Mesh, surface: np.ndarray, corners: CornerSet) -> None:
    """Fan each surface boundary vertex to its two nearest frame corners.

    Appends exactly 2*W + 2*H triangles: top row, bottom row, left column,
    right column, in that order.
    """
    tl, tr = corners.top_left, corners.top_right
    bl, br = corners.bottom_left, corners.bottom_right

    top = surface[0, :]
    bottom = surface[-1, :]
    left = surface[:, 0]
    right = surface[:, -1]

    def fan(edge: np.ndarray, order: tuple) -> np.ndarray:
        cols = [np.full_like(edge, v) if v is not None else edge for v in order]
        return np.stack(cols, axis=1)

    mesh.add_triangles(np.concatenate([
        fan(top, (tl, None, tr)),
        fan(bottom, (bl, br, None)),
        fan(left, (bl, None, tl)),
        fan(right, (None, br, tr)),
    ]))
