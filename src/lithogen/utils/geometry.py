"""3D geometry utilities: triangle and vertex normals."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """Scale each row to unit length; zero-length rows stay zero."""
    vectors = np.asarray(vectors, dtype=np.float64)
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    safe = np.where(lengths > 0, lengths, 1.0)
    return vectors / safe


def triangle_normals(corners: np.ndarray, normalize: bool = False) -> np.ndarray:
    """Normals of (M, 3, 3) triangle corner coordinates.

    The normal of (a, b, c) is cross(b - a, c - a), so its direction follows
    the winding order. Left unnormalized unless ``normalize`` is set.
    """
    corners = np.asarray(corners, dtype=np.float64)
    if len(corners) == 0:
        return np.zeros((0, 3))
    a, b, c = corners[:, 0], corners[:, 1], corners[:, 2]
    normals = np.cross(b - a, c - a)
    return normalize_rows(normals) if normalize else normals


def face_normals(vertices: np.ndarray, faces: np.ndarray, normalize: bool = False) -> np.ndarray:
    """Per-face normals for an indexed triangle mesh."""
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    return triangle_normals(np.asarray(vertices, dtype=np.float64)[faces], normalize=normalize)


def vertex_normals(vertices: np.ndarray, faces: np.ndarray, normalize: bool = True) -> np.ndarray:
    """Per-vertex normals: sum of the unnormalized normals of adjacent faces.

    Vertices not used by any face get a zero normal.
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    accum = np.zeros_like(vertices)
    if len(faces):
        fn = face_normals(vertices, faces)
        for k in range(3):
            np.add.at(accum, faces[:, k], fn)
    return normalize_rows(accum) if normalize else accum
