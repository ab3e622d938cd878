"""Shared data model: brightness grid, vertex arena, triangle sequence, corner set.

A ``Mesh`` is an append-only arena. Vertices are only ever added through
``add_vertex`` / ``add_vertices``, which return the handles of the new
vertices, and triangles may only reference handles that already exist.
Each conversion creates its own ``Mesh``; nothing here is shared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NewType

import numpy as np

from .errors import InvalidGridError

logger = logging.getLogger(__name__)

VertexHandle = NewType("VertexHandle", int)


@dataclass(frozen=True)
class BrightnessGrid:
    """Row-major grayscale samples, ``samples[y, x]`` in [0, 255]."""

    samples: np.ndarray

    @property
    def width(self) -> int:
        return int(self.samples.shape[1])

    @property
    def height(self) -> int:
        return int(self.samples.shape[0])

    @classmethod
    def from_array(cls, array) -> "BrightnessGrid":
        """Validate a 2D array of brightness values and freeze a copy of it."""
        samples = np.asarray(array)
        if samples.ndim != 2:
            raise InvalidGridError(f"Expected a 2D grid, got shape {samples.shape}")
        height, width = samples.shape
        if width < 2 or height < 2:
            raise InvalidGridError(
                f"Grid must be at least 2x2 to form a triangle, got {width}x{height}"
            )
        if not np.issubdtype(samples.dtype, np.number) or samples.dtype == np.bool_:
            raise InvalidGridError(f"Grid samples must be numeric, got {samples.dtype}")
        samples = samples.astype(np.float64)
        if not np.all(np.isfinite(samples)):
            raise InvalidGridError("Grid contains non-finite samples")
        if samples.min() < 0 or samples.max() > 255:
            raise InvalidGridError(
                f"Grid samples must lie in [0, 255], got [{samples.min()}, {samples.max()}]"
            )
        samples.setflags(write=False)
        return cls(samples=samples)

    @classmethod
    def from_flat(cls, width: int, height: int, values) -> "BrightnessGrid":
        """Build a grid from ``width * height`` samples listed row by row."""
        flat = np.asarray(values)
        if flat.ndim != 1 or flat.size != width * height:
            raise InvalidGridError(
                f"Expected {width * height} samples for a {width}x{height} grid, got {flat.size}"
            )
        if width < 2 or height < 2:
            raise InvalidGridError(
                f"Grid must be at least 2x2 to form a triangle, got {width}x{height}"
            )
        return cls.from_array(flat.reshape(height, width))


@dataclass(frozen=True)
class CornerSet:
    """Front-face frame corners, named in image space (the surface is x-mirrored)."""

    top_left: VertexHandle
    top_right: VertexHandle
    bottom_left: VertexHandle
    bottom_right: VertexHandle


class Mesh:
    """Append-only vertex arena plus an ordered triangle-index sequence."""

    def __init__(self):
        self._vertex_chunks: list[np.ndarray] = []
        self._face_chunks: list[np.ndarray] = []
        self._vertex_count = 0
        self._triangle_count = 0

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def triangle_count(self) -> int:
        return self._triangle_count

    @property
    def vertices(self) -> np.ndarray:
        """(N, 3) float64 positions, as a read-only view."""
        return _read_only(self._vertex_buffer())

    @property
    def faces(self) -> np.ndarray:
        """(M, 3) int64 vertex indices in triangle-sequence order, read-only."""
        return _read_only(self._face_buffer())

    def _vertex_buffer(self) -> np.ndarray:
        self._vertex_chunks = [_consolidate(self._vertex_chunks, (0, 3), np.float64)]
        return self._vertex_chunks[0]

    def _face_buffer(self) -> np.ndarray:
        self._face_chunks = [_consolidate(self._face_chunks, (0, 3), np.int64)]
        return self._face_chunks[0]

    @property
    def indices(self) -> np.ndarray:
        """Flat index sequence, three entries per triangle."""
        return self.faces.reshape(-1)

    def add_vertex(self, x: float, y: float, z: float) -> VertexHandle:
        return VertexHandle(int(self.add_vertices([[x, y, z]])[0]))

    def add_vertices(self, points) -> np.ndarray:
        """Append (K, 3) positions and return their K handles in order."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        first = self._vertex_count
        self._vertex_chunks.append(pts.copy())
        self._vertex_count += len(pts)
        return np.arange(first, self._vertex_count, dtype=np.int64)

    def add_triangle(self, a: VertexHandle, b: VertexHandle, c: VertexHandle) -> None:
        self.add_triangles([[a, b, c]])

    def add_triangles(self, triangles) -> None:
        """Append (K, 3) handle triples; every handle must already exist."""
        tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
        if len(tris) == 0:
            return
        if tris.min() < 0 or tris.max() >= self._vertex_count:
            raise ValueError(
                f"Triangle references vertex outside [0, {self._vertex_count}): "
                f"min={tris.min()}, max={tris.max()}"
            )
        self._face_chunks.append(tris.copy())
        self._triangle_count += len(tris)

    def scale(self, factor: float) -> None:
        """Multiply every coordinate by ``factor`` in place."""
        verts = self._vertex_buffer()
        verts *= factor

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savez(path, vertices=self.vertices, faces=self.faces)
        logger.debug(f"Saved mesh ({self.vertex_count} vertices, {self.triangle_count} faces) to {path}")
        return path

    @classmethod
    def load(cls, path: Path) -> "Mesh":
        with np.load(Path(path)) as data:
            vertices = data["vertices"]
            faces = data["faces"]
        mesh = cls()
        mesh.add_vertices(vertices)
        mesh.add_triangles(faces)
        return mesh


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


def _consolidate(chunks: list[np.ndarray], empty_shape: tuple[int, int], dtype) -> np.ndarray:
    if not chunks:
        return np.zeros(empty_shape, dtype=dtype)
    if len(chunks) == 1:
        return chunks[0]
    return np.concatenate(chunks, axis=0)
