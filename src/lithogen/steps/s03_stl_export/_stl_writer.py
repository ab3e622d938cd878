"""STL writer — ASCII and binary encodings of one canonical facet table.

Both encoders consume ``facet_table(mesh)``, which gathers corner coordinates
through the triangle-index sequence at call time, so the two files always
list the same facets in the same order.

Binary layout (little-endian):
    [80-byte header][uint32 triangle count][count x 50-byte record]
    record = 3 float32 normal, 9 float32 vertex coords, uint16 attribute (0)
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator

import numpy as np

from lithogen.core.errors import SerializationError
from lithogen.core.mesh import Mesh
from lithogen.utils.geometry import triangle_normals

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
RECORD_SIZE = 50

STL_RECORD = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attribute", "<u2"),
])


@dataclass(frozen=True)
class FacetTable:
    """Per-facet normals (M, 3) and corner coordinates (M, 3, 3), in index order."""

    normals: np.ndarray
    corners: np.ndarray

    def __len__(self) -> int:
        return len(self.corners)

    def __iter__(self) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        for normal, corners in zip(self.normals, self.corners):
            yield normal, corners


def facet_table(mesh: Mesh, normalize: bool = False) -> FacetTable:
    """Build the facet table every encoder reads from."""
    corners = mesh.vertices[mesh.faces]
    return FacetTable(normals=triangle_normals(corners, normalize=normalize), corners=corners)


def binary_size(triangle_count: int) -> int:
    return HEADER_SIZE + 4 + RECORD_SIZE * triangle_count


def _header(name: str) -> bytes:
    # A binary header starting with "solid" confuses ASCII/binary sniffers.
    text = f"binary STL {name}".encode("ascii", errors="replace")[:HEADER_SIZE]
    return text.ljust(HEADER_SIZE, b"\0")


def _fmt(values: np.ndarray) -> str:
    return " ".join(repr(v) for v in values.tolist())


# ── Encoders ─────────────────────────────────────────────────────────

def encode_ascii_stl(facets: FacetTable, name: str = "lithophane") -> bytes:
    lines = [f"solid {name}"]
    for normal, corners in facets:
        lines.append(f"facet normal {_fmt(normal)}")
        lines.append("outer loop")
        for corner in corners:
            lines.append(f"vertex {_fmt(corner)}")
        lines.append("endloop")
        lines.append("endfacet")
    lines.append(f"endsolid {name}")
    return ("\n".join(lines) + "\n").encode("utf-8")


def encode_binary_stl(facets: FacetTable, name: str = "lithophane") -> bytes:
    records = np.zeros(len(facets), dtype=STL_RECORD)
    records["normal"] = facets.normals
    records["vertices"] = facets.corners
    return _header(name) + struct.pack("<I", len(facets)) + records.tobytes()


# ── Stream writers ───────────────────────────────────────────────────

def _write_all(dest: BinaryIO, payload: bytes, kind: str) -> int:
    try:
        written = dest.write(payload)
        dest.flush()
    except OSError as exc:
        raise SerializationError(f"Failed to write {kind} STL: {exc}") from exc
    if written is not None and written != len(payload):
        raise SerializationError(
            f"Short write for {kind} STL: {written} of {len(payload)} bytes"
        )
    return len(payload)


def write_ascii_stl(mesh: Mesh, dest: BinaryIO, name: str = "lithophane",
                    normalize: bool = False) -> int:
    """Encode ``mesh`` as ASCII STL into ``dest``. Returns bytes written."""
    payload = encode_ascii_stl(facet_table(mesh, normalize=normalize), name)
    return _write_all(dest, payload, "ASCII")


def write_binary_stl(mesh: Mesh, dest: BinaryIO, name: str = "lithophane",
                     normalize: bool = False) -> int:
    """Encode ``mesh`` as binary STL into ``dest``. Returns bytes written."""
    payload = encode_binary_stl(facet_table(mesh, normalize=normalize), name)
    expected = binary_size(mesh.triangle_count)
    if len(payload) != expected:
        raise SerializationError(f"Binary STL is {len(payload)} bytes, expected {expected}")
    return _write_all(dest, payload, "binary")


# ── Readers ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StlData:
    header: bytes
    normals: np.ndarray
    vertices: np.ndarray
    attributes: np.ndarray

    @property
    def triangle_count(self) -> int:
        return len(self.vertices)


def read_binary_stl(data: bytes) -> StlData:
    """Decode a binary STL, checking the count against the byte length."""
    if len(data) < HEADER_SIZE + 4:
        raise SerializationError(f"Binary STL truncated: {len(data)} bytes")
    (count,) = struct.unpack_from("<I", data, HEADER_SIZE)
    expected = binary_size(count)
    if len(data) != expected:
        raise SerializationError(
            f"Binary STL declares {count} triangles ({expected} bytes) but has {len(data)} bytes"
        )
    records = np.frombuffer(data, dtype=STL_RECORD, count=count, offset=HEADER_SIZE + 4)
    return StlData(
        header=bytes(data[:HEADER_SIZE]),
        normals=records["normal"].astype(np.float64),
        vertices=records["vertices"].astype(np.float64),
        attributes=records["attribute"].copy(),
    )


def _parse_xyz(fields: list[str], lineno: int, raw: str) -> list[float]:
    if len(fields) != 3:
        raise SerializationError(f"Expected 3 numbers on line {lineno}: {raw!r}")
    try:
        return [float(v) for v in fields]
    except ValueError as exc:
        raise SerializationError(f"Bad number on line {lineno}: {raw!r}") from exc


def read_ascii_stl(text: str) -> StlData:
    """Parse the facets of an ASCII STL (normals and vertices only)."""
    normals: list[list[float]] = []
    vertices: list[list[float]] = []
    header = b""
    for lineno, raw in enumerate(text.splitlines(), 1):
        parts = raw.split()
        if not parts:
            continue
        if parts[0] == "solid" and lineno == 1:
            header = raw.encode("utf-8")
        elif parts[0] == "facet":
            normals.append(_parse_xyz(parts[2:], lineno, raw))
        elif parts[0] == "vertex":
            vertices.append(_parse_xyz(parts[1:], lineno, raw))
    if len(vertices) != 3 * len(normals):
        raise SerializationError(
            f"ASCII STL has {len(normals)} facets but {len(vertices)} vertices"
        )
    return StlData(
        header=header,
        normals=np.array(normals, dtype=np.float64).reshape(-1, 3),
        vertices=np.array(vertices, dtype=np.float64).reshape(-1, 3, 3),
        attributes=np.zeros(len(normals), dtype=np.uint16),
    )
