"""lithogen: grayscale images to framed lithophane STL meshes."""

from lithogen.core.errors import (
    ConfigurationError,
    InvalidGridError,
    LithogenError,
    SerializationError,
)
from lithogen.core.mesh import BrightnessGrid, CornerSet, Mesh, VertexHandle
from lithogen.steps.s02_mesh_build import build_lithophane_mesh
from lithogen.steps.s02_mesh_build.config import MeshBuildConfig
from lithogen.steps.s03_stl_export._stl_writer import (
    read_binary_stl,
    write_ascii_stl,
    write_binary_stl,
)

__version__ = "0.1.0"

__all__ = [
    "BrightnessGrid",
    "CornerSet",
    "Mesh",
    "VertexHandle",
    "MeshBuildConfig",
    "build_lithophane_mesh",
    "write_ascii_stl",
    "write_binary_stl",
    "read_binary_stl",
    "LithogenError",
    "InvalidGridError",
    "ConfigurationError",
    "SerializationError",
]
