"""Step 02: Mesh build."""

from ._pipeline import build_lithophane_mesh, scale_mesh

__all__ = ["build_lithophane_mesh", "scale_mesh"]
