"""I/O utilities: brightness grid persistence, atomic file replacement."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable

import numpy as np

from lithogen.core.errors import SerializationError
from lithogen.core.mesh import BrightnessGrid

logger = logging.getLogger(__name__)


# ── Brightness grid ──────────────────────────────────────────────────

def save_grid(path: Path, grid: BrightnessGrid) -> Path:
    """Write grid samples as uint8 .npy (samples are already in [0, 255])."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(str(path), np.rint(grid.samples).astype(np.uint8))
    return path


def load_grid(path: Path) -> BrightnessGrid:
    """Read a .npy grid back, re-running the grid validation."""
    return BrightnessGrid.from_array(np.load(str(path)))


# ── Atomic writes ────────────────────────────────────────────────────

def atomic_write(path: Path, writer: Callable[[BinaryIO], None]) -> Path:
    """Call ``writer`` on a temp file next to ``path`` and rename it into place.

    On any failure the temp file is removed, so ``path`` is either the complete
    new file or untouched. Filesystem errors surface as SerializationError.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise SerializationError(f"Cannot create {path}: {exc}") from exc
    try:
        with os.fdopen(fd, "wb") as f:
            writer(f)
        os.replace(tmp_name, path)
    except OSError as exc:
        _discard(tmp_name)
        raise SerializationError(f"Cannot write {path}: {exc}") from exc
    except BaseException:
        _discard(tmp_name)
        raise
    return path


def _discard(tmp_name: str) -> None:
    if os.path.exists(tmp_name):
        os.remove(tmp_name)
