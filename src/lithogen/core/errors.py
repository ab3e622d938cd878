"""Typed failures raised by the lithophane pipeline.

Every error carries the ``stage`` it was raised in so callers can report
which part of a conversion failed without parsing messages.
"""

from __future__ import annotations


class LithogenError(Exception):
    """Base class for all conversion failures."""

    def __init__(self, message: str, stage: str = "unknown"):
        super().__init__(message)
        self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class InvalidGridError(LithogenError):
    """Brightness grid cannot be meshed (too small, wrong shape, out-of-range samples)."""

    def __init__(self, message: str, stage: str = "grid"):
        super().__init__(message, stage)


class ConfigurationError(LithogenError):
    """Step or pipeline configuration failed validation."""

    def __init__(self, message: str, stage: str = "config"):
        super().__init__(message, stage)


class SerializationError(LithogenError):
    """STL bytes could not be written or decoded."""

    def __init__(self, message: str, stage: str = "stl"):
        super().__init__(message, stage)
