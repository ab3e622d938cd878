"""lithogen core: pipeline runner, base step, mesh model, shared contracts."""

from .step_base import BaseStep
from .contracts import PipelineConfig, StepEntry, StepMeta
from .errors import ConfigurationError, InvalidGridError, LithogenError, SerializationError
from .mesh import BrightnessGrid, CornerSet, Mesh, VertexHandle
from .pipeline_runner import coerce_config, load_pipeline_config, run_pipeline
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "StepEntry",
    "StepMeta",
    "LithogenError",
    "InvalidGridError",
    "ConfigurationError",
    "SerializationError",
    "BrightnessGrid",
    "CornerSet",
    "Mesh",
    "VertexHandle",
    "coerce_config",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
