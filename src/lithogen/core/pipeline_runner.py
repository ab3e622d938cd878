"""Pipeline orchestrator: reads pipeline.yaml and executes steps in order."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .contracts import PipelineConfig, StepEntry
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_config(config_class: type[ModelT], raw: dict[str, Any] | None) -> ModelT:
    """Validate a raw mapping into ``config_class``, raising ConfigurationError on failure."""
    try:
        return config_class(**(raw or {}))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid {config_class.__name__}: {problems}", stage="config"
        ) from exc


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load and validate pipeline.yaml."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return coerce_config(PipelineConfig, raw)


def load_step_config(config_path: Path, config_class: type[ModelT]) -> ModelT:
    """Load a step-specific YAML config into its Pydantic model."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return coerce_config(config_class, raw)


def resolve_config_file(entry: StepEntry, base_dir: Path | None = None) -> Path:
    """Locate a step config: as given (cwd-relative), else next to the pipeline file.

    ``base_dir`` is the pipeline file's directory; its parent is also tried so
    that ``configs/steps/x.yaml`` resolves from ``configs/pipeline.yaml``.
    """
    path = Path(entry.config_file)
    if path.is_absolute() or path.exists() or base_dir is None:
        return path
    for candidate in (base_dir / path, base_dir.parent / path):
        if candidate.exists():
            return candidate
    return path


def import_step_class(module_path: str):
    """Dynamically import a step class from its module path.

    Expects module_path like 'lithogen.steps.s02_mesh_build'
    and looks for a class ending in 'Step' in that module's step.py.
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if (
            isinstance(attr, type)
            and hasattr(attr, "run")
            and attr_name.endswith("Step")
            and attr_name != "BaseStep"
        ):
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def run_pipeline(
    config_path: Path,
    initial_input: dict[str, Any] | None = None,
) -> dict[str, BaseModel]:
    """Execute the full pipeline from a config file.

    ``initial_input`` feeds every step that has no dependencies (e.g. the
    image path for the first step). Returns each step's output by name.
    """
    config_path = Path(config_path)
    pipeline_cfg = load_pipeline_config(config_path)
    data_root = pipeline_cfg.data_root
    base_dir = config_path.parent
    results: dict[str, BaseModel] = {}

    enabled_steps = [s for s in pipeline_cfg.steps if s.enabled]
    logger.info(f"Pipeline '{pipeline_cfg.project_name}' with {len(enabled_steps)} steps")

    for entry in enabled_steps:
        logger.info(f"--- Step: {entry.name} ---")

        step_cls = import_step_class(entry.module)
        step_config = load_step_config(resolve_config_file(entry, base_dir), step_cls.config_type)
        step_instance = step_cls(config=step_config, data_root=data_root)

        # Build input from previous step outputs or the initial input
        input_data: dict[str, Any] = {}
        if entry.depends_on:
            for dep in entry.depends_on:
                if dep in results:
                    input_data.update(results[dep].model_dump())
        elif initial_input:
            input_data.update(initial_input)

        step_input = step_cls.input_type(**input_data) if input_data else step_cls.input_type()
        output = step_instance.execute(step_input)
        results[entry.name] = output

    logger.info("Pipeline complete.")
    return results
