"""CLI entry point for the lithogen pipeline.

Usage:
    lithogen run -i '{"image_path": "photo.jpg"}'   # Run full pipeline
    lithogen run-step mesh_build -i '{"grid_path": "grid.npy"}'
    lithogen generate photo.jpg --out out/ --hangars 2
    lithogen bulk bulk-process/ bulk-outputs/
    lithogen inspect out/photo-binary.stl
    lithogen info                                   # Show pipeline info
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lithogen.core.errors import LithogenError
from lithogen.core.logging import setup_logging

app = typer.Typer(name="lithogen", help="Image to lithophane STL pipeline")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


def _fail(exc: LithogenError) -> None:
    console.print(f"[red]{type(exc).__name__} in stage '{exc.stage}': {escape(str(exc))}[/red]")
    raise typer.Exit(1)


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input for the first step as JSON string"),
) -> None:
    """Run the full pipeline."""
    setup_logging()
    from lithogen.core.pipeline_runner import run_pipeline

    initial = json.loads(input_json) if input_json else None
    try:
        results = run_pipeline(config, initial_input=initial)
    except LithogenError as exc:
        _fail(exc)
    for name, output in results.items():
        console.print(f"[green]{name}:[/green] {output.model_dump_json()}")


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. mesh_build)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    setup_logging()
    from lithogen.core.pipeline_runner import (
        import_step_class,
        load_pipeline_config,
        load_step_config,
        resolve_config_file,
    )

    try:
        pipeline_cfg = load_pipeline_config(config)
        entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
        if entry is None:
            console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
            raise typer.Exit(1)

        step_cls = import_step_class(entry.module)
        step_config = load_step_config(resolve_config_file(entry, config.parent), step_cls.config_type)
        step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

        if input_json:
            input_data = json.loads(input_json)
        else:
            schema = step_cls.input_type.model_json_schema()
            required = schema.get("required", [])
            if required:
                console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
                console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
                console.print(f'  lithogen run-step {step_name} -i \'{{"field": "value"}}\'')
                raise typer.Exit(1)
            input_data = {}

        console.print(f"[green]Running step: {step_name}[/green]")
        step_input = step_cls.input_type(**input_data)
        output = step_instance.execute(step_input)
    except LithogenError as exc:
        _fail(exc)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from lithogen.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


def _convert_image(
    image: Path,
    out_dir: Path,
    stem: str,
    hangars: int,
    scale: float | None,
    max_dimension: int,
) -> tuple[Path, Path, int]:
    from lithogen.core.pipeline_runner import coerce_config
    from lithogen.steps.s01_load_image.config import LoadImageConfig
    from lithogen.steps.s01_load_image.step import load_image_grid
    from lithogen.steps.s02_mesh_build import build_lithophane_mesh
    from lithogen.steps.s03_stl_export.step import export_stl_files

    load_cfg = coerce_config(LoadImageConfig, {"max_dimension": max_dimension})

    grid = load_image_grid(image, load_cfg.max_dimension, load_cfg.border_px)
    mesh = build_lithophane_mesh(grid, {"hangar_count": hangars, "scale_factor": scale})
    ascii_path = out_dir / f"{stem}.stl"
    binary_path = out_dir / f"{stem}-binary.stl"
    export_stl_files(mesh, ascii_path, binary_path)
    return ascii_path, binary_path, mesh.triangle_count


@app.command()
def generate(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source image"),
    out: Path = typer.Option(Path("stl-outputs"), "--out", "-o", help="Output directory"),
    stem: str = typer.Option(None, help="Output file stem (default: image name)"),
    hangars: int = typer.Option(0, min=0, max=2, help="Number of hanging loops (0-2)"),
    scale: float = typer.Option(None, help="Uniform scale factor applied to the mesh"),
    max_dimension: int = typer.Option(200, help="Longest grid side after downscaling"),
) -> None:
    """Convert one image into ASCII and binary STL files."""
    setup_logging()
    try:
        ascii_path, binary_path, count = _convert_image(
            image, out, stem or image.stem, hangars, scale, max_dimension
        )
    except LithogenError as exc:
        _fail(exc)
    console.print(f"[green]{count} triangles[/green] -> {ascii_path}, {binary_path}")


@app.command()
def bulk(
    input_dir: Path = typer.Argument(..., exists=True, file_okay=False, help="Folder of images"),
    output_dir: Path = typer.Argument(..., help="Folder for STL outputs"),
    hangars: int = typer.Option(0, min=0, max=2, help="Number of hanging loops (0-2)"),
    max_dimension: int = typer.Option(200, help="Longest grid side after downscaling"),
) -> None:
    """Convert every image in a folder; failures are reported and skipped."""
    setup_logging()
    from lithogen.steps.s01_load_image.step import IMAGE_SUFFIXES

    images = sorted(p for p in input_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
    table = Table(title=f"Bulk: {input_dir}")
    table.add_column("Image", style="cyan")
    table.add_column("Triangles", style="green")
    table.add_column("Status")

    failures = 0
    for image in images:
        try:
            _, _, count = _convert_image(image, output_dir, image.stem, hangars, None, max_dimension)
            table.add_row(image.name, str(count), "[green]ok[/green]")
        except LithogenError as exc:
            failures += 1
            table.add_row(image.name, "-", f"[red]{escape(str(exc))}[/red]")
    console.print(table)
    if failures:
        raise typer.Exit(1)


@app.command()
def inspect(stl_path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Decode an STL file and print triangle count, size and bounds."""
    from lithogen.core.errors import SerializationError
    from lithogen.steps.s03_stl_export._stl_writer import read_ascii_stl, read_binary_stl

    data = stl_path.read_bytes()
    try:
        if data[:5] == b"solid" and b"facet" in data[:512]:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise SerializationError(f"ASCII STL is not valid UTF-8: {exc}") from exc
            stl = read_ascii_stl(text)
            kind = "ascii"
        else:
            stl = read_binary_stl(data)
            kind = "binary"
    except LithogenError as exc:
        _fail(exc)

    table = Table(title=str(stl_path))
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Encoding", kind)
    table.add_row("Triangles", str(stl.triangle_count))
    table.add_row("Bytes", str(len(data)))
    if stl.triangle_count:
        pts = stl.vertices.reshape(-1, 3)
        table.add_row("Min", " ".join(f"{v:.3f}" for v in pts.min(axis=0)))
        table.add_row("Max", " ".join(f"{v:.3f}" for v in pts.max(axis=0)))
    console.print(table)


if __name__ == "__main__":
    app()
