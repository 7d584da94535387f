"""CLI entry point for the clock train generator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml

app = typer.Typer(
    name="clocktrain",
    help="Cycloidal clock gear generator - builds BS 978 wheels, pinions and wheel trains",
)


class ProfileRole(str, Enum):
    """Tooth proportion tables."""
    driving_wheel = "driving-wheel"
    driven_pinion = "driven-pinion"
    sometimes_driven = "sometimes-driven"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_spec(spec_file: Path):
    from .models import TrainSpec

    if not spec_file.exists():
        typer.echo(f"Error: Specification file not found: {spec_file}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Loading specification from {spec_file}...")
    with open(spec_file) as f:
        spec_data = yaml.safe_load(f)

    return TrainSpec.model_validate(spec_data)


@app.command()
def build(
    spec_file: Path = typer.Argument(..., help="Path to YAML train specification"),
    output_dir: Path = typer.Option(
        Path("output"), "-o", "--output", help="Output directory for generated files"
    ),
    formats: str = typer.Option(
        "stl,step", "--formats", help="Comma-separated export formats (stl,step)"
    ),
    pitch_only: bool = typer.Option(
        False, "--pitch-only", help="Draw pitch circles instead of teeth (fast preview)"
    ),
) -> None:
    """Build a wheel train from a specification file."""
    from .assembly.builder import TrainAssemblyBuilder
    from .errors import ClockTrainError
    from .export.exporter import Exporter

    spec = _load_spec(spec_file)
    if pitch_only:
        spec = spec.model_copy(
            update={"render": spec.render.model_copy(update={"full_teeth": False})}
        )
    typer.echo(f"Building train: {spec.name}")

    builder = TrainAssemblyBuilder(spec)
    try:
        assembly = builder.build()
    except ClockTrainError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    export_formats = [fmt.strip().lower() for fmt in formats.split(",")]
    exporter = Exporter(output_dir, export_formats, spec.render)
    exporter.export(assembly, builder.parts, builder.get_bom(), builder.get_layout_records())

    typer.echo(f"Train exported to {output_dir}")


@app.command()
def validate(
    spec_file: Path = typer.Argument(..., help="Path to YAML train specification"),
) -> None:
    """Validate a specification and print the solved layout without building."""
    from pydantic import ValidationError

    from .assembly.layout import TrainLayoutSolver
    from .errors import ClockTrainError

    try:
        spec = _load_spec(spec_file)
        layout = TrainLayoutSolver.from_spec(spec).solve()
    except (ValidationError, ClockTrainError) as e:
        typer.echo(f"Validation error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Specification valid: {spec.name}")
    typer.echo(f"  Module: {spec.module}")
    typer.echo(f"  Teeth: {', '.join(str(t) for t in spec.teeth.as_tuple())}")
    for index, node in enumerate(layout.nodes, start=1):
        wheel = "-" if node.wheel_rotation is None else f"{node.wheel_rotation:.2f}"
        pinion = "-" if node.pinion_rotation is None else f"{node.pinion_rotation:.2f}"
        typer.echo(
            f"  Node {index}: ({node.position[0]:.3f}, {node.position[1]:.3f})"
            f"  wheel {wheel}  pinion {pinion}"
        )


@app.command()
def profile(
    teeth: int = typer.Argument(..., min=3, help="Tooth or leaf count"),
    role: ProfileRole = typer.Option(ProfileRole.driving_wheel, "--role", help="Profile table"),
    mate: Optional[int] = typer.Option(
        None, "--mate", help="Leaves of the driven pinion (driving-wheel only)"
    ),
    family: Optional[str] = typer.Option(
        None, "--family", help="Pinion form A, B or C (driven-pinion only)"
    ),
    module: float = typer.Option(1.0, "--module", help="Gear module in mm"),
) -> None:
    """Print BS 978 tooth proportions for one wheel or pinion."""
    from .profiles.curvature import curvature_center, is_degenerate
    from .profiles.standard import select_profile

    try:
        gear = select_profile(role.value, teeth, module, mate=mate, family=family)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    center = curvature_center(gear)
    typer.echo(f"{role.value}: {teeth} teeth, module {module}")
    typer.echo(f"  addendum factor:  {gear.addendum_factor:.4f}")
    typer.echo(f"  radius factor:    {gear.fillet_factor:.4f}")
    typer.echo(f"  thickness factor: {gear.thickness_factor:.4f}")
    typer.echo(f"  pitch diameter:   {gear.pitch_diameter:.3f}")
    typer.echo(f"  outside diameter: {gear.outside_diameter:.3f}")
    typer.echo(f"  flank centre:     ({center.x:.4f}, {center.y:.4f})")
    if is_degenerate(gear):
        typer.echo("  warning: flank radius too small, flat flank fallback used")


if __name__ == "__main__":
    app()
