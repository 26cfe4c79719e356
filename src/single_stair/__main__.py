"""Single Stair CLI.

Usage:
    python -m single_stair <command> [options]

Every command prints JSON to stdout. Configuration errors print
``{"ok": false, "error": ...}`` and exit with status 1. ``--verbose``
sends debug logging to stderr.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from single_stair import __version__
from single_stair.export.floorplan import (
    floorplan_svg,
    render_comparison,
    render_courtyard,
    render_floorplan,
)
from single_stair.export.mesh import build_courtyard_mesh_data, build_mesh_data
from single_stair.export.overview import render_overview
from single_stair.generators import generate_courtyard_layout, generate_layout
from single_stair.models.config import (
    BuildingConfig,
    ConfigurationError,
    CourtyardConfig,
    coerce_config,
)
from single_stair.models.layout import CourtyardLayout, Layout
from single_stair.queries import compare
from single_stair.url_state import decode_hash, encode_hash
from single_stair.validators import validate_courtyard, validate_layout

app = typer.Typer(
    name="single_stair",
    help="Single Stair — compare current-code and single-stair reform layouts.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(error: str) -> None:
    _output({"ok": False, "error": error})
    raise typer.Exit(1)


def _building_config(
    lot: str, stories: int, stair: str, ground: str, building: str = "standard"
) -> BuildingConfig:
    try:
        return coerce_config(BuildingConfig, {
            "lot": lot,
            "stories": stories,
            "stair": stair,
            "ground": ground,
            "building_type": building,
        })
    except ConfigurationError as exc:
        _fail(str(exc))


def _generate(config: BuildingConfig) -> Layout | CourtyardLayout:
    if config.is_courtyard:
        return generate_courtyard_layout(config.courtyard_config())
    return generate_layout(config)


def _validate_json(layout: Layout | CourtyardLayout) -> dict:
    """Run the matching validators and return structured results."""
    if isinstance(layout, CourtyardLayout):
        errors = validate_courtyard(layout)
    else:
        errors = validate_layout(layout)
    return {
        "errors": sum(1 for e in errors if e.severity == "error"),
        "warnings": sum(1 for e in errors if e.severity == "warning"),
        "details": [
            {"severity": e.severity, "element_type": e.element_type,
             "element_id": e.element_id, "message": e.message}
            for e in errors
        ],
    }


LOT = typer.Option("single", "--lot", "-l", help="Lot type: single, double, corner")
STORIES = typer.Option(3, "--stories", "-n", help="Number of stories (2-4)")
STAIR = typer.Option("current", "--stair", help="Egress code: current, reform")
GROUND = typer.Option("residential", "--ground", "-g", help="Ground floor: residential, commercial")
BUILDING = typer.Option("standard", "--building", "-b", help="Massing: standard, L, U")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Single Stair layout engine."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Layout commands
# ---------------------------------------------------------------------------

@app.command()
def layout(
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    building: str = BUILDING,
):
    """Generate a layout (courtyard layout for L/U buildings)."""
    config = _building_config(lot, stories, stair, ground, building)
    result = _generate(config)
    _output({"ok": True, "layout": result.model_dump(mode="json")})


@app.command()
def courtyard(
    shape: str = typer.Option("L", "--shape", help="Courtyard shape: L, U"),
    stories: int = STORIES,
    ground: str = GROUND,
):
    """Generate an L- or U-shaped courtyard layout."""
    try:
        config = coerce_config(CourtyardConfig, {
            "shape": shape, "stories": stories, "ground": ground,
        })
    except ConfigurationError as exc:
        _fail(str(exc))
    result = generate_courtyard_layout(config)
    _output({
        "ok": True,
        "layout": result.model_dump(mode="json"),
        "validation": _validate_json(result),
    })


@app.command()
def stats(
    lot: str = LOT,
    stories: int = STORIES,
    ground: str = GROUND,
):
    """Current code vs. reform: per floor, whole building and deltas."""
    config = _building_config(lot, stories, "current", ground)
    _output({"ok": True, "stats": compare(config).model_dump(mode="json")})


@app.command()
def mesh(
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    building: str = BUILDING,
    floor_height: float = typer.Option(10.0, "--floor-height", help="Story height in feet"),
):
    """3D box descriptors for a massing view."""
    config = _building_config(lot, stories, stair, ground, building)
    result = _generate(config)
    if isinstance(result, CourtyardLayout):
        boxes = build_courtyard_mesh_data(result, floor_height)
    else:
        boxes = build_mesh_data(result, floor_height)
    _output({"ok": True, "meshes": [b.model_dump(mode="json") for b in boxes]})


@app.command()
def validate(
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    building: str = BUILDING,
):
    """Run the geometric invariant checks on a generated layout."""
    config = _building_config(lot, stories, stair, ground, building)
    result = _validate_json(_generate(config))
    _output({"ok": result["errors"] == 0, "validation": result})


@app.command()
def render(
    output: str = typer.Option(..., "--output", "-o", help="Output image path (.png, .svg, .pdf)"),
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    building: str = BUILDING,
    floor: int = typer.Option(1, "--floor", "-f", help="Floor number (1 = ground)"),
    mode: str = typer.Option("plan", "--mode", "-m", help="plan, compare, overview"),
):
    """Render a floor plan, a side-by-side comparison or an overview grid."""
    config = _building_config(lot, stories, stair, ground, building)
    out = Path(output)
    try:
        if config.is_courtyard:
            path = render_courtyard(_generate(config), floor - 1, out)
        elif mode == "plan":
            path = render_floorplan(generate_layout(config), floor - 1, out)
        elif mode == "compare":
            path = render_comparison(config, floor - 1, out)
        elif mode == "overview":
            path = render_overview(config, out)
        else:
            _fail(f"Unknown render mode: {mode}. Available: plan, compare, overview")
    except ValueError as exc:
        _fail(str(exc))
    _output({"ok": True, "rendered": str(path), "mode": mode})


@app.command()
def svg(
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    floor: int = typer.Option(1, "--floor", "-f", help="Floor number (1 = ground)"),
):
    """Print one floor as SVG markup inside the JSON envelope."""
    config = _building_config(lot, stories, stair, ground)
    try:
        markup = floorplan_svg(generate_layout(config), floor - 1)
    except ValueError as exc:
        _fail(str(exc))
    _output({"ok": True, "floor": floor, "svg": markup})


# ---------------------------------------------------------------------------
# URL state
# ---------------------------------------------------------------------------

@app.command()
def decode(hash_str: Optional[str] = typer.Argument(None, help="URL hash, e.g. '#lot=double&stories=4'")):
    """Decode a URL hash into a configuration (invalid values take defaults)."""
    config = decode_hash(hash_str)
    _output({"ok": True, "config": config.model_dump(mode="json"), "hash": encode_hash(config)})


@app.command()
def encode(
    lot: str = LOT,
    stories: int = STORIES,
    stair: str = STAIR,
    ground: str = GROUND,
    building: str = BUILDING,
):
    """Encode a configuration as a URL hash."""
    config = _building_config(lot, stories, stair, ground, building)
    _output({"ok": True, "hash": encode_hash(config)})


@app.command()
def version():
    """Print the package version."""
    _output({"ok": True, "version": __version__})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
