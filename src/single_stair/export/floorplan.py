"""2D floor plan rendering using matplotlib.

Draws a floor as seen from above, street (north) at the top:
- Units as filled rectangles with id, area and bedroom label
- Dashed room partitions (living/kitchen, bedrooms, bath)
- Exterior window walls as thick blue edges, court-facing walls in green
- Staircases in red with tread lines, hallways in amber

Every patch carries an SVG id (``unit-<id>``, ``stair-<n>``, ``hall-<n>``)
so SVG output can be correlated with the layout for hover/selection.
"""

from __future__ import annotations

import io
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import matplotlib.patheffects as pe
import numpy as np

from single_stair.models.config import BuildingConfig
from single_stair.models.geometry import COMPASS_EDGES, Rect, shared_edge_length
from single_stair.models.layout import CourtyardLayout, Floor, Layout, Unit, UnitType
from single_stair.queries.stats import generate_pair

# Halo effect for text readability on colored fills
_TEXT_HALO = [pe.withStroke(linewidth=2, foreground="white")]

UNIT_COLORS = {
    UnitType.RESIDENTIAL: ("#EDE8DF", "#4A4A55"),
    UnitType.COMMERCIAL: ("#D6E4F0", "#35506B"),
}
STAIR_COLORS = ("#D64545", "#A63333")
HALL_COLORS = ("#D4903A", "#A36D2A")
WINDOW_COLOR = "#4A90D9"
COURT_WINDOW_COLOR = "#5E9E5A"
COURT_COLOR = "#DCEBD5"
ROOM_LINE_COLOR = "#8B8680"

STAIR_TREADS = 5


def _edge_line(rect: Rect, side: str) -> tuple[list[float], list[float]]:
    """(xs, ys) of one side of a rectangle."""
    axis, pos, start, end = rect.edge(side)
    if axis == "h":
        return [start, end], [pos, pos]
    return [pos, pos], [start, end]


def _draw_rect(
    ax: plt.Axes,
    rect: Rect,
    fill: str,
    edge: str,
    gid: str,
    alpha: float = 1.0,
    zorder: int = 2,
) -> None:
    patch = patches.Rectangle(
        (rect.x, rect.y), rect.w, rect.d,
        facecolor=fill, edgecolor=edge, linewidth=1.0,
        alpha=alpha, zorder=zorder,
    )
    patch.set_gid(gid)
    ax.add_patch(patch)


def _draw_room_partitions(ax: plt.Axes, unit: Unit) -> None:
    """Dashed living/bedroom/bath zones inside a residential unit.

    Front units: living (40%) → bedrooms (40%) → bath (20%), bath toward
    the building core. Rear units are flipped so living faces the rear
    windows.
    """
    br = unit.bedrooms
    if br < 1:
        return
    x, y, w, d = unit.x, unit.y, unit.w, unit.d
    rear = unit.position.startswith("rear")
    if rear:
        bath = (y, y + d * 0.2)
        beds = (y + d * 0.2, y + d * 0.6)
        living = (y + d * 0.6, y + d)
    else:
        living = (y, y + d * 0.4)
        beds = (y + d * 0.4, y + d * 0.8)
        bath = (y + d * 0.8, y + d)

    style = dict(color=ROOM_LINE_COLOR, linewidth=0.6, linestyle="--", zorder=3)
    pad = min(w, d) * 0.02
    for line_y in (beds[0], beds[1]):
        ax.plot([x + pad, x + w - pad], [line_y, line_y], **style)
    for bx in np.linspace(x, x + w, br + 1)[1:-1]:
        ax.plot([bx, bx], [beds[0] + pad, beds[1] - pad], **style)

    label = dict(fontsize=5, ha="center", va="center", color="#7A756E", zorder=4)
    ax.text(x + w / 2, sum(living) / 2, "Living / Kitchen", **label)
    for i, bx in enumerate(np.linspace(x, x + w, br + 1)[:-1]):
        ax.text(bx + w / br / 2, sum(beds) / 2, f"BR {i + 1}", **label)
    ax.text(x + w / 2, sum(bath) / 2, "Bath", **label)


def _draw_windows(ax: plt.Axes, unit: Unit, court: Rect | None) -> None:
    for side in unit.window_walls:
        if side in COMPASS_EDGES:
            xs, ys = _edge_line(unit, side)
            ax.plot(xs, ys, color=WINDOW_COLOR, linewidth=3.0, zorder=6,
                    solid_capstyle="butt")
    if court is not None and "courtyard" in unit.window_walls:
        for side in COMPASS_EDGES:
            if shared_edge_length(unit, side, court) > 0:
                xs, ys = _edge_line(unit, side)
                ax.plot(xs, ys, color=COURT_WINDOW_COLOR, linewidth=3.0, zorder=6,
                        solid_capstyle="butt")


def draw_floor(
    ax: plt.Axes,
    floor: Floor,
    envelope: Rect,
    show_labels: bool = True,
    show_rooms: bool = True,
    court: Rect | None = None,
    id_prefix: str = "",
) -> None:
    """Draw one floor onto existing axes."""
    ax.add_patch(patches.Rectangle(
        (envelope.x, envelope.y), envelope.w, envelope.d,
        fill=False, edgecolor="#555555", linewidth=0.8, linestyle="--", zorder=1,
    ))

    for unit in floor.units:
        fill, edge = UNIT_COLORS[unit.type]
        _draw_rect(ax, unit, fill, edge, f"{id_prefix}unit-{unit.id}")
        if show_rooms and unit.type == UnitType.RESIDENTIAL:
            _draw_room_partitions(ax, unit)
        _draw_windows(ax, unit, court)
        if show_labels:
            cx, cy = unit.center
            ax.text(
                cx, cy,
                f"Unit {unit.id} · {round(unit.sqft)} sf · {unit.bedrooms} BR",
                fontsize=7, ha="center", va="center", color="#2C2C35",
                fontweight="bold", path_effects=_TEXT_HALO, zorder=8,
            )

    for n, stair in enumerate(floor.staircases, start=1):
        fill, edge = STAIR_COLORS
        _draw_rect(ax, stair, fill, edge, f"{id_prefix}stair-{n}", alpha=0.85, zorder=5)
        for ty in np.linspace(stair.y, stair.y1, STAIR_TREADS + 1)[1:-1]:
            ax.plot([stair.x, stair.x1], [ty, ty], color=edge, linewidth=0.5, zorder=5)
        if show_labels:
            cx, cy = stair.center
            ax.text(cx, cy, "STAIR", fontsize=5, ha="center", va="center",
                    color="white", fontweight="bold", zorder=8,
                    rotation=90 if stair.d > stair.w else 0)

    for n, hall in enumerate(floor.hallways, start=1):
        fill, edge = HALL_COLORS
        _draw_rect(ax, hall, fill, edge, f"{id_prefix}hall-{n}", alpha=0.65, zorder=5)
        if show_labels:
            cx, cy = hall.center
            ax.text(cx, cy, "HALL", fontsize=5, ha="center", va="center",
                    color="white", fontweight="bold", zorder=8,
                    rotation=90 if hall.d > hall.w * 2 else 0)


def _setup_axes(ax: plt.Axes, bounds: Rect, title: str | None) -> None:
    margin = 3.0
    ax.set_aspect("equal")
    ax.set_facecolor("#FAFAFA")
    ax.set_xlim(bounds.x - margin, bounds.x1 + margin)
    # Street (north, y = 0) at the top
    ax.set_ylim(bounds.y1 + margin, bounds.y - margin)
    ax.grid(True, alpha=0.2, linestyle="--")
    ax.set_xlabel("X (feet)", fontsize=8)
    ax.set_ylabel("Y (feet)", fontsize=8)
    if title:
        ax.set_title(title, fontsize=11, fontweight="bold")


def _info_box(ax: plt.Axes, floor: Floor) -> None:
    info = "\n".join([
        f"Livable: {floor.livable_sqft:.0f} sf",
        f"Circulation: {floor.circulation_sqft:.0f} sf",
        f"Units: {len(floor.units)}",
        f"Bedrooms: {floor.bedroom_count}",
        f"Staircases: {len(floor.staircases)}",
    ])
    ax.text(
        0.02, 0.98, info,
        transform=ax.transAxes,
        fontsize=7,
        verticalalignment="top",
        fontfamily="monospace",
        bbox=dict(boxstyle="round,pad=0.5", facecolor="white", alpha=0.8, edgecolor="#CCCCCC"),
        zorder=100,
    )


def _floor_figure(
    layout: Layout,
    floor_index: int,
    title: str | None,
    show_labels: bool,
    show_rooms: bool,
    show_info_box: bool,
) -> plt.Figure:
    floor = layout.floor(floor_index)
    envelope = layout.lot.envelope
    fig, ax = plt.subplots(1, 1, figsize=(6, 12 * envelope.d / max(envelope.w, envelope.d)))
    fig.patch.set_facecolor("white")
    draw_floor(ax, floor, envelope, show_labels=show_labels, show_rooms=show_rooms)
    _setup_axes(ax, envelope, title if title is not None else _default_title(layout, floor))
    if show_info_box:
        _info_box(ax, floor)
    return fig


def _default_title(layout: Layout, floor: Floor) -> str:
    cfg = layout.config
    code = "Single Stair Reform" if cfg.stair.value == "reform" else "Current Code"
    return f"{code} · {cfg.lot.value} lot · Floor {floor.level} of {layout.stories}"


def render_floorplan(
    layout: Layout,
    floor_index: int,
    output_path: str | Path,
    title: str | None = None,
    dpi: int = 150,
    show_labels: bool = True,
    show_rooms: bool = True,
    show_info_box: bool = True,
) -> Path:
    """Render one floor to an image file (format from the suffix: .png, .svg, .pdf).

    Args:
        layout: Layout to render.
        floor_index: 0-based floor index.
        output_path: Output image path.
        title: Plot title (defaults to code, lot and floor).
        dpi: Image resolution for raster formats.
        show_labels: Unit/stair/hall labels.
        show_rooms: Dashed room partitions inside units.
        show_info_box: Area summary overlay.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = _floor_figure(layout, floor_index, title, show_labels, show_rooms, show_info_box)
    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


def floorplan_svg(
    layout: Layout,
    floor_index: int,
    show_labels: bool = True,
    show_rooms: bool = True,
) -> str:
    """One floor as SVG markup."""
    fig = _floor_figure(layout, floor_index, None, show_labels, show_rooms, False)
    buf = io.StringIO()
    fig.savefig(buf, format="svg", bbox_inches="tight")
    plt.close(fig)
    return buf.getvalue()


def render_comparison(
    config: BuildingConfig | Mapping[str, Any],
    floor_index: int,
    output_path: str | Path,
    dpi: int = 150,
) -> Path:
    """Current code and reform side by side for one floor, with the area delta."""
    current, reform = generate_pair(config)
    curr_floor = current.floor(floor_index)
    ref_floor = reform.floor(floor_index)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    envelope = current.lot.envelope
    fig, axes = plt.subplots(1, 2, figsize=(10, 12 * envelope.d / max(envelope.w, envelope.d)))
    fig.patch.set_facecolor("white")
    for ax, layout, floor, name in (
        (axes[0], current, curr_floor, "Current Code"),
        (axes[1], reform, ref_floor, "Single Stair Reform"),
    ):
        draw_floor(ax, floor, envelope, id_prefix=f"{layout.config.stair.value}-")
        _setup_axes(ax, envelope, name)
        _info_box(ax, floor)

    delta = ref_floor.livable_sqft - curr_floor.livable_sqft
    pct = delta / curr_floor.livable_sqft * 100 if curr_floor.livable_sqft > 0 else 0.0
    sign = "+" if delta >= 0 else ""
    fig.suptitle(
        f"Floor {curr_floor.level}: {sign}{round(delta)} sf ({sign}{pct:.0f}%) livable with reform",
        fontsize=13, fontweight="bold",
    )

    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


def render_courtyard(
    layout: CourtyardLayout,
    floor_index: int,
    output_path: str | Path,
    dpi: int = 150,
    show_labels: bool = True,
) -> Path:
    """Render one floor of every wing plus the court."""
    if not 0 <= floor_index < layout.stories:
        raise ValueError(
            f"Floor index {floor_index} out of range for a {layout.stories}-story building"
        )
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    site = layout.footprint
    fig, ax = plt.subplots(1, 1, figsize=(10, 10 * site.d / max(site.w, site.d) + 1))
    fig.patch.set_facecolor("white")

    court = layout.courtyard.bounds
    ax.add_patch(patches.Rectangle(
        (court.x, court.y), court.w, court.d,
        facecolor=COURT_COLOR, edgecolor="#7FA876", linewidth=1.0, zorder=1,
    ))
    cx, cy = court.center
    ax.text(cx, cy, f"Courtyard\n{layout.courtyard.area:.0f} sf", fontsize=8,
            ha="center", va="center", color="#3E6B38", zorder=8)

    for segment in layout.segments:
        draw_floor(
            ax, segment.floors[floor_index], segment.bounds,
            show_labels=show_labels, court=court, id_prefix=f"wing-{segment.label}-",
        )

    _setup_axes(
        ax, site,
        f"{layout.config.shape.value}-shape courtyard · Floor {floor_index + 1} of {layout.stories}",
    )
    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
