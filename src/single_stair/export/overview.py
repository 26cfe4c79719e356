"""Building overview rendering: every floor, current code above reform.

Generates a single image with one column per story and two rows, so a
whole configuration can be checked at a glance.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from single_stair.export.floorplan import draw_floor
from single_stair.models.config import BuildingConfig
from single_stair.queries.stats import generate_pair


def render_overview(
    config: BuildingConfig | Mapping[str, Any],
    output_path: str | Path,
    dpi: int = 150,
) -> Path:
    """Render all floors of both code variants in a grid.

    Args:
        config: Lot/story configuration; its ``stair`` value is ignored.
        output_path: Output image path.
        dpi: Image resolution.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    current, reform = generate_pair(config)
    cols = current.stories
    envelope = current.lot.envelope
    aspect = envelope.d / max(envelope.w, envelope.d)

    fig, axes = plt.subplots(2, cols, figsize=(3 * cols, 2 * 6 * aspect + 1), squeeze=False)
    fig.suptitle(
        f"{current.config.lot.value.capitalize()} lot · {cols} stories · "
        f"Current Code (top) vs. Single Stair Reform (bottom)",
        fontsize=14, fontweight="bold",
    )

    for row, layout in enumerate((current, reform)):
        for col, floor in enumerate(layout.floors):
            ax = axes[row][col]
            draw_floor(
                ax, floor, envelope,
                show_labels=False,  # Less clutter in overview
                show_rooms=False,
                id_prefix=f"{layout.config.stair.value}-{floor.level}-",
            )
            ax.set_aspect("equal")
            ax.set_xlim(envelope.x - 2, envelope.x1 + 2)
            ax.set_ylim(envelope.y1 + 2, envelope.y - 2)
            ax.set_title(
                f"Floor {floor.level} · {floor.livable_sqft:.0f} sf",
                fontsize=9,
            )
            ax.axis("off")

    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
