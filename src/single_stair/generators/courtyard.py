"""Courtyard layout engine: L and U massing.

Wings are independent single-stair buildings arranged around an open
court. The court rectangle is reserved first and the wings are laid out
around it. Each wing's stair sits at one short end (``S``), so both units
keep a long outer facade:

```
L shape                         U shape
+--+-------------+              +--+---------------------+
|S |  A1  |  A2  |              |S |    A1    |    A2    |
+--+---+---------+              +--+----+--------+-------+
|  S   |         |              |  S    |        |   S   |
|  B1  |  court  |              |  B1   | court  |  C1   |
|  B2  |         |              |  B2   |        |  C2   |
+------+---------+              +-------+--------+-------+
```

Each wing floor is built in the wing's own frame (circulation column
across local x = 0, local x running along the long axis, units split
along it) and then rotated/mirrored so the column lands on the short end
named by ``column_side``. Compass window walls are derived from the placed
geometry: an edge on the wing's outer boundary that does not abut another
wing or run along the court. Every wing unit also gets ``courtyard``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from single_stair.generators.layout import (
    Circulation,
    make_unit,
    single_stair_column,
)
from single_stair.models.config import (
    CourtyardConfig,
    CourtyardShape,
    GroundUse,
    coerce_config,
)
from single_stair.models.geometry import COMPASS_EDGES, Rect, shared_edge_length
from single_stair.models.layout import (
    Courtyard,
    CourtyardLayout,
    Floor,
    Segment,
    UnitType,
)

logger = logging.getLogger(__name__)

WING_DEPTH = 20.0
COURT_WIDTH = 20.0
COURT_DEPTH = 40.0

# label, bounds (x, y, w, d), short end holding the column
_L_WINGS = [
    ("A", (0.0, 0.0, WING_DEPTH + COURT_WIDTH, WING_DEPTH), "west"),
    ("B", (0.0, WING_DEPTH, WING_DEPTH, COURT_DEPTH), "north"),
]
_U_WINGS = [
    ("A", (0.0, 0.0, 2 * WING_DEPTH + COURT_WIDTH, WING_DEPTH), "west"),
    ("B", (0.0, WING_DEPTH, WING_DEPTH, COURT_DEPTH), "north"),
    ("C", (WING_DEPTH + COURT_WIDTH, WING_DEPTH, WING_DEPTH, COURT_DEPTH), "north"),
]
_WINGS = {CourtyardShape.L: _L_WINGS, CourtyardShape.U: _U_WINGS}

_EXPOSURE_TOL = 1e-6


def to_wing_frame(local: Rect, bounds: Rect, column_side: str) -> Rect:
    """Map a rectangle from the wing's local frame into site coordinates.

    ``column_side`` names the site edge that local x = 0 lands on. For
    west/east local x runs along site x; for north/south the frame is
    transposed so local x runs along site y.
    """
    if column_side == "west":
        return local.translated(bounds.x, bounds.y)
    if column_side == "east":
        return local.model_copy(update={
            "x": bounds.x1 - local.x - local.w,
            "y": bounds.y + local.y,
        })
    if column_side == "north":
        return local.model_copy(update={
            "x": bounds.x + local.y,
            "y": bounds.y + local.x,
            "w": local.d,
            "d": local.w,
        })
    if column_side == "south":
        return local.model_copy(update={
            "x": bounds.x + local.y,
            "y": bounds.y1 - local.x - local.w,
            "w": local.d,
            "d": local.w,
        })
    raise ValueError(f"Unknown column side '{column_side}'")


def wing_axes(bounds: Rect, column_side: str) -> tuple[float, float]:
    """(long, short) extent of a wing in its local frame."""
    if column_side in ("west", "east"):
        return bounds.w, bounds.d
    return bounds.d, bounds.w


def window_walls(rect: Rect, wing: Rect, others: list[Rect], court: Rect) -> list[str]:
    """Exposed walls of a unit rectangle placed in ``wing``.

    Compass walls are the unit's edges on the wing's outer boundary that
    neither run along the court nor are covered by another wing.
    ``courtyard`` is always last.
    """
    walls = []
    for side in COMPASS_EDGES:
        _, _, start, end = rect.edge(side)
        length = end - start
        if shared_edge_length(rect, side, court) > _EXPOSURE_TOL:
            continue
        if shared_edge_length(rect, side, wing) <= _EXPOSURE_TOL:
            continue
        blocked = sum(shared_edge_length(rect, side, o) for o in others)
        if length - blocked > _EXPOSURE_TOL:
            walls.append(side)
    walls.append("courtyard")
    return walls


def split_lengthwise(zone: Rect) -> tuple[Rect, Rect]:
    """Split a local-frame zone at half its long (x) extent."""
    half = zone.w / 2
    near = Rect(x=zone.x, y=zone.y, w=half, d=zone.d)
    far = Rect(x=zone.x + half, y=zone.y, w=zone.w - half, d=zone.d)
    return near, far


def _segment_floor(
    level: int,
    label: str,
    bounds: Rect,
    column_side: str,
    circ: Circulation,
    commercial: bool,
    others: list[Rect],
    court: Rect,
) -> Floor:
    """One floor of a wing."""
    long_axis, short_axis = wing_axes(bounds, column_side)
    zone = Rect(x=circ.column.x1, y=0, w=long_axis - circ.column.w, d=short_axis)

    def place(local: Rect) -> Rect:
        return to_wing_frame(local, bounds, column_side)

    if commercial:
        rect = place(zone)
        units = [make_unit(
            f"{label}R1", rect, zone.area + circ.dead_zone,
            window_walls(rect, bounds, others, court), "full",
            unit_type=UnitType.COMMERCIAL,
        )]
    else:
        share = circ.dead_zone / 2
        units = []
        for n, (local, position) in enumerate(
            zip(split_lengthwise(zone), ("front", "rear")), start=1
        ):
            rect = place(local)
            units.append(make_unit(
                f"{label}{n}", rect, local.area + share,
                window_walls(rect, bounds, others, court), position,
            ))

    return Floor(
        level=level,
        units=units,
        staircases=[place(s) for s in circ.staircases],
        hallways=[place(h) for h in circ.hallways],
    )


def _court_bounds() -> Rect:
    return Rect(x=WING_DEPTH, y=WING_DEPTH, w=COURT_WIDTH, d=COURT_DEPTH)


def generate_courtyard_layout(
    config: CourtyardConfig | Mapping[str, Any],
) -> CourtyardLayout:
    """Generate an L- or U-shaped courtyard building.

    Every wing is a single-stair cluster; the current/reform comparison
    does not apply here.

    Raises:
        ConfigurationError: ``shape`` or ``ground`` is outside its closed set.
    """
    config = coerce_config(CourtyardConfig, config)
    court = _court_bounds()
    wings = [
        (label, Rect(x=x, y=y, w=w, d=d), side)
        for label, (x, y, w, d), side in _WINGS[config.shape]
    ]
    logger.debug(
        "%s courtyard, %d stories: wings %s",
        config.shape.value, config.stories, [label for label, _, _ in wings],
    )

    segments = []
    for label, bounds, side in wings:
        others = [b for other, b, _ in wings if other != label]
        _, short_axis = wing_axes(bounds, side)
        # Column spans the short end; the stair runs across the wing
        circ = single_stair_column(0.0, short_axis)
        floors = [
            _segment_floor(
                i + 1, label, bounds, side, circ,
                commercial=i == 0 and config.ground == GroundUse.COMMERCIAL,
                others=others,
                court=court,
            )
            for i in range(config.stories)
        ]
        segments.append(Segment(label=label, bounds=bounds, column_side=side, floors=floors))

    return CourtyardLayout(
        config=config,
        segments=segments,
        courtyard=Courtyard(bounds=court, area=court.w * court.d),
    )
