"""Layout engine: building configuration → floor-by-floor spatial partition.

Stair shafts run the full height of a building, so the circulation
(staircase count, hallways and their footprints) is decided once per
building and stamped onto every floor. Floors then only differ in how the
remaining area is divided into units.

Circulation lives in a column that runs the full buildable depth:

```
single/corner, 1 stair        single/corner, 3 stairs      double, 2 stairs
+--+-----------+              +---+----------+             +-------+-+-------+
|  |     A     |              |ST |    A     |             |   A   |S|   B   |
|  |  (front)  |              |HL |          |             |       |H|       |
|ST+-----------+              |ST +----------+             +-------+A+-------+
|LD|     B     |              |HL |    B     |             |   C   |L|   D   |
|  |  (rear)   |              |ST |          |             |       |S|       |
+--+-----------+              +---+----------+             +-------+-+-------+
```

Unit rectangles never overlap the column. Column area that no staircase or
hallway covers (the dead zone) is shared equally among the floor's units and
added to their ``sqft``, so every floor satisfies
``livable + staircases + hallways == buildable area``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from single_stair.generators.bedrooms import estimate_bedrooms
from single_stair.models.config import (
    BuildingConfig,
    ConfigurationError,
    GroundUse,
    LotType,
    StairCode,
    coerce_config,
)
from single_stair.models.geometry import Rect
from single_stair.models.layout import (
    Floor,
    Hallway,
    Layout,
    Staircase,
    StaircaseType,
    Unit,
    UnitType,
)
from single_stair.models.lot import Lot, lot_for

logger = logging.getLogger(__name__)

STAIR_W = 4.0
STAIR_D = 10.0
LANDING_D = 5.0
CORRIDOR_W = 5.0
# Three stairs need landings, fire doors and connecting corridors
MULTI_STAIR_W = 6.0

# Code permits a single exit stair up to this many stories
SINGLE_EXIT_MAX_STORIES = 2


class FloorKind(str, Enum):
    """Per-floor generator selected from lot type, stair count and ground use."""

    STANDARD = "standard"
    DOUBLE_CENTRAL = "double_central"
    DOUBLE_CORRIDOR = "double_corridor"
    COMMERCIAL = "commercial"
    SEGMENT = "segment"


@dataclass(frozen=True)
class CirculationPolicy:
    """Building-wide staircase and hallway counts."""

    staircases: int
    hallways: int


@dataclass(frozen=True)
class Circulation:
    """Physical circulation shared by every floor of one building."""

    column: Rect
    staircases: tuple[Staircase, ...]
    hallways: tuple[Hallway, ...]

    @property
    def physical_area(self) -> float:
        return sum(s.area for s in self.staircases) + sum(h.area for h in self.hallways)

    @property
    def dead_zone(self) -> float:
        """Column area not covered by any staircase or hallway."""
        return self.column.area - self.physical_area


def circulation_policy(
    stair: StairCode, stories: int, lot_type: LotType
) -> CirculationPolicy:
    """Decide staircase and hallway counts for the whole building.

    - reform: always 1 stair with its landing
    - current, up to 2 stories: same as reform
    - current, 3+ stories, double lot: 2 stairs joined by a corridor
    - current, 3+ stories, single/corner lot: 3 stairs front/center/rear,
      2 hallway segments joining them
    """
    if stair == StairCode.REFORM or stories <= SINGLE_EXIT_MAX_STORIES:
        return CirculationPolicy(staircases=1, hallways=1)
    if lot_type == LotType.DOUBLE:
        return CirculationPolicy(staircases=2, hallways=1)
    return CirculationPolicy(staircases=3, hallways=2)


def single_stair_column(x: float, depth: float, width: float = STAIR_W) -> Circulation:
    """Column with one stair centered on ``depth`` and its landing behind it."""
    stair_y = depth / 2 - STAIR_D / 2
    return Circulation(
        column=Rect(x=x, y=0, w=width, d=depth),
        staircases=(Staircase(x=x, y=stair_y, w=width, d=STAIR_D),),
        hallways=(Hallway(x=x, y=stair_y + STAIR_D, w=width, d=LANDING_D),),
    )


def _multi_stair_column(depth: float) -> Circulation:
    center_y = depth / 2 - STAIR_D / 2
    rear_y = depth - STAIR_D
    return Circulation(
        column=Rect(x=0, y=0, w=MULTI_STAIR_W, d=depth),
        staircases=(
            Staircase(x=0, y=0, w=MULTI_STAIR_W, d=STAIR_D),
            Staircase(x=0, y=center_y, w=MULTI_STAIR_W, d=STAIR_D),
            Staircase(
                x=0, y=rear_y, w=MULTI_STAIR_W, d=STAIR_D,
                type=StaircaseType.GANGWAY,
            ),
        ),
        hallways=(
            Hallway(x=0, y=STAIR_D, w=MULTI_STAIR_W, d=center_y - STAIR_D),
            Hallway(
                x=0, y=center_y + STAIR_D, w=MULTI_STAIR_W,
                d=rear_y - center_y - STAIR_D,
            ),
        ),
    )


def _corridor_column(width: float, depth: float) -> Circulation:
    x = (width - CORRIDOR_W) / 2
    return Circulation(
        column=Rect(x=x, y=0, w=CORRIDOR_W, d=depth),
        staircases=(
            Staircase(x=x, y=0, w=CORRIDOR_W, d=STAIR_D),
            Staircase(x=x, y=depth - STAIR_D, w=CORRIDOR_W, d=STAIR_D),
        ),
        hallways=(
            Hallway(x=x, y=STAIR_D, w=CORRIDOR_W, d=depth - 2 * STAIR_D),
        ),
    )


def plan_circulation(lot: Lot, policy: CirculationPolicy) -> Circulation:
    """Place the building's staircases and hallways on the buildable envelope."""
    bw = lot.buildable_width
    bd = lot.buildable_depth
    if lot.lot_type == LotType.DOUBLE:
        if policy.staircases == 1:
            return single_stair_column((bw - STAIR_W) / 2, bd)
        if policy.staircases == 2:
            return _corridor_column(bw, bd)
    else:
        if policy.staircases == 1:
            return single_stair_column(0.0, bd)
        if policy.staircases == 3:
            return _multi_stair_column(bd)
    raise ConfigurationError(
        f"No circulation plan for {policy.staircases} staircase(s) "
        f"on a {lot.lot_type.value} lot"
    )


def floor_kind(lot_type: LotType, staircases: int, commercial: bool) -> FloorKind:
    """Which generator builds a floor."""
    if commercial:
        return FloorKind.COMMERCIAL
    if lot_type == LotType.DOUBLE:
        return FloorKind.DOUBLE_CORRIDOR if staircases == 2 else FloorKind.DOUBLE_CENTRAL
    return FloorKind.STANDARD


# ── Unit helpers ──────────────────────────────────────────────────────


def split_front_rear(zone: Rect) -> tuple[Rect, Rect]:
    """Split a zone at half its depth into (front, rear)."""
    half = zone.d / 2
    front = Rect(x=zone.x, y=zone.y, w=zone.w, d=half)
    rear = Rect(x=zone.x, y=zone.y + half, w=zone.w, d=zone.d - half)
    return front, rear


def side_zones(envelope: Rect, column: Rect) -> list[Rect]:
    """Parts of the envelope west and east of the column (empty parts dropped)."""
    zones = []
    if column.x > envelope.x:
        zones.append(Rect(x=envelope.x, y=envelope.y, w=column.x - envelope.x, d=envelope.d))
    if envelope.x1 > column.x1:
        zones.append(Rect(x=column.x1, y=envelope.y, w=envelope.x1 - column.x1, d=envelope.d))
    return zones


def make_unit(
    unit_id: str,
    rect: Rect,
    sqft: float,
    window_walls: list[str],
    position: str,
    unit_type: UnitType = UnitType.RESIDENTIAL,
) -> Unit:
    """Build a unit, deriving bedrooms from its area and exposure."""
    if unit_type == UnitType.COMMERCIAL:
        bedrooms = 0
    else:
        bedrooms = estimate_bedrooms(sqft, len(window_walls))
    return Unit(
        id=unit_id,
        x=rect.x, y=rect.y, w=rect.w, d=rect.d,
        sqft=sqft,
        bedrooms=bedrooms,
        window_walls=list(window_walls),
        position=position,
        type=unit_type,
    )


def _floor(level: int, units: list[Unit], circ: Circulation) -> Floor:
    return Floor(
        level=level,
        units=units,
        staircases=list(circ.staircases),
        hallways=list(circ.hallways),
    )


# ── Floor generators ──────────────────────────────────────────────────


def _standard_floor(level: int, lot: Lot, circ: Circulation) -> Floor:
    """Single/corner lot: column on the west, front and rear units east of it."""
    (zone,) = side_zones(lot.envelope, circ.column)
    front, rear = split_front_rear(zone)
    share = circ.dead_zone / 2

    front_windows = ["north"]
    rear_windows = ["south"]
    if lot.lot_type == LotType.CORNER:
        front_windows.append("east")
        rear_windows.append("east")

    units = [
        make_unit("A", front, front.area + share, front_windows, "front"),
        make_unit("B", rear, rear.area + share, rear_windows, "rear"),
    ]
    return _floor(level, units, circ)


def _quadrant_floor(level: int, lot: Lot, circ: Circulation) -> Floor:
    """Double lot: central column, four quadrant units around it."""
    west, east = side_zones(lot.envelope, circ.column)
    front_left, rear_left = split_front_rear(west)
    front_right, rear_right = split_front_rear(east)
    share = circ.dead_zone / 4

    quadrants = [
        ("A", front_left, "front-left", ["north", "west"]),
        ("B", front_right, "front-right", ["north", "east"]),
        ("C", rear_left, "rear-left", ["south", "west"]),
        ("D", rear_right, "rear-right", ["south", "east"]),
    ]
    units = [
        make_unit(uid, rect, rect.area + share, windows, position)
        for uid, rect, position, windows in quadrants
    ]
    return _floor(level, units, circ)


def _commercial_floor(level: int, lot: Lot, circ: Circulation) -> Floor:
    """Retail ground floor around the same shafts as the floors above.

    A side column leaves one retail space; a central column splits retail
    into west and east bays.
    """
    zones = side_zones(lot.envelope, circ.column)
    share = circ.dead_zone / len(zones)
    if len(zones) == 1:
        labels = [("R1", "full")]
    else:
        labels = [("R1", "left"), ("R2", "right")]
    units = [
        make_unit(
            uid, zone, zone.area + share, ["north", "south"], position,
            unit_type=UnitType.COMMERCIAL,
        )
        for (uid, position), zone in zip(labels, zones)
    ]
    return _floor(level, units, circ)


_FLOOR_GENERATORS: dict[FloorKind, Callable[[int, Lot, Circulation], Floor]] = {
    FloorKind.STANDARD: _standard_floor,
    FloorKind.DOUBLE_CENTRAL: _quadrant_floor,
    FloorKind.DOUBLE_CORRIDOR: _quadrant_floor,
    FloorKind.COMMERCIAL: _commercial_floor,
}


def generate_layout(config: BuildingConfig | Mapping[str, Any]) -> Layout:
    """Generate every floor of a standard building.

    Pure: the same configuration always yields the same layout.

    Args:
        config: A BuildingConfig, or a mapping with keys lot, stories,
            stair and optionally ground / building_type.

    Returns:
        Layout with one Floor per story, ground floor first.

    Raises:
        ConfigurationError: an enumerated field is outside its closed set.
    """
    config = coerce_config(BuildingConfig, config)
    lot = lot_for(config.lot)
    policy = circulation_policy(config.stair, config.stories, config.lot)
    circ = plan_circulation(lot, policy)
    logger.debug(
        "%s lot, %d stories, %s code: %d staircase(s), %d hallway(s)",
        config.lot.value, config.stories, config.stair.value,
        policy.staircases, policy.hallways,
    )

    floors = []
    for i in range(config.stories):
        commercial = i == 0 and config.ground == GroundUse.COMMERCIAL
        kind = floor_kind(config.lot, policy.staircases, commercial)
        logger.debug("Floor %d: %s", i + 1, kind.value)
        floors.append(_FLOOR_GENERATORS[kind](i + 1, lot, circ))

    return Layout(config=config, lot=lot, floors=floors)
