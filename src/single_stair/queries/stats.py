"""Current-code vs. reform comparison statistics.

All deltas are ``reform - current``. Display code depends on that
direction; a positive delta means the reform gains.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from single_stair.generators.layout import generate_layout
from single_stair.models.config import BuildingConfig, StairCode, coerce_config
from single_stair.models.layout import Floor, Layout


class FloorStats(BaseModel):
    """Aggregates for one floor of one building."""

    units: int
    livable_area: float
    avg_unit_size: float
    bedrooms: int
    window_walls: int
    staircases: int
    circulation_area: float


class FloorComparison(BaseModel):
    level: int
    current: FloorStats
    reform: FloorStats


class BuildingStats(BaseModel):
    """Whole-building totals for one building."""

    total_units: int
    total_livable_area: float
    avg_unit_size: float
    total_bedrooms: int
    total_window_walls: int
    total_staircases: int
    total_circulation: float


class WholeBuilding(BaseModel):
    current: BuildingStats
    reform: BuildingStats


class Deltas(BaseModel):
    """``reform - current`` for each whole-building total."""

    livable_area: float
    livable_area_pct: float
    units: int
    bedrooms: int
    window_walls: int
    staircases: int
    circulation: float


class StatsResult(BaseModel):
    per_floor: list[FloorComparison]
    whole_building: WholeBuilding
    deltas: Deltas


def floor_stats(floor: Floor) -> FloorStats:
    """Aggregate one floor."""
    livable = sum(u.sqft for u in floor.units)
    n = len(floor.units)
    return FloorStats(
        units=n,
        livable_area=livable,
        avg_unit_size=livable / n if n > 0 else 0.0,
        bedrooms=sum(u.bedrooms for u in floor.units),
        window_walls=sum(len(u.window_walls) for u in floor.units),
        staircases=len(floor.staircases),
        circulation_area=floor.circulation_sqft,
    )


def building_stats(floors: list[FloorStats]) -> BuildingStats:
    """Sum per-floor aggregates into whole-building totals."""
    total_units = sum(f.units for f in floors)
    total_livable = sum(f.livable_area for f in floors)
    return BuildingStats(
        total_units=total_units,
        total_livable_area=total_livable,
        avg_unit_size=total_livable / total_units if total_units > 0 else 0.0,
        total_bedrooms=sum(f.bedrooms for f in floors),
        total_window_walls=sum(f.window_walls for f in floors),
        total_staircases=sum(f.staircases for f in floors),
        total_circulation=sum(f.circulation_area for f in floors),
    )


def percent_change(current: float, reform: float) -> float:
    """``(reform / current - 1) * 100``, 0 when ``current`` is 0."""
    if current == 0:
        return 0.0
    return (reform / current - 1) * 100


def compute_stats(current: Layout, reform: Layout) -> StatsResult:
    """Compare two layouts of the same story count.

    Raises:
        ValueError: the layouts have different numbers of floors.
    """
    if len(current.floors) != len(reform.floors):
        raise ValueError(
            f"Cannot compare a {len(current.floors)}-story layout "
            f"with a {len(reform.floors)}-story layout"
        )

    per_floor = []
    for cf, rf in zip(current.floors, reform.floors):
        per_floor.append(FloorComparison(
            level=cf.level,
            current=floor_stats(cf),
            reform=floor_stats(rf),
        ))

    curr = building_stats([p.current for p in per_floor])
    ref = building_stats([p.reform for p in per_floor])

    deltas = Deltas(
        livable_area=ref.total_livable_area - curr.total_livable_area,
        livable_area_pct=percent_change(curr.total_livable_area, ref.total_livable_area),
        units=ref.total_units - curr.total_units,
        bedrooms=ref.total_bedrooms - curr.total_bedrooms,
        window_walls=ref.total_window_walls - curr.total_window_walls,
        staircases=ref.total_staircases - curr.total_staircases,
        circulation=ref.total_circulation - curr.total_circulation,
    )

    return StatsResult(
        per_floor=per_floor,
        whole_building=WholeBuilding(current=curr, reform=ref),
        deltas=deltas,
    )


def generate_pair(config: BuildingConfig | Mapping[str, Any]) -> tuple[Layout, Layout]:
    """Build the current-code and reform layouts for one configuration.

    The configuration's own ``stair`` value is ignored.
    """
    if isinstance(config, Mapping):
        config = {"stair": StairCode.CURRENT.value, **config}
    config = coerce_config(BuildingConfig, config)
    return (
        generate_layout(config.with_stair(StairCode.CURRENT)),
        generate_layout(config.with_stair(StairCode.REFORM)),
    )


def compare(config: BuildingConfig | Mapping[str, Any]) -> StatsResult:
    """Stats for current vs. reform on one lot/story configuration."""
    return compute_stats(*generate_pair(config))
