"""Layout output models: units, staircases, hallways, floors.

A ``Layout`` is the layout engine's only output. Renderers, the mesh
projector and the stats aggregator read it and never make geometric
decisions of their own.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from single_stair.models.config import BuildingConfig, CourtyardConfig
from single_stair.models.geometry import Rect, union
from single_stair.models.lot import Lot


class UnitType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class StaircaseType(str, Enum):
    """INTERIOR: enclosed stair inside the building.
    GANGWAY: rear stair opening onto the side gangway.
    """

    INTERIOR = "interior"
    GANGWAY = "gangway"


class Unit(Rect):
    """A dwelling unit or retail space.

    ``sqft`` is the allocated livable area: the unit rectangle plus its
    share of circulation dead zone, so it can exceed ``w * d``.
    """

    id: str = Field(description="Stable identity across renderers, e.g. 'A', 'R1', 'B2'")
    sqft: float = Field(ge=0)
    bedrooms: int = Field(ge=0)
    window_walls: list[str] = Field(
        default_factory=list,
        description="Exposed walls: north/south/east/west and 'courtyard'",
    )
    position: str = Field(description="front, rear, front-left, ..., full")
    type: UnitType = UnitType.RESIDENTIAL


class Staircase(Rect):
    """A stair shaft. Runs the full building height at the same footprint."""

    type: StaircaseType = StaircaseType.INTERIOR


class Hallway(Rect):
    """Corridor or landing confined to one floor."""


class Floor(BaseModel):
    """One story of a building (``level`` is 1-indexed)."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1)
    units: list[Unit] = Field(default_factory=list)
    staircases: list[Staircase] = Field(default_factory=list)
    hallways: list[Hallway] = Field(default_factory=list)

    @computed_field
    @property
    def circulation_sqft(self) -> float:
        """Physical staircase + hallway area."""
        return sum(s.area for s in self.staircases) + sum(h.area for h in self.hallways)

    @computed_field
    @property
    def livable_sqft(self) -> float:
        return sum(u.sqft for u in self.units)

    @property
    def window_wall_count(self) -> int:
        return sum(len(u.window_walls) for u in self.units)

    @property
    def bedroom_count(self) -> int:
        return sum(u.bedrooms for u in self.units)

    def get_unit(self, unit_id: str) -> Unit | None:
        """Find a unit by id."""
        return next((u for u in self.units if u.id == unit_id), None)

    def rects(self) -> list[tuple[str, Rect]]:
        """Every element as ``(kind, rect)``, kind in unit/staircase/hallway."""
        return (
            [("unit", u) for u in self.units]
            + [("staircase", s) for s in self.staircases]
            + [("hallway", h) for h in self.hallways]
        )


class Layout(BaseModel):
    """A standard (single footprint) building."""

    model_config = ConfigDict(frozen=True)

    config: BuildingConfig
    lot: Lot
    floors: list[Floor]

    @property
    def stories(self) -> int:
        return len(self.floors)

    @property
    def livable_sqft(self) -> float:
        return sum(f.livable_sqft for f in self.floors)

    def floor(self, index: int) -> Floor:
        """Floor by 0-based index; raises ValueError when out of range."""
        if not 0 <= index < len(self.floors):
            raise ValueError(
                f"Floor index {index} out of range for a {len(self.floors)}-story building"
            )
        return self.floors[index]


class Segment(BaseModel):
    """One wing of a courtyard building: an independent single-stair cluster."""

    model_config = ConfigDict(frozen=True)

    label: str
    bounds: Rect
    column_side: str = Field(description="Short wing end holding the circulation column")
    floors: list[Floor]

    @property
    def bounding_box(self) -> Rect:
        """Union of every unit, staircase and hallway rectangle on all floors."""
        return union([r for f in self.floors for _, r in f.rects()])


class Courtyard(BaseModel):
    """Open space reserved between the wings."""

    model_config = ConfigDict(frozen=True)

    bounds: Rect
    area: float = Field(ge=0)


class CourtyardLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    config: CourtyardConfig
    segments: list[Segment]
    courtyard: Courtyard

    @property
    def stories(self) -> int:
        return len(self.segments[0].floors) if self.segments else 0

    @property
    def footprint(self) -> Rect:
        """Bounding box of wings and court together."""
        return union([s.bounds for s in self.segments] + [self.courtyard.bounds])
