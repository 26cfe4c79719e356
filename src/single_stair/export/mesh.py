"""3D box descriptors for massing views.

Converts a layout into flat boxes a 3D viewer can instantiate directly.
Axes follow the viewer convention: ``x`` = plan x, ``y`` = up,
``z`` = plan y (front → rear).

Staircases are shafts: each is emitted once, from the ground floor
footprint, starting at ``y = 0`` and spanning the full building height.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from single_stair.models.geometry import Rect
from single_stair.models.layout import CourtyardLayout, Floor, Layout

FLOOR_HEIGHT = 10.0
SLAB_THICKNESS = 0.5


class MeshType(str, Enum):
    UNIT = "unit"
    STAIRCASE = "staircase"
    HALLWAY = "hallway"
    SLAB = "slab"


class MeshBox(BaseModel):
    """An axis-aligned box in viewer space (feet)."""

    type: MeshType
    x: float
    y: float
    z: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    depth: float = Field(ge=0)
    floor_level: int = Field(ge=0, description="0-based floor index")
    segment: str | None = Field(default=None, description="Courtyard wing label")
    unit_id: str | None = None
    unit_type: str | None = None
    window_walls: list[str] = Field(default_factory=list)
    is_ground_floor: bool = False
    is_top_floor: bool = False
    stair_type: str | None = None


def _box(kind: MeshType, rect: Rect, y: float, height: float, level: int, **extra) -> MeshBox:
    return MeshBox(
        type=kind,
        x=rect.x, y=y, z=rect.y,
        width=rect.w, height=height, depth=rect.d,
        floor_level=level,
        **extra,
    )


def _floors_to_meshes(
    floors: list[Floor],
    slab: Rect,
    floor_height: float,
    segment: str | None = None,
) -> list[MeshBox]:
    meshes: list[MeshBox] = []
    n = len(floors)
    if n == 0:
        return meshes

    for stair in floors[0].staircases:
        meshes.append(_box(
            MeshType.STAIRCASE, stair, 0.0, n * floor_height, 0,
            segment=segment, stair_type=stair.type.value,
        ))

    for i, floor in enumerate(floors):
        y = i * floor_height
        for unit in floor.units:
            meshes.append(_box(
                MeshType.UNIT, unit, y, floor_height, i,
                segment=segment,
                unit_id=unit.id,
                unit_type=unit.type.value,
                window_walls=list(unit.window_walls),
                is_ground_floor=i == 0,
                is_top_floor=i == n - 1,
            ))
        for hall in floor.hallways:
            meshes.append(_box(MeshType.HALLWAY, hall, y, floor_height, i, segment=segment))
        meshes.append(_box(MeshType.SLAB, slab, y, SLAB_THICKNESS, i, segment=segment))

    return meshes


def build_mesh_data(layout: Layout, floor_height: float = FLOOR_HEIGHT) -> list[MeshBox]:
    """Mesh descriptors for a standard building."""
    return _floors_to_meshes(layout.floors, layout.lot.envelope, floor_height)


def build_courtyard_mesh_data(
    layout: CourtyardLayout, floor_height: float = FLOOR_HEIGHT
) -> list[MeshBox]:
    """Mesh descriptors for every wing of a courtyard building."""
    meshes: list[MeshBox] = []
    for segment in layout.segments:
        meshes.extend(_floors_to_meshes(
            segment.floors, segment.bounds, floor_height, segment=segment.label
        ))
    return meshes
