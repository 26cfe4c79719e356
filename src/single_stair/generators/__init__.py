"""Layout generation.

Pure functions from a configuration to a layout:
- Layout engine: standard single-footprint buildings, current vs. reform
- Courtyard engine: L/U wings around an open court
- Bedroom estimation shared by both
"""

from single_stair.generators.bedrooms import estimate_bedrooms
from single_stair.generators.layout import (
    CirculationPolicy,
    FloorKind,
    circulation_policy,
    floor_kind,
    generate_layout,
)
from single_stair.generators.courtyard import generate_courtyard_layout

__all__ = [
    "estimate_bedrooms",
    "CirculationPolicy",
    "FloorKind",
    "circulation_policy",
    "floor_kind",
    "generate_layout",
    "generate_courtyard_layout",
]
