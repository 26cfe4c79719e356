"""Configuration, lot and layout models."""

from single_stair.models.config import (
    BuildingConfig,
    BuildingType,
    ConfigurationError,
    CourtyardConfig,
    CourtyardShape,
    GroundUse,
    LotType,
    StairCode,
    coerce_config,
)
from single_stair.models.geometry import Rect, union
from single_stair.models.lot import Lot, lot_for
from single_stair.models.layout import (
    Courtyard,
    CourtyardLayout,
    Floor,
    Hallway,
    Layout,
    Segment,
    Staircase,
    StaircaseType,
    Unit,
    UnitType,
)

__all__ = [
    "BuildingConfig",
    "BuildingType",
    "ConfigurationError",
    "CourtyardConfig",
    "CourtyardShape",
    "GroundUse",
    "LotType",
    "StairCode",
    "coerce_config",
    "Rect",
    "union",
    "Lot",
    "lot_for",
    "Courtyard",
    "CourtyardLayout",
    "Floor",
    "Hallway",
    "Layout",
    "Segment",
    "Staircase",
    "StaircaseType",
    "Unit",
    "UnitType",
]
