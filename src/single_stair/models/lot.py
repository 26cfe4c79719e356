"""Lot geometry: legal dimensions and the buildable envelope after setbacks."""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    model_validator,
)

from single_stair.models.config import ConfigurationError, LotType
from single_stair.models.geometry import Rect

FRONT_SETBACK = 15.0
REAR_SETBACK = 30.0
LOT_DEPTH = 125.0

# (lot width, total side setbacks) in feet
LOT_DIMENSIONS: dict[LotType, tuple[float, float]] = {
    LotType.SINGLE: (25.0, 5.0),
    LotType.DOUBLE: (50.0, 5.0),
    LotType.CORNER: (25.0, 2.5),
}


class Lot(BaseModel):
    """A lot and its buildable envelope.

    ``buildable_width = width - side_setbacks`` and
    ``buildable_depth = depth - front_setback - rear_setback``.
    """

    model_config = ConfigDict(frozen=True)

    lot_type: LotType
    width: float = Field(gt=0)
    depth: float = Field(gt=0)
    side_setbacks: float = Field(ge=0, description="Sum of both side setbacks")
    front_setback: float = Field(default=FRONT_SETBACK, ge=0)
    rear_setback: float = Field(default=REAR_SETBACK, ge=0)

    @computed_field
    @property
    def buildable_width(self) -> float:
        return self.width - self.side_setbacks

    @computed_field
    @property
    def buildable_depth(self) -> float:
        return self.depth - self.front_setback - self.rear_setback

    @property
    def buildable_area(self) -> float:
        return self.buildable_width * self.buildable_depth

    @property
    def envelope(self) -> Rect:
        """Buildable rectangle in lot-local coordinates (origin at its corner)."""
        return Rect(x=0, y=0, w=self.buildable_width, d=self.buildable_depth)

    @model_validator(mode="after")
    def envelope_not_degenerate(self) -> Lot:
        if self.buildable_width <= 0 or self.buildable_depth <= 0:
            raise ValueError(
                f"{self.lot_type.value} lot has no buildable area "
                f"({self.buildable_width} x {self.buildable_depth} ft after setbacks)"
            )
        return self


def lot_for(
    lot_type: LotType | str,
    front_setback: float = FRONT_SETBACK,
    rear_setback: float = REAR_SETBACK,
) -> Lot:
    """Build the lot for a lot type.

    Raises ConfigurationError for an unknown lot type or setbacks that
    leave no buildable envelope.
    """
    try:
        lot_type = LotType(lot_type)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown lot type '{lot_type}'") from exc
    width, side_setbacks = LOT_DIMENSIONS[lot_type]
    try:
        return Lot(
            lot_type=lot_type,
            width=width,
            depth=LOT_DEPTH,
            side_setbacks=side_setbacks,
            front_setback=front_setback,
            rear_setback=rear_setback,
        )
    except ValidationError as exc:
        raise ConfigurationError(str(exc.errors()[0]["msg"])) from exc
