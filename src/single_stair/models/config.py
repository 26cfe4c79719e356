"""Building configuration: the declarative input to the layout engines.

Each enumerated field is a closed set. The engines never substitute a
default for a bad value; they raise ``ConfigurationError`` instead. Only
the URL-hash layer (``url_state``) falls back to defaults for untrusted
input.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigurationError(ValueError):
    """An enumerated field holds a value outside its closed set, or the
    configuration describes degenerate geometry."""


class LotType(str, Enum):
    """Lot size classes.

    SINGLE: standard 25 ft city lot
    DOUBLE: two standard lots combined (50 ft)
    CORNER: 25 ft lot with street exposure on its east side
    """

    SINGLE = "single"
    DOUBLE = "double"
    CORNER = "corner"


class StairCode(str, Enum):
    """Egress-code regime."""

    CURRENT = "current"
    REFORM = "reform"


class GroundUse(str, Enum):
    """Ground floor use."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class BuildingType(str, Enum):
    """Massing shape."""

    STANDARD = "standard"
    L = "L"
    U = "U"


class CourtyardShape(str, Enum):
    """Courtyard massing shapes (wings around an open court)."""

    L = "L"
    U = "U"


class BuildingConfig(BaseModel):
    """Input to ``generate_layout``. Immutable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lot: LotType
    stories: int = Field(description="Number of stories (callers clamp to 2..4)")
    stair: StairCode
    ground: GroundUse = GroundUse.RESIDENTIAL
    building_type: BuildingType = BuildingType.STANDARD

    def with_stair(self, stair: StairCode | str) -> BuildingConfig:
        """Same configuration under another egress regime."""
        return self.model_copy(update={"stair": StairCode(stair)})

    @property
    def is_courtyard(self) -> bool:
        return self.building_type != BuildingType.STANDARD

    def courtyard_config(self) -> CourtyardConfig:
        """The courtyard input for an L/U building. Lot and stair do not apply."""
        if not self.is_courtyard:
            raise ConfigurationError("A standard building has no courtyard configuration")
        return CourtyardConfig(
            shape=CourtyardShape(self.building_type.value),
            stories=self.stories,
            ground=self.ground,
        )


class CourtyardConfig(BaseModel):
    """Input to ``generate_courtyard_layout``. Immutable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    shape: CourtyardShape
    stories: int
    ground: GroundUse = GroundUse.RESIDENTIAL


_M = TypeVar("_M", bound=BaseModel)


def coerce_config(model: type[_M], value: _M | Mapping[str, Any]) -> _M:
    """Return ``value`` as a ``model`` instance.

    Mappings are validated; any invalid field raises ``ConfigurationError``
    chained to pydantic's ``ValidationError``.
    """
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"Expected {model.__name__} or a mapping, got {type(value).__name__}"
        )
    try:
        return model.model_validate(dict(value))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid {model.__name__}: {problems}") from exc
