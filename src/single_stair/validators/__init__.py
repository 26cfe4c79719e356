"""Invariant validation for generated layouts.

- validate_layout: area conservation, overlaps, building-wide circulation,
  shaft alignment, envelope containment
- validate_courtyard: per-wing checks and wing/court separation
"""

from single_stair.validators.layout import (
    ValidationError,
    validate_courtyard,
    validate_layout,
)

__all__ = ["ValidationError", "validate_courtyard", "validate_layout"]
