"""Bedroom estimation.

Bedrooms need both floor area and an exterior wall for light and egress,
so the estimate is the smaller of an area-based count and a cap derived
from the unit's window walls.
"""

from __future__ import annotations

import math

# Kitchen, bath and entry
BEDROOM_OVERHEAD_SQFT = 150.0
SQFT_PER_BEDROOM = 150.0
BEDROOMS_PER_WINDOW_WALL = 2


def estimate_bedrooms(
    sqft: float,
    window_wall_count: int,
    overhead: float = BEDROOM_OVERHEAD_SQFT,
    per_bedroom: float = SQFT_PER_BEDROOM,
    per_wall_cap: int = BEDROOMS_PER_WINDOW_WALL,
) -> int:
    """Estimate bedrooms for a unit of ``sqft`` with ``window_wall_count`` exposures.

    Always at least 1.
    """
    by_space = max(1, math.floor((sqft - overhead) / per_bedroom))
    return min(by_space, max(1, window_wall_count * per_wall_cap))
