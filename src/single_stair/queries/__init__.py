"""Read-only queries over generated layouts.

- stats: current vs. reform comparison (per floor, whole building, deltas)
"""

from single_stair.queries.stats import (
    StatsResult,
    compare,
    compute_stats,
    generate_pair,
)

__all__ = [
    "StatsResult",
    "compare",
    "compute_stats",
    "generate_pair",
]
