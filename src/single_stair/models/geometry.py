"""Axis-aligned rectangle primitives.

Everything in a floor plan is a rectangle in lot-local feet:
``x`` runs west → east across the lot width, ``y`` runs front (street,
north) → rear (south) across the lot depth.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

# Edge names in the order window walls are reported
COMPASS_EDGES = ("north", "south", "east", "west")


class Rect(BaseModel):
    """Rectangle given by its front-left corner and size (feet)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    w: float = Field(ge=0, description="Extent along x (feet)")
    d: float = Field(ge=0, description="Extent along y (feet)")

    @property
    def x1(self) -> float:
        return self.x + self.w

    @property
    def y1(self) -> float:
        return self.y + self.d

    @property
    def area(self) -> float:
        return self.w * self.d

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.d / 2)

    def bounds(self) -> Rect:
        """Bare rectangle of this element (drops subclass fields)."""
        return Rect(x=self.x, y=self.y, w=self.w, d=self.d)

    def overlaps(self, other: Rect) -> bool:
        """True if the interiors intersect. Touching edges do not overlap."""
        return (
            self.x < other.x1
            and self.x1 > other.x
            and self.y < other.y1
            and self.y1 > other.y
        )

    def intersection_area(self, other: Rect) -> float:
        """Area shared by both rectangles (0 if disjoint)."""
        dx = min(self.x1, other.x1) - max(self.x, other.x)
        dy = min(self.y1, other.y1) - max(self.y, other.y)
        if dx <= 0 or dy <= 0:
            return 0.0
        return dx * dy

    def contains(self, other: Rect, tol: float = 1e-6) -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x - tol
            and other.y >= self.y - tol
            and other.x1 <= self.x1 + tol
            and other.y1 <= self.y1 + tol
        )

    def translated(self, dx: float, dy: float) -> Rect:
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})

    def edge(self, side: str) -> tuple[str, float, float, float]:
        """One side as ``(axis, position, start, end)``.

        ``axis`` is "h" for north/south edges (constant y) and "v" for
        east/west edges (constant x).
        """
        if side == "north":
            return ("h", self.y, self.x, self.x1)
        if side == "south":
            return ("h", self.y1, self.x, self.x1)
        if side == "west":
            return ("v", self.x, self.y, self.y1)
        if side == "east":
            return ("v", self.x1, self.y, self.y1)
        raise ValueError(f"Unknown side '{side}'. Use one of {COMPASS_EDGES}")


def union(rects: list[Rect]) -> Rect:
    """Smallest rectangle enclosing all ``rects``."""
    if not rects:
        raise ValueError("Cannot take the union of no rectangles")
    x0 = min(r.x for r in rects)
    y0 = min(r.y for r in rects)
    x1 = max(r.x1 for r in rects)
    y1 = max(r.y1 for r in rects)
    return Rect(x=x0, y=y0, w=x1 - x0, d=y1 - y0)


def shared_edge_length(a: Rect, side: str, b: Rect) -> float:
    """Length of ``a``'s ``side`` that runs along any side of ``b``."""
    axis, pos, start, end = a.edge(side)
    shared = 0.0
    for other_side in COMPASS_EDGES:
        o_axis, o_pos, o_start, o_end = b.edge(other_side)
        if o_axis != axis or not math.isclose(o_pos, pos, abs_tol=1e-6):
            continue
        shared = max(shared, min(end, o_end) - max(start, o_start))
    return max(shared, 0.0)


def overlapping_pairs(rects: list[Rect]) -> list[tuple[int, int]]:
    """Index pairs of rectangles whose interiors intersect."""
    pairs = []
    for i in range(len(rects)):
        for j in range(i + 1, len(rects)):
            if rects[i].overlaps(rects[j]):
                pairs.append((i, j))
    return pairs
