"""Geometric invariant checks for generated layouts.

Layout checks:
- area conservation: livable + staircase + hallway area == buildable area
- no overlapping rectangles on a floor
- building-wide circulation: same staircase/hallway counts on every floor
- shaft alignment: identical staircase footprints on every floor
- containment: every rectangle inside the buildable envelope

Courtyard checks:
- per-wing area conservation and one staircase per wing floor
- wings disjoint from each other and from the court
"""

from __future__ import annotations

from dataclasses import dataclass

from single_stair.models.geometry import Rect, overlapping_pairs
from single_stair.models.layout import CourtyardLayout, Floor, Layout

AREA_TOLERANCE = 20.0


@dataclass
class ValidationError:
    """A single validation issue."""

    severity: str  # "error" | "warning"
    element_type: str
    element_id: str
    message: str


def validate_layout(layout: Layout) -> list[ValidationError]:
    """Run every layout check."""
    errors: list[ValidationError] = []
    errors.extend(validate_area_conservation(layout))
    errors.extend(validate_no_overlaps(layout))
    errors.extend(validate_circulation_consistency(layout))
    errors.extend(validate_shaft_alignment(layout))
    errors.extend(validate_containment(layout))
    return errors


def _area_error(
    floor: Floor, expected: float, label: str, tolerance: float
) -> list[ValidationError]:
    total = floor.livable_sqft + floor.circulation_sqft
    if abs(total - expected) <= tolerance:
        return []
    return [ValidationError(
        severity="error",
        element_type="Floor",
        element_id=label,
        message=(
            f"{label}: livable {floor.livable_sqft:.1f} + circulation "
            f"{floor.circulation_sqft:.1f} = {total:.1f} sq ft, "
            f"expected {expected:.1f}"
        ),
    )]


def validate_area_conservation(
    layout: Layout, tolerance: float = AREA_TOLERANCE
) -> list[ValidationError]:
    """Each floor's units plus circulation must account for the buildable area."""
    errors: list[ValidationError] = []
    for floor in layout.floors:
        errors.extend(_area_error(
            floor, layout.lot.buildable_area, f"Floor {floor.level}", tolerance
        ))
    return errors


def floor_overlaps(floor: Floor) -> list[tuple[str, str]]:
    """Labels of overlapping element pairs on a floor, e.g. ('unit A', 'staircase 1')."""
    labels: list[str] = []
    rects: list[Rect] = []
    counters: dict[str, int] = {}
    for kind, rect in floor.rects():
        counters[kind] = counters.get(kind, 0) + 1
        name = getattr(rect, "id", None) or str(counters[kind])
        labels.append(f"{kind} {name}")
        rects.append(rect)
    return [(labels[i], labels[j]) for i, j in overlapping_pairs(rects)]


def validate_no_overlaps(layout: Layout) -> list[ValidationError]:
    """No two rectangles on a floor may overlap."""
    errors: list[ValidationError] = []
    for floor in layout.floors:
        for a, b in floor_overlaps(floor):
            errors.append(ValidationError(
                severity="error",
                element_type="Floor",
                element_id=f"floor-{floor.level}",
                message=f"Floor {floor.level}: {a} overlaps {b}",
            ))
    return errors


def validate_circulation_consistency(layout: Layout) -> list[ValidationError]:
    """Stairs run the full height, so every floor has the same counts."""
    if not layout.floors:
        return []
    stair_counts = [len(f.staircases) for f in layout.floors]
    hall_counts = [len(f.hallways) for f in layout.floors]
    errors: list[ValidationError] = []
    if len(set(stair_counts)) > 1:
        errors.append(ValidationError(
            severity="error",
            element_type="Staircase",
            element_id="building",
            message=f"Staircase count varies by floor: {stair_counts}",
        ))
    if len(set(hall_counts)) > 1:
        errors.append(ValidationError(
            severity="error",
            element_type="Hallway",
            element_id="building",
            message=f"Hallway count varies by floor: {hall_counts}",
        ))
    return errors


def validate_shaft_alignment(layout: Layout) -> list[ValidationError]:
    """Every floor's staircases must sit on the ground floor's footprints."""
    if not layout.floors:
        return []
    ground = [s.bounds() for s in layout.floors[0].staircases]
    errors: list[ValidationError] = []
    for floor in layout.floors[1:]:
        if [s.bounds() for s in floor.staircases] != ground:
            errors.append(ValidationError(
                severity="error",
                element_type="Staircase",
                element_id=f"floor-{floor.level}",
                message=(
                    f"Floor {floor.level}: staircase footprints differ "
                    f"from the ground floor"
                ),
            ))
    return errors


def validate_containment(layout: Layout) -> list[ValidationError]:
    """Every rectangle must lie inside the buildable envelope."""
    envelope = layout.lot.envelope
    errors: list[ValidationError] = []
    for floor in layout.floors:
        for kind, rect in floor.rects():
            if not envelope.contains(rect):
                errors.append(ValidationError(
                    severity="error",
                    element_type=kind.capitalize(),
                    element_id=getattr(rect, "id", "") or f"floor-{floor.level}",
                    message=(
                        f"Floor {floor.level}: {kind} at ({rect.x}, {rect.y}) "
                        f"size {rect.w}x{rect.d} leaves the buildable envelope"
                    ),
                ))
    return errors


def validate_courtyard(
    layout: CourtyardLayout, tolerance: float = AREA_TOLERANCE
) -> list[ValidationError]:
    """Run every courtyard check."""
    errors: list[ValidationError] = []
    boxes = [(s.label, s.bounding_box) for s in layout.segments]

    for segment in layout.segments:
        for floor in segment.floors:
            errors.extend(_area_error(
                floor, segment.bounds.area,
                f"Wing {segment.label} floor {floor.level}", tolerance,
            ))
            if len(floor.staircases) != 1:
                errors.append(ValidationError(
                    severity="error",
                    element_type="Staircase",
                    element_id=f"wing {segment.label}:floor-{floor.level}",
                    message=(
                        f"Wing {segment.label} floor {floor.level} has "
                        f"{len(floor.staircases)} staircases, expected 1"
                    ),
                ))
            for a, b in floor_overlaps(floor):
                errors.append(ValidationError(
                    severity="error",
                    element_type="Floor",
                    element_id=f"wing {segment.label}:floor-{floor.level}",
                    message=f"Wing {segment.label} floor {floor.level}: {a} overlaps {b}",
                ))

    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            if boxes[i][1].overlaps(boxes[j][1]):
                errors.append(ValidationError(
                    severity="error",
                    element_type="Segment",
                    element_id=boxes[i][0],
                    message=f"Wing {boxes[i][0]} overlaps wing {boxes[j][0]}",
                ))
    for label, box in boxes:
        if box.overlaps(layout.courtyard.bounds):
            errors.append(ValidationError(
                severity="error",
                element_type="Segment",
                element_id=label,
                message=f"Wing {label} overlaps the courtyard",
            ))
    return errors
