"""Tests for layout invariant validation."""

import itertools

import pytest

from single_stair.generators import generate_courtyard_layout, generate_layout
from single_stair.models import (
    Courtyard,
    CourtyardLayout,
    Hallway,
    Layout,
    Rect,
    Segment,
    Staircase,
)
from single_stair.validators import validate_courtyard, validate_layout
from single_stair.validators.layout import (
    floor_overlaps,
    validate_area_conservation,
    validate_circulation_consistency,
    validate_containment,
    validate_no_overlaps,
    validate_shaft_alignment,
)


def _replace_floor(layout: Layout, index: int, **changes) -> Layout:
    floors = list(layout.floors)
    floors[index] = floors[index].model_copy(update=changes)
    return Layout(config=layout.config, lot=layout.lot, floors=floors)


@pytest.fixture
def reform_3():
    return generate_layout({"lot": "single", "stories": 3, "stair": "reform"})


class TestGeneratedLayoutsAreValid:
    @pytest.mark.parametrize("lot,stories,stair,ground", list(itertools.product(
        ["single", "double", "corner"], [2, 3, 4], ["current", "reform"],
        ["residential", "commercial"],
    )))
    def test_no_errors(self, lot, stories, stair, ground):
        layout = generate_layout({"lot": lot, "stories": stories, "stair": stair, "ground": ground})
        assert validate_layout(layout) == []

    @pytest.mark.parametrize("shape", ["L", "U"])
    @pytest.mark.parametrize("ground", ["residential", "commercial"])
    def test_courtyard_no_errors(self, shape, ground):
        layout = generate_courtyard_layout({"shape": shape, "stories": 3, "ground": ground})
        assert validate_courtyard(layout) == []


class TestAreaConservation:
    def test_missing_unit(self, reform_3):
        broken = _replace_floor(reform_3, 1, units=reform_3.floors[1].units[:1])
        errors = validate_area_conservation(broken)
        assert len(errors) == 1
        assert errors[0].element_id == "Floor 2"
        assert "expected 1600.0" in errors[0].message

    def test_within_tolerance(self, reform_3):
        unit = reform_3.floors[0].units[0]
        nudged = unit.model_copy(update={"sqft": unit.sqft + 10})
        layout = _replace_floor(reform_3, 0, units=[nudged, reform_3.floors[0].units[1]])
        assert validate_area_conservation(layout) == []
        assert validate_area_conservation(layout, tolerance=5) != []


class TestOverlaps:
    def test_unit_over_stair(self, reform_3):
        floor = reform_3.floors[0]
        wide = floor.units[0].model_copy(update={"x": 0.0, "w": 20.0})
        broken = _replace_floor(reform_3, 0, units=[wide, floor.units[1]])
        assert ("unit A", "staircase 1") in floor_overlaps(broken.floors[0])
        errors = validate_no_overlaps(broken)
        assert errors
        assert all(e.severity == "error" for e in errors)
        assert "overlaps" in errors[0].message


class TestCirculation:
    def test_count_varies(self, reform_3):
        extra = Hallway(x=0, y=0, w=4, d=5)
        broken = _replace_floor(
            reform_3, 2, hallways=reform_3.floors[2].hallways + [extra],
        )
        errors = validate_circulation_consistency(broken)
        assert len(errors) == 1
        assert errors[0].element_type == "Hallway"
        assert "[1, 1, 2]" in errors[0].message

    def test_shaft_moved(self, reform_3):
        moved = Staircase(x=0, y=0, w=4, d=10)
        broken = _replace_floor(reform_3, 2, staircases=[moved])
        errors = validate_shaft_alignment(broken)
        assert len(errors) == 1
        assert errors[0].element_id == "floor-3"
        assert validate_circulation_consistency(broken) == []


class TestContainment:
    def test_outside_envelope(self, reform_3):
        outside = Staircase(x=18, y=35, w=4, d=10)
        broken = _replace_floor(reform_3, 0, staircases=[outside])
        errors = validate_containment(broken)
        assert len(errors) == 1
        assert errors[0].element_type == "Staircase"
        assert "leaves the buildable envelope" in errors[0].message


class TestCourtyardValidation:
    def test_wing_over_court(self):
        layout = generate_courtyard_layout({"shape": "L", "stories": 2})
        shifted = [
            layout.segments[0],
            Segment(
                label="B",
                bounds=layout.segments[1].bounds,
                column_side="north",
                floors=[
                    f.model_copy(update={"units": [
                        u.model_copy(update={"w": u.w + 5}) for u in f.units
                    ]})
                    for f in layout.segments[1].floors
                ],
            ),
        ]
        broken = CourtyardLayout(
            config=layout.config,
            segments=shifted,
            courtyard=Courtyard(bounds=Rect(x=20, y=20, w=20, d=40), area=800),
        )
        messages = [e.message for e in validate_courtyard(broken)]
        assert "Wing B overlaps the courtyard" in messages

    def test_two_stairs_in_wing(self):
        layout = generate_courtyard_layout({"shape": "L", "stories": 2})
        wing = layout.segments[1]
        floor = wing.floors[0]
        extra = Staircase(x=0, y=50, w=4, d=10)
        doubled = wing.model_copy(update={"floors": [
            floor.model_copy(update={"staircases": floor.staircases + [extra]}),
            wing.floors[1],
        ]})
        broken = layout.model_copy(update={"segments": [layout.segments[0], doubled]})
        errors = validate_courtyard(broken)
        assert any("expected 1" in e.message for e in errors)
