"""Tests for floor plan, comparison and overview rendering."""

import pytest

from single_stair.export.floorplan import (
    floorplan_svg,
    render_comparison,
    render_courtyard,
    render_floorplan,
)
from single_stair.export.overview import render_overview
from single_stair.generators import generate_courtyard_layout, generate_layout


@pytest.fixture
def current_3():
    return generate_layout({"lot": "single", "stories": 3, "stair": "current"})


class TestRenderFloorplan:
    def test_png(self, current_3, tmp_path):
        out = render_floorplan(current_3, 0, tmp_path / "floor1.png")
        assert out.exists()
        assert out.stat().st_size > 0

    def test_creates_parent_dirs(self, current_3, tmp_path):
        out = render_floorplan(current_3, 2, tmp_path / "nested" / "dir" / "top.svg")
        assert out.exists()
        assert out.read_text().lstrip().startswith("<?xml")

    def test_without_extras(self, current_3, tmp_path):
        out = render_floorplan(
            current_3, 1, tmp_path / "bare.png",
            show_labels=False, show_rooms=False, show_info_box=False,
        )
        assert out.exists()

    def test_floor_out_of_range(self, current_3, tmp_path):
        with pytest.raises(ValueError, match="out of range"):
            render_floorplan(current_3, 3, tmp_path / "nope.png")


class TestFloorplanSvg:
    def test_element_ids(self, current_3):
        svg = floorplan_svg(current_3, 0)
        assert svg.lstrip().startswith("<?xml")
        for gid in ("unit-A", "unit-B", "stair-1", "stair-2", "stair-3", "hall-1", "hall-2"):
            assert f'id="{gid}"' in svg

    def test_commercial_ids(self):
        layout = generate_layout({
            "lot": "double", "stories": 2, "stair": "reform", "ground": "commercial",
        })
        svg = floorplan_svg(layout, 0)
        assert 'id="unit-R1"' in svg
        assert 'id="unit-R2"' in svg


class TestComparisonAndOverview:
    def test_comparison(self, tmp_path):
        out = render_comparison({"lot": "double", "stories": 4}, 1, tmp_path / "compare.png")
        assert out.exists()

    def test_comparison_svg_prefixes(self, tmp_path):
        out = render_comparison({"lot": "single", "stories": 3}, 0, tmp_path / "compare.svg")
        svg = out.read_text()
        assert 'id="current-stair-3"' in svg
        assert 'id="reform-stair-1"' in svg

    def test_overview(self, tmp_path):
        out = render_overview({"lot": "corner", "stories": 3, "ground": "commercial"},
                              tmp_path / "overview.png")
        assert out.exists()
        assert out.stat().st_size > 0


class TestRenderCourtyard:
    @pytest.mark.parametrize("shape", ["L", "U"])
    def test_render(self, shape, tmp_path):
        layout = generate_courtyard_layout({"shape": shape, "stories": 2})
        out = render_courtyard(layout, 1, tmp_path / f"{shape}.svg")
        svg = out.read_text()
        assert 'id="wing-A-unit-A1"' in svg
        assert 'id="wing-B-stair-1"' in svg

    def test_floor_out_of_range(self, tmp_path):
        layout = generate_courtyard_layout({"shape": "L", "stories": 2})
        with pytest.raises(ValueError, match="out of range"):
            render_courtyard(layout, 5, tmp_path / "nope.png")
