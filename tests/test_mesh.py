"""Tests for 3D mesh descriptors."""

import pytest

from single_stair.export.mesh import (
    FLOOR_HEIGHT,
    SLAB_THICKNESS,
    MeshType,
    build_courtyard_mesh_data,
    build_mesh_data,
)
from single_stair.generators import generate_courtyard_layout, generate_layout


def _by_type(meshes, kind):
    return [m for m in meshes if m.type == kind]


@pytest.fixture
def current_3():
    return generate_layout({"lot": "single", "stories": 3, "stair": "current"})


class TestBuildMeshData:
    def test_counts(self, current_3):
        meshes = build_mesh_data(current_3)
        assert len(_by_type(meshes, MeshType.STAIRCASE)) == 3
        assert len(_by_type(meshes, MeshType.UNIT)) == 6
        assert len(_by_type(meshes, MeshType.HALLWAY)) == 6
        assert len(_by_type(meshes, MeshType.SLAB)) == 3

    def test_stair_shafts_span_building(self, current_3):
        for stair in _by_type(build_mesh_data(current_3), MeshType.STAIRCASE):
            assert stair.y == 0
            assert stair.height == 3 * FLOOR_HEIGHT
            assert stair.floor_level == 0
        gangway = _by_type(build_mesh_data(current_3), MeshType.STAIRCASE)[-1]
        assert gangway.stair_type == "gangway"

    def test_unit_boxes(self, current_3):
        units = _by_type(build_mesh_data(current_3), MeshType.UNIT)
        assert [u.y for u in units] == [0, 0, 10, 10, 20, 20]
        assert units[0].is_ground_floor and not units[0].is_top_floor
        assert units[-1].is_top_floor and not units[-1].is_ground_floor
        assert units[0].unit_id == "A"
        assert units[0].window_walls == ["north"]

    def test_axes(self, current_3):
        a = _by_type(build_mesh_data(current_3), MeshType.UNIT)[1]
        unit_b = current_3.floors[0].get_unit("B")
        # Plan y maps to z
        assert (a.x, a.z, a.width, a.depth) == (unit_b.x, unit_b.y, unit_b.w, unit_b.d)

    def test_slabs(self, current_3):
        slabs = _by_type(build_mesh_data(current_3), MeshType.SLAB)
        assert all(s.height == SLAB_THICKNESS for s in slabs)
        assert all(s.width == 20 and s.depth == 80 for s in slabs)

    def test_custom_floor_height(self):
        layout = generate_layout({"lot": "double", "stories": 4, "stair": "reform"})
        meshes = build_mesh_data(layout, floor_height=12)
        (stair,) = _by_type(meshes, MeshType.STAIRCASE)
        assert stair.height == 48
        assert max(u.y for u in _by_type(meshes, MeshType.UNIT)) == 36

    def test_commercial_unit_type(self):
        layout = generate_layout({
            "lot": "single", "stories": 2, "stair": "reform", "ground": "commercial",
        })
        units = _by_type(build_mesh_data(layout), MeshType.UNIT)
        assert units[0].unit_type == "commercial"
        assert units[1].unit_type == "residential"


class TestCourtyardMesh:
    def test_one_shaft_per_wing(self):
        layout = generate_courtyard_layout({"shape": "U", "stories": 3})
        meshes = build_courtyard_mesh_data(layout)
        stairs = _by_type(meshes, MeshType.STAIRCASE)
        assert [s.segment for s in stairs] == ["A", "B", "C"]
        assert len(meshes) == 3 * (1 + 3 * 4)

    def test_json(self):
        layout = generate_courtyard_layout({"shape": "L", "stories": 2})
        data = build_courtyard_mesh_data(layout)[0].model_dump(mode="json")
        assert data["type"] == "staircase"
        assert data["segment"] == "A"
