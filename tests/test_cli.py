"""Tests for the CLI interface."""
import json
import os
import subprocess
import sys
from pathlib import Path

CLI = [sys.executable, "-m", "single_stair"]
ROOT = Path(__file__).parent.parent
ENV = {**os.environ, "PYTHONPATH": str(ROOT / "src")}


def run_cli(*args: str) -> dict:
    """Run CLI command and return parsed JSON output."""
    result = subprocess.run(
        [*CLI, *args],
        capture_output=True, text=True, cwd=str(ROOT), env=ENV,
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}\n{result.stdout}"
    return json.loads(result.stdout)


def run_cli_expect_fail(*args: str) -> dict:
    """Run CLI command expecting failure, return parsed JSON output."""
    result = subprocess.run(
        [*CLI, *args],
        capture_output=True, text=True, cwd=str(ROOT), env=ENV,
    )
    assert result.returncode != 0
    return json.loads(result.stdout)


class TestLayout:
    def test_standard(self):
        data = run_cli("layout", "--lot", "double", "--stories", "4", "--stair", "reform")
        assert data["ok"] is True
        floors = data["layout"]["floors"]
        assert len(floors) == 4
        assert [u["id"] for u in floors[0]["units"]] == ["A", "B", "C", "D"]
        assert floors[0]["circulation_sqft"] == 60.0

    def test_courtyard_building(self):
        data = run_cli("layout", "--building", "U", "--stories", "2")
        assert [s["label"] for s in data["layout"]["segments"]] == ["A", "B", "C"]

    def test_bad_lot(self):
        data = run_cli_expect_fail("layout", "--lot", "mansion")
        assert data["ok"] is False
        assert "lot" in data["error"]


class TestCourtyard:
    def test_l_shape(self):
        data = run_cli("courtyard", "--shape", "L", "--stories", "3")
        assert data["ok"] is True
        assert data["layout"]["courtyard"]["area"] == 800
        assert data["validation"]["errors"] == 0

    def test_bad_shape(self):
        data = run_cli_expect_fail("courtyard", "--shape", "Z")
        assert data["ok"] is False


class TestStats:
    def test_single_lot(self):
        data = run_cli("stats", "--lot", "single", "--stories", "3")
        deltas = data["stats"]["deltas"]
        assert deltas["livable_area"] == 1260
        assert deltas["staircases"] == -6

    def test_two_stories_no_gain(self):
        data = run_cli("stats", "--lot", "corner", "--stories", "2")
        assert data["stats"]["deltas"]["livable_area"] == 0


class TestMesh:
    def test_mesh(self):
        data = run_cli("mesh", "--stair", "reform")
        stairs = [m for m in data["meshes"] if m["type"] == "staircase"]
        assert len(stairs) == 1
        assert stairs[0]["height"] == 30


class TestValidate:
    def test_valid(self):
        data = run_cli("validate", "--lot", "corner", "--stories", "4", "--ground", "commercial")
        assert data["ok"] is True
        assert data["validation"]["errors"] == 0

    def test_courtyard(self):
        data = run_cli("validate", "--building", "L")
        assert data["validation"]["errors"] == 0


class TestRender:
    def test_plan(self, tmp_path):
        out = tmp_path / "plan.png"
        data = run_cli("render", "--output", str(out), "--floor", "2")
        assert data["rendered"] == str(out)
        assert out.exists()

    def test_compare(self, tmp_path):
        out = tmp_path / "compare.png"
        run_cli("render", "--output", str(out), "--mode", "compare", "--lot", "double")
        assert out.exists()

    def test_floor_out_of_range(self, tmp_path):
        data = run_cli_expect_fail("render", "--output", str(tmp_path / "x.png"), "--floor", "9")
        assert "out of range" in data["error"]

    def test_unknown_mode(self, tmp_path):
        data = run_cli_expect_fail("render", "--output", str(tmp_path / "x.png"), "--mode", "3d")
        assert "Unknown render mode" in data["error"]

    def test_svg(self):
        data = run_cli("svg", "--floor", "1")
        assert 'id="unit-A"' in data["svg"]


class TestUrlState:
    def test_decode(self):
        data = run_cli("decode", "#lot=mansion&stories=99")
        assert data["config"]["lot"] == "single"
        assert data["config"]["stories"] == 4

    def test_decode_empty(self):
        data = run_cli("decode")
        assert data["hash"] == (
            "#lot=single&stories=3&stair=current&ground=residential&building=standard"
        )

    def test_encode(self):
        data = run_cli("encode", "--lot", "corner", "--stair", "reform")
        assert data["hash"].startswith("#lot=corner&stories=3&stair=reform")


class TestMisc:
    def test_version(self):
        data = run_cli("version")
        assert data["version"] == "0.1.0"

    def test_verbose_keeps_stdout_json(self):
        result = subprocess.run(
            [*CLI, "--verbose", "layout", "--stair", "reform"],
            capture_output=True, text=True, cwd=str(ROOT), env=ENV,
        )
        assert result.returncode == 0
        assert json.loads(result.stdout)["ok"] is True
        assert "staircase" in result.stderr
