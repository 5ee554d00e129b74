import json
import logging

import pytest

from polymesh.export import _cli, load_polygon, save_obj, save_polygon
from polymesh.mesh import Mesh
from polymesh.polygon import Polygon


def test_save_obj_with_uvs(tmp_path):
    mesh = Mesh([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)], [(0, 1, 2)],
                [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)], name="tri")
    path = tmp_path / "tri.obj"
    save_obj(str(path), mesh)
    lines = path.read_text().splitlines()
    assert lines[0] == "o tri"
    assert lines[1] == "v 0.000000 0.000000 0.000000"
    assert sum(1 for line in lines if line.startswith("vt ")) == 3
    assert lines[-1] == "f 1/1 2/2 3/3"


def test_save_obj_without_uvs(tmp_path):
    mesh = Mesh([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)], [(0, 2, 1)])
    path = tmp_path / "tri.obj"
    save_obj(str(path), mesh)
    lines = path.read_text().splitlines()
    assert not any(line.startswith("vt ") for line in lines)
    assert lines[-1] == "f 1 3 2"


def test_polygon_json_round_trip(tmp_path):
    poly = Polygon(curve_detail=0.05, uv_rotation=30.0)
    poly.set_curve_point(3, (0.1, 0.9))
    path = tmp_path / "shape.json"
    save_polygon(str(path), poly)
    assert load_polygon(str(path)) == poly


def test_load_polygon_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([[0, 0], [1, 0], [0, 1]]))
    with pytest.raises(ValueError):
        load_polygon(str(path))


def test_cli_square(tmp_path):
    out = tmp_path / "front.obj"
    collider = tmp_path / "collider.obj"
    shape = tmp_path / "shape.json"
    code = _cli(["--square", "1", "--out", str(out), "--collider", str(collider),
                 "--save-polygon", str(shape)])
    assert code == 0
    front_lines = out.read_text().splitlines()
    assert sum(1 for line in front_lines if line.startswith("v ")) == 4
    assert sum(1 for line in front_lines if line.startswith("f ")) == 2
    collider_lines = collider.read_text().splitlines()
    assert not any(line.startswith("vt ") for line in collider_lines)
    assert sum(1 for line in collider_lines if line.startswith("f ")) == 8
    assert load_polygon(str(shape)).key_points[0] == (1.0, 1.0)


def test_cli_polygon_file_with_overrides(tmp_path):
    poly = Polygon()
    poly.set_curve_point(0, (0.8, 0.0))
    shape = tmp_path / "shape.json"
    save_polygon(str(shape), poly)
    out = tmp_path / "front.obj"
    collider = tmp_path / "collider.obj"
    code = _cli(["--polygon", str(shape), "--detail", "0.5", "--depth", "2", "--front", "--no-edges",
                 "--out", str(out), "--collider", str(collider)])
    assert code == 0
    front_vertices = [line for line in out.read_text().splitlines() if line.startswith("v ")]
    assert len(front_vertices) == 3 + 2
    collider_vertices = [line for line in collider.read_text().splitlines() if line.startswith("v ")]
    # front only: every vertex sits on z = 0
    assert len(collider_vertices) == 5
    assert all(line.endswith(" 0.000000") for line in collider_vertices)


def test_cli_logs_front_bounds(tmp_path, caplog):
    out = tmp_path / "front.obj"
    with caplog.at_level(logging.INFO, logger="polymesh.export"):
        assert _cli(["--square", "2", "--out", str(out)]) == 0
    assert "front bounds x -2.000..2.000, y -2.000..2.000" in caplog.text
