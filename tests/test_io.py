import json
import os
import re

import pytest

from meshgradient.errors import InvalidInputError
from meshgradient.io import MeshIO
from meshgradient.mesh.tessellator import tessellate


def test_mesh_filename():
    assert MeshIO.mesh_filename(4, timestamp=1700000000) == "mesh-1700000000-subdiv4.json"
    assert re.fullmatch(r"mesh-\d+-subdiv0\.json", MeshIO.mesh_filename(0))


def test_save_and_load(tmp_path, deformed_grid):
    mesh = tessellate(deformed_grid, 2)
    path = tmp_path / "mesh.json"

    MeshIO.save_mesh(mesh, path)

    with open(path, encoding="utf-8") as f:
        record = json.load(f)
    assert set(record) == {"positions", "colors", "indexes"}
    assert MeshIO.load_mesh(path) == mesh


def test_save_to_configured_directory(tmp_path, monkeypatch, default_grid):
    target = tmp_path / "meshes"
    monkeypatch.setenv("MESHGRADIENT_OUTPUT_DIR", str(target))

    path = MeshIO.save_mesh_to_dir(tessellate(default_grid, 3), 3)

    assert os.path.dirname(path) == str(target)
    assert re.fullmatch(r"mesh-\d+-subdiv3\.json", os.path.basename(path))
    assert MeshIO.load_mesh(path).vertex_count == 4 * 25


def test_save_to_explicit_directory(tmp_path, default_grid):
    path = MeshIO.save_mesh_to_dir(tessellate(default_grid, 0), 0, tmp_path)
    assert os.path.exists(path)
    assert os.path.dirname(path) == str(tmp_path)


def test_load_rejects_malformed_mesh(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"positions": [[0, 0, 0]], "colors": [[0, 0, 0]]}))
    with pytest.raises(InvalidInputError):
        MeshIO.load_mesh(path)


def test_load_propagates_parse_errors(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        MeshIO.load_mesh(path)
    assert "Failed to read mesh" in caplog.text


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        MeshIO.load_mesh(tmp_path / "absent.json")
