import numpy as np
import pytest

from meshgradient.errors import InvalidInputError
from meshgradient.mesh.artifact import MeshArtifact
from meshgradient.mesh.tessellator import tessellate

QUAD = {
    "positions": [[-1.0, 1.0, 0.0], [1.0, 1.0, 0.0], [-1.0, -1.0, 0.0], [1.0, -1.0, 0.0]],
    "colors": [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]],
    "indexes": [2, 1, 0, 2, 3, 1],
}


def test_from_dict():
    mesh = MeshArtifact.from_dict(QUAD)
    assert mesh.vertex_count == 4
    assert mesh.triangle_count == 2
    assert mesh.indexes.dtype == np.uint32
    np.testing.assert_array_equal(mesh.triangles(), [[2, 1, 0], [2, 3, 1]])
    assert repr(mesh) == "MeshArtifact(vertices=4, triangles=2)"


def test_to_dict_uses_plain_lists(default_grid):
    record = tessellate(default_grid, 0).to_dict()
    assert set(record) == {"positions", "colors", "indexes"}
    assert isinstance(record["positions"][0], list)
    assert len(record["positions"][0]) == 3
    assert all(isinstance(i, int) for i in record["indexes"])
    assert record["indexes"][:3] == [2, 1, 0]


def test_arrays_are_read_only():
    mesh = MeshArtifact.from_dict(QUAD)
    with pytest.raises(ValueError):
        mesh.positions[0, 0] = 5.0
    with pytest.raises(ValueError):
        mesh.indexes[0] = 3
    with pytest.raises(AttributeError):
        mesh.colors = np.zeros((4, 3))


def test_construction_copies_input():
    positions = np.array(QUAD["positions"])
    mesh = MeshArtifact(positions, QUAD["colors"], QUAD["indexes"])
    positions[0, 0] = 9.0
    assert mesh.positions[0, 0] == -1.0


def test_interleaved_vertex_buffer():
    buffer = MeshArtifact.from_dict(QUAD).interleaved()
    assert buffer.dtype == np.float32
    assert buffer.shape == (4, 6)
    assert buffer.flags["C_CONTIGUOUS"]
    np.testing.assert_array_equal(buffer[1], [1.0, 1.0, 0.0, 1.0, 0.0, 0.0])


def test_empty_record():
    mesh = MeshArtifact.from_dict({"positions": [], "colors": [], "indexes": []})
    assert mesh.vertex_count == 0
    assert mesh.triangle_count == 0


@pytest.mark.parametrize("change", [
    {"colors": QUAD["colors"][:3]},
    {"indexes": [0, 1, 2, 3]},
    {"indexes": [0, 1, 4]},
    {"indexes": [0, 1, -1]},
    {"indexes": [0.0, 1.0, 2.0]},
    {"positions": [[0.0, 0.0]] * 4},
    {"colors": "red"},
    {"indexes": [[0, 1], [2]]},
    {"indexes": [0, "one", 2]},
])
def test_malformed_records_are_rejected(change):
    with pytest.raises(InvalidInputError):
        MeshArtifact.from_dict({**QUAD, **change})


def test_missing_fields_are_rejected():
    with pytest.raises(InvalidInputError, match="indexes"):
        MeshArtifact.from_dict({"positions": [], "colors": []})
    with pytest.raises(InvalidInputError):
        MeshArtifact.from_dict([1, 2, 3])


def test_equality():
    assert MeshArtifact.from_dict(QUAD) == MeshArtifact.from_dict(QUAD)
    other = {**QUAD, "indexes": [0, 1, 2, 1, 2, 3]}
    assert MeshArtifact.from_dict(QUAD) != MeshArtifact.from_dict(other)
