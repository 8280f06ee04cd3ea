"""
Mesh Artifact
=============
The triangulated output of one tessellation pass.

The serialized record has three fields, consumed as-is by the mesh viewer:

    positions: [[x, y, z], ...]   (z is always 0)
    colors:    [[r, g, b], ...]   (same length and order as positions)
    indexes:   [i0, i1, i2, ...]  (uint32, one triangle per triple)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from meshgradient.errors import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt

UINT32_LIMIT = 2 ** 32


def _as_rows(values: Any, name: str) -> npt.NDArray[np.float64]:
    """Read-only (n, 3) float copy of *values*."""
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"'{name}' must be a list of numeric triples.") from e
    if arr.size == 0:
        arr = arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInputError(f"'{name}' must have shape (N, 3), got {arr.shape}.")
    arr.setflags(write=False)
    return arr


def _as_indexes(values: Any, vertex_count: int) -> npt.NDArray[np.uint32]:
    """Read-only uint32 copy of *values*, checked against *vertex_count*."""
    try:
        arr = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("'indexes' must be a flat list of integers.") from e
    if arr.size == 0:
        arr = np.zeros(0, dtype=np.uint32)
    if arr.ndim != 1 or arr.dtype.kind not in "iu":
        raise InvalidInputError(f"'indexes' must be a flat list of integers, got {arr.dtype} {arr.shape}.")
    if len(arr) % 3 != 0:
        raise InvalidInputError(f"'indexes' length {len(arr)} is not a multiple of 3.")
    if len(arr) and (arr.min() < 0 or arr.max() >= vertex_count):
        raise InvalidInputError(f"'indexes' must lie in [0, {vertex_count}).")
    out = arr.astype(np.uint32)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class MeshArtifact:
    """
    Positions, colors and triangle indices of a tessellated grid.

    Arrays are copied and made read-only on construction.
    """
    positions: npt.NDArray[np.float64]
    colors: npt.NDArray[np.float64]
    indexes: npt.NDArray[np.uint32]

    def __post_init__(self) -> None:
        positions = _as_rows(self.positions, "positions")
        colors = _as_rows(self.colors, "colors")
        if len(positions) != len(colors):
            raise InvalidInputError(
                f"positions and colors differ in length ({len(positions)} != {len(colors)})."
            )
        if len(positions) > UINT32_LIMIT:
            raise InvalidInputError(f"{len(positions)} vertices cannot be addressed with uint32 indexes.")
        indexes = _as_indexes(self.indexes, len(positions))

        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "indexes", indexes)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vertices={self.vertex_count}, triangles={self.triangle_count})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MeshArtifact):
            return NotImplemented
        return (
            np.array_equal(self.positions, other.positions)
            and np.array_equal(self.colors, other.colors)
            and np.array_equal(self.indexes, other.indexes)
        )

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indexes) // 3

    def triangles(self) -> npt.NDArray[np.uint32]:
        """Index triples, shape (triangle_count, 3)."""
        return self.indexes.reshape(-1, 3)

    def interleaved(self) -> npt.NDArray[np.float32]:
        """
        Vertex buffer with one [x, y, z, r, g, b] float32 row per vertex.

        This is the layout a GPU consumer uploads next to ``indexes``.
        """
        return np.ascontiguousarray(np.hstack([self.positions, self.colors]), dtype=np.float32)

    def to_dict(self) -> dict[str, list]:
        """Serialized record: 'positions', 'colors' and 'indexes'."""
        return {
            "positions": self.positions.tolist(),
            "colors": self.colors.tolist(),
            "indexes": self.indexes.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeshArtifact:
        """Rebuild an artifact from its serialized record."""
        if not isinstance(data, dict):
            raise InvalidInputError(f"Mesh record must be a mapping, got {type(data).__name__}.")
        missing = [key for key in ("positions", "colors", "indexes") if key not in data]
        if missing:
            raise InvalidInputError(f"Mesh record is missing {', '.join(missing)}.")
        return cls(
            positions=data["positions"],
            colors=data["colors"],
            indexes=data["indexes"],
        )
