"""
Mesh Tessellator
================
Samples every patch of a control grid on a regular grid and connects the
samples into triangles.

Each patch is sampled independently on a (steps+1) x (steps+1) grid with
``steps = subdivisions + 1``. Neighbouring patches therefore emit their
shared edge twice; vertices are not welded.
"""
from __future__ import annotations

import logging
import numbers
from typing import TYPE_CHECKING

import numpy as np

from meshgradient.errors import InvalidInputError
from meshgradient.mesh.artifact import UINT32_LIMIT, MeshArtifact

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshgradient.model.control_grid import ControlGrid

logger = logging.getLogger(__name__)


def vertex_count(width: int, height: int, subdivisions: int) -> int:
    """Vertices a width x height grid tessellates into."""
    return (width - 1) * (height - 1) * (subdivisions + 2) ** 2


def index_count(width: int, height: int, subdivisions: int) -> int:
    """Triangle indices a width x height grid tessellates into."""
    return (width - 1) * (height - 1) * (subdivisions + 1) ** 2 * 6


def to_output_space(raw: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Map raw positions from the unit square to output space.

    ``[0, 1]^2`` becomes ``[-1, 1]^2`` with the vertical axis flipped, and a
    zero z component is appended.

    Args:
        raw: (n, 2) positions.

    Returns:
        (n, 3) positions.
    """
    raw = np.asarray(raw, dtype=np.float64).reshape(-1, 2)
    out = np.zeros((len(raw), 3), dtype=np.float64)
    out[:, 0] = 2.0 * raw[:, 0] - 1.0
    out[:, 1] = -(2.0 * raw[:, 1] - 1.0)
    return out


def triangle_template(steps: int) -> npt.NDArray[np.int64]:
    """
    Local triangle indices of one patch sampled with *steps* cells per side.

    For the sample at row r, column c (``idx = r * (steps+1) + c``) each cell
    emits ``(idx(r+1,c), idx(r,c+1), idx(r,c))`` then
    ``(idx(r+1,c), idx(r+1,c+1), idx(r,c+1))``, cells in row-major order.

    Example, steps = 2:

        0 1 2
        3 4 5     ->  3 1 0  3 4 1  4 2 1  4 5 2  6 4 3 ...
        6 7 8
    """
    row_len = steps + 1
    r, c = np.meshgrid(np.arange(steps), np.arange(steps), indexing="ij")
    base = (r * row_len + c).ravel()
    return np.column_stack([
        base + row_len, base + 1, base,
        base + row_len, base + row_len + 1, base + 1,
    ]).ravel()


def tessellate(grid: ControlGrid, subdivisions: int) -> MeshArtifact:
    """
    Tessellate every patch of *grid* into one triangulated mesh.

    Patches are visited column by column (w outer, h inner). Within a patch,
    sample ``i * (steps+1) + j`` lies at ``u = j/steps, v = i/steps``.

    Args:
        grid: Control grid to tessellate. It is snapshotted first, so edits
            made after this call returns do not affect the artifact.
        subdivisions: Extra samples per patch edge (>= 0).

    Returns:
        A fresh MeshArtifact.

    Raises:
        InvalidInputError: If *subdivisions* is not a non-negative integer.
    """
    if isinstance(subdivisions, bool) or not isinstance(subdivisions, numbers.Integral):
        raise InvalidInputError(f"subdivisions must be an integer, got {subdivisions!r}.")
    if subdivisions < 0:
        raise InvalidInputError(f"subdivisions must be >= 0, got {subdivisions}.")

    subdivisions = int(subdivisions)
    expected_vertices = vertex_count(grid.width, grid.height, subdivisions)
    if expected_vertices > UINT32_LIMIT:
        raise InvalidInputError(
            f"{expected_vertices} vertices exceed the uint32 index range; lower the subdivisions."
        )

    snapshot = grid.copy()
    steps = subdivisions + 1
    params = np.arange(steps + 1, dtype=np.float64) / steps
    template = triangle_template(steps)

    logger.debug(
        f"Tessellating {snapshot.width}x{snapshot.height} grid "
        f"({snapshot.patch_count} patches) with {subdivisions} subdivisions."
    )

    positions: list[npt.NDArray[np.float64]] = []
    colors: list[npt.NDArray[np.float64]] = []
    indexes: list[npt.NDArray[np.int64]] = []
    index_start = 0

    for patch in snapshot.patches():
        samples = patch.sample(params, params)
        positions.append(to_output_space(samples.positions))
        colors.append(samples.colors)
        indexes.append(template + index_start)
        index_start += len(samples)

    artifact = MeshArtifact(
        positions=np.concatenate(positions),
        colors=np.concatenate(colors),
        indexes=np.concatenate(indexes).astype(np.uint32),
    )
    logger.info(
        f"Tessellated mesh: {artifact.vertex_count} vertices, {artifact.triangle_count} triangles."
    )
    return artifact
