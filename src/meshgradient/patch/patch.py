"""
Patch Evaluator
===============
One bicubic Hermite patch, fitted through four control points.

Parameter convention: ``u`` runs from p00 toward p10 (along the grid columns,
the direction of the u tangent) and ``v`` runs from p00 toward p01 (along
the grid rows). In terms of :func:`meshgradient.patch.hermite.evaluate`,
``field(u, v) = evaluate(M, s=v, t=u)``. With this naming every corner
reproduces its control point exactly:

    position(0, 0) == p00    position(1, 0) == p10
    position(0, 1) == p01    position(1, 1) == p11
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from meshgradient.config import PREVIEW_CURVE_STEPS, PREVIEW_INTERIOR_SAMPLES
from meshgradient.errors import IndexOutOfRangeError, InvalidInputError
from meshgradient.model.fields import COLOR_FIELDS, POSITION_FIELDS, Field
from meshgradient.patch.coefficients import coefficient_matrix
from meshgradient.patch.hermite import evaluate, field_matrix, sample_field

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshgradient.model.control_grid import ControlGrid, ControlPoint


@dataclass(frozen=True)
class PatchSamples:
    """Positions (n, 2) and colors (n, 3) sampled from a patch, in step."""
    positions: npt.NDArray[np.float64]
    colors: npt.NDArray[np.float64]

    def __len__(self) -> int:
        return len(self.positions)


class Patch:
    """
    Bicubic Hermite patch over one grid cell.

    The corners are copied on construction and the coefficient and field
    matrices of all five fields are computed once, so later edits to the
    grid do not leak into an existing patch.
    """
    EDGES = ("top", "bottom", "leading", "trailing")

    def __init__(
        self,
        p00: ControlPoint,
        p01: ControlPoint,
        p10: ControlPoint,
        p11: ControlPoint,
        w: int = 0,
        h: int = 0,
    ) -> None:
        """
        Initialize the patch.

        Args:
            p00, p01, p10, p11: Corner points at (w, h), (w, h+1), (w+1, h), (w+1, h+1).
            w: Grid column of the cell.
            h: Grid row of the cell.
        """
        self.w = w
        self.h = h
        self.corners: tuple[ControlPoint, ...] = (p00.copy(), p01.copy(), p10.copy(), p11.copy())

        self._coefficients: dict[Field, npt.NDArray[np.float64]] = {}
        self._matrices: dict[Field, npt.NDArray[np.float64]] = {}
        for field in Field:
            g = coefficient_matrix(*self.corners, field)
            g.setflags(write=False)
            m = field_matrix(g)
            m.setflags(write=False)
            self._coefficients[field] = g
            self._matrices[field] = m

    @classmethod
    def from_grid(cls, grid: ControlGrid, w: int, h: int) -> Patch:
        """Patch of grid cell (w, h)."""
        if not (0 <= w < grid.width - 1 and 0 <= h < grid.height - 1):
            raise IndexOutOfRangeError(
                f"Patch ({w}, {h}) is outside the {grid.width - 1}x{grid.height - 1} patch grid."
            )
        return cls(
            grid.point_at(w, h),
            grid.point_at(w, h + 1),
            grid.point_at(w + 1, h),
            grid.point_at(w + 1, h + 1),
            w=w,
            h=h,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(w={self.w}, h={self.h})"

    def coefficients(self, field: Field) -> npt.NDArray[np.float64]:
        """Geometry coefficient matrix G of *field* (read-only)."""
        return self._coefficients[field]

    def matrix(self, field: Field) -> npt.NDArray[np.float64]:
        """Field matrix M = H^T G^T H of *field* (read-only)."""
        return self._matrices[field]

    # --- Point evaluation ---------------------------------------------

    def field(self, field: Field, u: float, v: float) -> float:
        return evaluate(self._matrices[field], v, u)

    def position(self, u: float, v: float) -> npt.NDArray[np.float64]:
        """Raw position [x, y] at (u, v), in the grid's unit square."""
        return np.array([self.field(f, u, v) for f in POSITION_FIELDS], dtype=np.float64)

    def color(self, u: float, v: float) -> npt.NDArray[np.float64]:
        """Color [r, g, b] at (u, v)."""
        return np.array([self.field(f, u, v) for f in COLOR_FIELDS], dtype=np.float64)

    # --- Grid sampling ------------------------------------------------

    def sample(self, u_values: npt.ArrayLike, v_values: npt.ArrayLike) -> PatchSamples:
        """
        Sample positions and colors on the tensor grid of u and v values.

        Samples are ordered row-major with v outer and u inner, i.e. sample
        ``i * len(u_values) + j`` lies at ``(u_values[j], v_values[i])``.

        Args:
            u_values: Parameters along the grid columns.
            v_values: Parameters along the grid rows.

        Returns:
            PatchSamples with positions (n, 2) and colors (n, 3).
        """
        positions = np.column_stack([
            sample_field(self._matrices[f], v_values, u_values).ravel() for f in POSITION_FIELDS
        ])
        colors = np.column_stack([
            sample_field(self._matrices[f], v_values, u_values).ravel() for f in COLOR_FIELDS
        ])
        return PatchSamples(positions=positions, colors=colors)

    # --- Live preview -------------------------------------------------

    def boundary_curves(self, steps: int = PREVIEW_CURVE_STEPS) -> dict[str, PatchSamples]:
        """
        The four edge curves of the patch as colored polylines.

        Args:
            steps: Line segments per edge (>= 1); each curve has steps+1 samples.

        Returns:
            Mapping of edge name to samples: 'top' (v=0), 'bottom' (v=1),
            'leading' (u=0) and 'trailing' (u=1).
        """
        if steps < 1:
            raise InvalidInputError(f"steps must be >= 1, got {steps}.")
        params = np.arange(steps + 1, dtype=np.float64) / steps
        return {
            "top": self.sample(params, [0.0]),
            "bottom": self.sample(params, [1.0]),
            "leading": self.sample([0.0], params),
            "trailing": self.sample([1.0], params),
        }

    def interior_samples(self, count: int = PREVIEW_INTERIOR_SAMPLES) -> PatchSamples:
        """
        A count x count dot grid at parameters k / count, k in [0, count).

        The far edges (u=1, v=1) are left to the neighbouring patch.
        """
        if count < 1:
            raise InvalidInputError(f"count must be >= 1, got {count}.")
        params = np.arange(count, dtype=np.float64) / count
        return self.sample(params, params)
