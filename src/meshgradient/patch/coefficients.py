"""
Patch Coefficient Builder
=========================
Builds the 4x4 geometry coefficient matrix of one scalar field for the
patch bounded by four control points.

Corner naming follows the grid cell: p00 is (w, h), p01 is (w, h+1),
p10 is (w+1, h) and p11 is (w+1, h+1).
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from meshgradient.errors import InvalidInputError
from meshgradient.model.fields import Field

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshgradient.model.control_grid import ControlPoint


def geometric_coefficients(
    p00: ControlPoint,
    p01: ControlPoint,
    p10: ControlPoint,
    p11: ControlPoint,
    field: Field,
) -> npt.NDArray[np.float64]:
    """
    Coefficient matrix of a position axis: corner values plus tangent slopes.

    Args:
        p00, p01, p10, p11: Corner control points.
        field: Field.POSITION_X or Field.POSITION_Y.

    Returns:
        (4, 4) coefficient matrix G.
    """
    if not field.is_position:
        raise InvalidInputError(f"{field.name} is not a position axis.")

    val = field.value_of
    u = field.u_slope
    v = field.v_slope

    return np.array([
        [val(p00), val(p01), v(p00), v(p01)],
        [val(p10), val(p11), v(p10), v(p11)],
        [u(p00), u(p01), 0.0, 0.0],
        [u(p10), u(p11), 0.0, 0.0],
    ], dtype=np.float64).T


def color_coefficients(
    p00: ControlPoint,
    p01: ControlPoint,
    p10: ControlPoint,
    p11: ControlPoint,
    field: Field,
) -> npt.NDArray[np.float64]:
    """
    Coefficient matrix of a color channel: corner values, zero slopes.

    Without slope terms the channel blends the four corners with the Hermite
    end-point weights only, so it never leaves the corners' range.
    """
    if field.is_position:
        raise InvalidInputError(f"{field.name} is not a color channel.")

    val = field.value_of

    return np.array([
        [val(p00), val(p01), 0.0, 0.0],
        [val(p10), val(p11), 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ], dtype=np.float64).T


def coefficient_matrix(
    p00: ControlPoint,
    p01: ControlPoint,
    p10: ControlPoint,
    p11: ControlPoint,
    field: Field,
) -> npt.NDArray[np.float64]:
    """Coefficient matrix for any field."""
    if field.is_position:
        return geometric_coefficients(p00, p01, p10, p11, field)
    return color_coefficients(p00, p01, p10, p11, field)
