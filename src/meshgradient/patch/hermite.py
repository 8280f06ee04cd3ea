"""
Hermite Basis
=============
The fixed basis shared by every patch and the kernels that evaluate a
scalar field from its 4x4 coefficient matrix.

For a coefficient matrix G the field matrix is ``M = H^T @ G^T @ H`` and

    field(s, t) = (M @ cubic(s)) . cubic(t)

with ``cubic(x) = [x^3, x^2, x, 1]``. ``H @ cubic(x)`` gives the four
Hermite blending functions: two end-point weights and two tangent weights.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numba as nb

if TYPE_CHECKING:
    import numpy.typing as npt


HERMITE_BASIS = np.array([
    [ 2.0, -3.0,  0.0,  1.0],
    [-2.0,  3.0,  0.0,  0.0],
    [ 1.0, -2.0,  1.0,  0.0],
    [ 1.0, -1.0,  0.0,  0.0],
], dtype=np.float64)
HERMITE_BASIS.setflags(write=False)


def cubic(t: float) -> npt.NDArray[np.float64]:
    """Cubic parameter vector [t^3, t^2, t, 1]."""
    return np.array([t * t * t, t * t, t, 1.0], dtype=np.float64)


def blending_weights(t: float) -> npt.NDArray[np.float64]:
    """
    Hermite blending functions at *t*.

    Returns:
        Array [h0, h1, h2, h3]: start and end point weights followed by the
        start and end tangent weights.
    """
    return HERMITE_BASIS @ cubic(t)


def field_matrix(coefficients: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Combine a coefficient matrix with the basis.

    Args:
        coefficients: (4, 4) geometry coefficient matrix G of one field.

    Returns:
        (4, 4) matrix M = H^T @ G^T @ H.
    """
    return np.ascontiguousarray(HERMITE_BASIS.T @ coefficients.T @ HERMITE_BASIS)


def evaluate(matrix: npt.NDArray[np.float64], s: float, t: float) -> float:
    """Evaluate (M @ cubic(s)) . cubic(t) for one parameter pair."""
    return float((matrix @ cubic(s)) @ cubic(t))


@nb.njit(cache=True)
def _sample_field_kernel(
    matrix: npt.NDArray[np.float64],
    s_values: npt.NDArray[np.float64],
    t_values: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Evaluate a field on the tensor grid of *s_values* x *t_values*.

    Args:
        matrix: (4, 4) field matrix M.
        s_values: (n,) first parameters.
        t_values: (m,) second parameters.

    Returns:
        (n, m) array, entry [i, j] = field(s_values[i], t_values[j]).
    """
    n_s = s_values.shape[0]
    n_t = t_values.shape[0]
    out = np.empty((n_s, n_t), dtype=np.float64)

    for i in range(n_s):
        s = s_values[i]
        s2 = s * s
        s3 = s2 * s
        # row = M @ cubic(s)
        r0 = matrix[0, 0] * s3 + matrix[0, 1] * s2 + matrix[0, 2] * s + matrix[0, 3]
        r1 = matrix[1, 0] * s3 + matrix[1, 1] * s2 + matrix[1, 2] * s + matrix[1, 3]
        r2 = matrix[2, 0] * s3 + matrix[2, 1] * s2 + matrix[2, 2] * s + matrix[2, 3]
        r3 = matrix[3, 0] * s3 + matrix[3, 1] * s2 + matrix[3, 2] * s + matrix[3, 3]

        for j in range(n_t):
            t = t_values[j]
            t2 = t * t
            out[i, j] = r0 * t2 * t + r1 * t2 + r2 * t + r3

    return out


def sample_field(
    matrix: npt.NDArray[np.float64],
    s_values: npt.ArrayLike,
    t_values: npt.ArrayLike,
) -> npt.NDArray[np.float64]:
    """
    Evaluate a field over every (s, t) pair of two parameter lists.

    Returns:
        (len(s_values), len(t_values)) array of field values.
    """
    return _sample_field_kernel(
        np.ascontiguousarray(matrix, dtype=np.float64),
        np.ascontiguousarray(s_values, dtype=np.float64).reshape(-1),
        np.ascontiguousarray(t_values, dtype=np.float64).reshape(-1),
    )
