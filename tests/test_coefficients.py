import numpy as np
import pytest

from meshgradient.errors import InvalidInputError
from meshgradient.model.control_grid import ControlGrid
from meshgradient.model.fields import COLOR_FIELDS, POSITION_FIELDS, Field
from meshgradient.patch.coefficients import (
    coefficient_matrix,
    color_coefficients,
    geometric_coefficients,
)


@pytest.fixture
def corners():
    colors = [
        (0.1, 0.2, 0.3), (0.4, 0.5, 0.6), (0.0, 0.0, 0.0),
        (0.7, 0.8, 0.9), (1.0, 0.9, 0.8), (0.0, 0.0, 0.0),
    ]
    grid = ControlGrid(3, 2, colors)
    return grid.point_at(0, 0), grid.point_at(0, 1), grid.point_at(1, 0), grid.point_at(1, 1)


def test_position_x_coefficients(corners):
    # p00=(0, 0), p01=(0, 1), p10=(0.5, 0), p11=(0.5, 1); u tangent (0.5, 0)
    expected = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [0.5, 0.5, 0.0, 0.0],
        [0.5, 0.5, 0.0, 0.0],
        [0.5, 0.5, 0.0, 0.0],
    ]).T
    np.testing.assert_allclose(geometric_coefficients(*corners, Field.POSITION_X), expected)


def test_position_y_coefficients(corners):
    # v tangent (0, 1)
    expected = np.array([
        [0.0, 1.0, 1.0, 1.0],
        [0.0, 1.0, 1.0, 1.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ]).T
    np.testing.assert_allclose(geometric_coefficients(*corners, Field.POSITION_Y), expected)


def test_position_coefficients_follow_dragged_points(corners):
    p00, p01, p10, p11 = corners
    p11.position = (0.8, 0.6)
    g = geometric_coefficients(p00, p01, p10, p11, Field.POSITION_X)
    # corner values sit in the transposed top-left block
    assert g[1, 1] == pytest.approx(0.8)
    g = geometric_coefficients(p00, p01, p10, p11, Field.POSITION_Y)
    assert g[1, 1] == pytest.approx(0.6)


def test_color_coefficients_have_no_slopes(corners):
    expected = np.array([
        [0.2, 0.8, 0.0, 0.0],
        [0.5, 0.9, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ]).T
    np.testing.assert_allclose(color_coefficients(*corners, Field.COLOR_G), expected)


def test_dispatch_by_field(corners):
    for field in POSITION_FIELDS:
        np.testing.assert_array_equal(
            coefficient_matrix(*corners, field), geometric_coefficients(*corners, field)
        )
    for field in COLOR_FIELDS:
        np.testing.assert_array_equal(
            coefficient_matrix(*corners, field), color_coefficients(*corners, field)
        )


def test_builders_reject_the_wrong_field_kind(corners):
    with pytest.raises(InvalidInputError):
        geometric_coefficients(*corners, Field.COLOR_R)
    with pytest.raises(InvalidInputError):
        color_coefficients(*corners, Field.POSITION_Y)


def test_field_projection(corners):
    p00, p01, _, _ = corners
    assert Field.COLOR_B.value_of(p01) == pytest.approx(0.9)
    assert Field.POSITION_Y.value_of(p01) == pytest.approx(1.0)
    assert Field.POSITION_X.u_slope(p00) == pytest.approx(0.5)
    assert Field.POSITION_Y.v_slope(p00) == pytest.approx(1.0)
    assert Field.COLOR_R.u_slope(p00) == 0.0
    assert Field.COLOR_R.v_slope(p00) == 0.0
