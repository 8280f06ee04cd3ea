"""
Control Grid
============
Owns the user-placed control points a gradient mesh is fitted through.

Points are stored row-major and addressed by (column, row). A point's
position and color are editable; its tangents are fixed when the grid is
built and depend on the grid shape only.

Classes:
    ControlPoint: Position, color and the two read-only tangents.
    ControlGrid: The width x height arrangement of control points.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Sequence

import numpy as np

from meshgradient.errors import IndexOutOfRangeError, InvalidInputError
from meshgradient.patch.patch import Patch

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _as_vector(values: Sequence[float] | npt.ArrayLike, size: int, name: str) -> npt.NDArray[np.float64]:
    """Copy *values* into a float vector of length *size*."""
    try:
        vector = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be numeric, got {values!r}") from e
    if vector.shape != (size,):
        raise InvalidInputError(f"{name} must have {size} components, got shape {vector.shape}.")
    return vector


def _is_integer(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def estimate_tangents(width: int, height: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Tangent vectors shared by every point of a width x height grid.

    The u tangent spans one column and the v tangent one row of the unit
    square, so an undeformed grid interpolates linearly.

    Args:
        width: Number of grid columns (>= 2).
        height: Number of grid rows (>= 2).

    Returns:
        Tuple of (u_tangent, v_tangent).
    """
    if width < 2 or height < 2:
        raise InvalidInputError(f"Grid must be at least 2x2, got {width}x{height}.")
    u_tangent = np.array([1.0 / (width - 1), 0.0], dtype=np.float64)
    v_tangent = np.array([0.0, 1.0 / (height - 1)], dtype=np.float64)
    return u_tangent, v_tangent


class ControlPoint:
    """
    A user-placed anchor of the gradient mesh.
    """
    def __init__(
        self,
        position: Sequence[float] | npt.ArrayLike,
        color: Sequence[float] | npt.ArrayLike,
        u_tangent: Sequence[float] | npt.ArrayLike,
        v_tangent: Sequence[float] | npt.ArrayLike,
    ) -> None:
        """
        Initialize the control point.

        Args:
            position: Location [x, y] in the normalized grid space.
            color: RGB color, each channel in [0, 1].
            u_tangent: Tangent along the grid columns.
            v_tangent: Tangent along the grid rows.
        """
        self._position = _as_vector(position, 2, "position")
        self._color = _as_vector(color, 3, "color")
        self._u_tangent = _as_vector(u_tangent, 2, "u_tangent")
        self._v_tangent = _as_vector(v_tangent, 2, "v_tangent")
        self._u_tangent.setflags(write=False)
        self._v_tangent.setflags(write=False)

    def __repr__(self) -> str:
        """String representation of the control point."""
        return f"{self.__class__.__name__}(position={self._position}, color={self._color})"

    @property
    def position(self) -> npt.NDArray[np.float64]:
        return self._position

    @position.setter
    def position(self, value: Sequence[float] | npt.ArrayLike) -> None:
        self._position = _as_vector(value, 2, "position")

    @property
    def color(self) -> npt.NDArray[np.float64]:
        return self._color

    @color.setter
    def color(self, value: Sequence[float] | npt.ArrayLike) -> None:
        self._color = _as_vector(value, 3, "color")

    @property
    def u_tangent(self) -> npt.NDArray[np.float64]:
        return self._u_tangent

    @property
    def v_tangent(self) -> npt.NDArray[np.float64]:
        return self._v_tangent

    def copy(self) -> ControlPoint:
        return ControlPoint(self._position, self._color, self._u_tangent, self._v_tangent)


class ControlGrid:
    """
    Row-major grid of control points.

    Patch (w, h) is spanned by the points at (w, h), (w, h+1), (w+1, h) and
    (w+1, h+1), so a grid defines (width-1) x (height-1) patches.
    """
    def __init__(
        self,
        width: int,
        height: int,
        colors: Sequence[Sequence[float]] | npt.ArrayLike,
    ) -> None:
        """
        Build the grid with evenly spaced points over the unit square.

        Args:
            width: Number of columns (>= 2).
            height: Number of rows (>= 2).
            colors: width*height RGB colors in row-major order.

        Raises:
            InvalidInputError: On bad dimensions or a color count mismatch.
        """
        if not (_is_integer(width) and _is_integer(height)):
            raise InvalidInputError(f"Grid dimensions must be integers, got {width!r}x{height!r}.")
        width, height = int(width), int(height)
        u_tangent, v_tangent = estimate_tangents(width, height)

        try:
            colors = list(colors)
        except TypeError as e:
            raise InvalidInputError(f"Colors must be a sequence of RGB triples, got {colors!r}.") from e
        if len(colors) != width * height:
            raise InvalidInputError(
                f"A {width}x{height} grid needs {width * height} colors, got {len(colors)}."
            )

        self._width = width
        self._height = height
        self.points: list[ControlPoint] = []
        for index, color in enumerate(colors):
            column, row = index % width, index // width
            self.points.append(ControlPoint(
                position=(column / (width - 1), row / (height - 1)),
                color=color,
                u_tangent=u_tangent,
                v_tangent=v_tangent,
            ))

        logger.debug(f"Built {width}x{height} control grid ({self.patch_count} patches).")

    @classmethod
    def uniform(cls, width: int, height: int, color: Sequence[float]) -> ControlGrid:
        """Grid with every point set to the same *color*."""
        return cls(width, height, [color] * (width * height))

    @classmethod
    def from_row_colors(
        cls,
        width: int,
        height: int,
        row_colors: Sequence[Sequence[float]],
    ) -> ControlGrid:
        """Grid whose rows take successive entries of *row_colors*, cycling."""
        if not row_colors:
            raise InvalidInputError("At least one row color is required.")
        colors = [row_colors[row % len(row_colors)] for row in range(height) for _ in range(width)]
        return cls(width, height, colors)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self._width}, height={self._height})"

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return iter(self.points)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def patch_count(self) -> int:
        return (self._width - 1) * (self._height - 1)

    def index_of(self, w: int, h: int) -> int:
        """Row-major offset of the point at column *w*, row *h*."""
        if not (_is_integer(w) and _is_integer(h)):
            raise InvalidInputError(f"Grid indices must be integers, got ({w!r}, {h!r}).")
        if not (0 <= w < self._width and 0 <= h < self._height):
            raise IndexOutOfRangeError(
                f"Control point ({w}, {h}) is outside the {self._width}x{self._height} grid."
            )
        return h * self._width + w

    def point_at(self, w: int, h: int) -> ControlPoint:
        return self.points[self.index_of(w, h)]

    def patch_at(self, w: int, h: int) -> Patch:
        """Patch spanned by the cell at column *w*, row *h*."""
        return Patch.from_grid(self, w, h)

    def patches(self) -> Iterator[Patch]:
        """All patches, column by column (w outer, h inner)."""
        for w in range(self._width - 1):
            for h in range(self._height - 1):
                yield Patch.from_grid(self, w, h)

    # --- Editing -------------------------------------------------------

    def set_position(self, w: int, h: int, position: Sequence[float]) -> None:
        self.point_at(w, h).position = position

    def translate(self, w: int, h: int, delta: Sequence[float]) -> None:
        """Move the point at (w, h) by *delta*; positions are not clamped."""
        point = self.point_at(w, h)
        point.position = point.position + _as_vector(delta, 2, "delta")

    def set_color(self, w: int, h: int, color: Sequence[float]) -> None:
        self.point_at(w, h).color = color

    def copy(self) -> ControlGrid:
        """Independent grid with the same shape, positions and colors."""
        clone = ControlGrid(self._width, self._height, [point.color for point in self.points])
        for source, target in zip(self.points, clone.points):
            target.position = source.position
        return clone
