"""
Field Selector
==============
The five scalar fields a patch interpolates independently.

Each member knows which attribute and component of a control point feeds it,
so the coefficient builder never needs to branch on axis or channel names.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meshgradient.model.control_grid import ControlPoint


class Field(Enum):
    POSITION_X = ("position", 0)
    POSITION_Y = ("position", 1)
    COLOR_R = ("color", 0)
    COLOR_G = ("color", 1)
    COLOR_B = ("color", 2)

    def __init__(self, attribute: str, component: int) -> None:
        self.attribute = attribute
        self.component = component

    @property
    def is_position(self) -> bool:
        return self.attribute == "position"

    def value_of(self, point: ControlPoint) -> float:
        """Corner value of this field at *point*."""
        return float(getattr(point, self.attribute)[self.component])

    def u_slope(self, point: ControlPoint) -> float:
        """Component of the u tangent feeding this field (0 for colors)."""
        if not self.is_position:
            return 0.0
        return float(point.u_tangent[self.component])

    def v_slope(self, point: ControlPoint) -> float:
        """Component of the v tangent feeding this field (0 for colors)."""
        if not self.is_position:
            return 0.0
        return float(point.v_tangent[self.component])


POSITION_FIELDS: tuple[Field, Field] = (Field.POSITION_X, Field.POSITION_Y)
COLOR_FIELDS: tuple[Field, Field, Field] = (Field.COLOR_R, Field.COLOR_G, Field.COLOR_B)
