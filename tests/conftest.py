import logging

import pytest

from meshgradient.model.control_grid import ControlGrid

BLACK = (0.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("meshgradient")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def default_grid():
    """The editor's starting grid: black, blue and green rows."""
    return ControlGrid.from_row_colors(3, 3, [BLACK, BLUE, GREEN])


@pytest.fixture
def deformed_grid():
    """3x3 grid with distinct colors and a few points dragged off the lattice."""
    colors = [(i / 8.0, 1.0 - i / 8.0, (i * 3 % 9) / 8.0) for i in range(9)]
    grid = ControlGrid(3, 3, colors)
    grid.translate(0, 0, (0.05, 0.02))
    grid.set_position(1, 1, (0.6, 0.4))
    grid.set_position(2, 1, (0.95, 0.55))
    grid.translate(1, 2, (-0.1, 0.03))
    return grid
