"""
Configuration & Defaults
========================
Central registry for the constants shared by the core, the I/O layer and the
command line.

Exports:
    DEFAULT_GRID_WIDTH / DEFAULT_GRID_HEIGHT (int): Grid shape the editor starts with.
    DEFAULT_ROW_COLORS (tuple): One RGB color per grid row, cycled.
    DEFAULT_SUBDIVISIONS (int): Subdivision count used when none is given.
    MAX_EDITOR_SUBDIVISIONS (int): Upper end of the editor's subdivision slider.
    PREVIEW_CURVE_STEPS (int): Samples per patch edge in the live preview.
    PREVIEW_INTERIOR_SAMPLES (int): Dots per patch side in the live preview.
    MESH_FILENAME_TEMPLATE (str): Name pattern of saved mesh artifacts.
    get_output_dir(): Directory mesh artifacts are written to by default.
"""
import os
from pathlib import Path


def get_output_dir() -> str:
    """
    Directory for generated meshes.

    Honors ``MESHGRADIENT_OUTPUT_DIR`` and falls back to the current working
    directory, which is where the editor has always dropped its files.
    """
    override = os.environ.get("MESHGRADIENT_OUTPUT_DIR")
    if override:
        return str(Path(override).expanduser())
    return os.getcwd()


# Grid the editor opens with: black, blue and green rows.
DEFAULT_GRID_WIDTH: int = 3
DEFAULT_GRID_HEIGHT: int = 3
DEFAULT_ROW_COLORS: tuple[tuple[float, float, float], ...] = (
    (0.0, 0.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 1.0, 0.0),
)

DEFAULT_SUBDIVISIONS: int = 0
MAX_EDITOR_SUBDIVISIONS: int = 20

PREVIEW_CURVE_STEPS: int = 100
PREVIEW_INTERIOR_SAMPLES: int = 20

MESH_FILENAME_TEMPLATE: str = "mesh-{timestamp}-subdiv{subdivisions}.json"
