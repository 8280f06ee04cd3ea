"""
Command-line interface.

Usage:
    python -m meshgradient [--width W] [--height H] [--colors FILE]
                           [--subdivisions S] [--output-dir DIR | --output FILE]
                           [--log-level LEVEL] [--log-file FILE]

Builds a control grid, tessellates it and writes the mesh as JSON. Without
--colors each grid row takes the next of the default row colors. The path of
the written file is the only output on stdout; log records go to stderr.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from meshgradient.config import (
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_ROW_COLORS,
    DEFAULT_SUBDIVISIONS,
    MAX_EDITOR_SUBDIVISIONS,
)
from meshgradient.errors import MeshGradientError
from meshgradient.io import MeshIO
from meshgradient.logging_config import setup_logging
from meshgradient.mesh.tessellator import tessellate
from meshgradient.model.control_grid import ControlGrid

logger = logging.getLogger("meshgradient.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meshgradient",
        description="Tessellate a grid of colored control points into a gradient mesh.",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_GRID_WIDTH, help="grid columns (>= 2)")
    parser.add_argument("--height", type=int, default=DEFAULT_GRID_HEIGHT, help="grid rows (>= 2)")
    parser.add_argument(
        "--colors",
        metavar="FILE",
        help="JSON file with a flat list of width*height [r, g, b] colors, row-major",
    )
    parser.add_argument("--subdivisions", type=int, default=DEFAULT_SUBDIVISIONS, help="extra samples per patch edge")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--output-dir", metavar="DIR", help="directory for the timestamped mesh file")
    target.add_argument("--output", metavar="FILE", help="exact output path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", metavar="FILE")
    return parser


def load_grid(width: int, height: int, colors_path: Optional[str]) -> ControlGrid:
    if colors_path is None:
        return ControlGrid.from_row_colors(width, height, DEFAULT_ROW_COLORS)
    with open(colors_path, "r", encoding="utf-8") as f:
        colors = json.load(f)
    return ControlGrid(width, height, colors)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    # stdout carries only the written path
    setup_logging(args.log_level, args.log_file, stream=sys.stderr)

    if args.subdivisions > MAX_EDITOR_SUBDIVISIONS:
        logger.warning(
            f"{args.subdivisions} subdivisions is above the editor's range of "
            f"{MAX_EDITOR_SUBDIVISIONS}; the mesh may be large."
        )

    try:
        grid = load_grid(args.width, args.height, args.colors)
        artifact = tessellate(grid, args.subdivisions)
        if args.output:
            MeshIO.save_mesh(artifact, args.output)
            path = args.output
        else:
            path = MeshIO.save_mesh_to_dir(artifact, args.subdivisions, args.output_dir)
    except (MeshGradientError, OSError, json.JSONDecodeError) as e:
        logger.error(f"{e}")
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
