"""
Input/Output Manager (JSON)
Handles saving and loading Mesh Artifacts to .json files.
"""
from __future__ import annotations

import json
import logging
import os
import time
from typing import Optional

from meshgradient.config import MESH_FILENAME_TEMPLATE, get_output_dir
from meshgradient.mesh.artifact import MeshArtifact

# Get module logger
logger = logging.getLogger(__name__)


class MeshIO:
    @staticmethod
    def mesh_filename(subdivisions: int, timestamp: Optional[int] = None) -> str:
        """
        File name of a saved mesh, e.g. 'mesh-1700000000-subdiv4.json'.

        Args:
            subdivisions: Subdivision count the mesh was tessellated with.
            timestamp: Unix time in seconds; defaults to now.
        """
        if timestamp is None:
            timestamp = int(time.time())
        return MESH_FILENAME_TEMPLATE.format(timestamp=int(timestamp), subdivisions=subdivisions)

    @staticmethod
    def save_mesh(artifact: MeshArtifact, filepath: str | os.PathLike) -> None:
        logger.info(f"Saving mesh to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(artifact.to_dict(), f, separators=(",", ":"))
        except Exception as e:
            logger.exception(f"Failed to save mesh: {e}")
            raise
        logger.debug(f"Wrote {artifact.vertex_count} vertices, {artifact.triangle_count} triangles.")

    @staticmethod
    def save_mesh_to_dir(
        artifact: MeshArtifact,
        subdivisions: int,
        directory: Optional[str | os.PathLike] = None,
    ) -> str:
        """
        Save under the timestamped default name.

        Args:
            artifact: Mesh to write.
            subdivisions: Subdivision count, recorded in the file name.
            directory: Target directory; defaults to the configured output dir.

        Returns:
            Path of the written file.
        """
        if directory is None:
            directory = get_output_dir()
        os.makedirs(directory, exist_ok=True)
        filepath = os.path.join(os.fspath(directory), MeshIO.mesh_filename(subdivisions))
        MeshIO.save_mesh(artifact, filepath)
        return filepath

    @staticmethod
    def load_mesh(filepath: str | os.PathLike) -> MeshArtifact:
        logger.info(f"Loading mesh from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.exception(f"Failed to read mesh '{filepath}': {e}")
            raise
        artifact = MeshArtifact.from_dict(data)
        logger.debug(f"Loaded {artifact!r}.")
        return artifact
