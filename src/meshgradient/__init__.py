"""
meshgradient: smooth, vertex-colored gradient meshes from a sparse grid of
control points, built from bicubic Hermite (Ferguson) patches.
"""
from importlib.metadata import PackageNotFoundError, version

from meshgradient.errors import IndexOutOfRangeError, InvalidInputError, MeshGradientError
from meshgradient.mesh.artifact import MeshArtifact
from meshgradient.mesh.tessellator import tessellate
from meshgradient.model.control_grid import ControlGrid, ControlPoint
from meshgradient.model.fields import Field
from meshgradient.patch.patch import Patch, PatchSamples

try:
    __version__ = version("meshgradient")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ControlGrid",
    "ControlPoint",
    "Field",
    "IndexOutOfRangeError",
    "InvalidInputError",
    "MeshArtifact",
    "MeshGradientError",
    "Patch",
    "PatchSamples",
    "tessellate",
]
