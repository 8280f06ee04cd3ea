"""
Error Taxonomy
==============
Contract violations raised by the patch and tessellation core.

Both errors are programming errors on the caller's side. They are raised
where they are detected and never clamped away.
"""


class MeshGradientError(Exception):
    """Base class for all errors raised by meshgradient."""


class InvalidInputError(MeshGradientError, ValueError):
    """Grid dimensions, color counts, sample counts or mesh data are malformed."""


class IndexOutOfRangeError(MeshGradientError, IndexError):
    """A control-point or patch index lies outside the grid."""
