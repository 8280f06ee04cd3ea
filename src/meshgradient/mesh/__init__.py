"""
Tessellation of a control grid into a triangulated, vertex-colored mesh.
"""
