"""
The MODEL layer holds the editable control data: control points, the grid
that owns them, and the closed set of scalar fields a patch interpolates.
It has NO knowledge of drawing or of files.
"""
