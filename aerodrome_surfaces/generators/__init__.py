"""Protection surface construction.

Provides the SurfaceBuilder that turns runway parameters into 3D polygons:
- VSS: 60 m before the threshold, strip-width base, splayed sides rising at VPA - 1.12°
- DEP OIS: 300 m base at the departure end, 15° splay, 5000 m at the climb gradient
"""

from aerodrome_surfaces.generators.surface_builder import SplayAngles, SurfaceBuilder

__all__ = [
    "SurfaceBuilder",
    "SplayAngles",
]
