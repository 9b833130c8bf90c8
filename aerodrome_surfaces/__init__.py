"""Aerodrome Surfaces - Obstacle evaluation against approach and departure surfaces.

Constructs the Visual Segment Surface (VSS) and the Departure Obstacle
Identification Surface (DEP OIS) for a runway and classifies obstacles as
critical when they penetrate the active surface:
- Planar math in NZTM2000 via pyproj (meters, grid bearings)
- Free-form coordinate parsing (decimal, DMS, DMM, compact notations)
- Centerline-linear, plane-fit and bilinear surface interpolation

Modules:
    core: Projection, coordinate parsing, geometry kernel, evaluation, classification
    model: Data structures (GeoPoint, RunwayGeometryInput, SurfacePolygon, Obstacle)
    generators: Surface construction (VSS, DEP OIS)
    io: Obstacle ingestion (rows, CSV, GeoJSON) and result formatting

Example:
    from aerodrome_surfaces.generators import SurfaceBuilder
    from aerodrome_surfaces.core import ObstacleClassifier
    from aerodrome_surfaces.io import ObstacleLoader
"""
