"""Core classes for projection, geometry and obstacle evaluation.

- CoordinateProjector: WGS84 <-> NZTM2000 planar grid
- PlanarCalculator: Grid bearings, destinations and distances
- Coordinate parser: Free-form latitude/longitude strings to decimal degrees
- GeometryKernel: Point-in-polygon and interpolation primitives
- SurfaceElevationEvaluator: Surface elevation at a planar point
- ObstacleClassifier: Critical / Not critical / Undetermined per obstacle
"""

from aerodrome_surfaces.core.coordinate_parser import (
    ParsedCoordinate,
    parse_coordinate,
    parse_coordinate_detailed,
    parse_latitude,
    parse_longitude,
)
from aerodrome_surfaces.core.geometry import GeometryKernel
from aerodrome_surfaces.core.obstacle_classifier import EvaluationStats, ObstacleClassifier
from aerodrome_surfaces.core.planar_calculator import PlanarCalculator
from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.core.surface_evaluator import (
    InterpolationStrategy,
    ProjectedSurface,
    SurfaceElevationEvaluator,
)

__all__ = [
    # Projection
    "CoordinateProjector",
    "PlanarCalculator",
    # Parsing
    "ParsedCoordinate",
    "parse_coordinate",
    "parse_coordinate_detailed",
    "parse_latitude",
    "parse_longitude",
    # Geometry
    "GeometryKernel",
    # Evaluation
    "InterpolationStrategy",
    "ProjectedSurface",
    "SurfaceElevationEvaluator",
    "EvaluationStats",
    "ObstacleClassifier",
]
