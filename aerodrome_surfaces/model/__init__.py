"""Data model classes for aerodrome surface evaluation.

Follows the separation of inputs, surfaces and results:
- GeoPoint / PlanarPoint: Geometry atoms (geographic and projected)
- RunwayGeometryInput: VSS construction parameters
- DepartureGeometryInput: DEP OIS construction parameters
- SurfaceKind / SurfacePolygon: Constructed surface and its vertex convention
- Obstacle: Candidate obstacle (name + position)
- Classification / EvaluationResult: Per-obstacle outcome
- Errors: ValidationError, ProjectionError, DegenerateGeometryError
"""

from aerodrome_surfaces.model.errors import (
    DegenerateGeometryError,
    FieldIssue,
    ProjectionError,
    SurfaceError,
    ValidationError,
)
from aerodrome_surfaces.model.geo_point import GeoPoint, PlanarPoint
from aerodrome_surfaces.model.obstacle import Classification, EvaluationResult, Obstacle
from aerodrome_surfaces.model.runway_input import DepartureGeometryInput, RunwayGeometryInput
from aerodrome_surfaces.model.surface import (
    ElevationRule,
    SurfaceKind,
    SurfacePolygon,
    VertexLayout,
)

__all__ = [
    "GeoPoint",
    "PlanarPoint",
    "RunwayGeometryInput",
    "DepartureGeometryInput",
    "ElevationRule",
    "VertexLayout",
    "SurfaceKind",
    "SurfacePolygon",
    "Obstacle",
    "Classification",
    "EvaluationResult",
    "SurfaceError",
    "FieldIssue",
    "ValidationError",
    "ProjectionError",
    "DegenerateGeometryError",
]
