"""Surface elevation evaluation at planar query points.

The surface polygon is projected to the planar grid once (ProjectedSurface)
and then queried many times. A query first tests the horizontal footprint;
points outside return None without any interpolation.

Inside the footprint the elevation comes from one of three strategies:
- CENTERLINE (default for VSS and DEP OIS): linear between the base-edge
  midpoint and the end-edge midpoint, lateral position ignored. Which
  corners form each edge, and how their elevations combine, comes from
  the SurfaceKind vertex layout.
- PLANE_FIT: plane through the first base corner and both end corners.
- BILINEAR: bilinear blend over the four corners.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from math import isnan
from typing import Optional

from aerodrome_surfaces.core.geometry import GeometryKernel
from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.model.geo_point import PlanarPoint
from aerodrome_surfaces.model.surface import SurfaceKind, SurfacePolygon

logger = logging.getLogger(__name__)


class InterpolationStrategy(Enum):
    """How the surface elevation is interpolated inside the footprint."""

    CENTERLINE = "centerline"
    PLANE_FIT = "plane_fit"
    BILINEAR = "bilinear"


@dataclass(frozen=True)
class ProjectedSurface:
    """A SurfacePolygon with its corners projected to the planar grid.

    Attributes:
        kind: Surface type (vertex layout)
        corners: Four (x, y, z) corners in ring order
        base_elevation: Elevation along the base edge
        end_elevation: Elevation along the far edge
    """

    kind: SurfaceKind
    corners: tuple[tuple[float, float, float], ...]
    base_elevation: float
    end_elevation: float

    @property
    def ring(self) -> list[tuple[float, float]]:
        """Closed (x, y) ring for point-in-polygon tests."""
        xy = [(c[0], c[1]) for c in self.corners]
        return xy + [xy[0]]

    def _edge_mid(self, indices: tuple[int, int]) -> tuple[float, float]:
        a, b = (self.corners[i] for i in indices)
        return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)

    @property
    def base_mid(self) -> tuple[float, float]:
        """Midpoint of the base edge."""
        return self._edge_mid(self.kind.layout.base_indices)

    @property
    def end_mid(self) -> tuple[float, float]:
        """Midpoint of the far edge."""
        return self._edge_mid(self.kind.layout.end_indices)

    def contains(self, point: PlanarPoint) -> bool:
        """Horizontal footprint membership (undefined exactly on an edge)."""
        return GeometryKernel.point_in_polygon(point.xy, self.ring)


class SurfaceElevationEvaluator:
    """Answers "what is the surface elevation here?" for a planar point.

    Example:
        evaluator = SurfaceElevationEvaluator()
        projected = evaluator.prepare(vss)
        elev = evaluator.elevation_at(PlanarPoint(x=1570000, y=5180000), projected)
    """

    def __init__(self, projector: Optional[CoordinateProjector] = None) -> None:
        self.projector = projector or CoordinateProjector.default()

    def prepare(self, surface: SurfacePolygon) -> ProjectedSurface:
        """Project a surface's corners to the planar grid once for many queries."""
        corners = []
        for vertex in surface.corners:
            p = self.projector.project(vertex)
            corners.append((p.x, p.y, vertex.elevation))
        return ProjectedSurface(
            kind=surface.kind,
            corners=tuple(corners),
            base_elevation=surface.base_elevation,
            end_elevation=surface.end_elevation,
        )

    def elevation_at(
        self,
        point: PlanarPoint,
        surface: SurfacePolygon | ProjectedSurface,
        kind: Optional[SurfaceKind] = None,
        strategy: InterpolationStrategy = InterpolationStrategy.CENTERLINE,
    ) -> Optional[float]:
        """Surface elevation at a planar point.

        Args:
            point: Query point in the planar grid
            surface: Surface polygon, or one already prepared
            kind: Override the vertex layout (defaults to the surface's own kind)
            strategy: Interpolation strategy inside the footprint

        Returns:
            Elevation in meters, or None if the point is outside the footprint
            or the interpolation is degenerate.

        The base and end midpoints lie on the footprint edge, where membership
        is undefined; the exact base/end elevation there is a property of
        GeometryKernel.centerline_z, not of this method.
        """
        projected = surface if isinstance(surface, ProjectedSurface) else self.prepare(surface)
        if kind is not None and kind is not projected.kind:
            elevations = [c[2] for c in projected.corners]
            projected = ProjectedSurface(
                kind=kind,
                corners=projected.corners,
                base_elevation=kind.layout.edge_elevation(elevations, kind.layout.base_indices),
                end_elevation=kind.layout.edge_elevation(elevations, kind.layout.end_indices),
            )

        if not projected.contains(point):
            return None

        if strategy is InterpolationStrategy.PLANE_FIT:
            elevation = self.plane_elevation_at(point, projected)
        elif strategy is InterpolationStrategy.BILINEAR:
            elevation = self.bilinear_elevation_at(point, projected)
        else:
            elevation = self.centerline_elevation_at(point, projected)

        if elevation is None or isnan(elevation):
            logger.warning(
                f"Degenerate {projected.kind.display_name} geometry ({strategy.value}) at "
                f"({point.x:.2f}, {point.y:.2f}) - elevation undetermined"
            )
            return None
        return elevation

    @staticmethod
    def centerline_elevation_at(point: PlanarPoint, projected: ProjectedSurface) -> Optional[float]:
        """Centerline-linear elevation (no footprint test)."""
        return GeometryKernel.centerline_z(
            point.x,
            point.y,
            base_mid=projected.base_mid,
            end_mid=projected.end_mid,
            base_z=projected.base_elevation,
            end_z=projected.end_elevation,
        )

    @staticmethod
    def plane_elevation_at(point: PlanarPoint, projected: ProjectedSurface) -> Optional[float]:
        """Plane through the first base corner and both end corners (no footprint test)."""
        layout = projected.kind.layout
        p0 = projected.corners[layout.base_indices[0]]
        p1, p2 = (projected.corners[i] for i in layout.end_indices)
        return GeometryKernel.plane_fit_z(point.x, point.y, p0, p1, p2)

    @staticmethod
    def bilinear_elevation_at(point: PlanarPoint, projected: ProjectedSurface) -> Optional[float]:
        """Bilinear blend over the four corners (no footprint test)."""
        return GeometryKernel.bilinear_interpolation(point.x, point.y, projected.corners)

