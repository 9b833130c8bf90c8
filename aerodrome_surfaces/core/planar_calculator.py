"""Planar bearing and offset calculations in the projected grid.

Provides the grid helpers the SurfaceBuilder composes surfaces from:
- Bearing calculation (grid heading between two planar points)
- Destination calculation (point at bearing and distance)
- Distance and midpoint

All inputs are PlanarPoints in meters. Bearings are degrees clockwise from
grid North (0-360), so a bearing vector is (sin θ, cos θ).
"""

from math import atan2, cos, degrees, hypot, radians, sin

from aerodrome_surfaces.model.geo_point import PlanarPoint


class PlanarCalculator:
    """Static methods for Euclidean calculations on the planar grid."""

    @staticmethod
    def bearing_deg(start: PlanarPoint, end: PlanarPoint) -> float:
        """Calculate grid bearing from start to end.

        Args:
            start: Start point
            end: End point

        Returns:
            Bearing in degrees (0-360, clockwise from grid North).
        """
        return (degrees(atan2(end.x - start.x, end.y - start.y)) + 360) % 360

    @staticmethod
    def destination(start: PlanarPoint, bearing_deg: float, distance_m: float) -> PlanarPoint:
        """Point reached by travelling distance_m from start along bearing_deg.

        Negative distances travel in the opposite direction.
        """
        brng = radians(bearing_deg)
        return PlanarPoint(
            x=start.x + distance_m * sin(brng),
            y=start.y + distance_m * cos(brng),
        )

    @staticmethod
    def distance_m(a: PlanarPoint, b: PlanarPoint) -> float:
        return hypot(b.x - a.x, b.y - a.y)

    @staticmethod
    def midpoint(a: PlanarPoint, b: PlanarPoint) -> PlanarPoint:
        return PlanarPoint(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)
