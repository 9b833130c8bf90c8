"""Coordinate projection between WGS84 and the planar working grid.

All distances, bearings and interpolation run in NZTM2000 (EPSG:2193), a
transverse Mercator grid in meters. This module is the only place that talks
to pyproj.

The projection is 2D: elevation is never transformed, callers carry it
through unchanged.
"""

from math import isfinite
from typing import Optional

import pyproj

from aerodrome_surfaces.constants import ProjectionConfig
from aerodrome_surfaces.core.planar_calculator import PlanarCalculator
from aerodrome_surfaces.model.errors import ProjectionError
from aerodrome_surfaces.model.geo_point import GeoPoint, PlanarPoint, is_finite_number


class CoordinateProjector:
    """Bidirectional WGS84 <-> planar grid conversion.

    Holds nothing but the two pyproj transformers, so one instance can be
    shared freely (pyproj transformers are safe to use from multiple threads).

    Example:
        projector = CoordinateProjector.default()
        p = projector.to_planar(lat=-43.4875, lon=172.5322)
        back = projector.to_geographic(x=p.x, y=p.y)
    """

    _default: Optional["CoordinateProjector"] = None

    def __init__(
        self,
        projected_crs: str = ProjectionConfig.PROJECTED_CRS,
        geographic_crs: str = ProjectionConfig.GEOGRAPHIC_CRS,
    ) -> None:
        """Build forward and inverse transformers.

        Args:
            projected_crs: Projected CRS definition (proj string or EPSG code)
            geographic_crs: Geographic CRS definition
        """
        geographic = pyproj.CRS(geographic_crs)
        projected = pyproj.CRS(projected_crs)
        # always_xy: inputs/outputs are (lon, lat) and (easting, northing)
        self._forward = pyproj.Transformer.from_crs(geographic, projected, always_xy=True)
        self._inverse = pyproj.Transformer.from_crs(projected, geographic, always_xy=True)
        self.projected_crs = projected

    @classmethod
    def default(cls) -> "CoordinateProjector":
        """Shared projector for the configured NZTM2000 grid."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    def to_planar(self, lat: float, lon: float) -> PlanarPoint:
        """Project a geographic coordinate to the planar grid.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            PlanarPoint in meters.

        Raises:
            ProjectionError: If the input or the projected result is not finite.
        """
        if not (is_finite_number(lat) and is_finite_number(lon)):
            raise ProjectionError(f"Cannot project non-finite coordinate lat={lat!r}, lon={lon!r}")
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise ProjectionError(f"Coordinate out of range: lat={lat}, lon={lon}")

        x, y = self._forward.transform(float(lon), float(lat))
        if not (isfinite(x) and isfinite(y)):
            raise ProjectionError(f"Projection of lat={lat}, lon={lon} produced non-finite grid coordinates")
        return PlanarPoint(x=float(x), y=float(y))

    def to_geographic(self, x: float, y: float, elevation: float = 0.0) -> GeoPoint:
        """Convert planar grid coordinates back to WGS84.

        Args:
            x: Easting in meters
            y: Northing in meters
            elevation: Passed through untouched onto the returned point

        Returns:
            GeoPoint with the given elevation.

        Raises:
            ProjectionError: If the input or the result is not finite.
        """
        if not (is_finite_number(x) and is_finite_number(y)):
            raise ProjectionError(f"Cannot unproject non-finite grid coordinate x={x!r}, y={y!r}")

        lon, lat = self._inverse.transform(float(x), float(y))
        if not (isfinite(lat) and isfinite(lon)):
            raise ProjectionError(f"Inverse projection of x={x}, y={y} produced non-finite coordinates")
        return GeoPoint(lat=float(lat), lon=float(lon), elevation=elevation)

    def project(self, point: GeoPoint) -> PlanarPoint:
        """Project a GeoPoint (elevation is dropped)."""
        return self.to_planar(lat=point.lat, lon=point.lon)

    def unproject(self, point: PlanarPoint, elevation: float = 0.0) -> GeoPoint:
        """Inverse of project(), attaching the given elevation."""
        return self.to_geographic(x=point.x, y=point.y, elevation=elevation)

    def runway_bearing_deg(self, threshold: GeoPoint, runway_end: GeoPoint) -> float:
        """Grid bearing of the runway centerline from threshold to runway end.

        Returns:
            Bearing in degrees (0-360, clockwise from grid North).
        """
        return PlanarCalculator.bearing_deg(start=self.project(threshold), end=self.project(runway_end))

    @staticmethod
    def in_operational_region(lat: float, lon: float) -> bool:
        """True if the coordinate lies where the grid is intended to be used."""
        lat_min, lat_max = ProjectionConfig.OPERATIONAL_LAT_RANGE
        lon_min, lon_max = ProjectionConfig.OPERATIONAL_LON_RANGE
        return lat_min <= lat <= lat_max and lon_min <= lon <= lon_max
