"""GeoPoint and PlanarPoint - The geometry atoms of surface evaluation.

A GeoPoint is a WGS84 coordinate with elevation. A PlanarPoint is the same
location expressed in the projected (NZTM2000) metre grid. All distance,
bearing and interpolation math happens on PlanarPoints; GeoPoints are what
callers hand in and get back.

Used by:
- RunwayGeometryInput (threshold / runway end)
- SurfacePolygon (ordered 3D vertices)
- Obstacle (candidate position)
"""

from dataclasses import dataclass
from math import isfinite
from numbers import Real


@dataclass(frozen=True)
class GeoPoint:
    """A geographic point with elevation.

    Attributes:
        lat: Latitude in decimal degrees (WGS84, -90..90)
        lon: Longitude in decimal degrees (WGS84, -180..180)
        elevation: Elevation in meters above the vertical datum

    Example:
        threshold = GeoPoint(lat=-43.4875, lon=172.5322, elevation=37.0)
    """

    lat: float
    lon: float
    elevation: float = 0.0

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON order."""
        return (self.lon, self.lat)

    @property
    def is_finite(self) -> bool:
        """True if latitude, longitude and elevation are all finite numbers."""
        return all(is_finite_number(v) for v in (self.lat, self.lon, self.elevation))

    def with_elevation(self, elevation: float) -> "GeoPoint":
        """Copy of this point at a different elevation."""
        return GeoPoint(lat=self.lat, lon=self.lon, elevation=elevation)

    def as_triple(self) -> list[float]:
        """Return [lat, lon, elevation] - the polygon vertex exchange shape."""
        return [self.lat, self.lon, self.elevation]

    def __repr__(self) -> str:
        return f"GeoPoint(lat={_fmt(self.lat, 8)}, lon={_fmt(self.lon, 8)}, elev={_fmt(self.elevation, 2)}m)"


@dataclass(frozen=True)
class PlanarPoint:
    """A point in the projected metre grid (easting x, northing y)."""

    x: float
    y: float

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"PlanarPoint(x={self.x:.3f}, y={self.y:.3f})"


def is_finite_number(value: object) -> bool:
    """True for finite real numbers, numpy scalars included (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return isfinite(value)


def _fmt(value: object, decimals: int) -> str:
    return f"{value:.{decimals}f}" if is_finite_number(value) else repr(value)
