"""Configuration constants for Aerodrome Surfaces.

All configurable parameters are centralized here for easy tuning.
Values follow ICAO PANS-OPS conventions for the Visual Segment Surface
and the Departure Obstacle Identification Surface.

Classes:
    ProjectionConfig: Geographic and projected coordinate reference systems
    VSSConfig: Visual Segment Surface construction constants
    DepOisConfig: Departure OIS construction constants
    GeometryConfig: Numerical tolerances for the geometry kernel
    ObstacleConfig: Property aliases used when reading obstacle records
    UnitConfig: Unit conversion factors
"""

from math import atan, degrees


class ProjectionConfig:
    """Coordinate reference systems used for all planar math."""

    GEOGRAPHIC_CRS = "EPSG:4326"

    # NZTM2000 (EPSG:2193) spelled out so no CRS database lookup is needed
    PROJECTED_CRS_NAME = "EPSG:2193"
    PROJECTED_CRS = (
        "+proj=tmerc +lat_0=0 +lon_0=173 +k=0.9996 +x_0=1600000 +y_0=10000000 +datum=WGS84 +units=m +no_defs"
    )

    # Region the projection is intended for (New Zealand mainland and near islands)
    OPERATIONAL_LAT_RANGE = (-48.0, -34.0)
    OPERATIONAL_LON_RANGE = (166.0, 179.0)


class VSSConfig:
    """Visual Segment Surface constants."""

    # Side splay of 15% expressed as an angle: atan(0.15) = 8.53076561°
    BASE_SPLAY_DEG = degrees(atan(0.15))

    # VSS slope = VPA - 1.12°
    SLOPE_CORRECTION_DEG = 1.12

    # Surface origin sits this far before the threshold
    ORIGIN_OFFSET_M = 60.0


class DepOisConfig:
    """Departure Obstacle Identification Surface constants."""

    BASE_WIDTH_M = 300.0
    BASE_HALF_WIDTH_M = BASE_WIDTH_M / 2
    LENGTH_M = 5000.0
    BASE_SPLAY_DEG = 15.0
    CLIMB_GRADIENT_PCT = 2.5

    # Surface starts 5m above the departure end of the runway
    BASE_HEIGHT_M = 5.0


class GeometryConfig:
    """Numerical tolerances for the geometry kernel."""

    # Added to the edge dy in ray casting so horizontal edges never divide by zero
    EDGE_EPSILON = 1e-12

    # Below this |determinant| a plane/basis solve is treated as degenerate
    DETERMINANT_EPSILON = 1e-8


class ObstacleConfig:
    """Property names recognised when reading obstacle features."""

    NAME_KEYS = ("name", "Name", "NAME", "OBJECT_NAM")
    ELEVATION_KEYS = ("elev", "elevation", "ALT_m", "ALT", "Altitude", "ELEVATION", "HEIGHT")


class UnitConfig:
    """Unit conversion factors."""

    FEET_TO_METERS = 0.3048


assert 0 < VSSConfig.BASE_SPLAY_DEG < 90
assert 0 < DepOisConfig.BASE_SPLAY_DEG < 90
