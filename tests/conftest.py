"""Shared pytest fixtures for aerodrome_surfaces tests.

Provides a real NZTM2000 projector and reusable runway/surface data.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Runway fixtures sit near Christchurch (lat -43, lon 172), inside the
    operational region of the NZTM2000 grid. The runway runs due south, so
    the VSS (approach side) extends north of the threshold and the DEP OIS
    extends south of the departure end. Grid convergence at lon 172 is under
    1°, so "north" in the grid is close to true north.
"""

from typing import Callable

import pytest

from aerodrome_surfaces.core.obstacle_classifier import ObstacleClassifier
from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.core.surface_evaluator import SurfaceElevationEvaluator
from aerodrome_surfaces.generators.surface_builder import SurfaceBuilder
from aerodrome_surfaces.model.geo_point import GeoPoint, PlanarPoint
from aerodrome_surfaces.model.obstacle import Obstacle
from aerodrome_surfaces.model.runway_input import DepartureGeometryInput, RunwayGeometryInput
from aerodrome_surfaces.model.surface import SurfacePolygon

# =============================================================================
# CORE FIXTURES
# =============================================================================


@pytest.fixture
def projector() -> CoordinateProjector:
    """Shared NZTM2000 projector."""
    return CoordinateProjector.default()


@pytest.fixture
def builder(projector: CoordinateProjector) -> SurfaceBuilder:
    return SurfaceBuilder(projector=projector)


@pytest.fixture
def evaluator(projector: CoordinateProjector) -> SurfaceElevationEvaluator:
    return SurfaceElevationEvaluator(projector=projector)


@pytest.fixture
def classifier(projector: CoordinateProjector) -> ObstacleClassifier:
    return ObstacleClassifier(projector=projector)


# =============================================================================
# RUNWAY / SURFACE FIXTURES
# =============================================================================


@pytest.fixture
def vss_input() -> RunwayGeometryInput:
    """Runway ~1.1km long running due south, threshold at 10m.

    OCH 152.4m (500ft), VPA 3.0° gives a VSS slope of 1.88° and a surface
    length of 152.4 / tan(1.88°) ≈ 4643m.
    """
    return RunwayGeometryInput(
        threshold=GeoPoint(lat=-43.0, lon=172.0, elevation=10.0),
        runway_end=GeoPoint(lat=-43.01, lon=172.0, elevation=10.0),
        strip_width_m=280.0,
        och_m=152.4,
        vertical_path_angle_deg=3.0,
        offset_angle_deg=0.0,
    )


@pytest.fixture
def vss_surface(builder: SurfaceBuilder, vss_input: RunwayGeometryInput) -> SurfacePolygon:
    """VSS built from vss_input: base 10m, end 162.4m."""
    return builder.build_vss(vss_input)


@pytest.fixture
def dep_input() -> DepartureGeometryInput:
    """Same runway flown southbound, departure end at 10m, no clearway.

    Base elevation = 10 + 5 = 15m, end elevation = 15 + 5000 * 2.5% = 140m.
    """
    return DepartureGeometryInput(
        start=GeoPoint(lat=-43.0, lon=172.0, elevation=10.0),
        end=GeoPoint(lat=-43.01, lon=172.0, elevation=10.0),
        clearway_length_m=0.0,
    )


@pytest.fixture
def dep_surface(builder: SurfaceBuilder, dep_input: DepartureGeometryInput) -> SurfacePolygon:
    """DEP OIS built from dep_input: base 15m, end 140m."""
    return builder.build_dep_ois(dep_input)


@pytest.fixture
def square_100m() -> list[tuple[float, float]]:
    """Axis-aligned 100m square, corners at (0,0) and (100,100)."""
    return [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0)]


# =============================================================================
# OBSTACLE FIXTURES
# =============================================================================


@pytest.fixture
def place_obstacle(projector: CoordinateProjector) -> Callable[..., Obstacle]:
    """Factory placing an obstacle at a planar grid position (unprojected to WGS84).

    Lets tests put obstacles a known distance along the surface centerline.
    """

    def _place(point: PlanarPoint, elevation: float, name: str = "OBS") -> Obstacle:
        return Obstacle(name=name, position=projector.unproject(point, elevation=elevation))

    return _place
