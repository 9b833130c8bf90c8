"""Tests for SurfaceBuilder - VSS and DEP OIS construction.

Focus on:
- Vertex count, ring order and corner elevations
- Splay rule for offset approaches
- Footprint validity (convex, non-self-intersecting) checked with Shapely
- Validation failures raised before any geometry runs
- Length monotonicity with Hypothesis property-based testing
"""

from math import radians, sin, tan

import numpy as np
import pytest
from hypothesis import assume, given, settings, strategies as st
from shapely.geometry import Polygon

from aerodrome_surfaces.constants import DepOisConfig, VSSConfig
from aerodrome_surfaces.core.planar_calculator import PlanarCalculator
from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.generators.surface_builder import SplayAngles, SurfaceBuilder
from aerodrome_surfaces.model.errors import ValidationError
from aerodrome_surfaces.model.geo_point import GeoPoint
from aerodrome_surfaces.model.runway_input import DepartureGeometryInput, RunwayGeometryInput
from aerodrome_surfaces.model.surface import SurfaceKind, SurfacePolygon


def _is_convex(polygon: Polygon) -> bool:
    return polygon.is_valid and polygon.area == pytest.approx(polygon.convex_hull.area, rel=1e-9)


# =============================================================================
# SPLAY ANGLES
# =============================================================================


class TestSplayAngles:
    """Offset rule applied to a symmetric base splay."""

    def test_zero_offset_is_symmetric(self) -> None:
        assert SurfaceBuilder.splay_angles(offset_deg=0.0, base_splay_deg=8.0) == SplayAngles(-8.0, 8.0)

    def test_negative_offset_widens_left(self) -> None:
        """offset < 0: left = offset - base, right = +base."""
        assert SurfaceBuilder.splay_angles(offset_deg=-5.0, base_splay_deg=8.0) == SplayAngles(-13.0, 8.0)

    def test_positive_offset_widens_right(self) -> None:
        """offset > 0: right = offset + base, left = -base."""
        assert SurfaceBuilder.splay_angles(offset_deg=5.0, base_splay_deg=8.0) == SplayAngles(-8.0, 13.0)

    def test_vss_base_splay_is_fifteen_percent(self) -> None:
        """atan(0.15) = 8.5308°."""
        assert VSSConfig.BASE_SPLAY_DEG == pytest.approx(8.53076561, abs=1e-8)


# =============================================================================
# VSS
# =============================================================================


class TestBuildVss:
    """Visual Segment Surface construction."""

    def test_simple_vss_vertices_and_elevations(self, vss_surface: SurfacePolygon) -> None:
        """5 vertices (closed ring), base at 10m, end at 10 + 152.4m."""
        triples = vss_surface.as_triples()
        assert len(triples) == 5
        assert triples[0] == triples[4]
        assert vss_surface.kind is SurfaceKind.VSS
        assert vss_surface.corner("leftBase").elevation == 10.0
        assert vss_surface.corner("rightBase").elevation == 10.0
        assert vss_surface.corner("leftEnd").elevation == pytest.approx(162.4)
        assert vss_surface.corner("rightEnd").elevation == pytest.approx(162.4)
        assert vss_surface.base_elevation == 10.0
        assert vss_surface.end_elevation == pytest.approx(162.4)

    def test_simple_vss_footprint_is_convex(self, vss_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        footprint = vss_surface.footprint(projector)
        assert footprint.is_valid
        assert _is_convex(footprint)

    def test_length_from_och_and_vpa(self, vss_surface: SurfacePolygon) -> None:
        """Length = OCH / tan(VPA - 1.12°) ≈ 4643m."""
        expected = 152.4 / tan(radians(3.0 - 1.12))
        assert vss_surface.length_m == pytest.approx(expected)
        assert 4600 < vss_surface.length_m < 4700

    def test_extends_away_from_runway(self, vss_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Runway points south, so the end corners are north of the threshold."""
        threshold = projector.to_planar(lat=-43.0, lon=172.0)
        left_end = projector.project(vss_surface.corner("leftEnd"))
        right_end = projector.project(vss_surface.corner("rightEnd"))
        assert left_end.y > threshold.y + 4000
        assert right_end.y > threshold.y + 4000

    def test_base_width_and_origin(self, vss_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Base corners are strip width apart, centred 60m before the threshold."""
        left = projector.project(vss_surface.corner("leftBase"))
        right = projector.project(vss_surface.corner("rightBase"))
        threshold = projector.to_planar(lat=-43.0, lon=172.0)
        origin = PlanarCalculator.midpoint(left, right)

        assert PlanarCalculator.distance_m(left, right) == pytest.approx(280.0, abs=1e-3)
        assert PlanarCalculator.distance_m(origin, threshold) == pytest.approx(60.0, abs=1e-3)

    def test_end_width_from_splay(self, vss_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Each side widens by length × 0.15."""
        left = projector.project(vss_surface.corner("leftEnd"))
        right = projector.project(vss_surface.corner("rightEnd"))
        expected = 280.0 + 2 * vss_surface.length_m * 0.15
        assert PlanarCalculator.distance_m(left, right) == pytest.approx(expected, abs=1e-2)

    def test_left_base_is_left_when_looking_out(
        self, vss_surface: SurfacePolygon, projector: CoordinateProjector
    ) -> None:
        """Facing north (away from a southbound runway), leftBase is west."""
        left = projector.project(vss_surface.corner("leftBase"))
        right = projector.project(vss_surface.corner("rightBase"))
        assert left.x < right.x

    def test_offset_widens_one_side_only(self, builder: SurfaceBuilder, vss_input: RunwayGeometryInput) -> None:
        """A negative offset moves leftEnd outward and leaves rightEnd alone."""
        plain = builder.build_vss(vss_input)
        offset = builder.build_vss(
            RunwayGeometryInput(
                threshold=vss_input.threshold,
                runway_end=vss_input.runway_end,
                strip_width_m=vss_input.strip_width_m,
                och_m=vss_input.och_m,
                vertical_path_angle_deg=vss_input.vertical_path_angle_deg,
                offset_angle_deg=-10.0,
            )
        )
        assert offset.corner("rightEnd").lat == pytest.approx(plain.corner("rightEnd").lat, abs=1e-9)
        assert offset.corner("rightEnd").lon == pytest.approx(plain.corner("rightEnd").lon, abs=1e-9)
        assert offset.corner("leftEnd").lon < plain.corner("leftEnd").lon

    def test_ils_offset_is_negated(self, builder: SurfaceBuilder, vss_input: RunwayGeometryInput) -> None:
        """from_ils_offset(+5) builds the same surface as offset -5."""
        ils = RunwayGeometryInput.from_ils_offset(
            threshold=vss_input.threshold,
            runway_end=vss_input.runway_end,
            strip_width_m=vss_input.strip_width_m,
            och_m=vss_input.och_m,
            vertical_path_angle_deg=vss_input.vertical_path_angle_deg,
            ils_offset_deg=5.0,
        )
        assert ils.offset_angle_deg == -5.0
        direct = RunwayGeometryInput(
            threshold=vss_input.threshold,
            runway_end=vss_input.runway_end,
            strip_width_m=vss_input.strip_width_m,
            och_m=vss_input.och_m,
            vertical_path_angle_deg=vss_input.vertical_path_angle_deg,
            offset_angle_deg=-5.0,
        )
        assert builder.build_vss(ils).as_triples() == builder.build_vss(direct).as_triples()

    def test_feet_och(self, builder: SurfaceBuilder, vss_input: RunwayGeometryInput) -> None:
        """500ft OCH equals 152.4m."""
        params = RunwayGeometryInput.from_feet_och(
            threshold=vss_input.threshold,
            runway_end=vss_input.runway_end,
            strip_width_m=280.0,
            och_ft=500.0,
            vertical_path_angle_deg=3.0,
        )
        assert params.och_m == pytest.approx(152.4)
        assert builder.build_vss(params).end_elevation == pytest.approx(162.4)

    def test_vpa_at_correction_is_rejected(self, builder: SurfaceBuilder, vss_input: RunwayGeometryInput) -> None:
        """VPA = 1.12° makes the VSS slope zero."""
        params = RunwayGeometryInput(
            threshold=vss_input.threshold,
            runway_end=vss_input.runway_end,
            strip_width_m=280.0,
            och_m=152.4,
            vertical_path_angle_deg=1.12,
        )
        with pytest.raises(ValidationError) as exc_info:
            builder.build_vss(params)
        assert exc_info.value.fields == ["vertical_path_angle_deg"]

    def test_every_bad_field_is_reported(self, builder: SurfaceBuilder) -> None:
        """Non-finite and out-of-domain fields are all listed, not just the first."""
        params = RunwayGeometryInput(
            threshold=GeoPoint(lat=float("nan"), lon=172.0, elevation=10.0),
            runway_end=GeoPoint(lat=-43.01, lon=172.0, elevation=10.0),
            strip_width_m=-1.0,
            och_m=float("inf"),
            vertical_path_angle_deg=3.0,
        )
        with pytest.raises(ValidationError) as exc_info:
            builder.build_vss(params)
        assert set(exc_info.value.fields) == {"threshold.lat", "strip_width_m", "och_m"}

    def test_coincident_threshold_and_end_rejected(self, builder: SurfaceBuilder) -> None:
        """A zero-length centerline has no bearing."""
        point = GeoPoint(lat=-43.0, lon=172.0, elevation=10.0)
        params = RunwayGeometryInput(
            threshold=point, runway_end=point, strip_width_m=280.0, och_m=152.4, vertical_path_angle_deg=3.0
        )
        with pytest.raises(ValidationError):
            builder.build_vss(params)

    def test_numpy_scalar_inputs_accepted(self, builder: SurfaceBuilder) -> None:
        """Values read through numpy (int64, float32) are valid numbers."""
        params = RunwayGeometryInput(
            threshold=GeoPoint(lat=np.float32(-43.0), lon=np.float32(172.0), elevation=np.int64(10)),
            runway_end=GeoPoint(lat=np.float64(-43.01), lon=np.float64(172.0), elevation=np.int64(10)),
            strip_width_m=np.int64(280),
            och_m=np.float32(152.4),
            vertical_path_angle_deg=np.float32(3.0),
        )
        params.validate()
        surface = builder.build_vss(params)
        assert surface.base_elevation == 10.0
        assert surface.end_elevation == pytest.approx(162.4, abs=1e-4)

    def test_vss_length_rejects_bad_slope(self) -> None:
        with pytest.raises(ValidationError):
            SurfaceBuilder.vss_length_m(och_m=100.0, vertical_path_angle_deg=1.0)

    @given(
        och=st.floats(min_value=30.0, max_value=600.0, allow_nan=False),
        vpa=st.floats(min_value=2.5, max_value=4.5, allow_nan=False),
        extra_och=st.floats(min_value=1.0, max_value=200.0, allow_nan=False),
        extra_vpa=st.floats(min_value=0.1, max_value=1.5, allow_nan=False),
    )
    @settings(max_examples=50)
    def test_length_monotonic(self, och: float, vpa: float, extra_och: float, extra_vpa: float) -> None:
        """Length grows with OCH and shrinks as the VPA steepens."""
        length = SurfaceBuilder.vss_length_m(och_m=och, vertical_path_angle_deg=vpa)
        assert SurfaceBuilder.vss_length_m(och_m=och + extra_och, vertical_path_angle_deg=vpa) > length
        assert SurfaceBuilder.vss_length_m(och_m=och, vertical_path_angle_deg=vpa + extra_vpa) < length

    @given(
        bearing_lat=st.floats(min_value=-0.02, max_value=0.02, allow_nan=False),
        bearing_lon=st.floats(min_value=-0.02, max_value=0.02, allow_nan=False),
        offset=st.floats(min_value=-20.0, max_value=20.0, allow_nan=False),
    )
    @settings(max_examples=30, deadline=None)
    def test_footprint_always_valid(self, bearing_lat: float, bearing_lon: float, offset: float) -> None:
        """Any runway direction and moderate offset yields a simple polygon."""
        assume(abs(bearing_lat) > 1e-4 or abs(bearing_lon) > 1e-4)
        projector = CoordinateProjector.default()
        params = RunwayGeometryInput(
            threshold=GeoPoint(lat=-43.0, lon=172.0, elevation=10.0),
            runway_end=GeoPoint(lat=-43.0 + bearing_lat, lon=172.0 + bearing_lon, elevation=10.0),
            strip_width_m=150.0,
            och_m=100.0,
            vertical_path_angle_deg=3.0,
            offset_angle_deg=offset,
        )
        surface = SurfaceBuilder(projector=projector).build_vss(params)
        assert surface.footprint(projector).is_valid


# =============================================================================
# DEP OIS
# =============================================================================


class TestBuildDepOis:
    """Departure Obstacle Identification Surface construction."""

    def test_vertices_and_elevations(self, dep_surface: SurfacePolygon) -> None:
        """Base at DER + 5m, end at base + 5000m × 2.5%."""
        assert len(dep_surface.as_triples()) == 5
        assert dep_surface.kind is SurfaceKind.DEP_OIS
        assert dep_surface.corner("baseRight").elevation == 15.0
        assert dep_surface.corner("baseLeft").elevation == 15.0
        assert dep_surface.corner("leftEnd").elevation == pytest.approx(140.0)
        assert dep_surface.corner("rightEnd").elevation == pytest.approx(140.0)
        assert dep_surface.base_elevation == 15.0
        assert dep_surface.end_elevation == pytest.approx(140.0)

    def test_footprint_is_convex(self, dep_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Ring order [baseRight, leftEnd, rightEnd, baseLeft] is a simple trapezoid."""
        footprint = dep_surface.footprint(projector)
        assert footprint.is_valid
        assert _is_convex(footprint)

    def test_base_centred_on_departure_end(self, dep_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Base is 300m wide and centred on the runway end when there is no clearway."""
        base_right = projector.project(dep_surface.corner("baseRight"))
        base_left = projector.project(dep_surface.corner("baseLeft"))
        der = projector.to_planar(lat=-43.01, lon=172.0)
        assert PlanarCalculator.distance_m(base_left, base_right) == pytest.approx(DepOisConfig.BASE_WIDTH_M, abs=1e-3)
        assert PlanarCalculator.distance_m(PlanarCalculator.midpoint(base_left, base_right), der) == pytest.approx(
            0.0, abs=1e-3
        )

    def test_end_width_from_fifteen_degree_splay(
        self, dep_surface: SurfacePolygon, projector: CoordinateProjector
    ) -> None:
        """Far edge width = 2 × (5000 sin 15° - 150)."""
        left_end = projector.project(dep_surface.corner("leftEnd"))
        right_end = projector.project(dep_surface.corner("rightEnd"))
        expected = 2 * (DepOisConfig.LENGTH_M * sin(radians(15.0)) - DepOisConfig.BASE_HALF_WIDTH_M)
        assert PlanarCalculator.distance_m(left_end, right_end) == pytest.approx(expected, abs=1e-2)

    def test_extends_beyond_departure_end(self, dep_surface: SurfacePolygon, projector: CoordinateProjector) -> None:
        """Southbound departure: the far edge is south of the runway end."""
        der = projector.to_planar(lat=-43.01, lon=172.0)
        assert projector.project(dep_surface.corner("leftEnd")).y < der.y - 4000
        assert projector.project(dep_surface.corner("rightEnd")).y < der.y - 4000

    def test_clearway_moves_base(
        self, builder: SurfaceBuilder, dep_input: DepartureGeometryInput, projector: CoordinateProjector
    ) -> None:
        """A 400m clearway moves the base 400m further along the centerline."""
        plain = builder.build_dep_ois(dep_input)
        with_clearway = builder.build_dep_ois(
            DepartureGeometryInput(start=dep_input.start, end=dep_input.end, clearway_length_m=400.0)
        )
        a = projector.project(plain.corner("baseRight"))
        b = projector.project(with_clearway.corner("baseRight"))
        assert PlanarCalculator.distance_m(a, b) == pytest.approx(400.0, abs=1e-3)
        assert b.y < a.y

    def test_negative_clearway_rejected(self, builder: SurfaceBuilder, dep_input: DepartureGeometryInput) -> None:
        with pytest.raises(ValidationError) as exc_info:
            builder.build_dep_ois(
                DepartureGeometryInput(start=dep_input.start, end=dep_input.end, clearway_length_m=-1.0)
            )
        assert exc_info.value.fields == ["clearway_length_m"]

    def test_offset_perturbs_splay(
        self, builder: SurfaceBuilder, dep_input: DepartureGeometryInput, projector: CoordinateProjector
    ) -> None:
        """A positive offset swings only the rightEnd corner, as for the VSS."""
        plain = builder.build_dep_ois(dep_input)
        offset = builder.build_dep_ois(
            DepartureGeometryInput(start=dep_input.start, end=dep_input.end, offset_angle_deg=10.0)
        )
        assert offset.corner("leftEnd").lat == pytest.approx(plain.corner("leftEnd").lat, abs=1e-9)
        assert offset.corner("leftEnd").lon == pytest.approx(plain.corner("leftEnd").lon, abs=1e-9)
        moved = PlanarCalculator.distance_m(
            projector.project(offset.corner("rightEnd")), projector.project(plain.corner("rightEnd"))
        )
        assert moved > 500.0

    def test_offset_too_large_rejected(self, builder: SurfaceBuilder, dep_input: DepartureGeometryInput) -> None:
        """Offset + 15° splay must stay below 90°."""
        with pytest.raises(ValidationError):
            builder.build_dep_ois(
                DepartureGeometryInput(start=dep_input.start, end=dep_input.end, offset_angle_deg=80.0)
            )
