"""SurfaceBuilder - Constructs VSS and DEP OIS polygons from runway parameters.

**Visual Segment Surface (build_vss):**
    1. Project threshold and runway end; centerline bearing θ = atan2(Δx, Δy).
    2. Splay angles from the base splay atan(0.15), perturbed by the offset:
       offset < 0 widens the left side, offset > 0 the right side.
    3. Origin 60m before the threshold (opposite the runway direction).
    4. Length to OCH = OCH / tan(VPA - 1.12°).
    5. Base corners ± strip/2 perpendicular to the centerline; end corners
       reached from each base corner along the splayed direction, away from
       the runway, by length / cos(splay).
    Ring: [leftBase, leftEnd, rightEnd, rightBase, leftBase]
    Elevations: base = runway elevation, end = runway elevation + OCH.

**Departure OIS (build_dep_ois):**
    Base origin at the runway end, moved out by the clearway length. Base
    corners ± 150m, end corners 5000m out along θ ± 15° (offset-perturbed
    the same way as the VSS).
    Ring: [baseRight, leftEnd, rightEnd, baseLeft, baseRight]
    Elevations: base = DER elevation + 5m, end = base + 5000m × 2.5%.

Inputs are validated first; a ValidationError means nothing was built.
"""

import logging
from dataclasses import dataclass
from math import cos, radians, tan
from typing import Optional

from shapely.geometry import Polygon

from aerodrome_surfaces.constants import DepOisConfig, VSSConfig
from aerodrome_surfaces.core.planar_calculator import PlanarCalculator
from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.model.errors import FieldIssue, ValidationError
from aerodrome_surfaces.model.geo_point import PlanarPoint
from aerodrome_surfaces.model.runway_input import DepartureGeometryInput, RunwayGeometryInput
from aerodrome_surfaces.model.surface import SurfaceKind, SurfacePolygon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplayAngles:
    """Left and right side splay in degrees, relative to the centerline bearing.

    Attributes:
        left_deg: Left side splay (negative = rotated anticlockwise)
        right_deg: Right side splay (positive = rotated clockwise)
    """

    left_deg: float
    right_deg: float


class SurfaceBuilder:
    """Builds protection surface polygons.

    Example:
        builder = SurfaceBuilder()
        vss = builder.build_vss(RunwayGeometryInput(...))
        vss.as_triples()  # [[lat, lon, elev], ...] x 5
    """

    def __init__(self, projector: Optional[CoordinateProjector] = None) -> None:
        self.projector = projector or CoordinateProjector.default()

    @staticmethod
    def splay_angles(offset_deg: float, base_splay_deg: float) -> SplayAngles:
        """Apply the offset rule to a symmetric base splay.

        Args:
            offset_deg: Course offset from the centerline in degrees
            base_splay_deg: Symmetric splay of an un-offset surface

        Returns:
            SplayAngles with the offset added on the side it points to.
        """
        if offset_deg < 0:
            return SplayAngles(left_deg=offset_deg - base_splay_deg, right_deg=base_splay_deg)
        if offset_deg > 0:
            return SplayAngles(left_deg=-base_splay_deg, right_deg=offset_deg + base_splay_deg)
        return SplayAngles(left_deg=-base_splay_deg, right_deg=base_splay_deg)

    @staticmethod
    def vss_length_m(och_m: float, vertical_path_angle_deg: float) -> float:
        """Horizontal distance from the VSS origin to where it reaches OCH.

        Raises:
            ValidationError: If the VSS slope is not within (0, 90) degrees.
        """
        slope_deg = vertical_path_angle_deg - VSSConfig.SLOPE_CORRECTION_DEG
        if not 0 < slope_deg < 90:
            raise ValidationError(
                [
                    FieldIssue(
                        field="vertical_path_angle_deg",
                        value=vertical_path_angle_deg,
                        reason=f"VSS slope {slope_deg:.2f}° must be in (0, 90)",
                    )
                ]
            )
        return och_m / tan(radians(slope_deg))

    def build_vss(self, params: RunwayGeometryInput) -> SurfacePolygon:
        """Construct the Visual Segment Surface.

        Args:
            params: Runway geometry (threshold elevation = runway elevation)

        Returns:
            Closed 5-vertex SurfacePolygon of kind VSS.

        Raises:
            ValidationError: If any parameter is invalid (nothing is built).
        """
        params.validate()

        threshold_xy = self.projector.project(params.threshold)
        end_xy = self.projector.project(params.runway_end)
        bearing = PlanarCalculator.bearing_deg(start=threshold_xy, end=end_xy)

        splay = self.splay_angles(offset_deg=params.offset_angle_deg, base_splay_deg=VSSConfig.BASE_SPLAY_DEG)
        length = self.vss_length_m(och_m=params.och_m, vertical_path_angle_deg=params.vertical_path_angle_deg)

        origin = PlanarCalculator.destination(threshold_xy, bearing + 180, VSSConfig.ORIGIN_OFFSET_M)
        half_strip = params.strip_width_m / 2
        left_base = PlanarCalculator.destination(origin, bearing + 90, half_strip)
        right_base = PlanarCalculator.destination(origin, bearing - 90, half_strip)

        # End corners extend away from the runway (approach side)
        left_end = PlanarCalculator.destination(
            left_base, bearing + splay.left_deg + 180, length / cos(radians(splay.left_deg))
        )
        right_end = PlanarCalculator.destination(
            right_base, bearing + splay.right_deg + 180, length / cos(radians(splay.right_deg))
        )

        base_elev = params.runway_elevation_m
        end_elev = params.runway_elevation_m + params.och_m
        surface = self._assemble(
            kind=SurfaceKind.VSS,
            corners=[(left_base, base_elev), (left_end, end_elev), (right_end, end_elev), (right_base, base_elev)],
            bearing=bearing,
            length=length,
        )
        logger.info(
            f"Built VSS: bearing={bearing:.2f}°, splay=({splay.left_deg:.2f}°, {splay.right_deg:.2f}°), "
            f"length={length:.1f}m, base={base_elev:.2f}m, end={end_elev:.2f}m"
        )
        return surface

    def build_dep_ois(self, params: DepartureGeometryInput) -> SurfacePolygon:
        """Construct the Departure Obstacle Identification Surface.

        Args:
            params: Departure geometry (end elevation = DER elevation)

        Returns:
            Closed 5-vertex SurfacePolygon of kind DEP_OIS.

        Raises:
            ValidationError: If any parameter is invalid (nothing is built).
        """
        params.validate()

        start_xy = self.projector.project(params.start)
        end_xy = self.projector.project(params.end)
        bearing = PlanarCalculator.bearing_deg(start=start_xy, end=end_xy)

        base_origin = end_xy
        if params.clearway_length_m > 0:
            base_origin = PlanarCalculator.destination(end_xy, bearing, params.clearway_length_m)

        base_left = PlanarCalculator.destination(base_origin, bearing + 90, DepOisConfig.BASE_HALF_WIDTH_M)
        base_right = PlanarCalculator.destination(base_origin, bearing - 90, DepOisConfig.BASE_HALF_WIDTH_M)

        splay = self.splay_angles(offset_deg=params.offset_angle_deg, base_splay_deg=DepOisConfig.BASE_SPLAY_DEG)
        left_end = PlanarCalculator.destination(base_left, bearing + splay.left_deg, DepOisConfig.LENGTH_M)
        right_end = PlanarCalculator.destination(base_right, bearing + splay.right_deg, DepOisConfig.LENGTH_M)

        base_elev = params.base_elevation_m
        end_elev = params.end_elevation_m
        surface = self._assemble(
            kind=SurfaceKind.DEP_OIS,
            corners=[(base_right, base_elev), (left_end, end_elev), (right_end, end_elev), (base_left, base_elev)],
            bearing=bearing,
            length=DepOisConfig.LENGTH_M,
        )
        logger.info(
            f"Built DEP OIS: bearing={bearing:.2f}°, clearway={params.clearway_length_m:.1f}m, "
            f"base={base_elev:.2f}m, end={end_elev:.2f}m"
        )
        return surface

    def _assemble(
        self,
        kind: SurfaceKind,
        corners: list[tuple[PlanarPoint, float]],
        bearing: float,
        length: float,
    ) -> SurfacePolygon:
        """Unproject planar corners and close the ring."""
        vertices = [self.projector.unproject(point, elevation=elev) for point, elev in corners]
        vertices.append(vertices[0])

        footprint = [point.xy for point, _ in corners]
        if not Polygon(footprint).is_valid:
            logger.warning(f"{kind.display_name} footprint is self-intersecting: {footprint}")

        return SurfacePolygon(
            kind=kind,
            vertices=tuple(vertices),
            centerline_bearing_deg=bearing,
            length_m=length,
        )
