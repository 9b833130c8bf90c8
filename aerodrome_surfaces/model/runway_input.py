"""Runway-anchored parameter sets consumed by the SurfaceBuilder.

Two parameter sets exist, one per surface:
- RunwayGeometryInput: Visual Segment Surface (approach side of a threshold)
- DepartureGeometryInput: Departure OIS (beyond the departure end)

Both validate themselves before any geometry runs. validate() collects every
invalid field and raises a single ValidationError listing them all.
"""

from dataclasses import dataclass

from aerodrome_surfaces.constants import DepOisConfig, UnitConfig, VSSConfig
from aerodrome_surfaces.model.errors import FieldIssue, ValidationError
from aerodrome_surfaces.model.geo_point import GeoPoint, is_finite_number


def _check_finite(issues: list[FieldIssue], field: str, value: object) -> bool:
    """Append an issue unless value is a finite real number. Returns validity."""
    if not is_finite_number(value):
        issues.append(FieldIssue(field=field, value=value, reason="must be a finite number"))
        return False
    return True


def _check_point(issues: list[FieldIssue], field: str, point: GeoPoint) -> None:
    lat_ok = _check_finite(issues, f"{field}.lat", point.lat)
    lon_ok = _check_finite(issues, f"{field}.lon", point.lon)
    _check_finite(issues, f"{field}.elevation", point.elevation)
    if lat_ok and not -90 <= point.lat <= 90:
        issues.append(FieldIssue(field=f"{field}.lat", value=point.lat, reason="must be within -90..90"))
    if lon_ok and not -180 <= point.lon <= 180:
        issues.append(FieldIssue(field=f"{field}.lon", value=point.lon, reason="must be within -180..180"))


def _check_distinct(issues: list[FieldIssue], field: str, a: GeoPoint, b: GeoPoint) -> None:
    if a.lat_lon == b.lat_lon:
        issues.append(FieldIssue(field=field, value=a.lat_lon, reason="start and end coincide (zero-length centerline)"))


def _check_offset(issues: list[FieldIssue], offset_deg: float, base_splay_deg: float) -> None:
    if _check_finite(issues, "offset_angle_deg", offset_deg) and abs(offset_deg) + base_splay_deg >= 90:
        issues.append(
            FieldIssue(
                field="offset_angle_deg",
                value=offset_deg,
                reason=f"offset plus {base_splay_deg:.2f}° splay must stay below 90°",
            )
        )


@dataclass(frozen=True)
class RunwayGeometryInput:
    """Parameters for Visual Segment Surface construction.

    The threshold elevation carries the runway elevation.

    Attributes:
        threshold: Landing threshold (elevation = runway elevation)
        runway_end: Opposite end of the runway, defines the centerline direction
        strip_width_m: Runway strip width in meters (> 0)
        och_m: Obstacle clearance height in meters (> 0)
        vertical_path_angle_deg: Vertical path angle (VPA) in degrees
        offset_angle_deg: Final approach course offset from the centerline
            (negative splays the left side, positive the right side)
    """

    threshold: GeoPoint
    runway_end: GeoPoint
    strip_width_m: float
    och_m: float
    vertical_path_angle_deg: float
    offset_angle_deg: float = 0.0

    @property
    def runway_elevation_m(self) -> float:
        return self.threshold.elevation

    @property
    def vss_slope_deg(self) -> float:
        """VSS slope = VPA - 1.12°."""
        return self.vertical_path_angle_deg - VSSConfig.SLOPE_CORRECTION_DEG

    @classmethod
    def from_feet_och(
        cls,
        threshold: GeoPoint,
        runway_end: GeoPoint,
        strip_width_m: float,
        och_ft: float,
        vertical_path_angle_deg: float,
        offset_angle_deg: float = 0.0,
    ) -> "RunwayGeometryInput":
        """Build input with the OCH given in feet (as published on charts)."""
        return cls(
            threshold=threshold,
            runway_end=runway_end,
            strip_width_m=strip_width_m,
            och_m=och_ft * UnitConfig.FEET_TO_METERS,
            vertical_path_angle_deg=vertical_path_angle_deg,
            offset_angle_deg=offset_angle_deg,
        )

    @classmethod
    def from_ils_offset(
        cls,
        threshold: GeoPoint,
        runway_end: GeoPoint,
        strip_width_m: float,
        och_m: float,
        vertical_path_angle_deg: float,
        ils_offset_deg: float,
    ) -> "RunwayGeometryInput":
        """Build input from an offset measured in the ILS frame of reference.

        The ILS frame measures the offset with the opposite sign, so it is negated.
        """
        return cls(
            threshold=threshold,
            runway_end=runway_end,
            strip_width_m=strip_width_m,
            och_m=och_m,
            vertical_path_angle_deg=vertical_path_angle_deg,
            offset_angle_deg=-ils_offset_deg if ils_offset_deg else 0.0,
        )

    def validate(self) -> None:
        """Check every field and raise ValidationError if any is invalid.

        Raises:
            ValidationError: Lists every non-finite or out-of-domain field.
        """
        issues: list[FieldIssue] = []
        _check_point(issues, "threshold", self.threshold)
        _check_point(issues, "runway_end", self.runway_end)
        if not issues:
            _check_distinct(issues, "runway_end", self.threshold, self.runway_end)

        if _check_finite(issues, "strip_width_m", self.strip_width_m) and self.strip_width_m <= 0:
            issues.append(FieldIssue(field="strip_width_m", value=self.strip_width_m, reason="must be > 0"))
        if _check_finite(issues, "och_m", self.och_m) and self.och_m <= 0:
            issues.append(FieldIssue(field="och_m", value=self.och_m, reason="must be > 0"))
        if _check_finite(issues, "vertical_path_angle_deg", self.vertical_path_angle_deg):
            slope = self.vss_slope_deg
            if not 0 < slope < 90:
                issues.append(
                    FieldIssue(
                        field="vertical_path_angle_deg",
                        value=self.vertical_path_angle_deg,
                        reason=f"VSS slope (VPA - {VSSConfig.SLOPE_CORRECTION_DEG}°) = {slope:.2f}° must be in (0, 90)",
                    )
                )
        _check_offset(issues, self.offset_angle_deg, VSSConfig.BASE_SPLAY_DEG)

        if issues:
            raise ValidationError(issues)


@dataclass(frozen=True)
class DepartureGeometryInput:
    """Parameters for Departure OIS construction.

    Attributes:
        start: Start of the take-off run, defines the centerline direction
        end: Departure end of the runway (elevation = DER elevation)
        clearway_length_m: Clearway beyond the runway end (>= 0); the surface
            base moves out by this distance
        offset_angle_deg: Optional splay offset, same rule as the VSS
        climb_gradient_pct: Surface gradient in percent
    """

    start: GeoPoint
    end: GeoPoint
    clearway_length_m: float = 0.0
    offset_angle_deg: float = 0.0
    climb_gradient_pct: float = DepOisConfig.CLIMB_GRADIENT_PCT

    @property
    def base_elevation_m(self) -> float:
        return self.end.elevation + DepOisConfig.BASE_HEIGHT_M

    @property
    def end_elevation_m(self) -> float:
        return self.base_elevation_m + DepOisConfig.LENGTH_M * self.climb_gradient_pct / 100

    def validate(self) -> None:
        """Check every field and raise ValidationError if any is invalid."""
        issues: list[FieldIssue] = []
        _check_point(issues, "start", self.start)
        _check_point(issues, "end", self.end)
        if not issues:
            _check_distinct(issues, "end", self.start, self.end)

        if _check_finite(issues, "clearway_length_m", self.clearway_length_m) and self.clearway_length_m < 0:
            issues.append(FieldIssue(field="clearway_length_m", value=self.clearway_length_m, reason="must be >= 0"))
        if _check_finite(issues, "climb_gradient_pct", self.climb_gradient_pct) and self.climb_gradient_pct <= 0:
            issues.append(FieldIssue(field="climb_gradient_pct", value=self.climb_gradient_pct, reason="must be > 0"))
        _check_offset(issues, self.offset_angle_deg, DepOisConfig.BASE_SPLAY_DEG)

        if issues:
            raise ValidationError(issues)
