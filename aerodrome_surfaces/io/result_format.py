"""Presentation helpers for evaluation results.

Pure formatting and ordering; nothing here renders or prints.
"""

from typing import Any, Callable, Iterable, Optional

from aerodrome_surfaces.model.obstacle import Classification, EvaluationResult

SORT_KEYS = ("name", "obstacle_elevation", "surface_elevation", "penetration", "classification")

# Higher rank sorts later ascending, so Critical comes first when descending
_CLASSIFICATION_RANK = {
    Classification.NOT_CRITICAL: 0,
    Classification.UNDETERMINED: 1,
    Classification.CRITICAL: 2,
}


def format_dms(value: float, is_lat: bool) -> str:
    """Format decimal degrees as degrees, minutes and seconds.

    Latitude uses 2-digit degrees and 3 second-decimals, longitude 3-digit
    degrees and 2 second-decimals. Rounding carries into minutes and degrees,
    so seconds never read 60.

    Example:
        format_dms(-43.5043056, is_lat=True)   # 43° 30' 15.500"S
        format_dms(172.5, is_lat=False)        # 172° 30' 00.00"E
    """
    decimals = 3 if is_lat else 2
    if is_lat:
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"

    scale = 10**decimals
    units = round(abs(value) * 3600 * scale)
    degrees, remainder = divmod(units, 3600 * scale)
    minutes, second_units = divmod(remainder, 60 * scale)
    seconds = second_units / scale

    deg_width = 2 if is_lat else 3
    return f"{degrees:0{deg_width}d}° {minutes:02d}' {seconds:0{decimals + 3}.{decimals}f}\"{hemisphere}"


def _sort_value(key: str) -> Callable[[EvaluationResult], Any]:
    if key == "name":
        return lambda r: (r.name or "").lower()
    if key == "obstacle_elevation":
        return lambda r: r.obstacle_elevation_m
    if key == "surface_elevation":
        return lambda r: r.surface_elevation_m
    if key == "penetration":
        return lambda r: r.penetration_m
    if key == "classification":
        return lambda r: _CLASSIFICATION_RANK[r.classification]
    raise ValueError(f"Unknown sort key {key!r}, expected one of {SORT_KEYS}")


def sort_results(
    results: Iterable[EvaluationResult],
    key: str = "name",
    descending: bool = False,
) -> list[EvaluationResult]:
    """Return results ordered by one column.

    The sort is stable. Results without a value for the key (undetermined
    surface elevation or penetration) always go last.

    Raises:
        ValueError: If key is not one of SORT_KEYS.
    """
    value_of = _sort_value(key)
    present = []
    missing = []
    for result in results:
        (missing if value_of(result) is None else present).append(result)
    present.sort(key=value_of, reverse=descending)
    return present + missing


def _fixed(value: Optional[float], decimals: int) -> str:
    return "" if value is None else f"{value:.{decimals}f}"


def to_display_record(result: EvaluationResult) -> dict[str, str]:
    """Table row with DMS coordinates and fixed-precision numbers."""
    return {
        "name": result.name or "",
        "position": f"{format_dms(result.obstacle.lat, is_lat=True)}, {format_dms(result.obstacle.lon, is_lat=False)}",
        "planar": f"{result.planar_position.x:.2f}, {result.planar_position.y:.2f}",
        "obstacle_elevation": f"{result.obstacle_elevation_m:g}",
        "surface_elevation": _fixed(result.surface_elevation_m, 3),
        "penetration": _fixed(result.penetration_m, 3),
        "classification": result.classification.value,
    }
