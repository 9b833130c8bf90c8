"""Coordinate-string parser for free-form latitude/longitude text.

Obstacle lists arrive in many notations. Formats are tried in a fixed
priority order; the first that matches the whole string wins:

1. Bare decimal degrees            43.5      -172.25
2. Decimal degrees + hemisphere    S43.5     172.25E
3. Delimited DMS                   43°30'15.5"S    S 43 30 15.5
4. Delimited DMM                   43°30.258'S     43 30.258 S
5. Compact DMS                     433015.5S       1723015E
6. Compact DMM                     4330.258S       17230.5E

A bare number is read as decimal degrees only when it has no hemisphere
letter and is a plausible angle (|value| <= 180). Otherwise the compact
forms apply, with the degree width taken from the integer digit count:
6-7 digits are DDMMSS / DDDMMSS, 4-5 digits are DDMM / DDDMM.

S and W (or a leading '-') make the value negative. Minutes and seconds
must be below 60. Unparseable text returns None, never 0.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from math import isfinite
from numbers import Real
from typing import Optional

logger = logging.getLogger(__name__)

_LEAD = r"(?P<lead>[NSEW+-])?\s*"
_TRAIL = r"\s*(?P<trail>[NSEW])?"
_DEG_SEP = r"(?:\s*[°º˚:]\s*|\s+)"
_MIN_SEP = r"(?:\s*['′’:]\s*|\s+)"
_MIN_MARK = r"\s*['′’]?"
_SEC_MARK = r"\s*(?:\"|″|”|'')?"

_UNICODE_MINUS = str.maketrans({"−": "-", "–": "-"})


@dataclass(frozen=True)
class ParsedCoordinate:
    """A successfully parsed coordinate.

    Attributes:
        value: Signed decimal degrees
        hemisphere: Hemisphere letter if one was given (N/S/E/W), else None
        format_name: Name of the format that matched
    """

    value: float
    hemisphere: Optional[str]
    format_name: str


class CoordinateFormat(ABC):
    """One coordinate notation. try_parse returns None when it does not apply."""

    name: str = ""
    pattern: re.Pattern

    def try_parse(self, text: str) -> Optional[ParsedCoordinate]:
        match = self.pattern.fullmatch(text)
        if match is None:
            return None

        groups = match.groupdict()
        lead = (groups.get("lead") or "").upper()
        trail = (groups.get("trail") or "").upper()
        if lead.isalpha() and trail:
            # Two hemisphere letters ("S43.5N") is ambiguous
            return None

        magnitude = self._magnitude(groups)
        if magnitude is None or not isfinite(magnitude) or magnitude > 180:
            return None

        hemisphere = trail or (lead if lead.isalpha() else "") or None
        negative = lead == "-" or hemisphere in ("S", "W")
        return ParsedCoordinate(
            value=-magnitude if negative else magnitude,
            hemisphere=hemisphere,
            format_name=self.name,
        )

    @abstractmethod
    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        """Unsigned decimal degrees from the regex groups, None if out of range."""


def _dms(degrees: str, minutes: str, seconds: Optional[str] = None) -> Optional[float]:
    minutes_f = float(minutes)
    seconds_f = float(seconds) if seconds else 0.0
    if minutes_f >= 60 or seconds_f >= 60:
        return None
    return float(degrees) + minutes_f / 60 + seconds_f / 3600


class BareDecimalFormat(CoordinateFormat):
    """Plain signed float, no hemisphere letter."""

    name = "decimal"
    pattern = re.compile(r"(?P<lead>[+-])?\s*(?P<deg>\d+(?:\.\d*)?|\.\d+)")

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        return float(groups["deg"])


class HemisphereDecimalFormat(CoordinateFormat):
    """Decimal degrees with a leading or trailing hemisphere letter."""

    name = "decimal_hemisphere"
    pattern = re.compile(_LEAD + r"(?P<deg>\d{1,3}(?:\.\d+)?)" + _TRAIL, re.IGNORECASE)

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        return float(groups["deg"])


class DelimitedDMSFormat(CoordinateFormat):
    """Degrees, minutes, seconds separated by symbols or whitespace."""

    name = "dms"
    pattern = re.compile(
        _LEAD
        + r"(?P<deg>\d{1,3})"
        + _DEG_SEP
        + r"(?P<min>\d{1,2})"
        + _MIN_SEP
        + r"(?P<sec>\d{1,2}(?:\.\d+)?)"
        + _SEC_MARK
        + _TRAIL,
        re.IGNORECASE,
    )

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        return _dms(groups["deg"], groups["min"], groups["sec"])


class DelimitedDMMFormat(CoordinateFormat):
    """Degrees and decimal minutes separated by a symbol or whitespace."""

    name = "dmm"
    pattern = re.compile(
        _LEAD + r"(?P<deg>\d{1,3})" + _DEG_SEP + r"(?P<min>\d{1,2}(?:\.\d+)?)" + _MIN_MARK + _TRAIL,
        re.IGNORECASE,
    )

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        return _dms(groups["deg"], groups["min"])


class CompactDMSFormat(CoordinateFormat):
    """DDMMSS[.s] or DDDMMSS[.s] with no delimiters."""

    name = "compact_dms"
    pattern = re.compile(_LEAD + r"(?P<digits>\d{6,7})(?P<frac>\.\d+)?" + _TRAIL, re.IGNORECASE)

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        digits = groups["digits"]
        seconds = digits[-2:] + (groups["frac"] or "")
        return _dms(digits[:-4], digits[-4:-2], seconds)


class CompactDMMFormat(CoordinateFormat):
    """DDMM[.m] or DDDMM[.m] with no delimiters."""

    name = "compact_dmm"
    pattern = re.compile(_LEAD + r"(?P<digits>\d{4,5})(?P<frac>\.\d+)?" + _TRAIL, re.IGNORECASE)

    def _magnitude(self, groups: dict[str, Optional[str]]) -> Optional[float]:
        digits = groups["digits"]
        return _dms(digits[:-2], digits[-2:] + (groups["frac"] or ""))


# Priority order matters: obstacle ingestion depends on it
FORMATS: tuple[CoordinateFormat, ...] = (
    BareDecimalFormat(),
    HemisphereDecimalFormat(),
    DelimitedDMSFormat(),
    DelimitedDMMFormat(),
    CompactDMSFormat(),
    CompactDMMFormat(),
)


def parse_coordinate_detailed(text: object) -> Optional[ParsedCoordinate]:
    """Parse a coordinate and report which format matched.

    Real numbers (numpy scalars included) are accepted as already-decimal degrees.

    Returns:
        ParsedCoordinate, or None if no format matches.
    """
    if isinstance(text, bool):
        return None
    if isinstance(text, Real):
        if not isfinite(text) or abs(text) > 180:
            return None
        return ParsedCoordinate(value=float(text), hemisphere=None, format_name="number")
    if not isinstance(text, str):
        return None

    cleaned = text.strip().translate(_UNICODE_MINUS)
    if not cleaned:
        return None

    for fmt in FORMATS:
        parsed = fmt.try_parse(cleaned)
        if parsed is not None:
            return parsed

    logger.debug(f"Unparseable coordinate string: {text!r}")
    return None


def parse_coordinate(text: object) -> Optional[float]:
    """Parse free-form coordinate text to signed decimal degrees.

    Example:
        parse_coordinate("433015.5S")  # -43.504305...
        parse_coordinate("43.5")       # 43.5

    Returns:
        Decimal degrees, or None if the text cannot be parsed.
    """
    parsed = parse_coordinate_detailed(text)
    return parsed.value if parsed is not None else None


def parse_latitude(text: object) -> Optional[float]:
    """parse_coordinate restricted to latitudes (|value| <= 90, no E/W letter)."""
    parsed = parse_coordinate_detailed(text)
    if parsed is None or parsed.hemisphere in ("E", "W") or abs(parsed.value) > 90:
        return None
    return parsed.value


def parse_longitude(text: object) -> Optional[float]:
    """parse_coordinate restricted to longitudes (no N/S letter)."""
    parsed = parse_coordinate_detailed(text)
    if parsed is None or parsed.hemisphere in ("N", "S"):
        return None
    return parsed.value
