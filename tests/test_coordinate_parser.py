"""Tests for the free-form coordinate parser.

Covers every supported notation, hemisphere sign handling, format priority,
and the rule that unparseable text yields None (never 0).
"""

import pytest
from hypothesis import given, settings, strategies as st

from aerodrome_surfaces.core.coordinate_parser import (
    parse_coordinate,
    parse_coordinate_detailed,
    parse_latitude,
    parse_longitude,
)

DMS_43_30_15_5 = 43 + 30 / 60 + 15.5 / 3600
DMM_43_30_258 = 43 + 30.258 / 60


# =============================================================================
# DECIMAL DEGREES
# =============================================================================


class TestDecimalDegrees:
    """Bare and hemisphere-tagged decimal degrees."""

    @pytest.mark.parametrize(
        "text,expected",
        [("43.5", 43.5), ("-43.5", -43.5), ("+172.25", 172.25), ("  43.5  ", 43.5), ("0", 0.0)],
    )
    def test_bare_decimal(self, text: str, expected: float) -> None:
        assert parse_coordinate(text) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "text,expected",
        [("S43.5", -43.5), ("43.5S", -43.5), ("172.25E", 172.25), ("W 72.5", -72.5), ("43.5 s", -43.5)],
    )
    def test_hemisphere_decimal(self, text: str, expected: float) -> None:
        """S and W are negative, letters may lead or trail, case-insensitive."""
        assert parse_coordinate(text) == pytest.approx(expected)

    def test_unicode_minus(self) -> None:
        """Typographic minus signs pasted from documents are accepted."""
        assert parse_coordinate("−43.5") == pytest.approx(-43.5)

    def test_numbers_pass_through(self) -> None:
        """Already-numeric values are taken as decimal degrees."""
        assert parse_coordinate(43.5) == 43.5
        assert parse_coordinate(-172) == -172.0

    @given(value=st.floats(min_value=-180.0, max_value=180.0, allow_nan=False))
    @settings(max_examples=100)
    def test_fixed_point_text_parses_to_value(self, value: float) -> None:
        """Any fixed-point decimal string within ±180 parses to its value."""
        assert parse_coordinate(f"{value:.6f}") == pytest.approx(round(value, 6), abs=1e-9)


# =============================================================================
# SEXAGESIMAL FORMATS
# =============================================================================


class TestSexagesimal:
    """Delimited and compact degrees-minutes(-seconds)."""

    @pytest.mark.parametrize(
        "text",
        ["43°30'15.5\"S", "S 43 30 15.5", "43 30 15.5 S", "43:30:15.5S", "43° 30′ 15.5″ S"],
    )
    def test_delimited_dms(self, text: str) -> None:
        assert parse_coordinate(text) == pytest.approx(-DMS_43_30_15_5)

    @pytest.mark.parametrize("text", ["43°30.258'S", "43 30.258 S", "S43 30.258"])
    def test_delimited_dmm(self, text: str) -> None:
        assert parse_coordinate(text) == pytest.approx(-DMM_43_30_258)

    def test_compact_dms_latitude(self) -> None:
        """DDMMSS.s with a hemisphere letter."""
        assert parse_coordinate("433015.5S") == pytest.approx(-43.50430556, abs=1e-8)

    def test_compact_dms_longitude(self) -> None:
        """DDDMMSS: 7 integer digits means a 3-digit degree field."""
        assert parse_coordinate("1723015E") == pytest.approx(172 + 30 / 60 + 15 / 3600)

    def test_compact_dmm(self) -> None:
        assert parse_coordinate("4330.258S") == pytest.approx(-DMM_43_30_258)
        assert parse_coordinate("17230.5E") == pytest.approx(172 + 30.5 / 60)

    def test_compact_without_hemisphere_is_positive(self) -> None:
        """A bare number too large to be degrees is read as compact DMS."""
        assert parse_coordinate("433015.5") == pytest.approx(DMS_43_30_15_5)

    def test_format_priority(self) -> None:
        """The first matching format in priority order is reported."""
        assert parse_coordinate_detailed("43.5").format_name == "decimal"
        assert parse_coordinate_detailed("43.5S").format_name == "decimal_hemisphere"
        assert parse_coordinate_detailed("43 30 15.5 S").format_name == "dms"
        assert parse_coordinate_detailed("43°30.258'S").format_name == "dmm"
        assert parse_coordinate_detailed("433015.5S").format_name == "compact_dms"
        assert parse_coordinate_detailed("4330.258S").format_name == "compact_dmm"

    def test_detailed_reports_hemisphere(self) -> None:
        parsed = parse_coordinate_detailed("s43.5")
        assert parsed.hemisphere == "S"
        assert parsed.value == pytest.approx(-43.5)


# =============================================================================
# FAILURES
# =============================================================================


class TestUnparseable:
    """Unparseable input returns None, never 0."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "abc",
            "43°75'00\"S",  # minutes >= 60
            "433075S",  # compact seconds >= 60
            "999999S",  # compact minutes >= 60
            "S43.5N",  # two hemisphere letters
            "200",  # not an angle, too short for compact forms
            "12.3.4",
            "43 30 15.5 X",
        ],
    )
    def test_returns_none(self, text: str) -> None:
        assert parse_coordinate(text) is None

    @pytest.mark.parametrize("value", [None, True, float("nan"), float("inf"), 500, ["43.5"]])
    def test_non_string_values(self, value: object) -> None:
        assert parse_coordinate(value) is None


# =============================================================================
# LATITUDE / LONGITUDE WRAPPERS
# =============================================================================


class TestLatLonWrappers:
    """parse_latitude / parse_longitude range and hemisphere checks."""

    def test_latitude_accepts_ns(self) -> None:
        assert parse_latitude("43.5S") == pytest.approx(-43.5)
        assert parse_latitude("433015.5S") == pytest.approx(-DMS_43_30_15_5)

    def test_latitude_rejects_out_of_range(self) -> None:
        """A latitude beyond ±90 is rejected even though it is a valid angle."""
        assert parse_latitude("95") is None
        assert parse_latitude(-120.0) is None

    def test_latitude_rejects_east_west(self) -> None:
        assert parse_latitude("43.5E") is None

    def test_longitude_accepts_ew(self) -> None:
        assert parse_longitude("172.5E") == pytest.approx(172.5)
        assert parse_longitude("1723015E") == pytest.approx(172 + 30 / 60 + 15 / 3600)

    def test_longitude_rejects_north_south(self) -> None:
        assert parse_longitude("43.5S") is None

    def test_longitude_rejects_out_of_range(self) -> None:
        assert parse_longitude("181") is None
