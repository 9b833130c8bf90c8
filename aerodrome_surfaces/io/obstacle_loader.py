"""Obstacle ingestion from tabular rows and GeoJSON feature collections.

Rows come from a CSV (or any table) together with a caller-supplied column
mapping; coordinates go through the coordinate-string parser, so DMS, DMM,
compact and decimal notations can be mixed within one file.

A record with unparseable coordinates or a missing/non-numeric elevation is
skipped and reported in LoadResult.skipped. Elevation is never defaulted.
"""

import csv
import logging
from dataclasses import dataclass, field
from math import isfinite
from numbers import Real
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from aerodrome_surfaces.constants import ObstacleConfig
from aerodrome_surfaces.core.coordinate_parser import parse_latitude, parse_longitude
from aerodrome_surfaces.model.geo_point import GeoPoint
from aerodrome_surfaces.model.obstacle import Obstacle

logger = logging.getLogger(__name__)

ColumnKey = Union[int, str]


@dataclass(frozen=True)
class ColumnMapping:
    """Which column holds which obstacle field.

    Keys are column indices for sequence rows or column names for dict rows.

    Example:
        mapping = ColumnMapping(name=0, latitude=1, longitude=2, elevation=3)
    """

    name: ColumnKey
    latitude: ColumnKey
    longitude: ColumnKey
    elevation: ColumnKey


@dataclass(frozen=True)
class SkippedRecord:
    """A record that could not be turned into an Obstacle."""

    index: int
    name: str
    reason: str


@dataclass
class LoadResult:
    """Obstacles read from a source plus the records that were rejected."""

    obstacles: list[Obstacle] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def parse_elevation(value: Any) -> Optional[float]:
    """Finite elevation in meters from a number or numeric string, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Real):
        return float(value) if isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if isfinite(number) else None
    return None


def _first_present(properties: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if properties.get(key) is not None:
            return properties[key]
    return None


def _cell(row: Union[Sequence[Any], Mapping[str, Any]], key: ColumnKey) -> Any:
    try:
        return row[key]
    except (IndexError, KeyError, TypeError):
        return None


class ObstacleLoader:
    """Builds Obstacle records from external data.

    Example:
        result = ObstacleLoader.from_csv("obstacles.csv", ColumnMapping(0, 1, 2, 3))
        for skipped in result.skipped:
            print(skipped.index, skipped.reason)
    """

    @staticmethod
    def _build(index: int, name: Any, lat_raw: Any, lon_raw: Any, elev_raw: Any, result: LoadResult) -> None:
        name = "" if name is None else str(name).strip()
        lat = parse_latitude(lat_raw)
        lon = parse_longitude(lon_raw)
        elevation = parse_elevation(elev_raw)

        reason = None
        if lat is None:
            reason = f"unparseable latitude {lat_raw!r}"
        elif lon is None:
            reason = f"unparseable longitude {lon_raw!r}"
        elif elevation is None:
            reason = f"missing or non-numeric elevation {elev_raw!r}"

        if reason is not None:
            logger.warning(f"Skipping obstacle record {index} ({name!r}): {reason}")
            result.skipped.append(SkippedRecord(index=index, name=name, reason=reason))
            return
        result.obstacles.append(Obstacle(name=name, position=GeoPoint(lat=lat, lon=lon, elevation=elevation)))

    @staticmethod
    def from_rows(
        rows: Iterable[Union[Sequence[Any], Mapping[str, Any]]],
        mapping: ColumnMapping,
    ) -> LoadResult:
        """Read obstacles from table rows (header already removed).

        Args:
            rows: Sequence rows (indexed by int) or dict rows (indexed by name)
            mapping: Column for each obstacle field

        Returns:
            LoadResult with obstacles in row order and the skipped rows.
        """
        result = LoadResult()
        for index, row in enumerate(rows):
            if not row:
                continue
            ObstacleLoader._build(
                index,
                name=_cell(row, mapping.name),
                lat_raw=_cell(row, mapping.latitude),
                lon_raw=_cell(row, mapping.longitude),
                elev_raw=_cell(row, mapping.elevation),
                result=result,
            )
        logger.info(f"Loaded {len(result.obstacles)} obstacles from rows ({result.skipped_count} skipped)")
        return result

    @staticmethod
    def from_csv(path: Union[str, Path], mapping: ColumnMapping, has_header: bool = True) -> LoadResult:
        """Read obstacles from a CSV file.

        With integer column keys rows are read as lists; with string keys the
        header row names the columns.
        """
        with open(path, "r", encoding="utf-8", newline="") as fh:
            if isinstance(mapping.name, str):
                return ObstacleLoader.from_rows(csv.DictReader(fh), mapping)
            reader = csv.reader(fh)
            if has_header:
                next(reader, None)
            return ObstacleLoader.from_rows(reader, mapping)

    @staticmethod
    def from_geojson(feature_collection: Mapping[str, Any]) -> LoadResult:
        """Read obstacles from Point features of a GeoJSON FeatureCollection.

        The name comes from the first present property among
        ObstacleConfig.NAME_KEYS, the elevation from ObstacleConfig.ELEVATION_KEYS.
        Non-Point features are skipped.
        """
        result = LoadResult()
        for index, feature in enumerate(feature_collection.get("features") or []):
            properties = feature.get("properties") or {}
            name = _first_present(properties, ObstacleConfig.NAME_KEYS)
            geometry = feature.get("geometry") or {}
            coordinates = geometry.get("coordinates") or []

            if geometry.get("type") != "Point" or len(coordinates) < 2:
                reason = f"unsupported geometry {geometry.get('type')!r}"
                logger.warning(f"Skipping feature {index} ({name!r}): {reason}")
                result.skipped.append(SkippedRecord(index=index, name=str(name or ""), reason=reason))
                continue

            ObstacleLoader._build(
                index,
                name=name,
                lat_raw=coordinates[1],
                lon_raw=coordinates[0],
                elev_raw=_first_present(properties, ObstacleConfig.ELEVATION_KEYS),
                result=result,
            )
        logger.info(f"Loaded {len(result.obstacles)} obstacles from GeoJSON ({result.skipped_count} skipped)")
        return result

    @staticmethod
    def to_geojson(obstacles: Iterable[Obstacle]) -> dict:
        """Serialize obstacles to a GeoJSON FeatureCollection (lon, lat order)."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [o.lon, o.lat]},
                    "properties": {"name": o.name, "elev": o.elevation},
                }
                for o in obstacles
            ],
        }
