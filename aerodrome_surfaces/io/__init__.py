"""Obstacle ingestion and result presentation."""

from aerodrome_surfaces.io.obstacle_loader import (
    ColumnMapping,
    LoadResult,
    ObstacleLoader,
    SkippedRecord,
    parse_elevation,
)
from aerodrome_surfaces.io.result_format import SORT_KEYS, format_dms, sort_results, to_display_record

__all__ = [
    "ColumnMapping",
    "LoadResult",
    "ObstacleLoader",
    "SkippedRecord",
    "parse_elevation",
    "SORT_KEYS",
    "format_dms",
    "sort_results",
    "to_display_record",
]
