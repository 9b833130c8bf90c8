"""Obstacle and EvaluationResult - Inputs and outputs of a classification pass.

An Obstacle is owned by the ingesting collaborator and never mutated here.
An EvaluationResult is created fresh per evaluation run and only sorted or
displayed afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from aerodrome_surfaces.model.geo_point import GeoPoint, PlanarPoint


class Classification(Enum):
    """Obstacle classification relative to a surface."""

    CRITICAL = "Critical"
    NOT_CRITICAL = "Not critical"
    UNDETERMINED = "Undetermined"


@dataclass(frozen=True)
class Obstacle:
    """A candidate obstacle.

    Attributes:
        name: Display name (may be empty)
        position: Location; elevation is the obstacle top in meters

    Example:
        mast = Obstacle(name="Mast 3", position=GeoPoint(lat=-43.49, lon=172.53, elevation=61.0))
    """

    name: str
    position: GeoPoint

    @property
    def lat(self) -> float:
        return self.position.lat

    @property
    def lon(self) -> float:
        return self.position.lon

    @property
    def elevation(self) -> float:
        return self.position.elevation

    @property
    def is_evaluable(self) -> bool:
        """True if latitude, longitude and elevation are finite numbers."""
        return self.position.is_finite

    def __repr__(self) -> str:
        return f"Obstacle({self.name!r}, {self.position})"


@dataclass(frozen=True)
class EvaluationResult:
    """Classification of one obstacle that lies inside a surface footprint.

    Attributes:
        obstacle: The evaluated obstacle (by reference)
        planar_position: Obstacle position in the projected grid
        surface_elevation_m: Surface elevation at that position, None if undetermined
        classification: Critical / Not critical / Undetermined
    """

    obstacle: Obstacle
    planar_position: PlanarPoint
    surface_elevation_m: Optional[float]
    classification: Classification

    @property
    def name(self) -> str:
        return self.obstacle.name

    @property
    def obstacle_elevation_m(self) -> float:
        return self.obstacle.elevation

    @property
    def penetration_m(self) -> Optional[float]:
        """Obstacle elevation minus surface elevation (positive = penetrates)."""
        if self.surface_elevation_m is None:
            return None
        return self.obstacle.elevation - self.surface_elevation_m

    @property
    def is_critical(self) -> bool:
        return self.classification is Classification.CRITICAL

    def to_record(self) -> dict[str, Any]:
        """Flat record for tables and exports."""
        return {
            "name": self.obstacle.name,
            "latitude": self.obstacle.lat,
            "longitude": self.obstacle.lon,
            "planar_x": self.planar_position.x,
            "planar_y": self.planar_position.y,
            "obstacle_elevation": self.obstacle.elevation,
            "surface_elevation": self.surface_elevation_m,
            "classification": self.classification.value,
        }

    def __repr__(self) -> str:
        surf = "n/a" if self.surface_elevation_m is None else f"{self.surface_elevation_m:.2f}m"
        return f"EvaluationResult({self.obstacle.name!r}, {self.obstacle.elevation}m vs {surf}, {self.classification.value})"
