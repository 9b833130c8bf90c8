"""Obstacle classification against a protection surface.

For each obstacle with finite latitude, longitude and elevation:
1. Project to the planar grid.
2. Skip it silently if it lies outside the surface footprint.
3. Ask the SurfaceElevationEvaluator for the surface elevation there.
4. Classify: no elevation -> Undetermined, above -> Critical, else Not critical.

The surface and obstacles are passed in explicitly on every call; nothing is
remembered between calls. One bad obstacle (unprojectable, degenerate
geometry) is skipped or marked Undetermined without affecting the others.
"""

import logging
from dataclasses import dataclass, field
from math import isnan
from typing import Iterable, Optional

from aerodrome_surfaces.core.projector import CoordinateProjector
from aerodrome_surfaces.core.surface_evaluator import (
    InterpolationStrategy,
    ProjectedSurface,
    SurfaceElevationEvaluator,
)
from aerodrome_surfaces.model.errors import ProjectionError
from aerodrome_surfaces.model.obstacle import Classification, EvaluationResult, Obstacle
from aerodrome_surfaces.model.surface import SurfacePolygon

logger = logging.getLogger(__name__)


@dataclass
class EvaluationStats:
    """Counters for one classification pass.

    Attributes:
        evaluated: Obstacles inside the footprint (reported)
        outside: Obstacles outside the footprint (omitted)
        skipped: Names of obstacles without valid coordinates/elevation
    """

    evaluated: int = 0
    outside: int = 0
    skipped: list[str] = field(default_factory=list)


class ObstacleClassifier:
    """Classifies obstacles against a SurfacePolygon.

    Example:
        classifier = ObstacleClassifier()
        results = classifier.evaluate(surface=vss, obstacles=obstacles)
        critical = [r for r in results if r.is_critical]
    """

    def __init__(
        self,
        projector: Optional[CoordinateProjector] = None,
        evaluator: Optional[SurfaceElevationEvaluator] = None,
    ) -> None:
        self.projector = projector or CoordinateProjector.default()
        self.evaluator = evaluator or SurfaceElevationEvaluator(projector=self.projector)

    @staticmethod
    def classify(obstacle_elevation: float, surface_elevation: Optional[float]) -> Classification:
        """Compare an obstacle elevation against the surface elevation above it."""
        if surface_elevation is None or isnan(surface_elevation):
            return Classification.UNDETERMINED
        if obstacle_elevation > surface_elevation:
            return Classification.CRITICAL
        return Classification.NOT_CRITICAL

    def evaluate(
        self,
        surface: SurfacePolygon,
        obstacles: Iterable[Obstacle],
        strategy: InterpolationStrategy = InterpolationStrategy.CENTERLINE,
    ) -> list[EvaluationResult]:
        """Classify every obstacle inside the surface footprint.

        Args:
            surface: The active surface (read-only for the duration of the call)
            obstacles: Candidate obstacles; invalid ones are skipped
            strategy: Interpolation strategy for the surface elevation

        Returns:
            One EvaluationResult per obstacle inside the footprint, in input order.
            Obstacles outside the footprint or with invalid data are omitted.
        """
        results, _ = self.evaluate_with_stats(surface, obstacles, strategy=strategy)
        return results

    def evaluate_with_stats(
        self,
        surface: SurfacePolygon,
        obstacles: Iterable[Obstacle],
        strategy: InterpolationStrategy = InterpolationStrategy.CENTERLINE,
    ) -> tuple[list[EvaluationResult], EvaluationStats]:
        """Same as evaluate(), also returning inside/outside/skipped counters."""
        projected = self.evaluator.prepare(surface)
        stats = EvaluationStats()
        results: list[EvaluationResult] = []

        for obstacle in obstacles:
            if not obstacle.is_evaluable:
                logger.warning(f"Skipping obstacle {obstacle.name!r}: invalid or missing coordinates/elevation")
                stats.skipped.append(obstacle.name)
                continue
            try:
                result = self.evaluate_one(obstacle, projected, strategy=strategy)
            except ProjectionError as e:
                logger.warning(f"Skipping obstacle {obstacle.name!r}: {e}")
                stats.skipped.append(obstacle.name)
                continue
            if result is None:
                stats.outside += 1
                continue
            stats.evaluated += 1
            results.append(result)

        critical = sum(1 for r in results if r.is_critical)
        logger.info(
            f"{surface.kind.display_name} evaluation: {stats.evaluated} inside ({critical} critical), "
            f"{stats.outside} outside, {len(stats.skipped)} skipped"
        )
        return results, stats

    def evaluate_one(
        self,
        obstacle: Obstacle,
        projected: ProjectedSurface,
        strategy: InterpolationStrategy = InterpolationStrategy.CENTERLINE,
    ) -> Optional[EvaluationResult]:
        """Classify a single obstacle against a prepared surface.

        Returns:
            EvaluationResult, or None if the obstacle is outside the footprint.

        Raises:
            ProjectionError: If the obstacle position cannot be projected.
        """
        position = self.projector.project(obstacle.position)
        if not projected.contains(position):
            logger.debug(f"Obstacle {obstacle.name!r} outside {projected.kind.display_name} footprint")
            return None

        surface_elevation = self.evaluator.elevation_at(position, projected, strategy=strategy)
        classification = self.classify(obstacle.elevation, surface_elevation)
        logger.debug(
            f"Obstacle {obstacle.name!r}: elev={obstacle.elevation}m, surface={surface_elevation}, "
            f"{classification.value}"
        )
        return EvaluationResult(
            obstacle=obstacle,
            planar_position=position,
            surface_elevation_m=surface_elevation,
            classification=classification,
        )

    def is_above_surface(self, obstacle: Obstacle, surface: SurfacePolygon) -> bool:
        """True if the obstacle is inside the footprint and higher than the surface.

        Outside the footprint (or undetermined) this is False.
        """
        if not obstacle.is_evaluable:
            return False
        result = self.evaluate_one(obstacle, self.evaluator.prepare(surface))
        return result is not None and result.is_critical
