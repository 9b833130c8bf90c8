"""Errors - Typed failures raised by the surface evaluation core.

Taxonomy:
- ValidationError: surface parameters are non-finite or out of domain.
  Raised before any geometry is constructed; fatal for the whole batch.
- ProjectionError: the projector was handed (or produced) a non-finite coordinate.
- DegenerateGeometryError: a geometric query has no unique answer
  (collinear points, zero-length centerline). Local to one query.

Coordinate parsing never raises; it returns None.
"""

from dataclasses import dataclass
from typing import Any


class SurfaceError(Exception):
    """Base class for all aerodrome surface errors."""


@dataclass(frozen=True)
class FieldIssue:
    """A single invalid input field.

    Attributes:
        field: Name of the offending field
        value: The rejected value
        reason: Human-readable explanation
    """

    field: str
    value: Any
    reason: str

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}: {self.reason}"


class ValidationError(SurfaceError, ValueError):
    """Surface parameters failed validation.

    Carries every issue found, not just the first, so the caller can
    report all bad fields at once.
    """

    def __init__(self, issues: list[FieldIssue]) -> None:
        self.issues = tuple(issues)
        summary = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"Invalid surface parameters: {summary}")

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed validation."""
        return [issue.field for issue in self.issues]


class ProjectionError(SurfaceError, ValueError):
    """Coordinates could not be projected to or from the planar system."""


class DegenerateGeometryError(SurfaceError):
    """Geometry has no unique solution (collinear points, zero length)."""
