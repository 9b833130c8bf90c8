"""SurfacePolygon - A constructed protection surface.

A surface is an ordered ring of 3D GeoPoints whose vertex roles depend on the
surface kind:

    VSS:     [leftBase, leftEnd, rightEnd, rightBase, leftBase]
    DEP OIS: [baseRight, leftEnd, rightEnd, baseLeft, baseRight]

The ordering is a contract with downstream consumers (map layers, KML export,
the SurfaceElevationEvaluator), which index vertices positionally. SurfaceKind
carries that convention as data so one generic evaluator serves both kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from shapely.geometry import Polygon

from aerodrome_surfaces.model.errors import FieldIssue, ValidationError
from aerodrome_surfaces.model.geo_point import GeoPoint

if TYPE_CHECKING:
    from aerodrome_surfaces.core.projector import CoordinateProjector


class ElevationRule(Enum):
    """How base/end elevations are read from a vertex pair."""

    FIRST_VERTEX = "first_vertex"  # elevation of the first vertex of the pair
    MEAN = "mean"  # average of both vertices of the pair


@dataclass(frozen=True)
class VertexLayout:
    """Positional roles of the four corner vertices.

    Attributes:
        labels: Role name of each corner, in ring order
        base_indices: Corner indices on the surface base edge
        end_indices: Corner indices on the far (end) edge
        elevation_rule: How the base/end elevation is derived from each pair
    """

    labels: tuple[str, str, str, str]
    base_indices: tuple[int, int]
    end_indices: tuple[int, int]
    elevation_rule: ElevationRule

    def edge_elevation(self, corner_elevations: Sequence[float], indices: tuple[int, int]) -> float:
        """Elevation of the edge formed by two corners, per elevation_rule."""
        a, b = (corner_elevations[i] for i in indices)
        if self.elevation_rule is ElevationRule.MEAN:
            return (a + b) / 2
        return a


class SurfaceKind(Enum):
    """Protection surface type."""

    VSS = "vss"
    DEP_OIS = "dep_ois"

    @property
    def layout(self) -> VertexLayout:
        return _LAYOUTS[self]

    @property
    def display_name(self) -> str:
        return "VSS" if self is SurfaceKind.VSS else "DEP OIS"


_LAYOUTS = {
    SurfaceKind.VSS: VertexLayout(
        labels=("leftBase", "leftEnd", "rightEnd", "rightBase"),
        base_indices=(0, 3),
        end_indices=(1, 2),
        elevation_rule=ElevationRule.FIRST_VERTEX,
    ),
    SurfaceKind.DEP_OIS: VertexLayout(
        labels=("baseRight", "leftEnd", "rightEnd", "baseLeft"),
        base_indices=(0, 3),
        end_indices=(1, 2),
        elevation_rule=ElevationRule.MEAN,
    ),
}


@dataclass(frozen=True)
class SurfacePolygon:
    """An ordered, closed ring of 3D vertices describing one surface.

    Attributes:
        kind: Surface type (determines vertex roles)
        vertices: 4 corners, or 5 with the first repeated to close the ring
        centerline_bearing_deg: Grid bearing of the runway centerline used to
            build the surface (informational)
        length_m: Horizontal length of the surface along the centerline
            (informational)

    Example:
        surface = SurfacePolygon.from_triples(SurfaceKind.VSS, [[lat, lon, elev], ...])
        surface.as_triples()  # back to the exchange shape
    """

    kind: SurfaceKind
    vertices: tuple[GeoPoint, ...]
    centerline_bearing_deg: Optional[float] = None
    length_m: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate vertex count, finiteness and ring closure.

        Raises:
            ValidationError: Listing every offending vertex.
        """
        name = self.kind.display_name
        count = len(self.vertices)
        if count not in (4, 5):
            raise ValidationError(
                [FieldIssue(field="vertices", value=count, reason=f"{name} polygon needs 4 or 5 vertices")]
            )

        issues = [
            FieldIssue(field=f"vertices[{i}]", value=vertex, reason=f"{name} vertex is not finite")
            for i, vertex in enumerate(self.vertices)
            if not vertex.is_finite
        ]
        if count == 5 and self.vertices[4] != self.vertices[0]:
            issues.append(
                FieldIssue(field="vertices[4]", value=self.vertices[4], reason="last vertex must close the ring")
            )
        if issues:
            raise ValidationError(issues)

    @classmethod
    def from_triples(cls, kind: SurfaceKind, triples: Sequence[Sequence[float]]) -> "SurfacePolygon":
        """Create a surface from [[lat, lon, elevation], ...] triples."""
        vertices = tuple(GeoPoint(lat=t[0], lon=t[1], elevation=t[2]) for t in triples)
        return cls(kind=kind, vertices=vertices)

    @property
    def is_closed(self) -> bool:
        return len(self.vertices) == 5

    @property
    def corners(self) -> tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        """The four distinct corners in ring order."""
        c = self.vertices
        return (c[0], c[1], c[2], c[3])

    def corner(self, label: str) -> GeoPoint:
        """Look up a corner by its role name (e.g. "leftBase")."""
        return self.corners[self.kind.layout.labels.index(label)]

    @property
    def base_elevation(self) -> float:
        """Surface elevation along the base edge."""
        layout = self.kind.layout
        return layout.edge_elevation([c.elevation for c in self.corners], layout.base_indices)

    @property
    def end_elevation(self) -> float:
        """Surface elevation along the far edge."""
        layout = self.kind.layout
        return layout.edge_elevation([c.elevation for c in self.corners], layout.end_indices)

    def as_triples(self) -> list[list[float]]:
        """Return the closed ring as [[lat, lon, elevation], ...]."""
        ring = list(self.vertices) if self.is_closed else [*self.vertices, self.vertices[0]]
        return [v.as_triple() for v in ring]

    def footprint(self, projector: "CoordinateProjector") -> Polygon:
        """Horizontal footprint as a Shapely Polygon in planar coordinates."""
        return Polygon([projector.project(v).xy for v in self.corners])

    def __repr__(self) -> str:
        return (
            f"SurfacePolygon({self.kind.display_name}, base={self.base_elevation:.2f}m, "
            f"end={self.end_elevation:.2f}m)"
        )
