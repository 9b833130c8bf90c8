"""Geometry kernel - pure functions over planar coordinates.

Provides the primitives the surface evaluator is built from:
- Point-in-polygon (even-odd ray casting)
- Plane fit through 3 points (Cramer's rule)
- Bilinear interpolation over a quadrilateral
- Barycentric interpolation over a triangle
- Centerline-linear interpolation between two edge midpoints

Vertices are (x, y) or (x, y, z) tuples in meters. Degenerate input
(collinear points, zero-length centerline) yields None, never NaN.

Point-in-polygon is undefined for points exactly on an edge: ray casting
may report either result there.
"""

from typing import Optional, Sequence

import numpy as np

from aerodrome_surfaces.constants import GeometryConfig
from aerodrome_surfaces.model.errors import DegenerateGeometryError

XY = Sequence[float]
XYZ = Sequence[float]


class GeometryKernel:
    """Static geometry primitives for surface evaluation."""

    @staticmethod
    def point_in_polygon(point: XY, polygon: Sequence[XY]) -> bool:
        """Even-odd ray casting test.

        A closing vertex equal to the first one is harmless.

        Args:
            point: (x, y) query point
            polygon: Ring of (x, y) vertices

        Returns:
            True if the point is inside. Undefined exactly on an edge.
        """
        px, py = point[0], point[1]
        inside = False
        j = len(polygon) - 1
        for i in range(len(polygon)):
            xi, yi = polygon[i][0], polygon[i][1]
            xj, yj = polygon[j][0], polygon[j][1]
            if (yi > py) != (yj > py):
                x_cross = (xj - xi) * (py - yi) / (yj - yi + GeometryConfig.EDGE_EPSILON) + xi
                if px < x_cross:
                    inside = not inside
            j = i
        return inside

    @staticmethod
    def solve_plane(p0: XYZ, p1: XYZ, p2: XYZ) -> tuple[float, float, float]:
        """Coefficients of z = a·x + b·y + c through three 3D points, local to p0.

        Solved with Cramer's rule. Coordinates are shifted to p0 first; grid
        coordinates are in the millions and the raw determinant would lose
        precision. Evaluate as a·(x - p0.x) + b·(y - p0.y) + c.

        Returns:
            (a, b, c)

        Raises:
            DegenerateGeometryError: If the points are collinear.
        """
        ox, oy = p0[0], p0[1]
        coeffs = np.array(
            [
                [0.0, 0.0, 1.0],
                [p1[0] - ox, p1[1] - oy, 1.0],
                [p2[0] - ox, p2[1] - oy, 1.0],
            ]
        )
        z = np.array([p0[2], p1[2], p2[2]], dtype=float)

        det = np.linalg.det(coeffs)
        if abs(det) < GeometryConfig.DETERMINANT_EPSILON:
            raise DegenerateGeometryError(f"Plane points are collinear (det={det:.3e})")

        solution = []
        for col in range(3):
            replaced = coeffs.copy()
            replaced[:, col] = z
            solution.append(float(np.linalg.det(replaced) / det))
        a, b, c = solution
        return a, b, c

    @staticmethod
    def plane_fit_z(x: float, y: float, p0: XYZ, p1: XYZ, p2: XYZ) -> Optional[float]:
        """Elevation at (x, y) on the plane through three 3D points.

        Returns:
            Interpolated z, or None if the points are collinear.
        """
        try:
            a, b, c = GeometryKernel.solve_plane(p0, p1, p2)
        except DegenerateGeometryError:
            return None
        return a * (x - p0[0]) + b * (y - p0[1]) + c

    @staticmethod
    def bilinear_interpolation(x: float, y: float, quad: Sequence[XYZ]) -> Optional[float]:
        """Bilinear blend over quadrilateral [A, B, C, D].

        (u, v) are solved in the parallelogram basis A→B, A→D and clamped to
        [0, 1], so points beyond the quad take the nearest edge value.

        Returns:
            Interpolated z, or None if A→B and A→D are parallel.
        """
        a, b, c, d = quad[0], quad[1], quad[2], quad[3]
        ab = (b[0] - a[0], b[1] - a[1])
        ad = (d[0] - a[0], d[1] - a[1])
        ap = (x - a[0], y - a[1])

        det = ab[0] * ad[1] - ab[1] * ad[0]
        if abs(det) < GeometryConfig.DETERMINANT_EPSILON:
            return None

        u = (ap[0] * ad[1] - ap[1] * ad[0]) / det
        v = (ab[0] * ap[1] - ab[1] * ap[0]) / det
        u = max(0.0, min(1.0, u))
        v = max(0.0, min(1.0, v))

        return (1 - u) * (1 - v) * a[2] + u * (1 - v) * b[2] + u * v * c[2] + (1 - u) * v * d[2]

    @staticmethod
    def barycentric_z(x: float, y: float, p0: XYZ, p1: XYZ, p2: XYZ) -> Optional[float]:
        """Barycentric interpolation over triangle (p0, p1, p2).

        Returns:
            Interpolated z, or None if the triangle is degenerate.
        """
        denom = (p1[1] - p2[1]) * (p0[0] - p2[0]) + (p2[0] - p1[0]) * (p0[1] - p2[1])
        if abs(denom) < GeometryConfig.DETERMINANT_EPSILON:
            return None
        w0 = ((p1[1] - p2[1]) * (x - p2[0]) + (p2[0] - p1[0]) * (y - p2[1])) / denom
        w1 = ((p2[1] - p0[1]) * (x - p2[0]) + (p0[0] - p2[0]) * (y - p2[1])) / denom
        w2 = 1 - w0 - w1
        return w0 * p0[2] + w1 * p1[2] + w2 * p2[2]

    @staticmethod
    def centerline_fraction(x: float, y: float, start: XY, end: XY) -> Optional[float]:
        """Scalar projection of (x, y) onto start→end, as an unclamped fraction.

        Returns:
            t where 0 is start and 1 is end, or None for a zero-length line.
        """
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            return None
        return ((x - start[0]) * dx + (y - start[1]) * dy) / length_sq

    @staticmethod
    def centerline_z(
        x: float,
        y: float,
        base_mid: XY,
        end_mid: XY,
        base_z: float,
        end_z: float,
    ) -> Optional[float]:
        """Linear elevation along the base→end centerline.

        Lateral offset from the centerline is ignored. The fraction is clamped
        to [0, 1]: beyond either end the base/end elevation applies.

        Returns:
            Interpolated z, or None for a zero-length centerline.
        """
        t = GeometryKernel.centerline_fraction(x, y, base_mid, end_mid)
        if t is None:
            return None
        t = max(0.0, min(1.0, t))
        return base_z + (end_z - base_z) * t
