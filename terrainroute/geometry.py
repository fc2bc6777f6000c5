"""Basic geometric types and helpers for terrain meshes."""

from __future__ import annotations

from typing import NamedTuple


class Point2(NamedTuple):
    """A point in the plane."""

    x: float
    y: float


class Point3(NamedTuple):
    """A point in space; points order lexicographically by (x, y, z)."""

    x: float
    y: float
    z: float

    def __sub__(self, other: Point3) -> Point3:  # type: ignore[override]
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def cross(self, other: Point3) -> Point3:
        """Cross product, treating both points as vectors."""
        return Point3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


def interpolate_z(p1: Point3, p2: Point3, p3: Point3, x: float, y: float) -> float:
    """Height at (x, y) on the plane through the three given points.

    Raises ValueError when the triangle is vertical or degenerate, so that the
    plane has no unique height above (x, y).
    """
    normal = (p2 - p1).cross(p3 - p1)
    a, b, c = normal
    if c == 0:
        raise ValueError("cannot interpolate height on a vertical or degenerate triangle")
    d = -(a * p1.x + b * p1.y + c * p1.z)
    return (-a * x - b * y - d) / c