import math

import pytest

from terrainroute.geometry import Point2, Point3, interpolate_z


TRIANGLE = (Point3(0, 0, 1), Point3(5, 0, 3), Point3(2.5, 5, 2))


@pytest.mark.parametrize("vertex", TRIANGLE)
def test_interpolate_at_vertex_returns_vertex_height(vertex):
    z = interpolate_z(*TRIANGLE, vertex.x, vertex.y)
    assert math.isclose(z, vertex.z, abs_tol=1e-9)


def test_interpolate_on_flat_plane_is_constant():
    a, b, c = Point3(0, 0, 7), Point3(4, 0, 7), Point3(0, 4, 7)
    for x, y in [(1, 1), (10, -3), (-50, 20)]:
        assert math.isclose(interpolate_z(a, b, c, x, y), 7)


def test_interpolate_is_linear_between_vertices():
    p1, p2, p3 = TRIANGLE
    mid_x = (p1.x + p2.x) / 2
    mid_y = (p1.y + p2.y) / 2
    z = interpolate_z(p1, p2, p3, mid_x, mid_y)
    assert math.isclose(z, (p1.z + p2.z) / 2)


def test_interpolate_independent_of_vertex_order():
    p1, p2, p3 = TRIANGLE
    forward = interpolate_z(p1, p2, p3, 1.5, 1.0)
    reverse = interpolate_z(p3, p2, p1, 1.5, 1.0)
    assert math.isclose(forward, reverse)


def test_interpolate_vertical_triangle_raises():
    with pytest.raises(ValueError):
        interpolate_z(Point3(0, 0, 0), Point3(1, 0, 0), Point3(2, 0, 5), 1, 1)


def test_point_subtraction_and_cross():
    a = Point3(3, 4, 5)
    b = Point3(1, 1, 1)
    diff = a - b
    assert diff == Point3(a.x - b.x, a.y - b.y, a.z - b.z)
    x_axis, y_axis = Point3(1, 0, 0), Point3(0, 1, 0)
    assert x_axis.cross(y_axis) == Point3(0, 0, 1)


def test_points_order_lexicographically_and_hash():
    assert Point3(0, 5, 0) < Point3(1, 0, 0)
    assert Point3(1, 0, 0) < Point3(1, 0, 2)
    assert len({Point2(1, 2), Point2(1, 2), Point2(2, 1)}) == 2