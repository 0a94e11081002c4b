"""Unit tests for ear-clipping triangulation."""

import numpy as np
import pytest

from foilmesh.exceptions import InvalidParameterError
from foilmesh.mesh.triangulate import signed_area, triangulate_outline


def triangle_areas(points, triangles):
    tri = points[triangles]
    return 0.5 * ((tri[:, 1, 0] - tri[:, 0, 0]) * (tri[:, 2, 1] - tri[:, 0, 1])
                  - (tri[:, 1, 1] - tri[:, 0, 1]) * (tri[:, 2, 0] - tri[:, 0, 0]))


class TestTriangulateOutline:
    """Test triangulation of simple polygons."""

    def test_square(self, unit_square):
        triangles = triangulate_outline(unit_square)
        assert triangles.shape == (2, 3)
        assert triangles.dtype == np.int64
        areas = triangle_areas(unit_square, triangles)
        assert np.all(areas > 0)
        assert areas.sum() == pytest.approx(1.0)

    def test_clockwise_input_gives_counter_clockwise_triangles(self, unit_square):
        clockwise = unit_square[::-1].copy()
        triangles = triangulate_outline(clockwise)
        assert np.all(triangle_areas(clockwise, triangles) > 0)

    def test_concave_polygon(self):
        """Test an L-shape is covered without spilling into the notch."""
        points = np.array([[0, 0], [2, 0], [2, 1], [1, 1], [1, 2], [0, 2]], dtype=float)
        triangles = triangulate_outline(points)
        areas = triangle_areas(points, triangles)
        assert len(triangles) == len(points) - 2
        assert np.all(areas > 0)
        assert areas.sum() == pytest.approx(3.0)

    def test_collinear_vertices(self):
        points = np.array([[0, 0], [1, 0], [2, 0], [2, 1], [0, 1]], dtype=float)
        triangles = triangulate_outline(points)
        areas = triangle_areas(points, triangles)
        assert len(triangles) == 3
        assert np.all(areas >= 0)
        assert areas.sum() == pytest.approx(2.0)

    def test_coincident_neighbours(self):
        """Test duplicated vertices become zero-area ears and stay referenced."""
        points = np.array([[0, 0], [1, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
        triangles = triangulate_outline(points)
        areas = triangle_areas(points, triangles)
        assert len(triangles) == len(points) - 2
        assert set(triangles.ravel()) == set(range(len(points)))
        assert np.all(areas >= -1e-15)
        assert areas.sum() == pytest.approx(1.0)

    def test_airfoil_outline(self, outline_2412):
        points = outline_2412.points
        triangles = triangulate_outline(points)
        areas = triangle_areas(points, triangles)
        assert triangles.shape == (len(points) - 2, 3)
        assert set(triangles.ravel()) == set(range(len(points)))
        assert np.all(areas >= -1e-15)
        assert areas.sum() == pytest.approx(signed_area(points), rel=1e-9)

    def test_closed_trailing_edge_outline(self, closed_outline_0012):
        points = closed_outline_0012.points
        triangles = triangulate_outline(points)
        assert triangles.shape == (len(points) - 2, 3)
        assert np.abs(triangle_areas(points, triangles)).sum() == pytest.approx(signed_area(points), rel=1e-9)

    def test_too_few_points(self):
        with pytest.raises(InvalidParameterError):
            triangulate_outline(np.zeros((2, 2)))
