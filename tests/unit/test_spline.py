"""Unit tests for the natural cubic spline and outline resampling."""

import numpy as np
import pytest

from foilmesh.exceptions import InvalidParameterError
from foilmesh.geometry.naca import Spacing
from foilmesh.geometry.spline import NaturalCubicSpline, interpolate, resample_outline


@pytest.fixture
def knots():
    xa = np.array([0.0, 0.3, 0.7, 1.2, 2.0, 2.5])
    return xa, np.sin(2.0 * xa)


class TestNaturalCubicSpline:
    """Test spline fit and evaluation."""

    def test_passes_through_knots(self, knots):
        xa, ya = knots
        np.testing.assert_allclose(NaturalCubicSpline(xa, ya)(xa), ya, atol=1e-12)

    def test_natural_end_conditions(self, knots):
        spline = NaturalCubicSpline(*knots)
        assert spline.y2[0] == 0.0
        assert spline.y2[-1] == 0.0

    def test_linear_data_is_exact(self):
        xa = np.array([0.0, 1.0, 1.5, 4.0])
        ya = 3.0 * xa - 1.0
        query = np.linspace(-1.0, 5.0, 13)
        np.testing.assert_allclose(interpolate(xa, ya, query), 3.0 * query - 1.0, atol=1e-12)

    def test_two_points_are_a_line(self):
        np.testing.assert_allclose(interpolate([0.0, 2.0], [1.0, 5.0], [0.5, 1.0]), [2.0, 3.0])

    def test_matches_scipy_natural_spline(self, knots):
        interp = pytest.importorskip("scipy.interpolate")
        xa, ya = knots
        query = np.linspace(xa[0], xa[-1], 57)
        expected = interp.CubicSpline(xa, ya, bc_type="natural")(query)
        np.testing.assert_allclose(NaturalCubicSpline(xa, ya)(query), expected, atol=1e-12)

    def test_extrapolates_with_end_intervals(self, knots):
        """Test queries outside the knot range continue the end polynomials."""
        interp = pytest.importorskip("scipy.interpolate")
        xa, ya = knots
        query = np.array([-0.2, 2.7])
        expected = interp.CubicSpline(xa, ya, bc_type="natural", extrapolate=True)(query)
        np.testing.assert_allclose(NaturalCubicSpline(xa, ya)(query), expected, atol=1e-12)

    def test_scalar_query(self, knots):
        spline = NaturalCubicSpline(*knots)
        assert np.ndim(spline(1.0)) == 0

    @pytest.mark.parametrize("xa", [[0.0, 1.0, 1.0], [0.0, 2.0, 1.0]])
    def test_abscissas_must_increase(self, xa):
        with pytest.raises(InvalidParameterError):
            NaturalCubicSpline(xa, [0.0, 1.0, 2.0])

    def test_needs_two_points(self):
        with pytest.raises(InvalidParameterError):
            NaturalCubicSpline([0.0], [1.0])

    def test_shape_mismatch(self):
        with pytest.raises(InvalidParameterError):
            NaturalCubicSpline([0.0, 1.0, 2.0], [0.0, 1.0])


class TestResampleOutline:
    """Test arc-length resampling of polylines."""

    def test_count_and_end_points(self, outline_2412):
        points = outline_2412.points
        resampled = resample_outline(points, 25)
        assert resampled.shape == (25, 2)
        np.testing.assert_allclose(resampled[0], points[0], atol=1e-12)
        np.testing.assert_allclose(resampled[-1], points[-1], atol=1e-12)

    def test_straight_line_linear_spacing(self):
        line = np.array([[0.0, 0.0], [1.0, 1.0], [3.0, 3.0]])
        resampled = resample_outline(line, 5, Spacing.LINEAR)
        expected = np.linspace(0.0, 3.0, 5)
        np.testing.assert_allclose(resampled, np.column_stack([expected, expected]), atol=1e-12)

    def test_duplicate_points_are_dropped(self):
        line = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
        resampled = resample_outline(line, 3, "linear")
        np.testing.assert_allclose(resampled, [[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]], atol=1e-12)

    def test_resampled_airfoil_stays_close(self, outline_2412):
        """Test resampled points lie near the input loop's thickness envelope."""
        resampled = resample_outline(outline_2412.points, 120)
        assert resampled[:, 0].min() == pytest.approx(0.0, abs=1e-2)
        assert resampled[:, 1].max() == pytest.approx(outline_2412.points[:, 1].max(), abs=1e-3)

    def test_invalid_count(self, unit_square):
        with pytest.raises(InvalidParameterError):
            resample_outline(unit_square, 1)

    def test_all_points_coincident(self):
        with pytest.raises(InvalidParameterError):
            resample_outline(np.ones((4, 2)), 10)
