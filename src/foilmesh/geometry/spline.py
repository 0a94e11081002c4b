"""Natural cubic spline fit and evaluation.

Used to resample externally supplied outlines to a chosen point count.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import numpy.typing as npt

from ..exceptions import InvalidParameterError, validate_min
from ..logging import get_logger
from .naca import Spacing, stations

log = get_logger("spline")


class NaturalCubicSpline:
    """Cubic spline through ``(xa, ya)`` with zero curvature at both ends.

    Queries outside ``[xa[0], xa[-1]]`` are extrapolated with the polynomial
    of the nearest end interval; no error is raised for them.
    """

    def __init__(self, xa: npt.ArrayLike, ya: npt.ArrayLike):
        xa = np.asarray(xa, dtype=np.float64)
        ya = np.asarray(ya, dtype=np.float64)

        if xa.ndim != 1 or xa.shape != ya.shape:
            raise InvalidParameterError(
                "Spline abscissas and ordinates must be 1D arrays of equal length",
                details={"xa_shape": xa.shape, "ya_shape": ya.shape}
            )
        if len(xa) < 2:
            raise InvalidParameterError("Spline needs at least 2 points", details={"count": len(xa)})
        if np.any(np.diff(xa) <= 0):
            raise InvalidParameterError("Spline abscissas must be strictly increasing")

        self.xa = xa
        self.ya = ya
        self.y2 = self._second_derivatives(xa, ya)

    @staticmethod
    def _second_derivatives(xa: np.ndarray, ya: np.ndarray) -> np.ndarray:
        n = len(xa)
        u = np.zeros(n)
        y2 = np.zeros(n)

        # Forward sweep of the tridiagonal system
        for i in range(1, n - 1):
            wx = xa[i + 1] - xa[i - 1]
            sig = (xa[i] - xa[i - 1]) / wx
            p = sig * y2[i - 1] + 2.0
            y2[i] = (sig - 1.0) / p
            ddydx = (ya[i + 1] - ya[i]) / (xa[i + 1] - xa[i]) - (ya[i] - ya[i - 1]) / (xa[i] - xa[i - 1])
            u[i] = (6.0 * ddydx / wx - sig * u[i - 1]) / p

        # Back substitution; y2[n - 1] stays 0
        for i in range(n - 2, -1, -1):
            y2[i] = y2[i] * y2[i + 1] + u[i]
        return y2

    def __call__(self, query: npt.ArrayLike) -> np.ndarray:
        q = np.asarray(query, dtype=np.float64)
        xa, ya, y2 = self.xa, self.ya, self.y2

        klo = np.clip(np.searchsorted(xa, q, side="right") - 1, 0, len(xa) - 2)
        khi = klo + 1

        h = xa[khi] - xa[klo]
        a = (xa[khi] - q) / h
        b = (q - xa[klo]) / h
        return a * ya[klo] + b * ya[khi] + ((a**3 - a) * y2[klo] + (b**3 - b) * y2[khi]) * h**2 / 6.0


def interpolate(xa: npt.ArrayLike, ya: npt.ArrayLike, query: npt.ArrayLike) -> np.ndarray:
    """Fit a natural cubic spline to ``(xa, ya)`` and evaluate it at ``query``."""
    return NaturalCubicSpline(xa, ya)(query)


def resample_outline(
    points: npt.ArrayLike,
    count: int,
    spacing: Union[Spacing, str] = Spacing.COSINE,
) -> np.ndarray:
    """Resample an open or closed polyline to ``count`` points.

    The polyline is parameterized by cumulative chord length; consecutive
    duplicate points are dropped first. With cosine spacing the samples
    cluster at both ends of the polyline, which for a DAT outline are the
    trailing edge.
    """
    validate_min(count, 2, "count")
    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2:
        raise InvalidParameterError("Points must have shape (N, 2)", details={"shape": points.shape})

    steps = np.linalg.norm(np.diff(points, axis=0), axis=1)
    keep = np.concatenate([[True], steps > 0])
    points = points[keep]
    if len(points) < 2:
        raise InvalidParameterError("Need at least 2 distinct points to resample")

    arc = np.concatenate([[0.0], np.cumsum(np.linalg.norm(np.diff(points, axis=0), axis=1))])
    target = stations(count, spacing) * arc[-1]

    log.debug("Resampling {} points to {}", len(points), count)
    return np.column_stack([
        interpolate(arc, points[:, 0], target),
        interpolate(arc, points[:, 1], target),
    ])
