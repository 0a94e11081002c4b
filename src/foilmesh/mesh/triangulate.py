"""Ear-clipping triangulation of a simple planar polygon."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from ..exceptions import InvalidParameterError
from ..logging import get_logger

log = get_logger("triangulate")


def signed_area(points: np.ndarray) -> float:
    x, y = points[:, 0], points[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def _cross(o: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    return float((a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0]))


def _contains_any(tri: np.ndarray, candidates: np.ndarray, eps: float) -> bool:
    """True if any candidate lies inside or on the boundary of the CCW triangle."""
    if len(candidates) == 0:
        return False
    a, b, c = tri
    px, py = candidates[:, 0], candidates[:, 1]
    d1 = (b[0] - a[0]) * (py - a[1]) - (b[1] - a[1]) * (px - a[0])
    d2 = (c[0] - b[0]) * (py - b[1]) - (c[1] - b[1]) * (px - b[0])
    d3 = (a[0] - c[0]) * (py - c[1]) - (a[1] - c[1]) * (px - c[0])
    return bool(np.any((d1 >= -eps) & (d2 >= -eps) & (d3 >= -eps)))


def triangulate_outline(points: npt.ArrayLike) -> np.ndarray:
    """Triangulate a closed simple polygon.

    Args:
        points: (N, 2) loop in either orientation; the closing edge is implicit.

    Returns:
        (N - 2, 3) int64 array of indices into ``points``, every triangle
        counter-clockwise in the xy-plane. A vertex coincident with a
        neighbour is clipped as a zero-area ear, so zero-length edges keep
        the triangle fan connected to every input index.
    """
    points = np.asarray(points, dtype=np.float64)
    n = len(points)
    if n < 3:
        raise InvalidParameterError("Polygon needs at least 3 points", details={"count": n})

    extent = float(np.max(np.ptp(points, axis=0)))
    tol = 1e-12 * max(extent, 1.0)

    ring = list(range(n))
    if signed_area(points) < 0:
        ring.reverse()

    def coincident(i: int, j: int) -> bool:
        return bool(np.hypot(*(points[i] - points[j])) <= tol)

    triangles = []
    forced = 0
    cursor = 0
    while len(ring) > 3:
        m = len(ring)
        clipped = False
        for step in range(m):
            k = (cursor + step) % m
            i_prev, i_cur, i_next = ring[k - 1], ring[k], ring[(k + 1) % m]

            if coincident(i_prev, i_cur) or coincident(i_cur, i_next):
                is_ear = True
            elif _cross(points[i_prev], points[i_cur], points[i_next]) <= tol * tol:
                is_ear = False
            else:
                tri = points[[i_prev, i_cur, i_next]]
                candidates = points[ring]
                distance = np.linalg.norm(candidates[:, None, :] - tri[None, :, :], axis=2)
                others = candidates[np.all(distance > tol, axis=1)]
                is_ear = not _contains_any(tri, others, tol * tol)

            if is_ear:
                triangles.append((i_prev, i_cur, i_next))
                del ring[k]
                cursor = k % len(ring)
                clipped = True
                break

        if not clipped:
            # Only collinear or self-touching vertices left; clip the flattest one.
            k = min(range(m), key=lambda j: abs(_cross(points[ring[j - 1]], points[ring[j]],
                                                       points[ring[(j + 1) % m]])))
            triangles.append((ring[k - 1], ring[k], ring[(k + 1) % m]))
            del ring[k]
            cursor = k % len(ring)
            forced += 1

    triangles.append(tuple(ring))
    if forced:
        log.debug("Clipped {} degenerate vertices without a valid ear", forced)
    return np.asarray(triangles, dtype=np.int64)
