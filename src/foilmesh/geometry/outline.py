"""Closed planar airfoil outline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np
import numpy.typing as npt

from ..exceptions import InvalidParameterError
from .naca import AirfoilCoordinates


class SurfaceTag(str, Enum):
    """Which curve an outline point was sampled from."""

    CAMBER = "camber"
    UPPER = "upper"
    LOWER = "lower"


@dataclass(frozen=True)
class AirfoilOutline:
    """A single closed loop of 2D points.

    The loop runs along the upper surface from the trailing edge to the
    leading edge and returns along the lower surface. The closing edge from
    the last point back to the first is implicit. Coincident leading- and
    trailing-edge points are kept, so consumers see zero-length edges there.
    """

    points: npt.NDArray[np.float64]
    tags: Tuple[SurfaceTag, ...]

    def __post_init__(self):
        points = np.array(self.points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise InvalidParameterError("Outline points must have shape (N, 2)",
                                        details={"shape": points.shape})
        if len(points) < 3:
            raise InvalidParameterError("Outline needs at least 3 points", details={"count": len(points)})
        if len(self.tags) != len(points):
            raise InvalidParameterError("Outline needs one tag per point",
                                        details={"points": len(points), "tags": len(self.tags)})
        points.setflags(write=False)
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "tags", tuple(SurfaceTag(t) for t in self.tags))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def signed_area(self) -> float:
        """Shoelace area; positive for a counter-clockwise loop."""
        x, y = self.points[:, 0], self.points[:, 1]
        return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area > 0

    def surface(self, tag: SurfaceTag) -> npt.NDArray[np.float64]:
        mask = np.array([t is tag for t in self.tags])
        return self.points[mask]


def assemble_outline(coords: AirfoilCoordinates) -> AirfoilOutline:
    """Join the upper (reversed, TE to LE) and lower (LE to TE) surfaces."""
    upper = coords.upper[::-1]
    lower = coords.lower
    points = np.concatenate([upper, lower])
    tags = (SurfaceTag.UPPER,) * len(upper) + (SurfaceTag.LOWER,) * len(lower)
    return AirfoilOutline(points=points, tags=tags)


def outline_from_points(points: npt.ArrayLike) -> AirfoilOutline:
    """Wrap an externally supplied loop, such as the rows of a DAT file.

    Points up to and including the one with the smallest x are tagged as
    upper surface, the rest as lower surface.
    """
    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2 or len(points) == 0:
        raise InvalidParameterError("Outline points must have shape (N, 2)",
                                    details={"shape": points.shape})
    leading_edge = int(np.argmin(points[:, 0]))
    tags = (SurfaceTag.UPPER,) * (leading_edge + 1) + (SurfaceTag.LOWER,) * (len(points) - leading_edge - 1)
    return AirfoilOutline(points=points, tags=tags)


def camber_points(coords: AirfoilCoordinates) -> npt.NDArray[np.float64]:
    """Camber line as an (s, 2) array, leading edge first."""
    return coords.camber
