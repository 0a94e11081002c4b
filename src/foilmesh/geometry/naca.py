"""NACA 4-, 5- and 6-series coordinate generator.

Samples the closed-form thickness distribution and camber line of a NACA
airfoil and combines them into upper and lower surface coordinates::

    coords = generate_naca("2412", SamplingSpec(points=100))
    coords.x_upper, coords.y_upper  # leading edge first

The formulas are evaluated exactly as defined. Singular points (the 6-series
logarithms at x = 0, x = a and x = 1) yield infinities or NaNs which are
returned unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

import numpy as np
import numpy.typing as npt

from ..exceptions import validate_min, validate_positive
from ..logging import get_logger
from .descriptor import AirfoilDescriptor, parse_descriptor

log = get_logger("naca")

FloatArray = npt.NDArray[np.float64]

# Thickness polynomial coefficients
A0, A1, A2, A3 = 0.2969, -0.1260, -0.3516, 0.2843
A4_OPEN = -0.1015
A4_CLOSED = -0.1036


class Spacing(str, Enum):
    """Distribution of stations along the chord."""

    LINEAR = "linear"
    COSINE = "cosine"


class TrailingEdge(str, Enum):
    """Trailing-edge closure."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class SamplingSpec:
    """How to sample an airfoil.

    Attributes:
        points: Number of stations per surface (s >= 2).
        spacing: Linear or cosine station distribution.
        chord: Chord length the unit airfoil is scaled by (> 0).
        alpha: Angle of attack in degrees.
        trailing_edge: Open or closed trailing edge.
    """

    points: int = 1000
    spacing: Spacing = Spacing.COSINE
    chord: float = 1.0
    alpha: float = 0.0
    trailing_edge: TrailingEdge = TrailingEdge.OPEN

    def __post_init__(self):
        validate_min(self.points, 2, "points")
        validate_positive(self.chord, "chord")
        object.__setattr__(self, "spacing", Spacing(self.spacing))
        object.__setattr__(self, "trailing_edge", TrailingEdge(self.trailing_edge))


@dataclass(frozen=True)
class AirfoilCoordinates:
    """Sampled surfaces and camber line, all of length ``s``.

    Stations run from the leading edge (index 0) to the trailing edge.
    """

    descriptor: AirfoilDescriptor
    x_upper: FloatArray
    y_upper: FloatArray
    x_lower: FloatArray
    y_lower: FloatArray
    x_camber: FloatArray
    y_camber: FloatArray

    def __len__(self) -> int:
        return len(self.x_upper)

    @property
    def upper(self) -> FloatArray:
        return np.column_stack([self.x_upper, self.y_upper])

    @property
    def lower(self) -> FloatArray:
        return np.column_stack([self.x_lower, self.y_lower])

    @property
    def camber(self) -> FloatArray:
        return np.column_stack([self.x_camber, self.y_camber])


def stations(points: int, spacing: Union[Spacing, str] = Spacing.COSINE) -> FloatArray:
    """Return ``points`` abscissas in [0, 1].

    Cosine spacing clusters stations at both the leading and trailing edge.
    """
    i = np.arange(points, dtype=np.float64)
    if Spacing(spacing) is Spacing.LINEAR:
        return i / (points - 1)
    return (1.0 - np.cos(i * np.pi / (points - 1))) / 2.0


def thickness(x: FloatArray, t: float, trailing_edge: Union[TrailingEdge, str] = TrailingEdge.OPEN) -> FloatArray:
    """Half-thickness distribution for thickness fraction ``t``.

    With the closed trailing-edge coefficient the distribution vanishes at x = 1.
    """
    a4 = A4_CLOSED if TrailingEdge(trailing_edge) is TrailingEdge.CLOSED else A4_OPEN
    return (t / 0.2) * (A0 * np.sqrt(x) + A1 * x + A2 * x**2 + A3 * x**3 + a4 * x**4)


def _four_digit_camber(x: FloatArray, m: float, p: float) -> Tuple[FloatArray, FloatArray]:
    yc = np.zeros_like(x)
    dyc = np.zeros_like(x)

    front = x < p
    if front.any():
        xf = x[front]
        yc[front] = m * xf / p**2 * (2 * p - xf)
        dyc[front] = 2 * m / p**2 * (p - xf)

    back = ~front
    xb = x[back]
    yc[back] = m * (1 - xb) / (1 - p) ** 2 * (1 + xb - 2 * p)
    dyc[back] = 2 * m / (1 - p) ** 2 * (p - xb)
    return yc, dyc


def _five_digit_camber(x: FloatArray, p: float) -> Tuple[FloatArray, FloatArray]:
    # Regression fits of the tabulated r and k1 against p
    r = 3.33333333333212 * p**3 + 0.700000000000909 * p**2 + 1.19666666666638 * p - 0.00399999999996247
    k1 = (1514933.33335235 * p**4 - 1087744.00001147 * p**3 + 286455.266669048 * p**2
          - 32968.4700001967 * p + 1420.18500000524)

    yc = np.empty_like(x)
    dyc = np.empty_like(x)

    front = x < r
    xf = x[front]
    yc[front] = k1 / 6 * (xf**3 - 3 * r * xf**2 + r**2 * (3 - r) * xf)
    dyc[front] = k1 / 6 * (3 * xf**2 - 6 * r * xf + r**2 * (3 - r))

    back = ~front
    yc[back] = k1 * r**3 / 6 * (1 - x[back])
    dyc[back] = -k1 * r**3 / 6
    return yc, dyc


def _five_digit_reflex_camber(x: FloatArray, p: float) -> Tuple[FloatArray, FloatArray]:
    r = 10.6666666666861 * p**3 - 2.00000000001601 * p**2 + 1.73333333333684 * p - 0.0340000000002413
    k1 = -27973.3333333385 * p**3 + 17972.8000000027 * p**2 - 3888.40666666711 * p + 289.076000000022
    k21 = 85.5279999999984 * p**3 - 34.9828000000004 * p**2 + 4.80324000000028 * p - 0.21526000000003

    base = k21 * (1 - r) ** 3 + r**3
    yc = np.empty_like(x)
    dyc = np.empty_like(x)

    front = x < r
    xf = x[front]
    yc[front] = k1 / 6 * ((xf - r) ** 3 - base * xf + r**3)
    dyc[front] = k1 / 6 * (3 * (xf - r) ** 2 - base)

    back = ~front
    xb = x[back]
    yc[back] = k1 / 6 * (k21 * (xb - r) ** 3 - base * xb + r**3)
    dyc[back] = k1 / 6 * (3 * k21 * (xb - r) ** 2 - base)
    return yc, dyc


def _six_series_camber(x: FloatArray, a: float, c_li: float) -> Tuple[FloatArray, FloatArray]:
    """Mean line of the NACA 6-series for loading extent ``a``.

    Evaluated without domain protection: ln(0) and 0 * ln(0) produce -inf
    and NaN at the end points and at x = a.
    """
    g = -1 / (1 - a) * (a**2 * (0.5 * np.log(a) - 0.25) + 0.25)
    h = 1 / (1 - a) * (0.5 * (1 - a) ** 2 * np.log(1 - a) - 0.25 * (1 - a) ** 2) + g
    factor = c_li / (2 * np.pi * (a + 1))

    log_ax = np.log(np.abs(a - x))
    log_1x = np.log(1 - x)

    bracket = 1 / (1 - a) * (
        0.5 * (a - x) ** 2 * log_ax
        - 0.5 * (1 - x) ** 2 * log_1x
        + 0.25 * (1 - x) ** 2
        - 0.25 * (a - x) ** 2
    )
    yc = factor * (bracket - x * np.log(x) + g - h * x)

    inner = (
        x / 2 - a / 2
        + log_1x * (2 * x - 2) / 2
        + log_ax * (2 * a - 2 * x) / 2
        + np.sign(a - x) * (a - x) ** 2 / (2 * np.abs(a - x))
    )
    dyc = -factor * (h + np.log(x) - inner / (a - 1) + 1)
    return yc, dyc


def camber_line(descriptor: AirfoilDescriptor, x: FloatArray) -> Tuple[FloatArray, FloatArray]:
    """Camber ordinate and slope at the unit-chord stations ``x``."""
    if descriptor.series == 4:
        return _four_digit_camber(x, descriptor.max_camber, descriptor.camber_position)
    if descriptor.series == 5:
        if descriptor.reflex:
            return _five_digit_reflex_camber(x, descriptor.camber_position)
        return _five_digit_camber(x, descriptor.camber_position)
    return _six_series_camber(x, descriptor.loading_extent, descriptor.design_lift)


def generate_naca(
    code: Union[int, str, AirfoilDescriptor],
    sampling: SamplingSpec = SamplingSpec(),
) -> AirfoilCoordinates:
    """Generate the surface and camber coordinates of a NACA airfoil.

    Args:
        code: NACA code as integer, digit string or parsed descriptor.
        sampling: Station count, spacing, chord, angle of attack and
            trailing-edge closure.

    Returns:
        AirfoilCoordinates with six arrays of length ``sampling.points``.

    Raises:
        UnsupportedDescriptorError: if the code cannot be generated.
    """
    descriptor = parse_descriptor(code)
    s = sampling.points
    c = sampling.chord
    alpha = np.radians(sampling.alpha)

    with np.errstate(divide="ignore", invalid="ignore"):
        x = stations(s, sampling.spacing)
        yt = thickness(x, descriptor.thickness, sampling.trailing_edge)
        yc, dyc = camber_line(descriptor, x)

        # Angle of attack tilts the camber line about mid-chord
        yc = yc + (0.5 - x) * np.sin(alpha)
        dyc = dyc / np.cos(alpha) - np.tan(alpha)

        theta = np.arctan(dyc)
        x_rot = 0.5 - (0.5 - x) * np.cos(alpha)

        coords = AirfoilCoordinates(
            descriptor=descriptor,
            x_upper=(x_rot - yt * np.sin(theta)) * c,
            y_upper=(yc + yt * np.cos(theta)) * c,
            x_lower=(x_rot + yt * np.sin(theta)) * c,
            y_lower=(yc - yt * np.cos(theta)) * c,
            x_camber=x_rot * c,
            y_camber=yc * c,
        )

    non_finite = int(np.count_nonzero(~np.isfinite(coords.y_upper)))
    if non_finite:
        log.debug("{} produced {} non-finite stations", descriptor, non_finite)
    log.debug("Generated {} with {} {} stations", descriptor, s, sampling.spacing.value)
    return coords
