"""NACA descriptor parsing.

A descriptor is the integer NACA code (``2412``, ``23012``, ``641212``).
Parsing classifies the series by digit count and extracts the
family-specific parameters; every descriptor error surfaces here, before any
coordinate array is allocated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import UnsupportedDescriptorError


SUPPORTED_SERIES = (4, 5, 6)


def _digit(code: int, position: int, count: int) -> int:
    """Return the ``position``-th digit (0 = most significant) of a ``count``-digit code."""
    return (code // 10 ** (count - 1 - position)) % 10


def series_of(code: int) -> int:
    """Classify a NACA code into its series by digit count.

    Leading zeros carry no information, so ``12`` and ``0012`` are the same
    4-digit code. Anything with eight or more digits is reported as 8.
    """
    if code < 10_000:
        return 4
    if code < 100_000:
        return 5
    if code < 1_000_000:
        return 6
    if code < 10_000_000:
        return 7
    return 8


@dataclass(frozen=True)
class AirfoilDescriptor:
    """Parsed NACA code."""

    code: int
    series: int
    thickness: float
    max_camber: float = 0.0
    camber_position: float = 0.0
    reflex: bool = False
    design_lift_digit: Optional[int] = None
    loading_extent: Optional[float] = None
    design_lift: Optional[float] = None

    @property
    def digits(self) -> str:
        return f"{self.code:0{self.series}d}"

    @property
    def symmetric(self) -> bool:
        if self.series == 4:
            return self.max_camber == 0.0
        if self.series == 6:
            return self.design_lift == 0.0
        return False

    def __str__(self) -> str:
        return f"NACA {self.digits}"


def _normalize(code: Union[int, str]) -> int:
    if isinstance(code, bool):
        raise UnsupportedDescriptorError("NACA descriptor must be a digit string or integer",
                                         details={"descriptor": code})
    if isinstance(code, int):
        value = code
    elif isinstance(code, str):
        text = "".join(code.split())
        if text[:4].upper() == "NACA":
            text = text[4:].lstrip("-")
        if not text.isdigit():
            raise UnsupportedDescriptorError("NACA descriptor must contain only digits",
                                             details={"descriptor": code})
        value = int(text)
    else:
        raise UnsupportedDescriptorError("NACA descriptor must be a digit string or integer",
                                         details={"descriptor": code, "type": type(code).__name__})

    if value < 0:
        raise UnsupportedDescriptorError("NACA descriptor must not be negative", details={"descriptor": code})
    return value


def parse_descriptor(code: Union[int, str, AirfoilDescriptor]) -> AirfoilDescriptor:
    """Parse ``code`` into an :class:`AirfoilDescriptor`.

    Raises:
        UnsupportedDescriptorError: for non-numeric input, 7- and 8-digit
            codes, a 5-digit code whose third digit is not 0 or 1, and a
            6-digit code that does not start with 6.
    """
    if isinstance(code, AirfoilDescriptor):
        return code

    value = _normalize(code)
    series = series_of(value)
    thickness = (value % 100) / 100

    if series == 4:
        return AirfoilDescriptor(
            code=value,
            series=4,
            thickness=thickness,
            max_camber=_digit(value, 0, 4) / 100,
            camber_position=_digit(value, 1, 4) / 10,
        )

    if series == 5:
        reflex_digit = _digit(value, 2, 5)
        if reflex_digit not in (0, 1):
            raise UnsupportedDescriptorError(
                "Third digit of a 5-digit NACA code must be 0 or 1",
                details={"descriptor": value, "third_digit": reflex_digit}
            )
        return AirfoilDescriptor(
            code=value,
            series=5,
            thickness=thickness,
            camber_position=_digit(value, 1, 5) / 20,
            reflex=reflex_digit == 1,
            design_lift_digit=_digit(value, 0, 5),
        )

    if series == 6:
        leading = _digit(value, 0, 6)
        if leading != 6:
            raise UnsupportedDescriptorError(
                "NACA 6-series code must begin with 6",
                details={"descriptor": value, "first_digit": leading}
            )
        return AirfoilDescriptor(
            code=value,
            series=6,
            thickness=thickness,
            loading_extent=_digit(value, 1, 6) / 10,
            design_lift=_digit(value, 3, 6) / 10,
        )

    raise UnsupportedDescriptorError(
        f"NACA {series}-digit series has not been implemented",
        details={"descriptor": value, "series": series}
    )
