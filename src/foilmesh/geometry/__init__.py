"""Airfoil section geometry: descriptors, coordinates, outlines and splines."""

from .descriptor import AirfoilDescriptor, parse_descriptor
from .naca import AirfoilCoordinates, SamplingSpec, Spacing, TrailingEdge, generate_naca, stations
from .outline import AirfoilOutline, SurfaceTag, assemble_outline, camber_points, outline_from_points
from .spline import NaturalCubicSpline, interpolate, resample_outline

__all__ = [
    "AirfoilCoordinates",
    "AirfoilDescriptor",
    "AirfoilOutline",
    "NaturalCubicSpline",
    "SamplingSpec",
    "Spacing",
    "SurfaceTag",
    "TrailingEdge",
    "assemble_outline",
    "camber_points",
    "generate_naca",
    "interpolate",
    "outline_from_points",
    "parse_descriptor",
    "resample_outline",
    "stations",
]
