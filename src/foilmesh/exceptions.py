"""Custom exceptions for foilmesh.

Provides structured error handling with specific exception types for the
failure modes of airfoil generation, extrusion and serialization.
"""

from typing import Any, Dict, Optional


class FoilMeshError(Exception):
    """Base exception for all foilmesh errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class UnsupportedDescriptorError(FoilMeshError):
    """Raised when a NACA descriptor names a series that cannot be generated."""
    pass


class InvalidParameterError(FoilMeshError):
    """Raised when a sampling, extrusion or spline parameter is out of range."""
    pass


class DataFormatError(FoilMeshError):
    """Raised when coordinate text cannot be read."""
    pass


class ConfigurationError(FoilMeshError):
    """Raised when there's a configuration-related error."""
    pass


def validate_positive(value: float, name: str) -> float:
    """Validate that a value is positive."""
    if not value > 0:
        raise InvalidParameterError(f"{name} must be positive", details={"value": value, "parameter": name})
    return value


def validate_non_negative(value: float, name: str) -> float:
    """Validate that a value is zero or positive."""
    if not value >= 0:
        raise InvalidParameterError(f"{name} must not be negative", details={"value": value, "parameter": name})
    return value


def validate_min(value: int, min_val: int, name: str) -> int:
    """Validate that an integer count is at least ``min_val``."""
    if value < min_val:
        raise InvalidParameterError(
            f"{name} must be at least {min_val}",
            details={"value": value, "min": min_val, "parameter": name}
        )
    return value
