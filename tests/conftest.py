"""Pytest configuration and fixtures for foilmesh."""

import os

import numpy as np
import pytest

from foilmesh.geometry.naca import SamplingSpec, Spacing, TrailingEdge, generate_naca
from foilmesh.geometry.outline import assemble_outline
from foilmesh.mesh.extrude import AnchorPolicy, ExtrusionSpec


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Keep settings from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("FOILMESH_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def sampling() -> SamplingSpec:
    return SamplingSpec(points=40, spacing=Spacing.COSINE, chord=1.0)


@pytest.fixture
def naca2412(sampling):
    return generate_naca("2412", sampling)


@pytest.fixture
def outline_2412(naca2412):
    return assemble_outline(naca2412)


@pytest.fixture
def closed_outline_0012():
    coords = generate_naca("0012", SamplingSpec(points=30, trailing_edge=TrailingEdge.CLOSED))
    return assemble_outline(coords)


@pytest.fixture
def raw_extrusion() -> ExtrusionSpec:
    """Straight extrusion in synthesis coordinates."""
    return ExtrusionSpec(span=1.0, twist_enabled=False, sections=4, anchor=AnchorPolicy.NONE)


@pytest.fixture
def unit_square() -> np.ndarray:
    return np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


# Custom markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
