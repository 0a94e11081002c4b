"""Solid mesh synthesis from airfoil outlines."""

from .extrude import AnchorPolicy, ExtrusionSpec, build_solid, extrude, planar_mesh
from .solid import SolidMesh
from .triangulate import triangulate_outline

__all__ = [
    "AnchorPolicy",
    "ExtrusionSpec",
    "SolidMesh",
    "build_solid",
    "extrude",
    "planar_mesh",
    "triangulate_outline",
]
