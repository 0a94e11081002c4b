"""Extrusion of an airfoil outline into a triangulated solid.

The solid is built by a sequence of pure stages, each taking and returning a
:class:`SolidMesh`::

    outline -> extrude -> [twist] -> rotate(-aoa) -> [scale] -> anchor

The span axis is z. Extruded rings sit at z in [-span/2, span/2] before
anchoring, so the spanwise fraction of a vertex is t = (z + span/2) / span.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Union

import numpy as np

from ..exceptions import validate_min, validate_non_negative, validate_positive
from ..geometry.outline import AirfoilOutline
from ..logging import get_logger
from .solid import SolidMesh
from .triangulate import signed_area, triangulate_outline

log = get_logger("extrude")

Stage = Callable[[SolidMesh], SolidMesh]


class AnchorPolicy(str, Enum):
    """Where the finished mesh is placed.

    ``corner`` puts the bounding-box minimum on the origin, ``center`` puts
    the bounding-box centre there and ``none`` keeps synthesis coordinates.
    """

    CORNER = "corner"
    CENTER = "center"
    NONE = "none"


@dataclass(frozen=True)
class ExtrusionSpec:
    """Extrusion parameters.

    Attributes:
        span: Length along the z axis; 0 gives a flat, single-sided mesh.
        twist_enabled: Apply ``twist`` linearly from root to tip.
        twist: Total twist at the tip in degrees, counter-clockwise positive.
        scale_enabled: Scale sections from ``root_scale`` to ``tip_scale``.
        root_scale: In-plane scale factor at the root.
        tip_scale: In-plane scale factor at the tip.
        sections: Number of uniform steps along the span.
        angle_of_attack: Degrees; the mesh is rotated by -angle_of_attack
            about the span axis.
        anchor: Placement of the finished mesh.
    """

    span: float = 0.2
    twist_enabled: bool = True
    twist: float = 0.0
    scale_enabled: bool = False
    root_scale: float = 1.0
    tip_scale: float = 1.0
    sections: int = 48
    angle_of_attack: float = 0.0
    anchor: AnchorPolicy = AnchorPolicy.CORNER

    def __post_init__(self):
        validate_min(self.sections, 1, "sections")
        validate_non_negative(self.span, "span")
        validate_positive(self.root_scale, "root_scale")
        validate_positive(self.tip_scale, "tip_scale")
        object.__setattr__(self, "anchor", AnchorPolicy(self.anchor))

    @property
    def planar(self) -> bool:
        return self.span == 0


def spanwise_fraction(vertices: np.ndarray, span: float) -> np.ndarray:
    """t = (z + span/2) / span for vertices in synthesis coordinates."""
    return (vertices[:, 2] + span / 2) / span


def _rotate_xy(vertices: np.ndarray, angle: Union[float, np.ndarray]) -> np.ndarray:
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    rotated = vertices.copy()
    rotated[:, 0] = vertices[:, 0] * cos_a - vertices[:, 1] * sin_a
    rotated[:, 1] = vertices[:, 0] * sin_a + vertices[:, 1] * cos_a
    return rotated


def planar_mesh(outline: AirfoilOutline) -> SolidMesh:
    """Flat triangulation of the outline at z = 0, facing +z."""
    vertices = np.column_stack([outline.points, np.zeros(len(outline))])
    return SolidMesh(vertices=vertices, faces=triangulate_outline(outline.points))


def extrude(outline: AirfoilOutline, span: float, sections: int) -> SolidMesh:
    """Sweep the outline straight along z in ``sections`` uniform steps.

    Vertex ``k * N + i`` is outline point ``i`` on ring ``k``. Every outline
    edge, including the closing edge, becomes a strip of quads split into
    two triangles; both ends are closed with the outline triangulation.
    """
    validate_min(sections, 1, "sections")
    n = len(outline)
    z = -span / 2 + span * np.arange(sections + 1) / sections

    vertices = np.empty(((sections + 1) * n, 3))
    vertices[:, :2] = np.tile(outline.points, (sections + 1, 1))
    vertices[:, 2] = np.repeat(z, n)

    i = np.arange(n)
    j = (i + 1) % n
    rings = (np.arange(sections) * n)[:, None]
    a = (rings + i).ravel()
    b = (rings + j).ravel()
    c = b + n
    d = a + n
    sides = np.concatenate([np.column_stack([a, b, c]), np.column_stack([a, c, d])])

    cap = triangulate_outline(outline.points)
    root = cap[:, ::-1]
    tip = cap + sections * n

    if signed_area(outline.points) < 0:
        # Clockwise loop: the side strip faces inwards
        sides = sides[:, ::-1]

    faces = np.concatenate([sides, root, tip])
    log.debug("Extruded {} points over {} sections: {} vertices, {} faces",
              n, sections, len(vertices), len(faces))
    return SolidMesh(vertices=vertices, faces=faces)


def twist(mesh: SolidMesh, span: float, angle: float) -> SolidMesh:
    """Rotate each vertex about z by ``angle * t`` degrees."""
    t = spanwise_fraction(mesh.vertices, span)
    return mesh.with_vertices(_rotate_xy(mesh.vertices, np.radians(angle) * t))


def rotate(mesh: SolidMesh, angle: float) -> SolidMesh:
    """Rotate the whole mesh about z by ``angle`` degrees."""
    return mesh.with_vertices(_rotate_xy(mesh.vertices, np.radians(angle)))


def scale(mesh: SolidMesh, span: float, root_scale: float, tip_scale: float) -> SolidMesh:
    """Scale in-plane coordinates by lerp(root_scale, tip_scale, t)."""
    t = spanwise_fraction(mesh.vertices, span)
    factor = root_scale + (tip_scale - root_scale) * t
    vertices = mesh.vertices.copy()
    vertices[:, :2] *= factor[:, None]
    return mesh.with_vertices(vertices)


def anchor(mesh: SolidMesh, policy: Union[AnchorPolicy, str] = AnchorPolicy.CORNER) -> SolidMesh:
    """Translate the mesh according to ``policy``.

    Translation leaves normals unchanged, so they are carried over.
    """
    policy = AnchorPolicy(policy)
    if policy is AnchorPolicy.NONE:
        return mesh

    lo, hi = mesh.bounds
    center = (lo + hi) / 2
    offset = -center
    if policy is AnchorPolicy.CORNER:
        offset = offset + (hi - lo) / 2
    return SolidMesh(vertices=mesh.vertices + offset, faces=mesh.faces, normals=mesh.normals)


def extrusion_stages(spec: ExtrusionSpec) -> List[Stage]:
    """Transform stages applied after the base geometry, in order."""
    stages: List[Stage] = []
    if spec.planar:
        if spec.angle_of_attack:
            stages.append(lambda m: rotate(m, -spec.angle_of_attack))
    else:
        if spec.twist_enabled and spec.twist:
            stages.append(lambda m: twist(m, spec.span, spec.twist))
        if spec.angle_of_attack:
            stages.append(lambda m: rotate(m, -spec.angle_of_attack))
        if spec.scale_enabled:
            stages.append(lambda m: scale(m, spec.span, spec.root_scale, spec.tip_scale))
    stages.append(lambda m: anchor(m, spec.anchor))
    return stages


def build_solid(outline: AirfoilOutline, spec: ExtrusionSpec = ExtrusionSpec()) -> SolidMesh:
    """Turn an outline into a solid mesh according to ``spec``.

    A zero span gives the flat triangulated outline; otherwise the outline
    is extruded and the enabled transforms are applied in sequence.
    """
    if spec.planar:
        mesh = planar_mesh(outline)
    else:
        mesh = extrude(outline, spec.span, spec.sections)

    for stage in extrusion_stages(spec):
        mesh = stage(mesh)
    return mesh
