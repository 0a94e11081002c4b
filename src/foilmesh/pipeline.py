"""One generation run: descriptor -> coordinates -> outline -> solid mesh.

Each run takes an explicit, immutable request and owns all the buffers it
produces; nothing is cached or shared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy.typing as npt

from .geometry.descriptor import AirfoilDescriptor, parse_descriptor
from .geometry.naca import AirfoilCoordinates, SamplingSpec, Spacing, generate_naca
from .geometry.outline import AirfoilOutline, assemble_outline, outline_from_points
from .geometry.spline import resample_outline
from .logging import get_logger
from .mesh.extrude import ExtrusionSpec, build_solid
from .mesh.solid import SolidMesh

log = get_logger("pipeline")


@dataclass(frozen=True)
class GenerationRequest:
    """Everything one generation run needs."""

    descriptor: Union[str, int, AirfoilDescriptor]
    sampling: SamplingSpec = field(default_factory=SamplingSpec)
    extrusion: ExtrusionSpec = field(default_factory=ExtrusionSpec)

    def __post_init__(self):
        # Descriptor errors surface before anything is allocated
        object.__setattr__(self, "descriptor", parse_descriptor(self.descriptor))


@dataclass(frozen=True)
class GenerationResult:
    """Products of one run. ``coordinates`` is None for outlines read from data."""

    outline: AirfoilOutline
    mesh: SolidMesh
    coordinates: Optional[AirfoilCoordinates] = None


def run_pipeline(request: GenerationRequest) -> GenerationResult:
    """Generate coordinates, assemble the outline and build the solid."""
    coords = generate_naca(request.descriptor, request.sampling)
    outline = assemble_outline(coords)
    mesh = build_solid(outline, request.extrusion)
    log.debug("{}: {} outline points, {} vertices, {} faces",
              request.descriptor, len(outline), mesh.vertex_count, mesh.face_count)
    return GenerationResult(outline=outline, mesh=mesh, coordinates=coords)


def run_from_points(
    points: npt.ArrayLike,
    extrusion: ExtrusionSpec = ExtrusionSpec(),
    resample: Optional[int] = None,
    spacing: Union[Spacing, str] = Spacing.COSINE,
    chord: float = 1.0,
) -> GenerationResult:
    """Build a solid from an externally supplied outline, e.g. DAT rows.

    Args:
        points: (N, 2) closed loop in chord-normalized units.
        extrusion: Extrusion parameters.
        resample: If given, resample the loop to this many points first.
        spacing: Spacing used when resampling.
        chord: Scale applied to the points.
    """
    outline = outline_from_points(points)
    if resample is not None:
        outline = outline_from_points(resample_outline(outline.points, resample, spacing))
    if chord != 1.0:
        outline = AirfoilOutline(points=outline.points * chord, tags=outline.tags)

    mesh = build_solid(outline, extrusion)
    log.debug("External outline: {} points, {} vertices, {} faces",
              len(outline), mesh.vertex_count, mesh.face_count)
    return GenerationResult(outline=outline, mesh=mesh)
