"""foilmesh: NACA airfoil coordinates and extruded solid meshes.

Generates 4-, 5- and 6-series NACA sections from closed-form formulas,
extrudes them into triangulated solids with optional twist and taper, and
writes OBJ and DAT text.
"""

__version__ = "1.0.0"

from .exceptions import (
    DataFormatError,
    FoilMeshError,
    InvalidParameterError,
    UnsupportedDescriptorError,
)
from .geometry import *
from .mesh import *
from .io import parse_dat, read_dat, to_dat, to_obj, write_dat, write_obj
from .pipeline import GenerationRequest, GenerationResult, run_from_points, run_pipeline

__all__ = [
    "__version__",
    "AirfoilCoordinates",
    "AirfoilDescriptor",
    "AirfoilOutline",
    "AnchorPolicy",
    "DataFormatError",
    "ExtrusionSpec",
    "FoilMeshError",
    "GenerationRequest",
    "GenerationResult",
    "InvalidParameterError",
    "NaturalCubicSpline",
    "SamplingSpec",
    "SolidMesh",
    "Spacing",
    "SurfaceTag",
    "TrailingEdge",
    "UnsupportedDescriptorError",
    "assemble_outline",
    "build_solid",
    "camber_points",
    "extrude",
    "generate_naca",
    "interpolate",
    "outline_from_points",
    "parse_dat",
    "parse_descriptor",
    "planar_mesh",
    "read_dat",
    "resample_outline",
    "run_from_points",
    "run_pipeline",
    "stations",
    "to_dat",
    "to_obj",
    "triangulate_outline",
    "write_dat",
    "write_obj",
]
