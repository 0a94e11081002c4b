"""Triangulated solid mesh as flat vertex and index buffers."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt
import trimesh

from ..exceptions import InvalidParameterError


def compute_vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Area-weighted unit vertex normals.

    Vertices that only touch degenerate or non-finite faces get a zero
    normal. Non-finite faces do not contribute to their neighbours.
    """
    normals = np.zeros_like(vertices, dtype=np.float64)
    if len(faces) == 0:
        return normals

    tri = vertices[faces]
    # Cross product length is twice the face area, which gives the weighting
    with np.errstate(invalid="ignore"):
        face_normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    face_normals[~np.isfinite(face_normals).all(axis=1)] = 0.0
    for corner in range(3):
        np.add.at(normals, faces[:, corner], face_normals)

    length = np.linalg.norm(normals, axis=1, keepdims=True)
    return np.divide(normals, length, out=np.zeros_like(normals), where=length > 0)


@dataclass(frozen=True)
class SolidMesh:
    """Vertex positions, triangle indices and per-vertex normals.

    ``faces`` holds one row per triangle; ``faces.ravel()`` is the flat
    index list. Faces are wound so their normals point out of the solid.
    """

    vertices: npt.NDArray[np.float64]
    faces: npt.NDArray[np.int64]
    normals: Optional[npt.NDArray[np.float64]] = None

    def __post_init__(self):
        vertices = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        faces = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        if faces.size and (faces.min() < 0 or faces.max() >= len(vertices)):
            raise InvalidParameterError(
                "Face index out of vertex-buffer bounds",
                details={"vertices": len(vertices), "min_index": int(faces.min()), "max_index": int(faces.max())}
            )
        if self.normals is None:
            normals = compute_vertex_normals(vertices, faces)
        else:
            normals = np.array(self.normals, dtype=np.float64).reshape(-1, 3)

        for array in (vertices, faces, normals):
            array.setflags(write=False)
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "faces", faces)
        object.__setattr__(self, "normals", normals)

    def with_vertices(self, vertices: npt.ArrayLike) -> "SolidMesh":
        """Same topology with moved vertices; normals are recomputed."""
        return SolidMesh(vertices=vertices, faces=self.faces)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def indices(self) -> np.ndarray:
        """Flat triangle-index list."""
        return self.faces.ravel()

    @property
    def bounds(self) -> np.ndarray:
        """(2, 3) array of bounding-box minimum and maximum.

        Non-finite coordinates are left out; an axis with no finite value
        gets NaN bounds.
        """
        finite = np.where(np.isfinite(self.vertices), self.vertices, np.nan)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            return np.array([np.nanmin(finite, axis=0), np.nanmax(finite, axis=0)])

    @property
    def extents(self) -> np.ndarray:
        lo, hi = self.bounds
        return hi - lo

    def face_normals(self) -> np.ndarray:
        tri = self.vertices[self.faces]
        normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        length = np.linalg.norm(normals, axis=1, keepdims=True)
        return np.divide(normals, length, out=np.zeros_like(normals), where=length > 0)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Hand the buffers to trimesh without merging or reordering vertices."""
        return trimesh.Trimesh(
            vertices=self.vertices.copy(),
            faces=self.faces.copy(),
            vertex_normals=self.normals.copy(),
            process=False,
        )
