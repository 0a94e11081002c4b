"""OBJ and DAT text serialization.

OBJ output is the Wavefront subset of ``v`` and ``f`` lines only. DAT output
is two-column coordinate text: lower surface from trailing edge to leading
edge, then upper surface from leading edge to trailing edge.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np

from .exceptions import DataFormatError
from .geometry.naca import AirfoilCoordinates
from .logging import get_logger
from .mesh.solid import SolidMesh

log = get_logger("io")

PathLike = Union[str, Path]


def to_obj(mesh: SolidMesh) -> str:
    """Serialize ``mesh`` as OBJ text with 1-indexed faces."""
    lines = [f"v {x} {y} {z}" for x, y, z in mesh.vertices.tolist()]
    lines.extend(f"f {a} {b} {c}" for a, b, c in (mesh.faces + 1).tolist())
    return "\n".join(lines) + "\n"


def write_obj(mesh: SolidMesh, path: PathLike) -> Path:
    path = Path(path)
    path.write_text(to_obj(mesh), encoding="utf-8")
    log.info("Wrote {} vertices and {} faces to {}", mesh.vertex_count, mesh.face_count, path)
    return path


def dat_points(coords: AirfoilCoordinates) -> np.ndarray:
    """Points in DAT order: lower surface reversed, then upper surface."""
    return np.concatenate([coords.lower[::-1], coords.upper])


def to_dat(coords: AirfoilCoordinates, header: Optional[str] = None) -> str:
    """Serialize ``coords`` as DAT text with an optional single header line."""
    lines = []
    if header is not None:
        lines.append(" ".join(header.split()))
    lines.extend(f"{x:.6f} {y:.6f}" for x, y in dat_points(coords).tolist())
    return "\n".join(lines) + "\n"


def write_dat(coords: AirfoilCoordinates, path: PathLike, header: Optional[str] = None) -> Path:
    path = Path(path)
    path.write_text(to_dat(coords, header), encoding="utf-8")
    log.info("Wrote {} points to {}", 2 * len(coords), path)
    return path


def _parse_row(line: str):
    parts = line.split()
    if len(parts) < 2:
        return None
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if np.isnan(x) or np.isnan(y):
        return None
    return x, y


def _lednicer_counts(rows):
    """Upper and lower point counts when ``rows`` open with a Lednicer count line."""
    first = rows[0]
    if not all(value >= 2 and value.is_integer() for value in first):
        return None
    upper, lower = int(first[0]), int(first[1])
    if upper + lower != len(rows) - 1:
        return None
    return upper, lower


def parse_dat(text: str) -> np.ndarray:
    """Read two-column coordinate text into an (N, 2) array.

    Lines that do not start with two numbers, such as a title line or
    blank lines, are skipped. Selig files are returned in file order. A
    Lednicer file (point-count line, then upper and lower surfaces each
    from LE to TE) is joined into one loop: upper TE to LE, then lower
    LE to TE.

    Raises:
        DataFormatError: if no coordinate rows are found.
    """
    rows = []
    skipped = 0
    for line in text.splitlines():
        row = _parse_row(line)
        if row is None:
            skipped += 1 if line.strip() else 0
            continue
        rows.append(row)

    if not rows:
        raise DataFormatError("No coordinate rows found in DAT text", details={"skipped_lines": skipped})
    if skipped:
        log.debug("Skipped {} non-coordinate lines", skipped)

    counts = _lednicer_counts(rows)
    if counts is not None:
        upper_count, lower_count = counts
        log.debug("Lednicer layout with {} upper and {} lower points", upper_count, lower_count)
        points = np.asarray(rows[1:], dtype=np.float64)
        return np.concatenate([points[:upper_count][::-1], points[upper_count:]])
    return np.asarray(rows, dtype=np.float64)


def read_dat(path: PathLike) -> np.ndarray:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataFormatError(f"Cannot read DAT file: {e}", details={"path": str(path)}) from e
    return parse_dat(text)
