"""Triangle meshes stored in world space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np


def _rows(values: Iterable[Sequence[float]], width: int, name: str) -> np.ndarray:
    array = np.asarray(list(values), dtype=float)
    if array.size == 0:
        return np.zeros((0, width))
    if array.ndim != 2 or array.shape[1] != width:
        raise ValueError(f"{name} must be a sequence of {width}-component vectors")
    return array


def _normalize_rows(rows: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(rows, axis=1, keepdims=True)
    return np.divide(rows, lengths, out=np.zeros_like(rows), where=lengths > 0)


@dataclass(eq=False)
class Vertex:
    """A mesh vertex with its attributes."""

    position: Sequence[float]
    normal: Sequence[float]
    tangent: Sequence[float]
    tex_coord: Sequence[float] = (0.0, 0.0)


class Mesh:
    """Vertex attributes and triangle indices, transformed into world space."""

    def __init__(
        self,
        positions: Iterable[Sequence[float]],
        normals: Iterable[Sequence[float]],
        tangents: Iterable[Sequence[float]],
        tex_coords: Iterable[Sequence[float]],
        indices: Iterable[int],
        transform: Optional[Sequence[Sequence[float]]] = None,
    ) -> None:
        positions = _rows(positions, 3, "positions")
        normals = _rows(normals, 3, "normals")
        tangents = _rows(tangents, 3, "tangents")
        tex_coords = _rows(tex_coords, 2, "tex_coords")

        count = len(positions)
        if len(normals) != count or len(tangents) != count:
            raise ValueError("normals and tangents must match positions in length")
        if len(tex_coords) not in (0, count):
            raise ValueError("tex_coords must be empty or match positions in length")

        matrix = np.identity(4) if transform is None else np.asarray(transform, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("transform must be a 4x4 matrix")
        linear = matrix[:3, :3]
        translation = matrix[:3, 3]

        self.positions = positions @ linear.T + translation
        self.normals = _normalize_rows(normals @ linear.T)
        self.tangents = _normalize_rows(tangents @ linear.T)
        self.tex_coords = tex_coords

        self.indices = np.asarray(list(indices), dtype=np.int64)
        if self.indices.size and (self.indices.min() < 0 or self.indices.max() >= count):
            raise ValueError("triangle index out of range")
        self.triangle_count = len(self.indices) // 3

    @classmethod
    def from_vertices(
        cls,
        vertices: Iterable[Vertex],
        indices: Iterable[int],
        transform: Optional[Sequence[Sequence[float]]] = None,
    ) -> "Mesh":
        """Build a mesh from interleaved vertices."""
        vertices = list(vertices)
        return cls(
            [v.position for v in vertices],
            [v.normal for v in vertices],
            [v.tangent for v in vertices],
            [v.tex_coord for v in vertices],
            indices,
            transform,
        )