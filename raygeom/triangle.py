"""Mesh triangles: Möller-Trumbore intersection and area sampling."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from raygeom.intersection import Intersection, Ray, ShapeSample
from raygeom.mesh import Mesh

EPSILON = float(np.finfo(np.float32).eps)


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    return v / length if length > 0 else v


class Triangle:
    """One triangle of a mesh, referenced by its index."""

    def __init__(self, mesh: Mesh, index: int) -> None:
        if not 0 <= index < mesh.triangle_count:
            raise IndexError(f"triangle {index} out of range")
        self.mesh = mesh
        self.index = index
        self.vertices = tuple(int(i) for i in mesh.indices[3 * index : 3 * index + 3])

    def _corners(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        p = self.mesh.positions
        a, b, c = self.vertices
        return p[a], p[b], p[c]

    def _interpolate(self, attribute: np.ndarray, u: float, v: float, w: float) -> np.ndarray:
        a, b, c = self.vertices
        return w * attribute[a] + u * attribute[b] + v * attribute[c]

    def _hit(self, ray: Ray, t_min: float, t_max: float):
        p0, p1, p2 = self._corners()
        e1 = p1 - p0
        e2 = p2 - p0

        length = float(np.linalg.norm(ray.direction))
        if length == 0:
            return None
        d = ray.direction / length
        pvec = np.cross(d, e2)

        det = float(np.dot(e1, pvec))
        if abs(det) < EPSILON:
            return None
        inv_det = 1 / det

        tvec = ray.origin - p0
        u = float(np.dot(tvec, pvec)) * inv_det
        if u < 0 or u > 1:
            return None

        qvec = np.cross(tvec, e1)
        v = float(np.dot(d, qvec)) * inv_det
        if v < 0 or u + v > 1:
            return None

        t = float(np.dot(e2, qvec)) * inv_det / length
        if t < t_min or t > t_max:
            return None
        return t, u, v, e1, e2

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Optional[Intersection]:
        """Return the hit within [t_min, t_max], or None."""
        hit = self._hit(ray, t_min, t_max)
        if hit is None:
            return None
        t, u, v, e1, e2 = hit
        w = 1 - u - v

        if len(self.mesh.tex_coords):
            uv = self._interpolate(self.mesh.tex_coords, u, v, w)
        else:
            uv = np.array([u, v])

        isect = Intersection(t=t, point=ray.at(t), uv=uv)
        normal = _normalize(np.cross(e1, e2))
        isect.set_face_normal(
            ray.direction,
            normal,
            _normalize(self._interpolate(self.mesh.normals, u, v, w)),
            _normalize(self._interpolate(self.mesh.tangents, u, v, w)),
        )
        return isect

    def intersect_any(self, ray: Ray, t_min: float, t_max: float) -> bool:
        """Tell whether the ray hits the triangle within [t_min, t_max]."""
        return self._hit(ray, t_min, t_max) is not None

    def sample(self, u: Sequence[float]) -> ShapeSample:
        """Sample a point uniformly by area; pdf is per unit area."""
        p0, p1, p2 = self._corners()
        e1 = p1 - p0
        e2 = p2 - p0

        a, b = float(u[0]), float(u[1])
        if a + b > 1:
            a, b = 1 - a, 1 - b

        normal = np.cross(e1, e2)
        point = p0 + e1 * a + e2 * b
        length = float(np.linalg.norm(normal))
        if length == 0:
            raise ValueError("degenerate triangle has no area")
        area = length * 0.5
        return ShapeSample(point=point, normal=normal / length, pdf=1 / area)

    def sample_from(self, ref: Sequence[float], u: Sequence[float]) -> ShapeSample:
        """Sample by area and convert the pdf to solid angle as seen from ``ref``."""
        sample = self.sample(u)
        d = sample.point - np.asarray(ref, dtype=float)
        distance_squared = float(np.dot(d, d))
        if distance_squared == 0:
            sample.pdf = math.inf
            return sample
        cosine = abs(float(np.dot(d, sample.normal))) / math.sqrt(distance_squared)
        sample.pdf = math.inf if cosine == 0 else sample.pdf * distance_squared / cosine
        return sample