"""Sphere shape: ray intersection and point sampling."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from raygeom.intersection import Intersection, Ray, ShapeSample

_Y_AXIS = np.array([0.0, 1.0, 0.0])
_X_AXIS = np.array([1.0, 0.0, 0.0])


def _orthonormal_basis(n: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    sign = math.copysign(1.0, n[2])
    a = -1.0 / (sign + n[2])
    b = n[0] * n[1] * a
    x = np.array([1.0 + sign * n[0] * n[0] * a, sign * b, -sign * n[0]])
    y = np.array([b, sign + n[1] * n[1] * a, -n[1]])
    return x, y


def _tex_coord(normal: np.ndarray) -> np.ndarray:
    theta = math.acos(max(-1.0, min(1.0, -normal[1])))
    phi = math.atan2(-normal[2], normal[0]) + math.pi
    return np.array([phi / (2 * math.pi), theta / math.pi])


def _sample_uniform_sphere(u: Sequence[float]) -> np.ndarray:
    z = 1 - 2 * u[0]
    r = math.sqrt(max(0.0, 1 - z * z))
    phi = 2 * math.pi * u[1]
    return np.array([r * math.cos(phi), r * math.sin(phi), z])


class Sphere:
    """A sphere placed in the world by a center and a rotation."""

    def __init__(
        self,
        center: Sequence[float],
        radius: float,
        rotation: Optional[Sequence[Sequence[float]]] = None,
    ) -> None:
        if radius <= 0:
            raise ValueError("sphere radius must be positive")
        self.center = np.asarray(center, dtype=float)
        self.radius = float(radius)
        self.rotation = np.identity(3) if rotation is None else np.asarray(rotation, dtype=float)
        if self.center.shape != (3,) or self.rotation.shape != (3, 3):
            raise ValueError("center must be a 3-vector and rotation a 3x3 matrix")

    def _local_hit(self, ray: Ray, t_min: float, t_max: float):
        o = self.rotation.T @ (ray.origin - self.center)
        d = self.rotation.T @ ray.direction
        a = float(d @ d)
        half_b = float(o @ d)
        c = float(o @ o) - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None
        sqrt_d = math.sqrt(discriminant)

        root = (-half_b - sqrt_d) / a
        if root < t_min or t_max < root:
            root = (-half_b + sqrt_d) / a
            if root < t_min or t_max < root:
                return None
        return root, o + root * d

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Optional[Intersection]:
        """Return the nearest hit within [t_min, t_max], or None."""
        hit = self._local_hit(ray, t_min, t_max)
        if hit is None:
            return None
        root, local_point = hit
        normal = local_point / self.radius

        isect = Intersection(
            t=root,
            point=self.rotation @ local_point + self.center,
            uv=_tex_coord(normal),
        )
        tangent = np.cross(_Y_AXIS, normal)
        length = float(np.linalg.norm(tangent))
        tangent = tangent / length if length > 0 else _X_AXIS
        n = self.rotation @ normal
        isect.set_face_normal(ray.direction, n, n, self.rotation @ tangent)
        return isect

    def intersect_any(self, ray: Ray, t_min: float, t_max: float) -> bool:
        """Tell whether the ray hits the sphere within [t_min, t_max]."""
        return self._local_hit(ray, t_min, t_max) is not None

    def sample(self, u: Sequence[float]) -> ShapeSample:
        """Sample a point uniformly by area; pdf is per unit area."""
        normal = _sample_uniform_sphere(u)
        point = self.center + normal * self.radius
        area = 4 * math.pi * self.radius * self.radius
        return ShapeSample(point=point, normal=normal, pdf=1 / area)

    def sample_from(self, ref: Sequence[float], u: Sequence[float]) -> ShapeSample:
        """Sample a point visible from ``ref``, uniform over the subtended cone.

        The pdf is per unit solid angle. ``ref`` must lie outside the sphere.
        """
        ref = np.asarray(ref, dtype=float)
        direction = self.center - ref
        distance = float(np.linalg.norm(direction))
        distance_squared = distance * distance
        r2 = self.radius * self.radius
        if distance_squared <= r2:
            raise ValueError("reference point lies inside the sphere")
        direction = direction / distance

        cos_theta_max = math.sqrt(1 - r2 / distance_squared)
        z = 1 + u[1] * (cos_theta_max - 1)
        phi = 2 * math.pi * u[0]
        sin_theta = math.sqrt(max(0.0, 1 - z * z))
        local = np.array([math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, z])

        s = distance * z - math.sqrt(max(0.0, r2 - distance_squared * sin_theta * sin_theta))

        x_axis, y_axis = _orthonormal_basis(direction)
        world = x_axis * local[0] + y_axis * local[1] + direction * local[2]
        point = ref + world * s

        normal = point - self.center
        normal = normal / np.linalg.norm(normal)
        solid_angle = 2 * math.pi * (1 - cos_theta_max)
        return ShapeSample(point=point, normal=normal, pdf=1 / solid_angle)