"""Rays, surface intersection records and shape samples."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import numpy as np


def _vec(values: Sequence[float], size: int = 3) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (size,):
        raise ValueError(f"expected a vector of {size} components, got shape {array.shape}")
    return array


@dataclass(eq=False)
class Ray:
    """A ray with an origin and a (not necessarily unit) direction."""

    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self) -> None:
        self.origin = _vec(self.origin)
        self.direction = _vec(self.direction)

    def at(self, t: float) -> np.ndarray:
        """Return the point reached after travelling ``t`` along the ray."""
        return self.origin + t * self.direction


@dataclass(frozen=True)
class MediumInterface:
    """The participating media on either side of a surface."""

    inside: Any = None
    outside: Any = None


@dataclass(eq=False)
class ShapeSample:
    """A point sampled on a shape, its surface normal and its density."""

    point: np.ndarray
    normal: np.ndarray
    pdf: float


@dataclass(eq=False)
class ShadingFrame:
    """Shading normal and tangent, possibly perturbed by normal mapping."""

    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tangent: np.ndarray = field(default_factory=lambda: np.zeros(3))


@dataclass(eq=False)
class Intersection:
    """Geometric record of a ray hitting a surface."""

    t: float
    point: np.ndarray
    uv: np.ndarray
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    front_face: bool = True
    shading: ShadingFrame = field(default_factory=ShadingFrame)
    medium_interface: Optional[MediumInterface] = None

    def __post_init__(self) -> None:
        self.point = _vec(self.point)
        self.uv = _vec(self.uv, 2)
        self.normal = _vec(self.normal)

    def set_face_normal(
        self,
        direction: Sequence[float],
        normal: Sequence[float],
        shading_normal: Sequence[float],
        shading_tangent: Sequence[float],
    ) -> None:
        """Orient the normals so they face against the incoming direction."""
        direction = _vec(direction)
        normal = _vec(normal)
        shading_normal = _vec(shading_normal)
        shading_tangent = _vec(shading_tangent)
        if float(np.dot(direction, normal)) < 0:
            self.front_face = True
            self.normal = normal
            self.shading = ShadingFrame(shading_normal, shading_tangent)
        else:
            self.front_face = False
            self.normal = -normal
            self.shading = ShadingFrame(-shading_normal, -shading_tangent)

    def apply_normal_map(self, normal_map: Callable[[np.ndarray], Sequence[float]]) -> None:
        """Perturb the shading frame with a tangent-space normal map.

        ``normal_map`` maps texture coordinates to an RGB triple in [0, 1].
        """
        rgb = _vec(normal_map(self.uv))
        local = rgb * 2 - 1
        length = float(np.linalg.norm(local))
        if length == 0:
            raise ValueError("normal map produced a zero-length normal")
        local = local / length

        x = self.shading.tangent
        z = self.shading.normal
        y = np.cross(z, x)

        n = x * local[0] + y * local[1] + z * local[2]
        t = x - float(np.dot(x, n)) * n
        self.shading = ShadingFrame(n, t)

    def medium(self, w: Sequence[float]) -> Any:
        """Return the medium a ray leaving in direction ``w`` enters."""
        if self.medium_interface is None:
            raise ValueError("intersection has no medium interface")
        w = _vec(w)
        if self.front_face == (float(np.dot(w, self.normal)) > 0):
            return self.medium_interface.outside
        return self.medium_interface.inside