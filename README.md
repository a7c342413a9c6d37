# raygeom

Geometry primitives for a ray tracer: rays, surface intersections, spheres and
triangle meshes, each of which can be hit by a ray and sampled for light
transport.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install .[test]
```

## What it provides

- `raygeom.intersection`
  - `Ray`: an origin and a direction. `Ray.at(t)` gives the point at distance `t`.
  - `Intersection`: a record of a hit, holding the distance, point, texture
    coordinates, geometric normal, shading frame and which side was hit.
    `set_face_normal` orients the normals against the incoming ray.
    `apply_normal_map` bends the shading frame using a tangent-space normal map.
    `medium` picks the medium on the side of the surface that a direction points to.
  - `MediumInterface`: the media inside and outside a surface.
  - `ShapeSample`: a point, a normal and a pdf, as returned by shape sampling.
- `raygeom.mesh`
  - `Vertex` and `Mesh`. A mesh moves its positions, normals and tangents into
    world space with a 4x4 transform. `Mesh.from_vertices` builds one from a
    list of `Vertex`.
- `raygeom.sphere`
  - `Sphere`: `intersect` and `intersect_any` test a ray against the sphere
    between `t_min` and `t_max`. `sample(u)` samples the surface uniformly by
    area, and `sample_from(ref, u)` samples the cone of directions that the
    sphere subtends from a reference point, so its pdf is per solid angle.
- `raygeom.triangle`
  - `Triangle`: one triangle of a `Mesh`, intersected with the
    Möller–Trumbore test. `sample(u)` samples by area and `sample_from(ref, u)`
    converts the pdf to solid angle as seen from `ref`.

## Example

```python
import numpy as np

from raygeom.intersection import Ray
from raygeom.sphere import Sphere

sphere = Sphere(radius=1.0)
ray = Ray(np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, -1.0]))

hit = sphere.intersect(ray, 0.0, np.inf)
if hit is not None:
    print(hit.t, hit.point, hit.normal)
```

`intersect` returns an `Intersection`, or `None` when the ray misses.
`intersect_any` only answers whether there is a hit.

## Running the tests

```
pytest
```