"""Ray intersection and sampling for spheres and triangle meshes."""

__version__ = "0.1.0"
__all__ = ["intersection", "mesh", "sphere", "triangle"]