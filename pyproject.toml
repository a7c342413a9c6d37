[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raygeom"
version = "0.1.0"
description = "Ray-shape intersection and shape sampling for spheres and triangle meshes"
requires-python = ">=3.10"
keywords = ["ray tracing", "geometry", "intersection", "rendering", "sampling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = ["numpy"]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raygeom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
