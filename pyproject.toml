[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terrainroute"
version = "1.0.0"
description = "Building blocks for terrain-sensitive routing: geographic tiling, tile downloads and graphs of cost features"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "terrain", "gis", "tiles", "land cover", "elevation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["terrainroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
