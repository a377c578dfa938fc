[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelworld"
version = "0.1.0"
description = "Chunk, section, heightmap and tick primitives for voxel game worlds"
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "chunk", "heightmap", "tick", "game", "world"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxelworld"]

[tool.pytest.ini_options]
addopts = "-ra"
