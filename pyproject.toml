[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roadrouter"
version = "0.1.0"
description = "Road network graph with shortest paths by distance and by time-dependent travel time"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "shortest-path", "dijkstra", "road-network", "gis", "json", "grisu2"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
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

[project.scripts]
roadrouter = "roadrouter.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["roadrouter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
