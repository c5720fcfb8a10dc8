[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geokit"
version = "0.1.0"
description = "Planar and geographic geometry toolkit: WKT and GeoJSON, spatial relations, measurements, R-tree indexing, geohash, UTM and Chinese datum conversions."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gis",
    "geometry",
    "wkt",
    "geojson",
    "rtree",
    "geohash",
    "utm",
    "convex-hull",
    "douglas-peucker",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["geokit"]

[tool.hatch.build.targets.sdist]
include = ["geokit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
