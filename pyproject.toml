[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "locutils"
version = "0.1.0"
description = "Location service utilities: NMEA sentence generation, a FIFO list, GNSS target detection and level-filtered logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["gps", "gnss", "glonass", "nmea", "location", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["locutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
