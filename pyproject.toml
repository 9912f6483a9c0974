[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libstacks"
version = "0.1.0"
description = "A small library management system: book catalogue, borrower records, fines and an admin console."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "books", "catalogue", "lending", "fines"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
libstacks = "libstacks.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["libstacks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
