[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sfntkit"
version = "0.1.0"
description = "Read-only parser for OpenType and TrueType font files and collections"
requires-python = ">=3.10"
dependencies = []
keywords = ["opentype", "truetype", "font", "sfnt", "cmap", "colr", "cpal", "fvar"]
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
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sfntkit"]

[tool.pytest.ini_options]
addopts = "-ra"
