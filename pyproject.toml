[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynamic_materials"
version = "0.1.0"
description = "A grid-based falling-sand simulation where configurable materials fall, flow, settle by density and dissolve."
requires-python = ">=3.11"
keywords = ["simulation", "falling-sand", "particles", "cellular-automaton", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dynamic-materials = "dynamic_materials.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dynamic_materials"]

[tool.pytest.ini_options]
addopts = "-ra"
