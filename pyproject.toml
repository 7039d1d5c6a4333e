[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netschem"
version = "0.1.0"
description = "Hierarchical netlist and schematic symbol model with an XML cell library format"
requires-python = ">=3.10"
dependencies = []
keywords = ["netlist", "schematic", "eda", "cell", "symbol", "xml"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netschem = "netschem.cell:main"

[tool.hatch.build.targets.wheel]
packages = ["netschem"]

[tool.pytest.ini_options]
addopts = "-ra"
