[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mwfnchem"
version = "0.1.0"
description = "Multiwfn wavefunction files, Gaussian basis sets, nuclear repulsion and repulsion-integral bookkeeping for quantum chemistry"
requires-python = ">=3.10"
keywords = ["quantum chemistry", "multiwfn", "wavefunction", "basis set", "mp2", "cauchy-schwarz screening"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mwfnchem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
