[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spectralpde"
version = "0.1.0"
description = "FFT-based spectral solvers for the discrete Poisson equation on periodic grids"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["poisson", "pde", "spectral", "fft", "finite-difference", "laplacian", "solver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "numpy"]

[tool.hatch.build.targets.wheel]
packages = ["spectralpde"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
