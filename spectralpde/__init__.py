"""FFT-based Poisson solvers on periodic grids, with grid, stencil and eigenvalue helpers."""

__version__ = "0.1.0"