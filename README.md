# spectralpde

Spectral solvers for the discrete Poisson equation

    -Δu = f

on uniform periodic grids. The solvers diagonalise the second-order
finite-difference Laplacian with the FFT, so a solve costs O(N log N) and the
result satisfies the discrete equation to round-off accuracy.

## Installation

    pip install .

The only runtime dependency is numpy. The test suite needs pytest
(`pip install .[test]`).

## Quick start

```python
import numpy as np
from spectralpde.periodic import Plan2DPeriodic
from spectralpde.options import with_subtract_mean

nx, ny = 128, 128
plan = Plan2DPeriodic(nx, ny, 1.0 / nx, 1.0 / ny, with_subtract_mean())

x = np.arange(nx) / nx
y = np.arange(ny) / ny
rhs = 8 * np.pi**2 * np.outer(np.sin(2 * np.pi * x), np.sin(2 * np.pi * y)).ravel()

u = plan.solve(rhs)   # flat, row-major numpy array
```

A plan precomputes its eigenvalues and transforms; create it once and call
`solve` for each new right-hand side. `solve_in_place(buf)` overwrites `buf`
(a list or numpy array) with the solution.

All grid data is flat and row-major: in 2D the element `(i, j)` is at
`i * ny + j`.

## Modules

- `spectralpde.periodic`: `Plan1DPeriodic(nx, hx, *options)`,
  `Plan2DPeriodic(nx, ny, hx, hy, *options)` and
  `Plan3DPeriodic(nx, ny, nz, hx, hy, hz, *options)`, plus the helpers
  `mean_and_max_abs` and `mean_within_tolerance`.
- `spectralpde.periodic_nd`: `PlanNDPeriodic(shape, h, *options)` for periodic
  grids with any number of dimensions.
- `spectralpde.options`: `Options`, `NullspaceHandling` and the option helpers
  `with_nullspace`, `with_subtract_mean`, `with_solution_mean`,
  `with_workers`, `with_real_fft`, `with_in_place`, together with
  `default_options` and `apply_options`.
- `spectralpde.eigenvalues`: eigenvalues of the 1D discrete Laplacian for
  periodic, Dirichlet and Neumann boundaries (`eigenvalues`,
  `eigenvalues_periodic`, `eigenvalues_dirichlet`, `eigenvalues_neumann`,
  `has_zero_eigenvalue`, `zero_eigenvalue_index`).
- `spectralpde.laplacian`: `apply_1d`, `apply_2d` and `apply_3d` return the
  negative Laplacian stencil applied to a grid, with a boundary type per axis
  (wrapped for periodic, zero for Dirichlet, mirrored for Neumann). They are
  handy for building manufactured test problems.
- `spectralpde.boundary`: `apply_dirichlet_rhs` and `apply_neumann_rhs` add
  inhomogeneous boundary data (`BoundaryData` entries per face) to a
  right-hand side in place.
- `spectralpde.fft_plan`: `FFTPlan(n, workers=1)` applies a complex FFT of
  length `n` along every line of one axis of a row-major grid, in place. The
  inverse is normalised.
- `spectralpde.grid`: `Shape`, `Stride`, row-major index helpers,
  `LineIterator`, `PlaneIterator` and strided copy functions.
- `spectralpde.parallel`: helpers that split line-wise work over threads.
- `spectralpde.bc`: `BCType`, `AxisBC`, `BoundaryFace`, `BoundaryData`.
- `spectralpde.errors`: the exception classes.

## The constant mode (nullspace)

On a periodic grid the constant mode has a zero eigenvalue. A
`NullspaceHandling` value chooses how a plan deals with it:

- `ZERO_MODE` (default): the right-hand side must have mean zero, otherwise
  `NonZeroMeanError` is raised; the zero mode of the solution is set to zero.
- `SUBTRACT_MEAN`: the mean is removed from the right-hand side first. Select
  it with `with_subtract_mean()`.
- `ERROR`: `solve` raises `NullspaceError`.

`with_solution_mean(m)` adds `m` to the solution afterwards.

## Other options

- `with_workers(n)`: number of threads used for the line transforms of the
  1D–3D plans; `0` (the default) means the CPU count.
- `with_real_fft(True)`: 2D and 3D plans use real-to-complex transforms when
  every size is a power of two and the last size is even; otherwise a warning
  is logged and complex transforms are used. `plan.uses_real_fft` tells which.
  `PlanNDPeriodic` logs a warning and ignores this option.

## Errors

Every exception derives from `PoissonError` in `spectralpde.errors`:
`InvalidSizeError`, `InvalidSpacingError`, `SizeMismatchError`,
`NullspaceError`, `NonZeroMeanError`, `NilBufferError`, `ResonantError`,
`SizeError` and `ValidationError`. Most of them are also `ValueError`s.

## What this package does not do

The solver plans cover periodic boundaries only. There is no solver plan for
Dirichlet, Neumann or mixed boundaries and no Helmholtz (`(α - Δ)u = f`)
solver; the eigenvalue, stencil and boundary-data helpers for those boundary
types are provided, but nothing here solves such problems. There is no
command-line tool.