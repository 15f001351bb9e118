"""Spectral Poisson solvers on periodic grids of one to three dimensions.

Each plan solves ``-Δu = f`` for the standard second-order finite-difference
Laplacian on a uniform periodic grid. A plan precomputes the eigenvalues and
transforms once and can then be reused for many right-hand sides.

The constant mode has a zero eigenvalue, so the problem only has a solution
when the right-hand side has mean zero. How that is handled is chosen with
:class:`~spectralpde.options.NullspaceHandling`:

* ``ZERO_MODE`` (default): the RHS must have mean zero, and the zero mode of
  the solution is set to zero.
* ``SUBTRACT_MEAN``: the RHS mean is subtracted before solving.
* ``ERROR``: solving raises :class:`~spectralpde.errors.NullspaceError`.

With :func:`~spectralpde.options.with_solution_mean` a constant is added to
the solution afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence

import numpy as np

from .eigenvalues import eigenvalues_periodic
from .errors import (
    InvalidSizeError,
    InvalidSpacingError,
    NilBufferError,
    NonZeroMeanError,
    NullspaceError,
    SizeMismatchError,
)
from .fft_plan import FFTPlan, is_power_of_two
from .grid import Shape
from .options import NullspaceHandling, Option, Options, apply_options, default_options
from .parallel import effective_workers

_log = logging.getLogger(__name__)

MEAN_TOL = 1e-12


def mean_and_max_abs(values: Sequence[float]) -> tuple[float, float]:
    """Return the mean and the largest absolute value of ``values``."""
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size == 0:
        return 0.0, 0.0
    return float(arr.mean()), float(np.abs(arr).max())


def mean_within_tolerance(mean: float, max_abs: float) -> bool:
    """True when ``mean`` is zero relative to the data's magnitude."""
    return abs(mean) <= MEAN_TOL * (1.0 + max_abs)


class _PeriodicPlan:
    """Shared machinery of the fixed-dimension periodic plans."""

    def __init__(
        self,
        dims: Sequence[int],
        spacing: Sequence[float],
        opts: Sequence[Option],
        real_fft_supported: bool,
    ) -> None:
        if any(n < 1 for n in dims):
            raise InvalidSizeError()
        if any(h <= 0 for h in spacing):
            raise InvalidSpacingError()

        options = apply_options(default_options(), opts)
        self._options = Options(
            nullspace=options.nullspace,
            solution_mean=options.solution_mean,
            use_real_fft=options.use_real_fft,
            workers=effective_workers(options.workers),
            in_place=options.in_place,
        )
        self._dims = tuple(int(n) for n in dims)
        self._spacing = tuple(float(h) for h in spacing)
        self._grid_shape = Shape(*self._dims)
        self._size = self._grid_shape.size()

        eig = [eigenvalues_periodic(n, h) for n, h in zip(self._dims, self._spacing)]

        self._use_real = False
        if self._options.use_real_fft and real_fft_supported:
            *_, last = self._dims
            if last % 2 != 0 or last < 2 or not all(map(is_power_of_two, self._dims)):
                _log.warning(
                    "real FFT disabled for %dD plan %s: requires even last size "
                    "and power-of-two sizes",
                    len(self._dims),
                    self._dims,
                )
            else:
                self._use_real = True

        if self._use_real:
            half = self._dims[-1] // 2 + 1
            eig = eig[:-1] + [eig[-1][:half]]
            self._ffts: list[FFTPlan] = []
        else:
            self._ffts = [FFTPlan(n, self._options.workers) for n in self._dims]

        denom = sum(np.meshgrid(*eig, indexing="ij", sparse=True))
        denom = np.asarray(denom, dtype=float)
        self._inverse_eig = np.divide(
            1.0, denom, out=np.zeros_like(denom), where=denom != 0
        )

    @property
    def options(self) -> Options:
        return self._options

    @property
    def shape(self) -> tuple[int, ...]:
        return self._dims

    @property
    def uses_real_fft(self) -> bool:
        """True when the plan runs on real-to-complex transforms."""
        return self._use_real

    def solve(self, rhs: Sequence[float]) -> np.ndarray:
        """Solve ``-Δu = rhs`` and return ``u`` as a flat row-major array."""
        if rhs is None:
            raise NilBufferError()
        arr = np.asarray(rhs, dtype=float).reshape(-1)
        if arr.size != self._size:
            raise SizeMismatchError()

        nullspace = self._options.nullspace
        if nullspace == NullspaceHandling.ERROR:
            raise NullspaceError()

        mean, max_abs = mean_and_max_abs(arr)
        if nullspace == NullspaceHandling.ZERO_MODE and not mean_within_tolerance(
            mean, max_abs
        ):
            raise NonZeroMeanError()
        offset = mean if nullspace == NullspaceHandling.SUBTRACT_MEAN else 0.0

        if self._use_real:
            spec = np.fft.rfftn((arr - offset).reshape(self._dims))
            spec *= self._inverse_eig
            result = np.fft.irfftn(spec, s=self._dims).reshape(-1)
        else:
            work = (arr - offset).astype(complex)
            for axis, plan in enumerate(self._ffts):
                plan.transform_lines(work, self._grid_shape, axis, False)
            work *= self._inverse_eig.reshape(-1)
            for axis in reversed(range(len(self._ffts))):
                self._ffts[axis].transform_lines(work, self._grid_shape, axis, True)
            result = work.real.copy()

        add_mean = self._options.solution_mean
        if add_mean is not None:
            result += add_mean
        return result

    def solve_in_place(self, buf: MutableSequence[float]) -> None:
        """Solve with ``buf`` as the RHS and overwrite it with the solution."""
        solution = self.solve(buf)
        if isinstance(buf, np.ndarray):
            buf.reshape(-1)[:] = solution
        else:
            buf[:] = solution.tolist()


class Plan1DPeriodic(_PeriodicPlan):
    """Reusable solver for ``-Δu = f`` on a 1D periodic grid."""

    def __init__(self, nx: int, hx: float, *args: Option) -> None:
        super().__init__((nx,), (hx,), args, real_fft_supported=False)

    def solve(self, rhs: Sequence[float]) -> np.ndarray:
        return super().solve(rhs)

    def solve_in_place(self, buf: MutableSequence[float]) -> None:
        super().solve_in_place(buf)


class Plan2DPeriodic(_PeriodicPlan):
    """Reusable solver for ``-Δu = f`` on a 2D periodic grid (row-major)."""

    def __init__(self, nx: int, ny: int, hx: float, hy: float, *args: Option) -> None:
        super().__init__((nx, ny), (hx, hy), args, real_fft_supported=True)

    def solve(self, rhs: Sequence[float]) -> np.ndarray:
        return super().solve(rhs)

    def solve_in_place(self, buf: MutableSequence[float]) -> None:
        super().solve_in_place(buf)


class Plan3DPeriodic(_PeriodicPlan):
    """Reusable solver for ``-Δu = f`` on a 3D periodic grid (row-major)."""

    def __init__(
        self,
        nx: int,
        ny: int,
        nz: int,
        hx: float,
        hy: float,
        hz: float,
        *args: Option,
    ) -> None:
        super().__init__((nx, ny, nz), (hx, hy, hz), args, real_fft_supported=True)

    def solve(self, rhs: Sequence[float]) -> np.ndarray:
        return super().solve(rhs)

    def solve_in_place(self, buf: MutableSequence[float]) -> None:
        super().solve_in_place(buf)