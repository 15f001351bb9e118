"""Spectral Poisson solver on periodic grids of any dimension."""

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
    ValidationError,
)
from .options import NullspaceHandling, Option, Options, apply_options, default_options
from .periodic import mean_and_max_abs, mean_within_tolerance

_log = logging.getLogger(__name__)


class PlanNDPeriodic:
    """Reusable solver for ``-Δu = f`` on an N-dimensional periodic grid.

    Data is stored flat in row-major order; ``h`` gives the spacing per axis.
    """

    def __init__(
        self, shape: Sequence[int] | None, h: Sequence[float] | None, *args: Option
    ) -> None:
        dims = tuple(int(n) for n in (shape if shape is not None else ()))
        if not dims:
            raise InvalidSizeError()
        if any(n < 1 for n in dims):
            raise InvalidSizeError()

        spacing = tuple(float(x) for x in (h if h is not None else ()))
        if len(spacing) != len(dims):
            raise ValidationError("h", "length must match shape dimensions")
        if any(x <= 0 for x in spacing):
            raise InvalidSpacingError()

        options = apply_options(default_options(), args)
        if options.use_real_fft:
            _log.warning(
                "real FFT disabled for ND plan: not supported for arbitrary dimensions"
            )

        self._dims = dims
        self._spacing = spacing
        self._options = options
        self._size = int(np.prod(dims))

        denom = np.zeros(dims, dtype=float)
        for axis, (n, step) in enumerate(zip(dims, spacing)):
            view = [1] * len(dims)
            view[axis] = n
            denom = denom + eigenvalues_periodic(n, step).reshape(view)
        self._inverse_eig = np.divide(
            1.0, denom, out=np.zeros_like(denom), where=denom != 0
        )

    @property
    def shape(self) -> tuple[int, ...]:
        return self._dims

    @property
    def spacing(self) -> tuple[float, ...]:
        return self._spacing

    @property
    def options(self) -> Options:
        return self._options

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

        spec = np.fft.fftn((arr - offset).reshape(self._dims))
        spec *= self._inverse_eig
        result = np.fft.ifftn(spec).real.reshape(-1).copy()

        if self._options.solution_mean is not None:
            result += self._options.solution_mean
        return result

    def solve_in_place(self, buf: MutableSequence[float]) -> None:
        """Solve with ``buf`` as the RHS and overwrite it with the solution."""
        solution = self.solve(buf)
        if isinstance(buf, np.ndarray):
            buf.reshape(-1)[:] = solution
        else:
            buf[:] = solution.tolist()