"""Complex FFT applied along every line of a row-major grid."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

import numpy as np

from .errors import InvalidSizeError, NilBufferError, SizeMismatchError
from .grid import Shape
from .parallel import clamp_workers, effective_workers, line_count, other_axes, parallel_for


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class FFTPlan:
    """Complex FFT of a fixed length, applied line by line along an axis.

    The inverse transform is normalised, so forward followed by inverse
    returns the original data.
    """

    def __init__(self, n: int, workers: int = 1) -> None:
        if n < 1:
            raise InvalidSizeError()
        self._n = n
        self._workers = effective_workers(workers)

    def __len__(self) -> int:
        return self._n

    @property
    def workers(self) -> int:
        return self._workers

    def transform_lines(
        self,
        data: MutableSequence[complex],
        shape: Sequence[int],
        axis: int,
        inverse: bool = False,
    ) -> None:
        """Transform ``data`` in place along every line parallel to ``axis``."""
        if data is None:
            raise NilBufferError()
        shape = Shape(*shape)

        if isinstance(data, np.ndarray):
            if not np.iscomplexobj(data):
                raise TypeError("data must hold complex values")
            arr = data
        else:
            arr = np.asarray(data, dtype=complex)

        if arr.ndim != 1 or arr.size != shape.size():
            raise SizeMismatchError()
        if shape.n(axis) != self._n:
            raise SizeMismatchError()

        o0, o1 = other_axes(axis)
        cube = arr.reshape(shape)
        moved = np.moveaxis(cube, axis, -1)
        # Line number = pos0 + pos1 * shape[o0], matching the grid's line order.
        lines = np.array(moved.transpose(1, 0, 2)).reshape(-1, self._n)

        transform = np.fft.ifft if inverse else np.fft.fft
        num_lines = line_count(shape, axis)
        workers = clamp_workers(self._workers, num_lines)

        def run(_worker: int, start: int, end: int) -> None:
            lines[start:end] = transform(lines[start:end], axis=-1)

        parallel_for(workers, num_lines, run)

        moved[...] = lines.reshape(shape[o1], shape[o0], self._n).transpose(1, 0, 2)
        arr[:] = cube.reshape(-1)
        if arr is not data:
            data[:] = arr.tolist()