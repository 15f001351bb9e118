"""Shapes, strides and indexing helpers for row-major grids of up to three dimensions."""

from __future__ import annotations

import operator
from collections.abc import Iterator, MutableSequence, Sequence
from typing import NamedTuple


class Shape(NamedTuple):
    """Grid dimensions; unused trailing axes have size 1."""

    nx: int
    ny: int = 1
    nz: int = 1

    def dim(self) -> int:
        """Return the dimensionality (1, 2 or 3)."""
        if self.nz > 1:
            return 3
        if self.ny > 1:
            return 2
        return 1

    def size(self) -> int:
        """Return the total number of elements."""
        return self.nx * self.ny * self.nz

    def n(self, axis: int) -> int:
        """Return the size along ``axis`` (0=x, 1=y, 2=z)."""
        return self[axis]


class Stride(NamedTuple):
    """Element strides for each of the three axes."""

    x: int
    y: int
    z: int


def shape_1d(nx: int) -> Shape:
    return Shape(nx, 1, 1)


def shape_2d(nx: int, ny: int) -> Shape:
    return Shape(nx, ny, 1)


def shape_3d(nx: int, ny: int, nz: int) -> Shape:
    return Shape(nx, ny, nz)


def row_major_stride(shape: Sequence[int]) -> Stride:
    """Return C-order strides: ``(ny*nz, nz, 1)``."""
    return Stride(shape[1] * shape[2], shape[2], 1)


def index_1d(i: int) -> int:
    """Return the linear index of a 1D coordinate; rejects non-integers."""
    return operator.index(i)


def index_2d(i: int, j: int, ny: int) -> int:
    return i * ny + j


def index_3d(i: int, j: int, k: int, shape: Sequence[int]) -> int:
    return i * shape[1] * shape[2] + j * shape[2] + k


def index(i: int, j: int, k: int, stride: Sequence[int]) -> int:
    """Return the linear index of ``(i, j, k)`` under ``stride``."""
    return i * stride[0] + j * stride[1] + k * stride[2]


def from_index_1d(idx: int) -> int:
    """Return the 1D coordinate of a linear index; rejects non-integers."""
    return operator.index(idx)


def from_index_2d(idx: int, ny: int) -> tuple[int, int]:
    return divmod(idx, ny)


def from_index_3d(idx: int, shape: Sequence[int]) -> tuple[int, int, int]:
    i, rem = divmod(idx, shape[1] * shape[2])
    j, k = divmod(rem, shape[2])
    return i, j, k


def _other_axes(axis: int) -> tuple[int, int]:
    first, second = (d for d in range(3) if d != axis)
    return first, second


class LineIterator:
    """Walks over all lines of a grid that run parallel to one axis.

    The iterator starts positioned on the first line; :meth:`advance` moves to
    the next one and returns False once every line has been visited.
    """

    def __init__(self, shape: Sequence[int], axis: int) -> None:
        self._shape = Shape(*shape)
        self._stride = row_major_stride(self._shape)
        self._axis = axis
        self._other = _other_axes(axis)
        maxes = [self._shape[d] for d in self._other]

        dim = self._shape.dim()
        if dim < 3 and axis != 2:
            maxes[1] = 1
        if dim < 2 and axis != 1:
            maxes[0] = 1

        self._max = tuple(maxes)
        self._pos = [0, 0]
        self._done = False

    def advance(self) -> bool:
        """Move to the next line; return False when no line is left."""
        if self._done:
            return False
        self._pos[0] += 1
        if self._pos[0] >= self._max[0]:
            self._pos[0] = 0
            self._pos[1] += 1
            if self._pos[1] >= self._max[1]:
                self._done = True
                return False
        return True

    def reset(self) -> None:
        self._pos = [0, 0]
        self._done = False

    def start_index(self) -> int:
        """Linear index of the first element of the current line."""
        coords = [0, 0, 0]
        coords[self._other[0]] = self._pos[0]
        coords[self._other[1]] = self._pos[1]
        coords[self._axis] = 0
        return index(*coords, self._stride)

    def line_stride(self) -> int:
        return self._stride[self._axis]

    def line_length(self) -> int:
        return self._shape[self._axis]

    def num_lines(self) -> int:
        total = 1
        for d in self._other:
            if self._shape[d] > 0:
                total *= self._shape[d]
        return total

    def __iter__(self) -> Iterator[int]:
        """Restart and yield the start index of every line."""
        self.reset()
        yield self.start_index()
        while self.advance():
            yield self.start_index()


class PlaneIterator:
    """Walks over the planes orthogonal to one axis."""

    def __init__(self, shape: Sequence[int], axis: int) -> None:
        self._shape = Shape(*shape)
        self._stride = row_major_stride(self._shape)
        self._axis = axis
        self._other = _other_axes(axis)
        self._max = self._shape[axis]
        self._pos = 0
        self._done = False

    def advance(self) -> bool:
        """Move to the next plane; return False when no plane is left."""
        if self._done:
            return False
        self._pos += 1
        if self._pos >= self._max:
            self._done = True
            return False
        return True

    def reset(self) -> None:
        self._pos = 0
        self._done = False

    def start_index(self) -> int:
        coords = [0, 0, 0]
        coords[self._axis] = self._pos
        return index(*coords, self._stride)

    def plane_stride0(self) -> int:
        return self._stride[self._other[0]]

    def plane_stride1(self) -> int:
        return self._stride[self._other[1]]

    def plane_size0(self) -> int:
        return self._shape[self._other[0]]

    def plane_size1(self) -> int:
        return self._shape[self._other[1]]

    def num_planes(self) -> int:
        return max(self._max, 0)

    def __iter__(self) -> Iterator[int]:
        """Restart and yield the start index of every plane."""
        self.reset()
        yield self.start_index()
        while self.advance():
            yield self.start_index()


def copy_strided(
    dst: MutableSequence[float],
    dst_stride: int,
    src: Sequence[float],
    src_stride: int,
    n: int,
) -> None:
    """Copy ``n`` elements from ``src`` to ``dst`` stepping by the given strides."""
    if n <= 0:
        return
    values = src[0 : (n - 1) * src_stride + 1 : src_stride]
    if len(values) != n:
        raise IndexError("source too short for strided copy")
    target = slice(0, (n - 1) * dst_stride + 1, dst_stride)
    if len(range(*target.indices(len(dst)))) != n:
        raise IndexError("destination too short for strided copy")
    dst[target] = values


def copy_strided_to_contiguous(
    dst: MutableSequence[float], src: Sequence[float], src_stride: int
) -> None:
    """Fill all of ``dst`` from ``src`` read with ``src_stride``."""
    copy_strided(dst, 1, src, src_stride, len(dst))


def copy_contiguous_to_strided(
    dst: MutableSequence[float], dst_stride: int, src: Sequence[float]
) -> None:
    """Write all of ``src`` into ``dst`` with ``dst_stride``."""
    copy_strided(dst, dst_stride, src, 1, len(src))