"""Finite-difference negative Laplacian stencils in one to three dimensions."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .bc import BCType
from .errors import SizeError
from .grid import Shape

_PAD_MODES = {
    BCType.PERIODIC: "wrap",
    BCType.DIRICHLET: "constant",
    BCType.NEUMANN: "edge",
}


def _second_difference(u: np.ndarray, axis: int, h: float, bc: BCType) -> np.ndarray:
    """Return ``(2u - u_prev - u_next) / h^2`` along ``axis``.

    Neighbours outside the grid are taken from the boundary condition:
    wrapped for Periodic, zero for Dirichlet, mirrored for Neumann.
    """
    width = [(0, 0)] * u.ndim
    width[axis] = (1, 1)
    padded = np.pad(u, width, mode=_PAD_MODES[BCType(bc)])
    n = u.shape[axis]
    left = np.take(padded, np.arange(0, n), axis=axis)
    right = np.take(padded, np.arange(2, n + 2), axis=axis)
    return (2.0 * u - left - right) * (1.0 / (h * h))


def apply_1d(src: Sequence[float], h: float, bc: BCType) -> np.ndarray:
    """Apply the 1D negative Laplacian to ``src`` and return the result."""
    u = np.array(src, dtype=float).reshape(-1)
    if u.size == 0:
        return u
    return _second_difference(u, 0, h, bc)


def apply_2d(
    src: Sequence[float],
    shape: Sequence[int],
    h: Sequence[float],
    bc: Sequence[BCType],
) -> np.ndarray:
    """Apply the 2D negative Laplacian to row-major ``src`` of ``shape``."""
    shape = Shape(*shape)
    nx, ny = shape[0], shape[1]
    u = np.array(src, dtype=float).reshape(-1)
    if nx == 0 or ny == 0:
        return np.zeros(0)
    total = nx * ny
    if u.size != total:
        raise SizeError(total, u.size, "apply_2d")
    grid = u.reshape(nx, ny)
    out = _second_difference(grid, 0, h[0], bc[0]) + _second_difference(
        grid, 1, h[1], bc[1]
    )
    return out.reshape(-1)


def apply_3d(
    src: Sequence[float],
    shape: Sequence[int],
    h: Sequence[float],
    bc: Sequence[BCType],
) -> np.ndarray:
    """Apply the 3D negative Laplacian to row-major ``src`` of ``shape``."""
    shape = Shape(*shape)
    nx, ny, nz = shape
    u = np.array(src, dtype=float).reshape(-1)
    if nx == 0 or ny == 0 or nz == 0:
        return np.zeros(0)
    total = nx * ny * nz
    if u.size != total:
        raise SizeError(total, u.size, "apply_3d")
    grid = u.reshape(nx, ny, nz)
    out = (
        _second_difference(grid, 0, h[0], bc[0])
        + _second_difference(grid, 1, h[1], bc[1])
        + _second_difference(grid, 2, h[2], bc[2])
    )
    return out.reshape(-1)