"""Eigenvalues of the second-order finite-difference Laplacian.

For a uniform grid of ``n`` points with spacing ``h``:

* Periodic (m = 0..n-1):  ``(2 - 2 cos(2 pi m / n)) / h^2``
* Dirichlet (m = 1..n):   ``(2 - 2 cos(pi m / (n + 1))) / h^2``
* Neumann (m = 0..n-1):   ``(2 - 2 cos(pi m / n)) / h^2``

In several dimensions the eigenvalues of the axes add up. Periodic and
Neumann conditions have a zero eigenvalue (the constant mode), which the
solvers must treat specially.
"""

from __future__ import annotations

import numpy as np

from .bc import BCType


def eigenvalues(n: int, h: float, bc: BCType) -> np.ndarray:
    """Return the ``n`` eigenvalues of the 1D negative Laplacian for ``bc``.

    Dirichlet eigenvalues for m = 1..n are stored at indices 0..n-1.
    """
    bc = BCType(bc)
    h2 = h * h
    if bc is BCType.PERIODIC:
        m = np.arange(n, dtype=float)
        return (2.0 - 2.0 * np.cos(2.0 * np.pi * m / n)) / h2
    if bc is BCType.DIRICHLET:
        m = np.arange(1, n + 1, dtype=float)
        return (2.0 - 2.0 * np.cos(np.pi * m / (n + 1))) / h2
    m = np.arange(n, dtype=float)
    return (2.0 - 2.0 * np.cos(np.pi * m / n)) / h2


def eigenvalues_periodic(n: int, h: float) -> np.ndarray:
    return eigenvalues(n, h, BCType.PERIODIC)


def eigenvalues_dirichlet(n: int, h: float) -> np.ndarray:
    return eigenvalues(n, h, BCType.DIRICHLET)


def eigenvalues_neumann(n: int, h: float) -> np.ndarray:
    return eigenvalues(n, h, BCType.NEUMANN)


def has_zero_eigenvalue(bc: BCType) -> bool:
    """True if ``bc`` has a constant mode with zero eigenvalue."""
    return bc in (BCType.PERIODIC, BCType.NEUMANN)


def zero_eigenvalue_index(bc: BCType) -> int:
    """Index of the zero eigenvalue, or -1 when there is none."""
    return 0 if has_zero_eigenvalue(bc) else -1