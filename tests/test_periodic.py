import math

import numpy as np
import pytest

from spectralpde.bc import BCType
from spectralpde.errors import (
    InvalidSizeError,
    InvalidSpacingError,
    NilBufferError,
    NonZeroMeanError,
    NullspaceError,
    SizeMismatchError,
)
from spectralpde.grid import shape_2d, shape_3d
from spectralpde.laplacian import apply_1d, apply_2d, apply_3d
from spectralpde.options import (
    NullspaceHandling,
    with_nullspace,
    with_real_fft,
    with_solution_mean,
    with_subtract_mean,
    with_workers,
)
from spectralpde.periodic import (
    Plan1DPeriodic,
    Plan2DPeriodic,
    Plan3DPeriodic,
    mean_and_max_abs,
    mean_within_tolerance,
)

TOL = 1e-10
REAL_TOL = 1e-6
P = BCType.PERIODIC


def max_abs_diff(a, b):
    return float(np.max(np.abs(np.asarray(a) - np.asarray(b))))


def grid_2d(nx, ny, hx, hy, fn):
    x = np.arange(nx)[:, None] * hx
    y = np.arange(ny)[None, :] * hy
    return fn(x, y).reshape(-1)


def grid_3d(nx, ny, nz, hx, hy, hz, fn):
    x = np.arange(nx)[:, None, None] * hx
    y = np.arange(ny)[None, :, None] * hy
    z = np.arange(nz)[None, None, :] * hz
    return fn(x, y, z).reshape(-1)


# ---- helpers ----


def test_mean_and_max_abs():
    assert mean_and_max_abs([1.0, -3.0, 2.0]) == (0.0, 3.0)
    assert mean_and_max_abs([]) == (0.0, 0.0)


def test_mean_within_tolerance():
    assert mean_within_tolerance(1e-13, 0.0)
    assert not mean_within_tolerance(1e-3, 1.0)


# ---- 1D ----


def test_1d_invalid_inputs():
    with pytest.raises(InvalidSizeError):
        Plan1DPeriodic(0, 1.0)
    with pytest.raises(InvalidSpacingError):
        Plan1DPeriodic(4, 0)


def test_1d_solve_manufactured():
    n = 64
    h = 1.0 / n
    length = n * h
    plan = Plan1DPeriodic(n, h)
    x = np.arange(n) * h
    u = np.sin(2 * math.pi * x / length) + 0.25 * np.cos(4 * math.pi * x / length)
    rhs = apply_1d(u, h, P)
    got = plan.solve(rhs)
    assert max_abs_diff(got, u) <= TOL


def test_1d_solve_in_place():
    n = 32
    h = 1.0 / n
    length = n * h
    plan = Plan1DPeriodic(n, h)
    x = np.arange(n) * h
    u = np.sin(2 * math.pi * x / length) - 0.125 * np.cos(6 * math.pi * x / length)
    buf = apply_1d(u, h, P)
    plan.solve_in_place(buf)
    assert max_abs_diff(buf, u) <= TOL


def test_1d_solve_in_place_list():
    n = 16
    h = 1.0 / n
    x = np.arange(n) * h
    u = np.sin(2 * math.pi * x)
    buf = apply_1d(u, h, P).tolist()
    Plan1DPeriodic(n, h).solve_in_place(buf)
    assert isinstance(buf, list)
    assert max_abs_diff(buf, u) <= TOL


def test_1d_non_zero_mean_default():
    plan = Plan1DPeriodic(16, 1.0)
    with pytest.raises(NonZeroMeanError):
        plan.solve([1.0] * 16)


def test_1d_subtract_mean():
    plan = Plan1DPeriodic(16, 1.0, with_subtract_mean())
    dst = plan.solve([1.0] * 16)
    assert len(dst) == 16
    assert max_abs_diff(dst, [0.0] * 16) <= TOL


def test_1d_set_solution_mean():
    n = 64
    h = 1.0 / n
    target = 2.5
    plan = Plan1DPeriodic(n, h, with_solution_mean(target))
    u = np.sin(2 * math.pi * np.arange(n) * h / (n * h))
    dst = plan.solve(apply_1d(u, h, P))
    assert abs(float(np.mean(dst)) - target) <= TOL


def test_1d_nullspace_error_option():
    plan = Plan1DPeriodic(8, 1.0, with_nullspace(NullspaceHandling.ERROR))
    with pytest.raises(NullspaceError):
        plan.solve([0.0] * 8)


def test_1d_buffer_errors():
    plan = Plan1DPeriodic(8, 1.0)
    with pytest.raises(NilBufferError):
        plan.solve(None)
    with pytest.raises(SizeMismatchError):
        plan.solve([0.0] * 7)


# ---- 2D ----


@pytest.mark.parametrize(
    "args, exc",
    [
        ((0, 4, 1.0, 1.0), InvalidSizeError),
        ((4, 0, 1.0, 1.0), InvalidSizeError),
        ((4, 4, 0, 1.0), InvalidSpacingError),
    ],
)
def test_2d_invalid_inputs(args, exc):
    with pytest.raises(exc):
        Plan2DPeriodic(*args)


def test_2d_manufactured_sine_sine():
    nx, ny = 64, 48
    hx, hy = 1.0 / nx, 1.0 / ny
    lx, ly = nx * hx, ny * hy
    plan = Plan2DPeriodic(nx, ny, hx, hy)
    u = grid_2d(
        nx, ny, hx, hy,
        lambda x, y: np.sin(2 * math.pi * x / lx) * np.sin(2 * math.pi * y / ly),
    )
    rhs = apply_2d(u, shape_2d(nx, ny), (hx, hy), (P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= TOL


def test_2d_manufactured_cos_cos():
    nx, ny = 48, 64
    hx, hy = 1.0 / nx, 1.0 / ny
    lx, ly = nx * hx, ny * hy
    plan = Plan2DPeriodic(nx, ny, hx, hy)
    u = grid_2d(
        nx, ny, hx, hy,
        lambda x, y: np.cos(2 * math.pi * x / lx) * np.cos(4 * math.pi * y / ly),
    )
    rhs = apply_2d(u, shape_2d(nx, ny), (hx, hy), (P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= TOL


def test_2d_real_fft():
    nx, ny = 32, 32
    hx, hy = 1.0 / nx, 1.0 / ny
    plan = Plan2DPeriodic(nx, ny, hx, hy, with_real_fft(True))
    assert plan.uses_real_fft
    u = grid_2d(
        nx, ny, hx, hy,
        lambda x, y: np.sin(2 * math.pi * x) * np.cos(2 * math.pi * y),
    )
    rhs = apply_2d(u, shape_2d(nx, ny), (hx, hy), (P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= REAL_TOL


def test_2d_real_fft_disabled_for_odd_sizes():
    nx, ny = 12, 9
    hx, hy = 1.0 / nx, 1.0 / ny
    plan = Plan2DPeriodic(nx, ny, hx, hy, with_real_fft(True))
    assert not plan.uses_real_fft
    u = grid_2d(
        nx, ny, hx, hy,
        lambda x, y: np.sin(2 * math.pi * x) * np.sin(2 * math.pi * y),
    )
    rhs = apply_2d(u, shape_2d(nx, ny), (hx, hy), (P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= TOL


def continuous_rhs_2d(nx, ny, hx, hy):
    lx, ly = nx * hx, ny * hy
    kx, ky = 2 * math.pi / lx, 2 * math.pi / ly
    u = grid_2d(nx, ny, hx, hy, lambda x, y: np.sin(kx * x) * np.sin(ky * y))
    return u, (kx * kx + ky * ky) * u


def test_2d_convergence():
    errors = []
    for n in (16, 32, 64):
        h = 1.0 / n
        u, rhs = continuous_rhs_2d(n, n, h, h)
        errors.append(max_abs_diff(Plan2DPeriodic(n, n, h, h).solve(rhs), u))
    for prev, cur in zip(errors, errors[1:]):
        assert cur < prev * 0.6


def test_2d_non_zero_mean_default():
    plan = Plan2DPeriodic(8, 8, 1.0, 1.0)
    with pytest.raises(NonZeroMeanError):
        plan.solve([1.0] * 64)


def test_2d_subtract_mean():
    plan = Plan2DPeriodic(8, 8, 1.0, 1.0, with_subtract_mean())
    dst = plan.solve([1.0] * 64)
    assert len(dst) == 64
    assert max_abs_diff(dst, [0.0] * 64) <= TOL


def test_2d_set_solution_mean():
    nx, ny = 32, 32
    hx, hy = 1.0 / nx, 1.0 / ny
    target = 1.25
    plan = Plan2DPeriodic(nx, ny, hx, hy, with_solution_mean(target))
    _, rhs = continuous_rhs_2d(nx, ny, hx, hy)
    assert abs(float(np.mean(plan.solve(rhs))) - target) <= TOL


def test_2d_parallel_matches_serial():
    nx, ny = 12, 10
    hx, hy = 1.0 / nx, 1.0 / ny
    _, rhs = continuous_rhs_2d(nx, ny, hx, hy)
    serial = Plan2DPeriodic(nx, ny, hx, hy, with_workers(1)).solve(rhs)
    parallel = Plan2DPeriodic(nx, ny, hx, hy, with_workers(3)).solve(rhs)
    assert max_abs_diff(serial, parallel) <= 1e-12


# ---- 3D ----


@pytest.mark.parametrize(
    "args, exc",
    [
        ((0, 4, 4, 1.0, 1.0, 1.0), InvalidSizeError),
        ((4, 0, 4, 1.0, 1.0, 1.0), InvalidSizeError),
        ((4, 4, 0, 1.0, 1.0, 1.0), InvalidSizeError),
        ((4, 4, 4, 0, 1.0, 1.0), InvalidSpacingError),
    ],
)
def test_3d_invalid_inputs(args, exc):
    with pytest.raises(exc):
        Plan3DPeriodic(*args)


def test_3d_manufactured():
    nx, ny, nz = 24, 20, 18
    hx, hy, hz = 1.0 / nx, 1.0 / ny, 1.0 / nz
    lx, ly, lz = nx * hx, ny * hy, nz * hz
    plan = Plan3DPeriodic(nx, ny, nz, hx, hy, hz)
    u = grid_3d(
        nx, ny, nz, hx, hy, hz,
        lambda x, y, z: np.sin(2 * math.pi * x / lx)
        * np.sin(2 * math.pi * y / ly)
        * np.cos(4 * math.pi * z / lz),
    )
    rhs = apply_3d(u, shape_3d(nx, ny, nz), (hx, hy, hz), (P, P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= TOL


def test_3d_real_fft():
    nx = ny = nz = 8
    h = 1.0 / 8
    plan = Plan3DPeriodic(nx, ny, nz, h, h, h, with_real_fft(True))
    assert plan.uses_real_fft
    u = grid_3d(
        nx, ny, nz, h, h, h,
        lambda x, y, z: np.sin(2 * math.pi * x)
        * np.cos(2 * math.pi * y)
        * np.sin(2 * math.pi * z),
    )
    rhs = apply_3d(u, shape_3d(nx, ny, nz), (h, h, h), (P, P, P))
    assert max_abs_diff(plan.solve(rhs), u) <= REAL_TOL


def test_3d_non_zero_mean_default():
    plan = Plan3DPeriodic(6, 6, 6, 1.0, 1.0, 1.0)
    with pytest.raises(NonZeroMeanError):
        plan.solve([1.0] * 216)


def test_3d_subtract_mean():
    plan = Plan3DPeriodic(6, 6, 6, 1.0, 1.0, 1.0, with_subtract_mean())
    dst = plan.solve([1.0] * 216)
    assert len(dst) == 216
    assert max_abs_diff(dst, [0.0] * 216) <= TOL


def test_3d_set_solution_mean():
    nx, ny, nz = 10, 8, 6
    hx, hy, hz = 1.0 / nx, 1.0 / ny, 1.0 / nz
    target = -0.75
    plan = Plan3DPeriodic(nx, ny, nz, hx, hy, hz, with_solution_mean(target))
    u = grid_3d(
        nx, ny, nz, hx, hy, hz,
        lambda x, y, z: np.sin(2 * math.pi * x)
        * np.cos(2 * math.pi * y)
        * np.sin(2 * math.pi * z),
    )
    rhs = apply_3d(u, shape_3d(nx, ny, nz), (hx, hy, hz), (P, P, P))
    assert abs(float(np.mean(plan.solve(rhs))) - target) <= TOL


def test_3d_solve_in_place():
    nx, ny, nz = 8, 6, 4
    hx, hy, hz = 1.0 / nx, 1.0 / ny, 1.0 / nz
    u = grid_3d(
        nx, ny, nz, hx, hy, hz,
        lambda x, y, z: np.cos(2 * math.pi * x) * np.sin(2 * math.pi * z) + 0 * y,
    )
    buf = apply_3d(u, shape_3d(nx, ny, nz), (hx, hy, hz), (P, P, P))
    Plan3DPeriodic(nx, ny, nz, hx, hy, hz).solve_in_place(buf)
    assert max_abs_diff(buf, u) <= TOL


def test_3d_size_mismatch():
    plan = Plan3DPeriodic(4, 4, 4, 1.0, 1.0, 1.0)
    with pytest.raises(SizeMismatchError):
        plan.solve([0.0] * 63)