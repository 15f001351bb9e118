"""Helpers for splitting line-wise work over worker threads."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .grid import row_major_stride


def effective_workers(workers: int) -> int:
    """Return ``workers``, or the CPU count when it is not positive."""
    if workers <= 0:
        workers = os.cpu_count() or 1
    return max(workers, 1)


def clamp_workers(workers: int, tasks: int) -> int:
    """Limit ``workers`` to between 1 and ``tasks``."""
    if tasks < 1:
        return 1
    return min(max(workers, 1), tasks)


def parallel_for(
    workers: int, tasks: int, fn: Callable[[int, int, int], None]
) -> None:
    """Call ``fn(worker, start, end)`` over contiguous chunks of ``range(tasks)``.

    The first failing chunk's exception is re-raised once all chunks finish.
    """
    if tasks <= 0:
        return
    if workers <= 1 or tasks == 1:
        fn(0, 0, tasks)
        return

    chunk = -(-tasks // workers)
    ranges = [
        (w, start, min(start + chunk, tasks))
        for w, start in enumerate(range(0, tasks, chunk))
    ]
    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures = [pool.submit(fn, *r) for r in ranges]
    for future in futures:
        exc = future.exception()
        if exc is not None:
            raise exc


def other_axes(axis: int) -> tuple[int, int]:
    """Return the two axes other than ``axis``."""
    if axis == 0:
        return 1, 2
    if axis == 1:
        return 0, 2
    return 0, 1


def line_count(shape: Sequence[int], axis: int) -> int:
    """Number of lines parallel to ``axis``."""
    o0, o1 = other_axes(axis)
    return shape[o0] * shape[o1]


def line_start_index(shape: Sequence[int], axis: int, line: int) -> int:
    """Linear index of the first element of line number ``line``."""
    o0, o1 = other_axes(axis)
    max0 = shape[o0]
    if max0 <= 0:
        return 0
    pos1, pos0 = divmod(line, max0)
    stride = row_major_stride(shape)
    return pos0 * stride[o0] + pos1 * stride[o1]