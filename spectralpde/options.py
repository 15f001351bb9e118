"""Solver options and the option helpers that build them."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import IntEnum


class NullspaceHandling(IntEnum):
    """How to treat the constant mode of Periodic and Neumann problems."""

    ZERO_MODE = 0
    """Set the zero mode to zero; the RHS must have mean zero."""
    SUBTRACT_MEAN = 1
    """Subtract the RHS mean before solving."""
    ERROR = 2
    """Refuse to solve a problem that has a nullspace."""


@dataclass(frozen=True)
class Options:
    """Configuration of a solver plan."""

    nullspace: NullspaceHandling = NullspaceHandling.ZERO_MODE
    solution_mean: float | None = None
    use_real_fft: bool = False
    workers: int = 0
    in_place: bool = False


Option = Callable[[Options], Options]


def default_options() -> Options:
    return Options()


def with_nullspace(handling: NullspaceHandling) -> Option:
    return lambda o: replace(o, nullspace=NullspaceHandling(handling))


def with_subtract_mean() -> Option:
    return with_nullspace(NullspaceHandling.SUBTRACT_MEAN)


def with_workers(n: int) -> Option:
    return lambda o: replace(o, workers=n)


def with_solution_mean(mean: float) -> Option:
    return lambda o: replace(o, solution_mean=float(mean))


def with_real_fft(enabled: bool) -> Option:
    return lambda o: replace(o, use_real_fft=enabled)


def with_in_place(in_place: bool) -> Option:
    return lambda o: replace(o, in_place=in_place)


def apply_options(base: Options, opts: Iterable[Option]) -> Options:
    """Apply ``opts`` in order to ``base`` and return the result."""
    for opt in opts:
        base = opt(base)
    return base