"""Boundary condition types and per-face boundary data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class BCType(IntEnum):
    """Kind of boundary condition applied along an axis."""

    PERIODIC = 0
    DIRICHLET = 1
    NEUMANN = 2

    def __str__(self) -> str:
        return self.name.capitalize()

    def has_nullspace(self) -> bool:
        """True for conditions with a constant mode of zero eigenvalue."""
        return self in (BCType.PERIODIC, BCType.NEUMANN)


@dataclass(frozen=True)
class AxisBC:
    """Boundary condition for one axis, the same on both ends."""

    type: BCType


class BoundaryFace(IntEnum):
    """A face of the domain, named by axis and low/high end."""

    X_LOW = 0
    X_HIGH = 1
    Y_LOW = 2
    Y_HIGH = 3
    Z_LOW = 4
    Z_HIGH = 5


@dataclass
class BoundaryData:
    """Boundary values for one face under one condition type."""

    face: BoundaryFace
    type: BCType
    values: list[float] = field(default_factory=list)


BoundaryConditions = list[BoundaryData]