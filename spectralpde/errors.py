"""Exceptions raised by the solvers."""

from __future__ import annotations


class PoissonError(Exception):
    """Base class for solver errors."""

    default_message = "poisson solver error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class InvalidSizeError(PoissonError, ValueError):
    default_message = "invalid grid size: dimensions must be positive"


class InvalidSpacingError(PoissonError, ValueError):
    default_message = "invalid grid spacing: must be positive"


class SizeMismatchError(PoissonError, ValueError):
    default_message = "buffer size does not match plan dimensions"


class NullspaceError(PoissonError):
    default_message = (
        "problem has nullspace (zero eigenvalue): "
        "periodic or Neumann BC without unique solution"
    )


class NonZeroMeanError(PoissonError, ValueError):
    default_message = (
        "RHS does not have mean zero: "
        "problem is inconsistent for periodic/Neumann BC"
    )


class NilBufferError(PoissonError, TypeError):
    default_message = "buffer is nil"


class ResonantError(PoissonError):
    default_message = "helmholtz operator is singular: alpha cancels eigenvalue"


class SizeError(PoissonError, ValueError):
    """A buffer had a different length than expected."""

    def __init__(self, expected: int, got: int, context: str) -> None:
        self.expected = expected
        self.got = got
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f"size mismatch in {self.context}: "
            f"expected {self.expected}, got {self.got}"
        )


class ValidationError(PoissonError, ValueError):
    """An argument failed validation."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"validation error for {self.field}: {self.message}"