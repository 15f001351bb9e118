"""Right-hand-side corrections for inhomogeneous boundary data."""

from __future__ import annotations

from collections.abc import Callable, Iterable, MutableSequence, Sequence

import numpy as np

from .bc import BCType, BoundaryData, BoundaryFace
from .errors import NilBufferError, SizeError, ValidationError
from .grid import Shape

_AXIS_NAMES = "XYZ"


def _apply_face_rhs(
    rhs: MutableSequence[float],
    shape: Sequence[int],
    h: Sequence[float],
    bc: Iterable[BoundaryData],
    kind: BCType,
    context: str,
    scale: Callable[[float, bool], float],
) -> None:
    if rhs is None:
        raise NilBufferError()

    shape = Shape(*shape)
    arr = np.asarray(rhs, dtype=float)
    expected = shape.size()
    if arr.ndim != 1 or arr.size != expected:
        raise SizeError(expected, arr.size, context)

    dim = shape.dim()
    cube = arr.reshape(shape)
    try:
        for data in bc:
            if data.type != kind:
                raise ValidationError(
                    "Type", f"only {kind} boundary data is supported"
                )
            try:
                face = BoundaryFace(data.face)
            except ValueError:
                raise ValidationError("Face", "unknown boundary face") from None

            axis, high = divmod(int(face), 2)
            name = _AXIS_NAMES[axis]
            if dim < axis + 1:
                raise ValidationError(
                    "Face", f"{name} face not valid for this dimension"
                )

            face_shape = tuple(shape[d] for d in range(3) if d != axis)
            values = np.asarray(data.values, dtype=float).reshape(-1)
            expected_face = face_shape[0] * face_shape[1]
            if values.size != expected_face:
                raise SizeError(expected_face, values.size, f"{name} face values")

            where: list[object] = [slice(None)] * 3
            where[axis] = shape[axis] - 1 if high else 0
            cube[tuple(where)] += values.reshape(face_shape) * scale(h[axis], bool(high))
    finally:
        arr[:] = cube.reshape(-1)
        if arr is not rhs:
            rhs[:] = arr.tolist()


def apply_dirichlet_rhs(
    rhs: MutableSequence[float],
    shape: Sequence[int],
    h: Sequence[float],
    bc: Iterable[BoundaryData],
) -> None:
    """Add inhomogeneous Dirichlet contributions ``g / h^2`` to ``rhs`` in place.

    ``rhs`` is row-major; face values are ordered row-major over the face.
    """
    _apply_face_rhs(
        rhs,
        shape,
        h,
        bc,
        BCType.DIRICHLET,
        "ApplyDirichletRHS",
        lambda spacing, _high: 1.0 / (spacing * spacing),
    )


def apply_neumann_rhs(
    rhs: MutableSequence[float],
    shape: Sequence[int],
    h: Sequence[float],
    bc: Iterable[BoundaryData],
) -> None:
    """Add inhomogeneous Neumann contributions to ``rhs`` in place.

    Values are derivatives along the positive axis direction; they enter as
    ``-g / h`` on low faces and ``+g / h`` on high faces.
    """

    def scale(spacing: float, high: bool) -> float:
        inv = 1.0 / spacing
        return inv if high else -inv

    _apply_face_rhs(
        rhs, shape, h, bc, BCType.NEUMANN, "ApplyNeumannRHS", scale
    )