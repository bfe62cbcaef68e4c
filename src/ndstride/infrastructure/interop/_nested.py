"""
Dimension Info and element-sequence contracts for arbitrary values.

The NDArray core consumes only two things from foreign representations:

1. a shape/dimensionality query, and
2. an element (or major-slice) sequence used to copy data in.

This module answers both for every value the engine may meet:

- objects implementing `IDimensionInfo` (NDArrays and third-party
  representations), which are asked directly;
- Python lists and tuples, treated as nested generic arrays;
- `numpy.ndarray` instances;
- everything else, which is a scalar (rank 0). Strings and bytes are scalars.

Shape validation is eager: `validate_shape` walks the whole structure and
raises `InconsistentShapeError` on ragged input before any caller allocates
or writes storage.
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from ...domain._capabilities import (
    IConversion,
    IDimensionInfo,
    IFunctionalOperations,
    ISliceView,
    IValidateShape,
)
from ...domain._errors import InconsistentShapeError, RankMismatchError


def _is_nested_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def is_array_like(x: Any) -> bool:
    """True if `x` has rank >= 1 or is an array representation of any rank."""
    return (
        _is_nested_sequence(x)
        or isinstance(x, np.ndarray)
        or isinstance(x, IDimensionInfo)
    )


def get_0d(x: Any) -> Any:
    """
    Return the scalar value held by a rank-0 value.

    NumPy scalars are unwrapped to the matching Python scalar. Rank-0 array
    representations are asked for their single element.
    """
    if isinstance(x, np.generic):
        return x.item()
    if isinstance(x, np.ndarray):
        if x.ndim != 0:
            raise RankMismatchError((), x.ndim)
        return x[()] if x.dtype == object else x.item()
    if isinstance(x, IDimensionInfo):
        if x.dimensionality() != 0:
            raise RankMismatchError((), x.dimensionality())
        get = getattr(x, "get_0d", None)
        if callable(get):
            return get()
        if isinstance(x, IFunctionalOperations):
            return next(iter(x.element_seq()))
    return x


def dimensionality(x: Any) -> int:
    """Rank of `x` (0 for scalars)."""
    if isinstance(x, IDimensionInfo):
        return int(x.dimensionality())
    if isinstance(x, np.ndarray):
        return x.ndim
    if _is_nested_sequence(x):
        return 1 + (dimensionality(x[0]) if len(x) > 0 else 0)
    return 0


def major_slice_seq(x: Any) -> list:
    """
    Return the major-axis slices of `x`.

    For rank-1 inputs the slices are the elements themselves.

    Raises
    ------
    RankMismatchError
        If `x` is a scalar.
    """
    if isinstance(x, ISliceView):
        return list(x.get_major_slice_seq())
    if isinstance(x, np.ndarray):
        if x.ndim == 0:
            raise RankMismatchError((0,), 0)
        return list(x) if x.ndim > 1 else x.tolist()
    if _is_nested_sequence(x):
        return list(x)
    if isinstance(x, IDimensionInfo) and x.dimensionality() == 0:
        raise RankMismatchError((0,), 0)
    if isinstance(x, IFunctionalOperations) and dimensionality(x) == 1:
        return list(x.element_seq())
    raise RankMismatchError((0,), 0)


def validate_shape(x: Any) -> tuple[int, ...]:
    """
    Compute the shape of `x`, checking that every sub-array agrees.

    Returns
    -------
    tuple[int, ...]
        The validated shape.

    Raises
    ------
    InconsistentShapeError
        If any two major-axis slices (at any depth) differ in shape, or if a
        representation reports a shape its slices do not have.
    """
    if isinstance(x, IValidateShape):
        return tuple(int(d) for d in x.validate_shape())
    if isinstance(x, np.ndarray):
        return tuple(int(d) for d in x.shape)
    if _is_nested_sequence(x):
        shapes = [validate_shape(s) for s in x]
        if any(s != shapes[0] for s in shapes[1:]):
            raise InconsistentShapeError(
                f"Inconsistent shapes for sub arrays: {sorted(set(shapes))!r}"
            )
        return (len(x),) + (shapes[0] if shapes else ())
    if isinstance(x, IDimensionInfo):
        shape = tuple(int(d) for d in x.get_shape())
        if len(shape) != x.dimensionality():
            raise InconsistentShapeError(
                f"{type(x).__name__} reports shape {shape!r} "
                f"with dimensionality {x.dimensionality()}"
            )
        if len(shape) >= 1 and isinstance(x, ISliceView):
            slices = x.get_major_slice_seq()
            if len(slices) != shape[0]:
                raise InconsistentShapeError(
                    f"{type(x).__name__} reports {shape[0]} major slices "
                    f"but yields {len(slices)}"
                )
            for s in slices:
                if validate_shape(s) != shape[1:]:
                    raise InconsistentShapeError(
                        f"Sub array of {type(x).__name__} does not have "
                        f"shape {shape[1:]!r}"
                    )
        return shape
    return ()


def get_shape(x: Any) -> tuple[int, ...]:
    """Validated shape of `x` (empty tuple for scalars)."""
    return validate_shape(x)


def element_seq(x: Any) -> Iterator[Any]:
    """Yield the elements of `x` in row-major order."""
    if isinstance(x, IFunctionalOperations):
        yield from x.element_seq()
        return
    if isinstance(x, np.ndarray):
        if x.ndim == 0:
            yield get_0d(x)
        else:
            yield from x.ravel().tolist()
        return
    if _is_nested_sequence(x) or isinstance(x, IDimensionInfo):
        if dimensionality(x) == 0:
            yield get_0d(x)
            return
        for s in major_slice_seq(x):
            yield from element_seq(s)
        return
    yield x


def to_nested(x: Any) -> Any:
    """
    Convert `x` to nested Python lists (scalars are returned unchanged).
    """
    if isinstance(x, IConversion):
        return x.to_nested()
    if isinstance(x, np.ndarray):
        return x.tolist()
    if is_array_like(x):
        if dimensionality(x) == 0:
            return get_0d(x)
        return [to_nested(s) for s in major_slice_seq(x)]
    return x
