"""
Stride calculation for the canonical (C-contiguous, row-major) layout.

Strides are expressed in storage slots (elements), not bytes:
``strides[rank-1] == 1`` and ``strides[d] == strides[d+1] * shape[d+1]``.
"""

import numbers
from typing import Sequence

from ...domain._errors import InvalidShapeError


def normalize_shape(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Validate a shape and return it as a tuple of Python ints.

    Parameters
    ----------
    shape : Sequence[int]
        Candidate shape. Integer-like entries (including NumPy integers) are
        accepted; booleans are not.

    Returns
    -------
    tuple[int, ...]
        The normalized shape.

    Raises
    ------
    InvalidShapeError
        If `shape` is not a sequence, or any dimension is negative or not an
        integer.
    """
    if isinstance(shape, (str, bytes)) or not hasattr(shape, "__iter__"):
        raise InvalidShapeError(shape, "expected a sequence of integers")
    out = []
    for d in shape:
        if isinstance(d, bool) or not isinstance(d, numbers.Integral):
            raise InvalidShapeError(shape, f"dimension {d!r} is not an integer")
        if d < 0:
            raise InvalidShapeError(shape, f"dimension {d!r} is negative")
        out.append(int(d))
    return tuple(out)


def c_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute row-major strides for `shape`.

    Examples
    --------
    >>> c_strides([4, 3, 2])
    (6, 2, 1)
    >>> c_strides([])
    ()
    """
    shape = normalize_shape(shape)
    strides = [0] * len(shape)
    step = 1
    for d in range(len(shape) - 1, -1, -1):
        strides[d] = step
        step *= shape[d]
    return tuple(strides)


def element_count(shape: Sequence[int]) -> int:
    """Number of elements addressed by `shape` (1 for rank 0, 0 if any dim is 0)."""
    n = 1
    for d in normalize_shape(shape):
        n *= d
    return n
