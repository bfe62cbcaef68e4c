"""
Index arithmetic: multi-dimensional coordinates to flat storage offsets.

The functions here are the only place that turns coordinates into offsets.
They are shared by element access, view construction, and the generic
(per-element) kernel loops.
"""

import numbers
from itertools import product
from typing import Iterator, Sequence

from ...domain._errors import IndexOutOfBoundsError, RankMismatchError


def normalize_index(index: Sequence, shape: Sequence[int]) -> tuple[int, ...]:
    """
    Validate a full or partial index against `shape`.

    Parameters
    ----------
    index : Sequence
        Coordinates, one per leading dimension. May be shorter than the rank.
    shape : Sequence[int]
        Shape of the addressed array.

    Returns
    -------
    tuple[int, ...]
        The index as a tuple of Python ints.

    Raises
    ------
    RankMismatchError
        If `index` has more coordinates than `shape` has dimensions.
    IndexOutOfBoundsError
        If a coordinate is not an integer, is negative, or is not smaller
        than its dimension.
    """
    index = tuple(index)
    if len(index) > len(shape):
        raise RankMismatchError(index, len(shape))
    out = []
    for i, dim in zip(index, shape):
        if isinstance(i, bool) or not isinstance(i, numbers.Integral):
            raise IndexOutOfBoundsError(index, shape)
        if i < 0 or i >= dim:
            raise IndexOutOfBoundsError(index, shape)
        out.append(int(i))
    return tuple(out)


def offset(
    strides: Sequence[int],
    index: Sequence,
    shape: Sequence[int],
    base: int = 0,
) -> int:
    """
    Compute the flat storage offset of a (possibly partial) index.

    ``base + sum(index[d] * strides[d])`` over the given coordinates. A
    partial index yields the offset of the first element of the addressed
    sub-array.

    Raises
    ------
    RankMismatchError
        If `index` is longer than the rank.
    IndexOutOfBoundsError
        If any coordinate is out of range.
    """
    pos = base
    for i, s in zip(normalize_index(index, shape), strides):
        pos += i * s
    return pos


def iter_indices(shape: Sequence[int]) -> Iterator[tuple[int, ...]]:
    """Yield every coordinate tuple of `shape` in row-major order."""
    return product(*map(range, shape))


def iter_offsets(
    shape: Sequence[int], strides: Sequence[int], base: int = 0
) -> Iterator[int]:
    """
    Yield the flat offset of every element in row-major logical order.

    Works for any strides, including reversed (transposed) and zero
    (broadcast) strides. The running offset is updated incrementally rather
    than recomputed per element.
    """
    rank = len(shape)
    if any(d == 0 for d in shape):
        return
    idx = [0] * rank
    pos = base
    while True:
        yield pos
        d = rank - 1
        while d >= 0:
            idx[d] += 1
            pos += strides[d]
            if idx[d] < shape[d]:
                break
            pos -= strides[d] * shape[d]
            idx[d] = 0
            d -= 1
        if d < 0:
            return
