"""
Slicing / views mixin.

Implements the Slicing capability for strided arrays:

- major-axis slices (leading index fixed) are views whenever the source is
  contiguous, and materialized copies otherwise;
- generic slices along a non-leading axis are always materialized, since a
  fixed non-leading index is not a contiguous run of storage;
- `get_major_slice_view` / `get_slice_view` always return views, using the
  source's strides directly;
- `get_row` / `get_column` are the matrix spellings of axis-0 and axis-1
  slices.

Views share the owner's store: writes through a view are visible in the
owner and in every other view of it.
"""

import numbers
from typing import Any
from abc import ABC

from .....domain._errors import IndexOutOfBoundsError, RankMismatchError
from ..._index_mapper import normalize_index


class NDArrayMixinSlicing(ABC):
    """Slicing operations for `NDArrayCore` hosts."""

    def _check_axis(self, axis: int) -> int:
        rank = len(self.shape)
        if isinstance(axis, bool) or not isinstance(axis, numbers.Integral):
            raise IndexOutOfBoundsError((axis,), (rank,))
        if not 0 <= axis < rank:
            raise IndexOutOfBoundsError((axis,), (rank,))
        return int(axis)

    def get_major_slice_view(self, i: int) -> Any:
        """
        Return a view of the sub-array at leading index `i`.

        On a rank-1 array the result is a rank-0 view of one element.

        Raises
        ------
        RankMismatchError
            If the array has rank 0.
        IndexOutOfBoundsError
            If `i` is out of range.
        """
        if not self.shape:
            raise RankMismatchError((i,), 0)
        (i,) = normalize_index((i,), self.shape)
        return self._view(self.shape[1:], self.strides[1:], self.offset + i * self.strides[0])

    def get_major_slice(self, i: int) -> Any:
        """
        Return the sub-array at leading index `i`.

        - rank 1: the element itself;
        - contiguous source: a view (no copy);
        - otherwise (e.g. transposed arrays): a materialized copy.
        """
        if len(self.shape) == 1:
            return self.get(i)
        view = self.get_major_slice_view(i)
        if self.is_contiguous():
            return view
        return view.clone()

    def get_major_slice_seq(self) -> list:
        """Return every major slice, in order (elements for rank 1)."""
        if not self.shape:
            raise RankMismatchError((0,), 0)
        return [self.get_major_slice(i) for i in range(self.shape[0])]

    def get_slice_view(self, axis: int, i: int) -> Any:
        """
        Return a view of the sub-array obtained by fixing index `i` on `axis`.
        """
        axis = self._check_axis(axis)
        (i,) = normalize_index((i,), (self.shape[axis],))
        shape = self.shape[:axis] + self.shape[axis + 1 :]
        strides = self.strides[:axis] + self.strides[axis + 1 :]
        return self._view(shape, strides, self.offset + i * self.strides[axis])

    def get_slice(self, axis: int, i: int) -> Any:
        """
        Return the sub-array obtained by fixing index `i` on `axis`.

        Axis 0 behaves like `get_major_slice`. Any other axis yields a new
        owning array: mutating it never affects the source.
        """
        axis = self._check_axis(axis)
        if axis == 0:
            return self.get_major_slice(i)
        return self.get_slice_view(axis, i).clone()

    def get_row(self, i: int) -> Any:
        """Row `i` of a matrix; same as ``get_major_slice(i)``."""
        return self.get_major_slice(i)

    def get_column(self, i: int) -> Any:
        """
        Column `i` of a matrix; same as ``get_slice(1, i)``.

        The column is a new owning array; writes to it never reach the source.

        Raises
        ------
        IndexOutOfBoundsError
            If the array has rank below 2 or `i` is out of range.
        """
        return self.get_slice(1, i)
