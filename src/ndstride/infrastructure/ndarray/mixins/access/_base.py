"""
Indexed access and mutation mixin.

This module defines `NDArrayMixinAccess`, which implements the Indexed
Access / Indexed Setting capabilities on top of the strided storage core:

- `get`   : element at a full index, or a view of the sub-array at a partial
            index
- `set`   : copy-producing update (the receiver is left untouched)
- `set_`  : in-place update (requires a mutable array)
- `get_0d`: the single value of a rank-0 array
- `as_immutable`: read-only view of the same storage
- `as_mutable`: mutable copy, usable on immutable arrays

All index arithmetic goes through the index mapper, so every coordinate is
bounds-checked before the store is touched.
"""

from typing import Any, Sequence
from abc import ABC

from .....domain._errors import RankMismatchError
from ..._index_mapper import normalize_index


def _as_index(index: Sequence) -> tuple:
    if len(index) == 1 and isinstance(index[0], (tuple, list)):
        return tuple(index[0])
    return tuple(index)


class NDArrayMixinAccess(ABC):
    """
    Mixin implementing element access and mutation for `NDArrayCore` hosts.

    Indices may be passed either as separate arguments (``a.get(1, 0)``) or
    as one sequence (``a.get((1, 0))``).
    """

    def get(self, *index: Any) -> Any:
        """
        Return the element at a full index, or a view at a partial index.

        Parameters
        ----------
        *index : int | Sequence[int]
            Coordinates along the leading dimensions.

        Returns
        -------
        Any
            The element when ``len(index) == rank``; otherwise an
            `NDArrayView` of the addressed sub-array sharing this array's
            storage.

        Raises
        ------
        RankMismatchError
            If more coordinates than dimensions are given.
        IndexOutOfBoundsError
            If a coordinate is outside its dimension.
        """
        idx = normalize_index(_as_index(index), self.shape)
        pos = self._offset_of(idx)
        k = len(idx)
        if k == len(self.shape):
            return self._raw_get(pos)
        return self._view(self.shape[k:], self.strides[k:], pos)

    def get_0d(self) -> Any:
        """Return the value held by a rank-0 array."""
        if self.shape:
            raise RankMismatchError((), len(self.shape))
        return self._raw_get(self.offset)

    def set(self, index: Sequence[int], value: Any) -> "NDArrayMixinAccess":
        """
        Return a copy of this array with one element (or sub-array) replaced.

        A partial index assigns `value`, broadcast as needed, to the whole
        addressed sub-array of the copy. The receiver is never modified, so
        `set` also works on immutable arrays.
        """
        out = self.clone()
        out.set_(index, value)
        return out

    def set_(self, index: Sequence[int], value: Any) -> "NDArrayMixinAccess":
        """
        Update this array in place and return it.

        Raises
        ------
        CapabilityNotImplementedError
            If the array is immutable.
        RankMismatchError, IndexOutOfBoundsError
            If the index is invalid.
        """
        self._require_mutable("set_")
        idx = normalize_index(_as_index((index,)), self.shape)
        if len(idx) == len(self.shape):
            self._raw_set(self._offset_of(idx), value)
        else:
            self.get(idx).assign_(value)
        return self

    def as_immutable(self) -> "NDArrayMixinAccess":
        """Return a read-only view sharing this array's storage."""
        return self._view(self.shape, self.strides, self.offset, mutable=False)

    def as_mutable(self) -> "NDArrayMixinAccess":
        """
        Return a new mutable array with this array's content.

        Always copies, so the result never shares storage with an immutable
        source. Nested arrays held in object slots are not copied.
        """
        return self.clone()
