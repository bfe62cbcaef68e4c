"""
NDArray memory / layout mixin.

This module defines `NDArrayMixinMemory`, which groups the operations that
copy storage or re-interpret it through a different layout:

- `clone`      : materialize into a fresh, owning, contiguous array
- `transpose`  : non-owning view with reversed shape and strides
- `broadcast`  : non-owning, zero-copy view repeating elements via stride 0
- `to_nested`  : nested Python lists
- `to_numpy`   : detached NumPy array copy
- `fill`, `fill_`, `assign_` : declared here, implemented per element kind
  in `_ndarray_fill` through the specialization generator

Layout caveat
-------------
Transposed and broadcast views do not satisfy the canonical row-major stride
invariant. Slicing them along a leading axis still works (it materializes
when needed), but callers needing canonical strides must `clone()` first.
Writing through a broadcast view writes the single underlying slot, which
every repeated position observes.
"""

from typing import Any, Sequence
from abc import ABC

import numpy as np

from .....domain._errors import IncompatibleShapeError
from ..._strides import normalize_shape


class NDArrayMixinMemory(ABC):
    """Copy, layout and fill operations for `NDArrayCore` hosts."""

    def clone(self) -> Any:
        """
        Return an owning, contiguous, mutable copy with the same logical content.
        """
        out = self._new(self.shape)
        if out.element_count():
            out.data[:] = self._as_numpy_view().ravel()
        return out

    def transpose(self) -> Any:
        """
        Return a view with the axis order reversed.

        The view shares this array's storage: writes through either are
        visible in both. Applying `transpose` twice restores the original
        shape and strides.
        """
        return self._view(self.shape[::-1], self.strides[::-1], self.offset)

    def broadcast(self, target_shape: Sequence[int]) -> Any:
        """
        Return a view of this array repeated to `target_shape`.

        New leading axes and existing axes of size 1 get stride 0, so no
        element is copied.

        Parameters
        ----------
        target_shape : Sequence[int]
            Requested shape. Its trailing dimensions must equal this array's
            dimensions (or the array's dimension must be 1).

        Raises
        ------
        IncompatibleShapeError
            If this array has more dimensions than `target_shape`, or a
            trailing dimension differs and is not 1.
        InvalidShapeError
            If `target_shape` is malformed.
        """
        target = normalize_shape(target_shape)
        src = self.shape
        if len(src) > len(target):
            raise IncompatibleShapeError(src, target)
        lead = len(target) - len(src)
        strides = [0] * lead
        for d, (sd, td) in enumerate(zip(src, target[lead:])):
            if sd == td:
                strides.append(self.strides[d])
            elif sd == 1:
                strides.append(0)
            else:
                raise IncompatibleShapeError(src, target)
        return self._view(target, strides, self.offset)

    def to_nested(self) -> Any:
        """
        Convert to nested Python lists (the scalar itself for rank 0).

        Double storage yields Python floats; object storage yields the stored
        objects unchanged.
        """
        return self._as_numpy_view().tolist()

    def to_numpy(self) -> np.ndarray:
        """Return a detached NumPy copy (float64 or object dtype)."""
        return np.array(self._as_numpy_view(), dtype=self.element_kind.dtype, copy=True)

    def fill(self, value: Any) -> Any:
        """
        Return a copy of this array with every element set from `value`.

        `value` may be a scalar or anything broadcastable to this shape.
        """

    def fill_(self, value: Any) -> Any:
        """
        Set every element from `value` in place and return this array.

        Raises
        ------
        CapabilityNotImplementedError
            If the array is immutable.
        IncompatibleShapeError
            If `value` cannot be broadcast to this shape.
        """

    def assign_(self, source: Any) -> Any:
        """
        Copy `source` (broadcast to this shape) into this array in place.

        `source` may be any array-like: another NDArray, nested lists, a
        NumPy array or a foreign representation.
        """
