"""
NDArray storage entity (NumPy-backed flat store addressed through strides).

This module defines `NDArrayCore`, the state holder shared by the owning
`NDArray` and the non-owning `NDArrayView`. It keeps:

- a flat, one-dimensional `numpy.ndarray` backing store (`float64` for
  `ElementKind.DOUBLE`, `object` for `ElementKind.OBJECT`),
- the logical shape and strides (in storage slots),
- a base offset into the store (non-zero only for views),
- the element kind and a mutability flag.

It also exposes the Dimension Info capability, raw get/set at computed
offsets, and the hooks the operation mixins build on (`_new`, `_view`,
`_as_numpy_view`, `_prepare_operand`).

Design notes
------------
- Only `NDArray.__init__` allocates. Views re-use the owner's store, so a
  view can never outlive or replace its owner's storage.
- Mixins construct results through `_new` / `_view` instead of importing the
  concrete classes, which avoids import cycles.
- Strides of an owning array always follow the canonical row-major layout.
  Views (slices, transposes, broadcasts) may carry any strides.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np
from numpy.lib.stride_tricks import as_strided

from ...domain._element_kind import ElementKind
from ...domain._errors import (
    CapabilityNotImplementedError,
    IndexOutOfBoundsError,
    InconsistentShapeError,
)
from .._config import default_element_kind
from ..interop import _nested as interop
from ._index_mapper import offset as _offset
from ._strides import c_strides, element_count, normalize_shape


class NDArrayCore:
    """
    Strided storage core of an n-dimensional array.

    Parameters
    ----------
    shape : Sequence[int]
        Array shape. Rank 0 denotes a scalar container with one slot.
    kind : ElementKind | str, optional
        Element kind of the backing store. Defaults to the configured
        default kind (see `ndstride.infrastructure._config`).
    mutable : bool, optional
        Whether in-place operations are allowed. Defaults to True.

    Raises
    ------
    InvalidShapeError
        If `shape` contains negative or non-integer dimensions.
    ValueError
        If `kind` is not a recognized element kind.
    """

    def __init__(
        self,
        shape: Sequence[int],
        kind: Optional[Union[ElementKind, str]] = None,
        *,
        mutable: bool = True,
    ) -> None:
        self._kind = ElementKind.parse(kind) if kind is not None else default_element_kind()
        self._shape = normalize_shape(shape)
        self._strides = c_strides(self._shape)
        self._offset = 0
        self._mutable = bool(mutable)
        self._data = self.__allocate()

    def __allocate(self) -> np.ndarray:
        n = element_count(self._shape)
        if self._kind is ElementKind.DOUBLE:
            return np.zeros(n, dtype=np.float64)
        return np.full(n, self._kind.default_value, dtype=object)

    # ------------------------------------------------------------------
    # Layout and identity
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        """Per-dimension step sizes, in storage slots."""
        return self._strides

    @property
    def offset(self) -> int:
        """Base offset of element ``(0, ..., 0)`` in the backing store."""
        return self._offset

    @property
    def element_kind(self) -> ElementKind:
        """Declared element kind; selects the specialized control paths."""
        return self._kind

    @property
    def data(self) -> np.ndarray:
        """The flat backing store (shared with every view of the owner)."""
        return self._data

    @property
    def owner(self) -> "NDArrayCore":
        """The array that owns the backing store (``self`` for owning arrays)."""
        return self

    def is_view(self) -> bool:
        return False

    def is_mutable(self) -> bool:
        return self._mutable

    def is_contiguous(self) -> bool:
        """
        True if the elements occupy one row-major run of the store.

        Dimensions of size 0 or 1 never affect contiguity.
        """
        expected = c_strides(self._shape)
        return all(
            s == e for s, e, d in zip(self._strides, expected, self._shape) if d > 1
        )

    # ------------------------------------------------------------------
    # Implementation capability
    # ------------------------------------------------------------------
    def implementation_key(self) -> str:
        return self._kind.implementation_key

    def new_array(self, shape: Sequence[int]) -> "NDArrayCore":
        """Create an empty owning array of this element kind."""
        return self._new(shape)

    def construct_array(self, data: Any) -> "NDArrayCore":
        """Construct an owning array of this element kind from `data`."""
        from ._construct import construct

        return construct(data, self._kind)

    def supports_dimensionality(self, dims: int) -> bool:
        return int(dims) >= 0

    def coerce_param(self, param: Any) -> "NDArrayCore":
        """
        Coerce `param` into this representation.

        NDArrays (and views) of the same element kind are returned unchanged,
        so no storage is copied when no transformation is needed. Anything
        else is materialized into a new array of this element kind.
        """
        if isinstance(param, NDArrayCore) and param.element_kind is self._kind:
            return param
        from ._construct import construct

        return construct(param, self._kind)

    # ------------------------------------------------------------------
    # Dimension info
    # ------------------------------------------------------------------
    def dimensionality(self) -> int:
        return len(self._shape)

    def get_shape(self) -> tuple[int, ...]:
        return self._shape

    def dimension_count(self, axis: int) -> int:
        rank = len(self._shape)
        if isinstance(axis, bool) or not isinstance(axis, numbers.Integral):
            raise IndexOutOfBoundsError((axis,), (rank,))
        if not 0 <= axis < rank:
            raise IndexOutOfBoundsError((axis,), (rank,))
        return self._shape[axis]

    def element_type(self) -> type:
        """`float` for double storage, `object` for generic storage."""
        return self._kind.element_type

    def element_count(self) -> int:
        return element_count(self._shape)

    def validate_shape(self) -> tuple[int, ...]:
        return self._shape

    def is_scalar(self) -> bool:
        return False

    def is_vector(self) -> bool:
        return len(self._shape) == 1

    # ------------------------------------------------------------------
    # Raw storage access
    # ------------------------------------------------------------------
    def _raw_get(self, pos: int) -> Any:
        v = self._data[pos]
        return float(v) if self._kind is ElementKind.DOUBLE else v

    def _raw_set(self, pos: int, value: Any) -> None:
        if self._kind is ElementKind.DOUBLE:
            self._data[pos] = float(value)
        else:
            self._data[pos] = value

    def _offset_of(self, index: Sequence) -> int:
        return _offset(self._strides, index, self._shape, self._offset)

    def _as_numpy_view(self) -> np.ndarray:
        """
        Return a NumPy view with this array's logical layout.

        The view aliases the backing store: writes through it are visible to
        the owner and every other view. Zero-size arrays get a detached empty
        array since they address no storage.
        """
        if any(d == 0 for d in self._shape):
            return np.empty(self._shape, dtype=self._kind.dtype)
        itemsize = self._data.itemsize
        return as_strided(
            self._data[self._offset :],
            shape=self._shape,
            strides=tuple(s * itemsize for s in self._strides),
        )

    def _require_mutable(self, op: str) -> None:
        if not self._mutable:
            raise CapabilityNotImplementedError(op, self.implementation_key())

    # ------------------------------------------------------------------
    # Construction hooks used by the operation mixins
    # ------------------------------------------------------------------
    def _new(
        self, shape: Sequence[int], kind: Optional[ElementKind] = None
    ) -> "NDArrayCore":
        from ._ndarray import NDArray

        return NDArray(shape, kind or self._kind)

    def _view(
        self,
        shape: Sequence[int],
        strides: Sequence[int],
        offset: int,
        *,
        mutable: Optional[bool] = None,
    ) -> "NDArrayCore":
        from ._ndarray import NDArrayView

        return NDArrayView(
            self,
            shape,
            strides,
            offset,
            mutable=self._mutable if mutable is None else mutable,
        )

    def _prepare_operand(self, value: Any) -> "NDArrayCore":
        """
        Coerce `value` into this representation and broadcast it to `self.shape`.

        Raises
        ------
        IncompatibleShapeError
            If the coerced operand cannot be broadcast to this array's shape.
        """
        operand = self.coerce_param(value)
        if operand.shape != self._shape:
            operand = operand.broadcast(self._shape)
        return operand

    # ------------------------------------------------------------------
    # Structural equality and Python protocol
    # ------------------------------------------------------------------
    def equals(self, other: Any, eps: Optional[float] = None) -> bool:
        """
        Structural equality: same shape and elementwise-equal values.

        Strides are ignored, so a view and a materialized copy with the same
        logical content are equal. Numbers are compared with ``==``, so a
        double array equals an object array holding the same numbers.
        Elements that are themselves arrays (nested NDArrays, NumPy arrays,
        lists) are compared structurally.

        Parameters
        ----------
        other : Any
            Array-like value to compare with.
        eps : float, optional
            Absolute tolerance for numeric elements: ``abs(a - b) <= eps``.
            Non-numeric elements are still compared with ``==``.
        """
        return _arrays_equal(self, other, eps)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, NDArrayCore) or interop.is_array_like(other):
            return self.equals(other)
        return NotImplemented

    __hash__ = None

    def __len__(self) -> int:
        if not self._shape:
            raise TypeError("len() of a rank-0 array")
        return self._shape[0]

    def __iter__(self) -> Iterator[Any]:
        if not self._shape:
            raise TypeError("iteration over a rank-0 array")
        return iter(self.get_major_slice_seq())

    def __getitem__(self, key: Any) -> Any:
        return self.get(*(key if isinstance(key, tuple) else (key,)))

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set_(key if isinstance(key, tuple) else (key,), value)

    def __repr__(self) -> str:
        kind = self._kind.value
        view = ", view" if self.is_view() else ""
        return f"{type(self).__name__}(shape={self._shape}, kind={kind}{view})"


def _values_equal(a: Any, b: Any, eps: Optional[float]) -> bool:
    if interop.is_array_like(a) or interop.is_array_like(b):
        return _arrays_equal(a, b, eps)
    if eps is not None and isinstance(a, numbers.Number) and isinstance(b, numbers.Number):
        return bool(abs(a - b) <= eps)
    return bool(a == b)


def _arrays_equal(a: Any, b: Any, eps: Optional[float]) -> bool:
    try:
        shape = interop.get_shape(a)
        other_shape = interop.get_shape(b)
    except InconsistentShapeError:
        return False
    if shape != other_shape:
        return False
    return all(
        _values_equal(x, y, eps)
        for x, y in zip(interop.element_seq(a), interop.element_seq(b))
    )
