"""
Concrete NDArray classes: the owning `NDArray` and the non-owning `NDArrayView`.

`NDArray` composes the storage core with the operation-set mixins. The
element-kind-specific control paths are registered when the mixin packages
are imported, so importing this module is enough to get a fully dispatched
class.

`NDArrayView` is created only through the `_view` hook (partial `get`,
slices, `transpose`, `broadcast`, `as_immutable`). It never allocates: it
carries the root owner, a shape, strides and a base offset into the owner's
store.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from ...domain._element_kind import ElementKind
from ._ndarray_core import NDArrayCore
from ._strides import normalize_shape
from .mixins import (
    NDArrayMixinAccess,
    NDArrayMixinArithmetic,
    NDArrayMixinFunctional,
    NDArrayMixinMemory,
    NDArrayMixinSlicing,
)


class NDArray(
    NDArrayMixinArithmetic,
    NDArrayMixinFunctional,
    NDArrayMixinMemory,
    NDArrayMixinSlicing,
    NDArrayMixinAccess,
    NDArrayCore,
):
    """
    Owning n-dimensional array over a contiguous row-major store.

    Parameters
    ----------
    shape : Sequence[int]
        Array shape.
    kind : ElementKind | str, optional
        ``"double"`` for unboxed float64 storage, ``"object"`` for arbitrary
        Python values. Defaults to the configured default kind.
    mutable : bool, optional
        Whether in-place operations are allowed. Defaults to True.

    Notes
    -----
    - Elements start as ``0.0`` (double) or ``None`` (object).
    - Use `construct` to build an array from existing data.
    """

    def __init__(
        self,
        shape: Sequence[int],
        kind: Optional[Union[ElementKind, str]] = None,
        *,
        mutable: bool = True,
    ) -> None:
        super().__init__(shape, kind, mutable=mutable)


class NDArrayView(NDArray):
    """
    Non-owning strided window onto another array's store.

    Parameters
    ----------
    owner : NDArrayCore
        Array (or view) whose store is shared. The view always records the
        root owning array.
    shape, strides : Sequence[int]
        Logical layout of the view, strides in storage slots.
    offset : int
        Position of element ``(0, ..., 0)`` in the shared store.
    mutable : bool
        Whether writes through the view are allowed.
    """

    def __init__(
        self,
        owner: NDArrayCore,
        shape: Sequence[int],
        strides: Sequence[int],
        offset: int,
        *,
        mutable: bool,
    ) -> None:
        self._owner = owner.owner
        self._data = owner.data
        self._kind = owner.element_kind
        self._shape = normalize_shape(shape)
        self._strides = tuple(int(s) for s in strides)
        self._offset = int(offset)
        self._mutable = bool(mutable)
        if len(self._strides) != len(self._shape):
            raise ValueError(
                f"strides {self._strides!r} do not match shape {self._shape!r}"
            )

    @property
    def owner(self) -> NDArrayCore:
        return self._owner

    def is_view(self) -> bool:
        return True
