"""
Capability interface definitions.

This module defines the catalogue of capabilities an array representation may
support, each as a small structural (duck-typed) protocol. A representation
declares a capability simply by providing its members; callers look a
capability up with `isinstance(value, ICapability)` and fall back to a
canonical implementation (see `ndstride.infrastructure.registry`) only when
the representation omits it.

Notes
-----
- All protocols are `runtime_checkable`. Runtime checks only verify that the
  members exist, not their signatures, which is exactly what capability
  lookup needs.
- Mutating capabilities (`IIndexedSettingMutable`, `IMutableMap`) are listed
  in `MUTATING_CAPABILITIES` and never fall back: mutating a coerced copy
  would silently lose the write.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class IDimensionInfo(Protocol):
    """
    Dimension Info capability.

    `len(get_shape()) == dimensionality()` must hold for every implementation.
    """

    def dimensionality(self) -> int:
        """Return the number of dimensions (rank)."""
        ...

    def get_shape(self) -> tuple[int, ...]:
        """Return the per-dimension sizes."""
        ...

    def dimension_count(self, axis: int) -> int:
        """
        Return the size of one dimension.

        Parameters
        ----------
        axis : int
            Dimension index in ``[0, dimensionality())``.

        Raises
        ------
        IndexOutOfBoundsError
            If `axis` is outside the valid range.
        """
        ...

    def is_scalar(self) -> bool: ...
    def is_vector(self) -> bool: ...


@runtime_checkable
class IElementCount(Protocol):
    """Element Count capability."""

    def element_count(self) -> int: ...


@runtime_checkable
class IValidateShape(Protocol):
    """
    Shape validation capability.

    Returns the shape after checking that every sub-array agrees with it;
    raises `InconsistentShapeError` otherwise.
    """

    def validate_shape(self) -> tuple[int, ...]: ...


@runtime_checkable
class IIndexedAccess(Protocol):
    """
    Indexed Access capability.

    A full index yields an element; a partial index yields a sub-array.
    """

    def get(self, *index: Any) -> Any: ...


@runtime_checkable
class IIndexedSetting(Protocol):
    """Copy-producing indexed setting capability."""

    def set(self, index: Sequence[int], value: Any) -> Any: ...
    def is_mutable(self) -> bool: ...


@runtime_checkable
class IIndexedSettingMutable(Protocol):
    """In-place indexed setting capability (requires a mutable array)."""

    def set_(self, index: Sequence[int], value: Any) -> Any: ...


@runtime_checkable
class ISliceView(Protocol):
    """
    Slicing / Views capability.

    Major-axis slices fix the leading index; generic slices fix an arbitrary
    axis. Views alias the owner's storage; copies do not.
    """

    def get_major_slice(self, i: int) -> Any: ...
    def get_major_slice_view(self, i: int) -> Any: ...
    def get_major_slice_seq(self) -> list: ...
    def get_slice(self, axis: int, i: int) -> Any: ...
    def get_slice_view(self, axis: int, i: int) -> Any: ...


@runtime_checkable
class IBroadcast(Protocol):
    """Broadcasting capability."""

    def broadcast(self, target_shape: Sequence[int]) -> Any: ...


@runtime_checkable
class ITranspose(Protocol):
    """Transpose capability (reverses the axis order)."""

    def transpose(self) -> Any: ...


@runtime_checkable
class ICoercion(Protocol):
    """
    Coercion capability.

    Converts an arbitrary external value into this representation's
    canonical storage, sharing structure when no transformation is needed.
    """

    def coerce_param(self, param: Any) -> Any: ...


@runtime_checkable
class IConversion(Protocol):
    """Conversion to nested Python lists."""

    def to_nested(self) -> Any: ...


@runtime_checkable
class IFunctionalOperations(Protocol):
    """
    Functional Map/Reduce capability.

    `element_map` co-iterates 1..N arrays of identical shape; `element_reduce`
    left-folds over the row-major element sequence, with or without a seed.
    """

    def element_seq(self) -> Iterable[Any]: ...
    def element_map(self, f: Callable[..., Any], *others: Any) -> Any: ...
    def element_reduce(self, f: Callable[[Any, Any], Any], *init: Any) -> Any: ...


@runtime_checkable
class IMapIndexed(Protocol):
    """Indexed map: the callback receives the coordinate tuple, then values."""

    def element_map_indexed(self, f: Callable[..., Any], *others: Any) -> Any: ...


@runtime_checkable
class IMutableMap(Protocol):
    """
    Mutable Map capability.

    In-place variants of the functional maps. A slot holding an independently
    mutable array is mapped in place; any other slot is replaced.
    """

    def is_mutable(self) -> bool: ...
    def element_map_(self, f: Callable[..., Any], *others: Any) -> Any: ...
    def element_map_indexed_(self, f: Callable[..., Any], *others: Any) -> Any: ...


@runtime_checkable
class IImplementation(Protocol):
    """
    Implementation capability, required to register with the backend registry.
    """

    def implementation_key(self) -> str: ...
    def new_array(self, shape: Sequence[int]) -> Any: ...
    def construct_array(self, data: Any) -> Any: ...
    def supports_dimensionality(self, dims: int) -> bool: ...


@runtime_checkable
class ITypeInfo(Protocol):
    """Element type reporting capability."""

    def element_type(self) -> type: ...


@runtime_checkable
class IMatrixSlices(Protocol):
    """Row and column access for matrices (rank 2 and above)."""

    def get_row(self, i: int) -> Any: ...
    def get_column(self, i: int) -> Any: ...


@runtime_checkable
class IMutableConstruction(Protocol):
    """Produces a mutable copy of a possibly immutable array."""

    def as_mutable(self) -> Any: ...


CAPABILITIES: dict[str, type] = {
    "dimension-info": IDimensionInfo,
    "element-count": IElementCount,
    "validate-shape": IValidateShape,
    "indexed-access": IIndexedAccess,
    "indexed-setting": IIndexedSetting,
    "indexed-setting-mutable": IIndexedSettingMutable,
    "slice-view": ISliceView,
    "broadcast": IBroadcast,
    "transpose": ITranspose,
    "coercion": ICoercion,
    "conversion": IConversion,
    "functional": IFunctionalOperations,
    "map-indexed": IMapIndexed,
    "mutable-map": IMutableMap,
    "type-info": ITypeInfo,
    "matrix-slices": IMatrixSlices,
    "mutable-construction": IMutableConstruction,
    "implementation": IImplementation,
}
"""Capability catalogue: name -> protocol."""

MUTATING_CAPABILITIES: frozenset = frozenset({IIndexedSettingMutable, IMutableMap})
"""Capabilities for which canonical fallback is never attempted."""

__all__ = [
    IDimensionInfo.__name__,
    IElementCount.__name__,
    IValidateShape.__name__,
    IIndexedAccess.__name__,
    IIndexedSetting.__name__,
    IIndexedSettingMutable.__name__,
    ISliceView.__name__,
    IBroadcast.__name__,
    ITranspose.__name__,
    ICoercion.__name__,
    IConversion.__name__,
    IFunctionalOperations.__name__,
    IMapIndexed.__name__,
    IMutableMap.__name__,
    ITypeInfo.__name__,
    IMatrixSlices.__name__,
    IMutableConstruction.__name__,
    IImplementation.__name__,
    "CAPABILITIES",
    "MUTATING_CAPABILITIES",
]
