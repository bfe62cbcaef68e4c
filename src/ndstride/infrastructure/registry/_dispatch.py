"""
Capability dispatch with canonical fallback.

`perform` runs a named operation of a capability on any value:

1. if the value implements the capability, the operation is called on it;
2. otherwise the value is coerced through the canonical implementation and
   the operation is retried exactly once (``trying_canonical=True``);
3. if the coerced value still lacks the capability, or the capability
   mutates its receiver, `CapabilityNotImplementedError` is raised.

Mutating capabilities never fall back: the write would land in a coerced
copy the caller never sees.

When ``NDSTRIDE_WARN_ON_FALLBACK`` is enabled, each fallback emits a
`FallbackWarning`.

The module-level helpers (`dimensionality`, `get_shape`, ...) are thin
wrappers over `perform` for the operations used most often.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Optional, Union

from ...domain._capabilities import (
    CAPABILITIES,
    MUTATING_CAPABILITIES,
    ICoercion,
    IConversion,
    IDimensionInfo,
    IElementCount,
    IFunctionalOperations,
    IImplementation,
    IMapIndexed,
    IMatrixSlices,
    IMutableConstruction,
    IMutableMap,
    ITranspose,
    ITypeInfo,
)
from ...domain._errors import CapabilityNotImplementedError, FallbackWarning
from .._config import default_implementation_key, fallback_warnings_enabled
from ._backend_registry import BackendRegistry, backend_registry


def _resolve_capability(capability: Union[str, type]) -> type:
    if isinstance(capability, str):
        try:
            return CAPABILITIES[capability]
        except KeyError:
            available = ", ".join(sorted(CAPABILITIES))
            raise LookupError(
                f"Unknown capability: {capability!r}. Available: {available}"
            ) from None
    return capability


def representation_of(m: Any) -> str:
    """Implementation key of `m`, or its type name for foreign values."""
    if isinstance(m, IImplementation):
        return m.implementation_key()
    return type(m).__name__


def perform(
    capability: Union[str, type],
    op_name: str,
    m: Any,
    *args: Any,
    trying_canonical: bool = False,
    registry: Optional[BackendRegistry] = None,
    **kwargs: Any,
) -> Any:
    """
    Call ``m.<op_name>(*args, **kwargs)`` through capability dispatch.

    Parameters
    ----------
    capability : str | type
        Capability protocol, or its name in `CAPABILITIES`.
    op_name : str
        Method of the capability to call.
    m : Any
        Receiver. Values lacking the capability are coerced through the
        canonical implementation of the configured default kind.
    trying_canonical : bool, optional
        Set on the retry after coercion; disables further fallback.
    registry : BackendRegistry, optional
        Registry providing the canonical implementation. Defaults to the
        process-wide registry.

    Raises
    ------
    CapabilityNotImplementedError
        If `m` lacks the capability and no fallback applies.
    LookupError
        If the capability name or the canonical implementation is unknown.
    """
    cap = _resolve_capability(capability)
    if isinstance(m, cap):
        return getattr(m, op_name)(*args, **kwargs)
    if trying_canonical or cap in MUTATING_CAPABILITIES:
        raise CapabilityNotImplementedError(op_name, representation_of(m))

    registry = registry or backend_registry
    impl = registry.canonical(default_implementation_key())
    if fallback_warnings_enabled():
        warnings.warn(
            f"{representation_of(m)} does not implement {cap.__name__}; "
            f"falling back to canonical implementation "
            f"'{impl.implementation_key()}' for {op_name}.",
            FallbackWarning,
            stacklevel=2,
        )
    return perform(
        cap,
        op_name,
        impl.coerce_param(m),
        *args,
        trying_canonical=True,
        registry=registry,
        **kwargs,
    )


def coerce(m: Any, key: Optional[str] = None) -> Any:
    """
    Coerce `m` into the implementation registered under `key`.

    Defaults to the configured default implementation.
    """
    impl = backend_registry.canonical(key or default_implementation_key())
    return perform(ICoercion, "coerce_param", impl, m)


def dimensionality(m: Any) -> int:
    return perform(IDimensionInfo, "dimensionality", m)


def get_shape(m: Any) -> tuple[int, ...]:
    return tuple(perform(IDimensionInfo, "get_shape", m))


def element_count(m: Any) -> int:
    return perform(IElementCount, "element_count", m)


def element_seq(m: Any) -> list:
    return list(perform(IFunctionalOperations, "element_seq", m))


def element_map(m: Any, f: Callable[..., Any], *others: Any) -> Any:
    return perform(IFunctionalOperations, "element_map", m, f, *others)


def element_map_indexed(m: Any, f: Callable[..., Any], *others: Any) -> Any:
    return perform(IMapIndexed, "element_map_indexed", m, f, *others)


def element_map_(m: Any, f: Callable[..., Any], *others: Any) -> Any:
    """In-place map; raises for values without `IMutableMap`."""
    return perform(IMutableMap, "element_map_", m, f, *others)


def element_reduce(m: Any, f: Callable[[Any, Any], Any], *init: Any) -> Any:
    return perform(IFunctionalOperations, "element_reduce", m, f, *init)


def transpose(m: Any) -> Any:
    return perform(ITranspose, "transpose", m)


def to_nested(m: Any) -> Any:
    return perform(IConversion, "to_nested", m)


def element_type(m: Any) -> type:
    return perform(ITypeInfo, "element_type", m)


def get_row(m: Any, i: int) -> Any:
    return perform(IMatrixSlices, "get_row", m, i)


def get_column(m: Any, i: int) -> Any:
    return perform(IMatrixSlices, "get_column", m, i)


def as_mutable(m: Any) -> Any:
    """Mutable copy of `m`, falling back to the canonical implementation."""
    return perform(IMutableConstruction, "as_mutable", m)
