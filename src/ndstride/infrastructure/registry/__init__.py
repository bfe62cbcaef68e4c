"""
Backend registry and capability dispatch.

Importing this package registers the canonical NDArray instances for both
element kinds.
"""

from ._backend_registry import (
    BackendRegistry,
    backend_registry,
    canonical,
    register_implementation,
)
from ._dispatch import (
    perform,
    representation_of,
    coerce,
    dimensionality,
    get_shape,
    element_count,
    element_seq,
    element_map,
    element_map_indexed,
    element_map_,
    element_reduce,
    transpose,
    to_nested,
    element_type,
    get_row,
    get_column,
    as_mutable,
)

__all__ = [
    BackendRegistry.__name__,
    "backend_registry",
    canonical.__name__,
    register_implementation.__name__,
    perform.__name__,
    representation_of.__name__,
    coerce.__name__,
    dimensionality.__name__,
    get_shape.__name__,
    element_count.__name__,
    element_seq.__name__,
    element_map.__name__,
    element_map_indexed.__name__,
    element_map_.__name__,
    element_reduce.__name__,
    transpose.__name__,
    to_nested.__name__,
    element_type.__name__,
    get_row.__name__,
    get_column.__name__,
    as_mutable.__name__,
]
