"""
Interop helpers for values that are not NDArrays (nested Python sequences,
NumPy arrays, scalars, third-party representations).
"""

from ._nested import (
    dimensionality,
    element_seq,
    get_0d,
    get_shape,
    is_array_like,
    major_slice_seq,
    to_nested,
    validate_shape,
)

__all__ = [
    dimensionality.__name__,
    element_seq.__name__,
    get_0d.__name__,
    get_shape.__name__,
    is_array_like.__name__,
    major_slice_seq.__name__,
    to_nested.__name__,
    validate_shape.__name__,
]
