"""
Strided NDArray implementation.

Importing this package composes `NDArray` from its storage core and
operation mixins (registering every element-kind-specific control path) and
exposes the construction helpers and the specialization generator.
"""

from ._ndarray import NDArray, NDArrayView
from ._ndarray_core import NDArrayCore
from ._construct import construct, empty_ndarray
from ._specialize import (
    ElementOps,
    DoubleOps,
    ObjectOps,
    Kernel,
    Reduction,
    specialize,
    specialize_reduction,
)
from ._strides import c_strides, element_count, normalize_shape

__all__ = [
    NDArray.__name__,
    NDArrayView.__name__,
    NDArrayCore.__name__,
    construct.__name__,
    empty_ndarray.__name__,
    ElementOps.__name__,
    DoubleOps.__name__,
    ObjectOps.__name__,
    Kernel.__name__,
    Reduction.__name__,
    specialize.__name__,
    specialize_reduction.__name__,
    c_strides.__name__,
    normalize_shape.__name__,
]
