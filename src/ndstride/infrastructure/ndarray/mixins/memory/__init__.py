"""
NDArray memory operation registrations.

Importing this package registers the element-kind-specific control paths of
`fill`, `fill_` and `assign_` (see `_ndarray_fill`). Only
`NDArrayMixinMemory` is part of the public interface.
"""

from ._ndarray_fill import *
from ._base import NDArrayMixinMemory

__all__ = [
    NDArrayMixinMemory.__name__,
]
