"""
NDArray functional operation registrations.

Importing this package registers the element-kind-specific control paths of
`element_seq`, `element_map`, `element_map_indexed`, `element_map_` and
`element_map_indexed_`. Only `NDArrayMixinFunctional` is part of the public
interface.
"""

from ._ndarray_element_seq import *
from ._ndarray_element_map import *
from ._ndarray_element_map_inplace import *
from ._base import NDArrayMixinFunctional

__all__ = [
    NDArrayMixinFunctional.__name__,
]
