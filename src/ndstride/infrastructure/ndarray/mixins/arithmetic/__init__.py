"""
NDArray arithmetic operation registrations.

Importing this package registers the element-kind-specific control paths of
the element-wise arithmetic methods and reductions. Only
`NDArrayMixinArithmetic` is part of the public interface.
"""

from ._ndarray_elementwise import *
from ._ndarray_scaling import *
from ._ndarray_reduction import *
from ._base import NDArrayMixinArithmetic

__all__ = [
    NDArrayMixinArithmetic.__name__,
]
